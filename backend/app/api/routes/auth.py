from datetime import timedelta
from fastapi import APIRouter, Depends
from app.api.deps import get_auth_service, get_current_user
from app.api.utils import raise_for_resultado
from app.config import settings
from app.core.security import create_access_token
from app.schemas.usuario import (
    UsuarioLogin, Token, UsuarioAutenticadoResponse, AlterarSenhaRequest
)
from app.services.auth_service import AuthService, UsuarioAutenticado, ErroAuth

router = APIRouter()


@router.post("/login", response_model=Token)
def login(
    credentials: UsuarioLogin,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Autenticação de usuário

    Fluxo (primeiro que casar vence):
    1. Master (credencial da configuração)
    2. Tenant pelo email -> Gerente
    3. Funcionário ativo pelo email -> Operador
    4. Gera JWT token com user_id, tenant_id e perfil
    """
    resultado = auth.login(credentials.email, credentials.senha)
    raise_for_resultado(resultado)

    usuario = resultado.usuario
    access_token = create_access_token(
        data={
            "user_id": usuario.id,
            "tenant_id": usuario.tenant_id,
            "perfil": usuario.perfil.value,
            "nome": usuario.nome,
            "email": usuario.email
        },
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UsuarioAutenticadoResponse.model_validate(usuario)
    }


@router.get("/me", response_model=UsuarioAutenticadoResponse)
def me(usuario: UsuarioAutenticado = Depends(get_current_user)):
    """Identidade do portador do token"""
    return usuario


@router.post("/alterar-senha", response_model=UsuarioAutenticadoResponse)
def alterar_senha(
    dados: AlterarSenhaRequest,
    usuario: UsuarioAutenticado = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service)
):
    """
    Troca a senha do gerente logado.

    Única rota liberada enquanto a senha temporária não for trocada.
    """
    resultado = auth.alterar_senha(usuario, dados.senha_atual, dados.nova_senha)
    # Senha atual errada aqui é erro de entrada, não de autenticação
    raise_for_resultado(resultado, {ErroAuth.CREDENCIAIS_INVALIDAS: 400})
    return resultado.usuario
