from fastapi import Depends, Request, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.repositories import TenantRepository, FuncionarioRepository
from app.services.auth_service import AuthService, UsuarioAutenticado, PerfilUsuario
from app.services.importacao_nfe_service import ImportacaoNFeService
from app.services.venda_service import VendaService

__all__ = [
    "get_db",
    "get_current_user",
    "get_current_tenant_id",
    "require_master",
    "require_gerente",
    "require_senha_atualizada",
    "get_auth_service",
    "get_importacao_service",
    "get_venda_service",
]

USUARIO_REVOGADO = "Usuário inativo ou removido"


def get_current_user(request: Request) -> UsuarioAutenticado:
    """
    Monta a identidade do usuário a partir do contexto da request
    (configurado pelo middleware a partir do JWT)
    """
    if not getattr(request.state, 'user_id', None):
        raise HTTPException(status_code=401, detail="Usuário não identificado")

    return UsuarioAutenticado(
        id=request.state.user_id,
        nome=request.state.nome,
        email=request.state.email,
        perfil=PerfilUsuario(request.state.perfil),
        tenant_id=request.state.tenant_id,
    )


def get_current_tenant_id(user: UsuarioAutenticado = Depends(get_current_user)) -> int:
    """
    Tenant do usuário atual. O master não pertence a nenhum tenant.
    """
    if user.tenant_id is None:
        raise HTTPException(status_code=400, detail="Tenant não identificado")
    return user.tenant_id


def require_master(
    user: UsuarioAutenticado = Depends(get_current_user)
) -> UsuarioAutenticado:
    """
    Dependency que requer que o usuário seja MASTER (administrador do SaaS)
    """
    if user.perfil != PerfilUsuario.MASTER:
        raise HTTPException(
            status_code=403,
            detail="Acesso negado: apenas usuário master"
        )
    return user


def require_senha_atualizada(
    user: UsuarioAutenticado = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UsuarioAutenticado:
    """
    Revalida no banco a identidade do token a cada request.

    - Operador desativado ou removido (junto com a loja) perde o acesso: 401
    - Gerente cuja loja foi removida: 401
    - Gerente que ainda precisa trocar a senha temporária: 403

    O flag de troca é lido do banco (e não do token) para que a troca
    libere o acesso sem novo login.
    """
    if user.perfil == PerfilUsuario.OPERADOR:
        funcionario = FuncionarioRepository(db).buscar_por_id(int(user.id), user.tenant_id)
        if not funcionario or not funcionario.ativo:
            raise HTTPException(status_code=401, detail=USUARIO_REVOGADO)
        return user

    if user.perfil != PerfilUsuario.GERENTE:
        return user

    tenant = TenantRepository(db).buscar_por_id(user.tenant_id)
    if not tenant:
        raise HTTPException(status_code=401, detail=USUARIO_REVOGADO)
    if tenant.deve_trocar_senha:
        raise HTTPException(
            status_code=403,
            detail="Troca de senha obrigatória antes de continuar"
        )
    user.deve_trocar_senha = False
    return user


def require_gerente(
    user: UsuarioAutenticado = Depends(require_senha_atualizada)
) -> UsuarioAutenticado:
    """
    Dependency que requer o dono da loja (GERENTE) com senha já trocada
    """
    if user.perfil != PerfilUsuario.GERENTE:
        raise HTTPException(
            status_code=403,
            detail="Acesso negado: apenas o gerente da loja"
        )
    return user


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_importacao_service(db: Session = Depends(get_db)) -> ImportacaoNFeService:
    return ImportacaoNFeService(db)


def get_venda_service(db: Session = Depends(get_db)) -> VendaService:
    return VendaService(db)
