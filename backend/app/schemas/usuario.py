from pydantic import BaseModel, Field, field_validator
from typing import Optional
from app.core.security import BCRYPT_MAX_BYTES, senha_cabe_no_bcrypt
from app.services.auth_service import PerfilUsuario


class UsuarioLogin(BaseModel):
    """Schema para login (email é comparado exatamente como digitado)"""
    email: str = Field(..., min_length=3, max_length=200)
    senha: str = Field(..., min_length=1, max_length=128)


class UsuarioAutenticadoResponse(BaseModel):
    """Identidade resolvida no login (SEM senha!)"""
    id: str
    nome: str
    email: str
    perfil: PerfilUsuario
    tenant_id: Optional[int] = None
    deve_trocar_senha: bool

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Schema de resposta para autenticação"""
    access_token: str
    token_type: str = "bearer"
    user: UsuarioAutenticadoResponse


class AlterarSenhaRequest(BaseModel):
    """
    Schema para troca de senha do gerente

    O tamanho mínimo da nova senha é validado no AuthService,
    que responde SENHA_FRACA sem alterar nada.
    """
    senha_atual: str = Field(..., max_length=128)
    nova_senha: str = Field(..., max_length=BCRYPT_MAX_BYTES)

    @field_validator('nova_senha')
    @classmethod
    def validate_nova_senha(cls, v):
        if not senha_cabe_no_bcrypt(v):
            raise ValueError(f'A senha deve ter no máximo {BCRYPT_MAX_BYTES} bytes')
        return v


class SenhaTemporariaResponse(BaseModel):
    """Senha temporária gerada no reset - exibida uma única vez"""
    tenant_id: int
    senha_temporaria: str
