from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from app.core.security import BCRYPT_MAX_BYTES, senha_cabe_no_bcrypt


class FuncionarioCreate(BaseModel):
    """Schema para o gerente cadastrar um operador"""
    nome: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    senha: str = Field(..., min_length=6, max_length=BCRYPT_MAX_BYTES)

    @field_validator('senha')
    @classmethod
    def validate_senha(cls, v):
        """max_length conta caracteres; o bcrypt limita bytes UTF-8"""
        if not senha_cabe_no_bcrypt(v):
            raise ValueError(f'A senha deve ter no máximo {BCRYPT_MAX_BYTES} bytes')
        return v


class FuncionarioResponse(BaseModel):
    """Schema de resposta para Funcionario (SEM senha!)"""
    id: int
    tenant_id: int
    nome: str
    email: str
    ativo: bool
    created_at: datetime

    class Config:
        from_attributes = True
