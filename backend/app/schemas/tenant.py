from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from app.models.tenant import StatusTenant
import re


class TenantBase(BaseModel):
    """Schema base para Tenant"""
    nome_empresa: str = Field(..., min_length=2, max_length=200)
    nome_responsavel: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    documento: str = Field(..., min_length=11, max_length=20, description="CNPJ/CPF, com ou sem pontuação")

    @field_validator('documento')
    @classmethod
    def validate_documento(cls, v):
        """Documento aceita apenas dígitos e pontuação de CNPJ/CPF"""
        if not re.match(r'^[\d./-]+$', v):
            raise ValueError('Documento deve conter apenas números e pontuação (. / -)')
        return v


class TenantCreate(TenantBase):
    """Schema para o master criar um novo Tenant"""
    plano_id: str = Field(..., min_length=1, max_length=50)
    status: StatusTenant = StatusTenant.ACTIVE


class TenantUpdate(BaseModel):
    """Schema para atualizar Tenant"""
    nome_empresa: Optional[str] = Field(None, min_length=2, max_length=200)
    nome_responsavel: Optional[str] = Field(None, min_length=2, max_length=200)
    plano_id: Optional[str] = Field(None, min_length=1, max_length=50)
    status: Optional[StatusTenant] = None


class TenantResponse(BaseModel):
    """Schema de resposta para Tenant (SEM senha!)"""
    id: int
    nome_empresa: str
    nome_responsavel: str
    email: str
    documento: str
    plano_id: str
    status: StatusTenant
    mensalidade: Decimal
    proximo_vencimento: datetime
    data_adesao: datetime
    deve_trocar_senha: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TenantCriadoResponse(BaseModel):
    """Tenant recém criado + senha temporária do gerente (exibida uma única vez)"""
    tenant: TenantResponse
    senha_temporaria: str


class TenantListResponse(BaseModel):
    """Schema para listagem de tenants"""
    total: int
    items: List[TenantResponse]
