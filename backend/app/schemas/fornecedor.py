from pydantic import BaseModel, Field, EmailStr
from typing import Optional
from datetime import datetime


class FornecedorBase(BaseModel):
    """Schema base para Fornecedor"""
    nome: str = Field(..., min_length=1, max_length=200, description="Razão social ou nome fantasia")
    documento: str = Field(..., min_length=1, max_length=20, description="CNPJ")
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    nome_contato: Optional[str] = Field(None, max_length=200)


class FornecedorCreate(FornecedorBase):
    """Schema para criação de fornecedor"""
    pass


class FornecedorResponse(FornecedorBase):
    """Schema para resposta da API"""
    id: int
    tenant_id: int
    email: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class FornecedorListResponse(BaseModel):
    """Schema para listagem paginada"""
    total: int
    items: list[FornecedorResponse]
