from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal


class PlanoBase(BaseModel):
    """Schema base para Plano"""
    nome: str = Field(..., min_length=2, max_length=100)
    limite_produtos: int = Field(100, ge=-1, description="-1 para ilimitado")
    limite_usuarios: int = Field(1, ge=-1, description="-1 para ilimitado")
    taxa_implantacao: Decimal = Field(Decimal("0"), ge=0)
    taxa_suporte: Decimal = Field(Decimal("0"), ge=0, description="Mensalidade recorrente")
    recursos: List[str] = Field(default_factory=list)


class PlanoCreate(PlanoBase):
    """Schema para criação de plano"""
    id: str = Field(..., min_length=1, max_length=50, pattern=r'^[a-z0-9_]+$')


class PlanoUpdate(BaseModel):
    """Schema para atualização de plano (campos opcionais)"""
    nome: Optional[str] = Field(None, min_length=2, max_length=100)
    limite_produtos: Optional[int] = Field(None, ge=-1)
    limite_usuarios: Optional[int] = Field(None, ge=-1)
    taxa_implantacao: Optional[Decimal] = Field(None, ge=0)
    taxa_suporte: Optional[Decimal] = Field(None, ge=0)
    recursos: Optional[List[str]] = None


class PlanoResponse(PlanoBase):
    """Schema para resposta da API"""
    id: str

    class Config:
        from_attributes = True
