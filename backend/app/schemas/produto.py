from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from app.models.produto import UnidadeMedida, StatusProduto


class ProdutoBase(BaseModel):
    """Schema base para Produto"""
    codigo: str = Field(..., min_length=1, max_length=50, description="Código interno do produto")
    codigo_barras: Optional[str] = Field(None, max_length=50, description="EAN")
    nome: str = Field(..., min_length=1, max_length=200, description="Nome do produto")
    descricao: Optional[str] = Field(None, description="Descrição detalhada")
    categoria: str = Field("Geral", max_length=100)
    unidade: UnidadeMedida = Field(UnidadeMedida.UN, description="Unidade de medida (UN, KG, LT, MT)")
    preco_custo: Decimal = Field(..., ge=0)
    preco_venda: Decimal = Field(..., ge=0)
    estoque_minimo: Decimal = Field(Decimal("0"), ge=0, description="Estoque mínimo")
    status: StatusProduto = StatusProduto.ATIVO


class ProdutoCreate(ProdutoBase):
    """Schema para criação de produto"""
    estoque: Decimal = Field(Decimal("0"), description="Estoque inicial")


class ProdutoResponse(ProdutoBase):
    """Schema para resposta da API"""
    id: int
    tenant_id: int
    estoque: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProdutoListResponse(BaseModel):
    """Schema para listagem paginada"""
    total: int
    items: list[ProdutoResponse]
