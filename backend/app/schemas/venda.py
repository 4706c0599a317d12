from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from app.models.venda import FormaPagamento


class ItemVendaCreate(BaseModel):
    """Item do carrinho"""
    produto_id: int
    quantidade: Decimal = Field(..., gt=0)
    preco_unitario: Optional[Decimal] = Field(None, ge=0, description="Padrão: preço de venda do produto")


class VendaCreate(BaseModel):
    """Fechamento do carrinho no caixa"""
    itens: List[ItemVendaCreate] = Field(..., min_length=1)
    desconto: Decimal = Field(Decimal("0"), ge=0)
    forma_pagamento: FormaPagamento


class ItemVendaResponse(BaseModel):
    id: int
    produto_id: int
    nome_produto: str
    quantidade: Decimal
    preco_unitario: Decimal
    total: Decimal

    class Config:
        from_attributes = True


class VendaResponse(BaseModel):
    id: int
    tenant_id: int
    total: Decimal
    desconto: Decimal
    valor_final: Decimal
    forma_pagamento: FormaPagamento
    data_venda: datetime
    registrada_por: Optional[str] = None
    itens: List[ItemVendaResponse]

    class Config:
        from_attributes = True


class ProdutoMaisVendido(BaseModel):
    nome_produto: str
    quantidade: Decimal


class ResumoVendasResponse(BaseModel):
    """Indicadores do painel: faturamento, nº de vendas, ticket médio e top produtos"""
    total_vendas: Decimal
    quantidade_vendas: int
    ticket_medio: Decimal
    mais_vendidos: List[ProdutoMaisVendido]
