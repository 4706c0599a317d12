"""
Schemas da importação de NFe

NotaFiscalImportacao é o payload transitório consumido uma única vez
pela reconciliação de estoque. Política de validação: quantidade
estritamente positiva e preço unitário não negativo; uma nota com
qualquer item inválido é rejeitada inteira, antes de qualquer escrita.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal


class FornecedorNota(BaseModel):
    """Emitente da nota"""
    nome: str = Field(..., min_length=1, max_length=200)
    documento: str = Field(..., min_length=1, max_length=20, description="CNPJ do emitente")


class ItemNotaFiscal(BaseModel):
    """Item (det/prod) da nota"""
    codigo: str = Field("", max_length=50, description="cProd - pode vir vazio")
    nome: str = Field(..., min_length=1, max_length=200, description="xProd")
    quantidade: Decimal = Field(..., gt=0, description="qCom")
    preco_unitario: Decimal = Field(..., ge=0, description="vUnCom")
    unidade: str = Field("UN", max_length=10, description="uCom")


class NotaFiscalImportacao(BaseModel):
    """Payload de importação: fornecedor + itens"""
    fornecedor: FornecedorNota
    itens: List[ItemNotaFiscal] = Field(default_factory=list)


class ResultadoImportacaoResponse(BaseModel):
    """Resumo da importação aplicada"""
    fornecedor_id: Optional[int] = None
    fornecedor_criado: bool
    produtos_atualizados: int
    produtos_criados: int
