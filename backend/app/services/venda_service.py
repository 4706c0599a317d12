"""
Servico de vendas (PDV)

Grava a venda com seus itens e baixa o estoque de cada produto na mesma
transacao, sob o lock do tenant usado tambem pela importacao de NFe.
O estoque pode ficar negativo: o caixa nao e bloqueado por falta de saldo.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.tenant_locks import tenant_lock
from app.models.venda import Venda, ItemVenda
from app.repositories import VendaRepository
from app.schemas.venda import VendaCreate

logger = logging.getLogger(__name__)

CENTAVOS = Decimal("0.01")


class ErroVenda(str, enum.Enum):
    PRODUTO_NAO_ENCONTRADO = "PRODUTO_NAO_ENCONTRADO"
    DESCONTO_INVALIDO = "DESCONTO_INVALIDO"
    BANCO_INDISPONIVEL = "BANCO_INDISPONIVEL"


MENSAGENS_ERRO = {
    ErroVenda.PRODUTO_NAO_ENCONTRADO: "Produto não encontrado",
    ErroVenda.DESCONTO_INVALIDO: "Desconto maior que o total da venda",
    ErroVenda.BANCO_INDISPONIVEL: "Banco de dados indisponível. A venda não foi registrada.",
}


@dataclass
class ResultadoVenda:
    success: bool
    venda: Optional[Venda] = None
    erro: Optional[ErroVenda] = None
    mensagem: Optional[str] = None

    @classmethod
    def falha(cls, erro: ErroVenda) -> "ResultadoVenda":
        return cls(success=False, erro=erro, mensagem=MENSAGENS_ERRO[erro])


class VendaService:
    """Registro de vendas e indicadores do painel"""

    def __init__(self, db: Session, vendas: Optional[VendaRepository] = None):
        self.db = db
        self.vendas = vendas or VendaRepository(db)

    def registrar(self, tenant_id: int, dados: VendaCreate, registrada_por: Optional[str] = None) -> ResultadoVenda:
        """
        Registra a venda e baixa o estoque.

        Produto de outro tenant conta como inexistente. Em qualquer
        falha nada e gravado.
        """
        try:
            with tenant_lock(tenant_id):
                produto_ids = {item.produto_id for item in dados.itens}
                produtos = {p.id: p for p in self.vendas.buscar_produtos(tenant_id, list(produto_ids))}
                if len(produtos) != len(produto_ids):
                    self.db.rollback()
                    return ResultadoVenda.falha(ErroVenda.PRODUTO_NAO_ENCONTRADO)

                itens = []
                for item in dados.itens:
                    produto = produtos[item.produto_id]
                    preco = item.preco_unitario if item.preco_unitario is not None else produto.preco_venda
                    itens.append(ItemVenda(
                        tenant_id=tenant_id,
                        produto_id=produto.id,
                        nome_produto=produto.nome,
                        quantidade=item.quantidade,
                        preco_unitario=preco,
                        total=(preco * item.quantidade).quantize(CENTAVOS),
                    ))

                total = sum((i.total for i in itens), Decimal("0"))
                if dados.desconto > total:
                    self.db.rollback()
                    return ResultadoVenda.falha(ErroVenda.DESCONTO_INVALIDO)

                venda = self.vendas.adicionar(Venda(
                    tenant_id=tenant_id,
                    total=total,
                    desconto=dados.desconto,
                    valor_final=total - dados.desconto,
                    forma_pagamento=dados.forma_pagamento,
                    data_venda=datetime.utcnow(),
                    registrada_por=registrada_por,
                    itens=itens,
                ))
                for item in itens:
                    self.vendas.registrar_saida(item.produto_id, item.quantidade)

                self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Erro de banco ao registrar venda")
            return ResultadoVenda.falha(ErroVenda.BANCO_INDISPONIVEL)

        logger.info("Venda %s registrada: %d itens, valor_final=%s", venda.id, len(itens), venda.valor_final)
        return ResultadoVenda(success=True, venda=venda)

    def resumo(self, tenant_id: int, inicio: Optional[datetime] = None, fim: Optional[datetime] = None) -> dict:
        total = self.vendas.total_por_tenant(tenant_id, inicio, fim).quantize(CENTAVOS)
        quantidade = self.vendas.contar_por_tenant(tenant_id, inicio, fim)
        ticket_medio = (total / quantidade).quantize(CENTAVOS) if quantidade else Decimal("0.00")
        return {
            "total_vendas": total,
            "quantidade_vendas": quantidade,
            "ticket_medio": ticket_medio,
            "mais_vendidos": [
                {"nome_produto": nome, "quantidade": qtd}
                for nome, qtd in self.vendas.produtos_mais_vendidos(tenant_id)
            ],
        }
