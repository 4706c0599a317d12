from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Tuple
from sqlalchemy import update, func
from sqlalchemy.orm import Session, selectinload
from app.models.produto import Produto
from app.models.venda import Venda, ItemVenda


class VendaRepository:
    """
    Vendas de um tenant e a baixa de estoque correspondente

    A baixa usa UPDATE ... SET estoque = estoque - q, assim uma venda
    e uma importação de NFe no mesmo produto nunca se sobrescrevem.
    """

    def __init__(self, db: Session):
        self.db = db

    def buscar_produtos(self, tenant_id: int, produto_ids: List[int]) -> List[Produto]:
        return self.db.query(Produto).filter(
            Produto.tenant_id == tenant_id,
            Produto.id.in_(produto_ids)
        ).with_for_update().all()

    def adicionar(self, venda: Venda) -> Venda:
        self.db.add(venda)
        self.db.flush()
        return venda

    def registrar_saida(self, produto_id: int, quantidade: Decimal) -> None:
        self.db.execute(
            update(Produto)
            .where(Produto.id == produto_id)
            .values(estoque=Produto.estoque - quantidade)
            .execution_options(synchronize_session=False)
        )

    def buscar_por_id(self, venda_id: int, tenant_id: int) -> Optional[Venda]:
        return self.db.query(Venda).options(selectinload(Venda.itens)).filter(
            Venda.id == venda_id,
            Venda.tenant_id == tenant_id
        ).first()

    def listar_por_tenant(self, tenant_id: int, limite: int = 50) -> List[Venda]:
        """Mais recentes primeiro"""
        return self.db.query(Venda).options(selectinload(Venda.itens)).filter(
            Venda.tenant_id == tenant_id
        ).order_by(Venda.data_venda.desc(), Venda.id.desc()).limit(limite).all()

    def _filtro_periodo(self, query, inicio: Optional[datetime], fim: Optional[datetime]):
        if inicio:
            query = query.filter(Venda.data_venda >= inicio)
        if fim:
            query = query.filter(Venda.data_venda <= fim)
        return query

    def total_por_tenant(
        self,
        tenant_id: int,
        inicio: Optional[datetime] = None,
        fim: Optional[datetime] = None
    ) -> Decimal:
        query = self.db.query(func.coalesce(func.sum(Venda.valor_final), 0)).filter(
            Venda.tenant_id == tenant_id
        )
        return Decimal(str(self._filtro_periodo(query, inicio, fim).scalar()))

    def contar_por_tenant(
        self,
        tenant_id: int,
        inicio: Optional[datetime] = None,
        fim: Optional[datetime] = None
    ) -> int:
        query = self.db.query(func.count(Venda.id)).filter(Venda.tenant_id == tenant_id)
        return self._filtro_periodo(query, inicio, fim).scalar()

    def produtos_mais_vendidos(self, tenant_id: int, limite: int = 5) -> List[Tuple[str, Decimal]]:
        """(nome do produto, quantidade vendida), maiores quantidades primeiro"""
        quantidade = func.sum(ItemVenda.quantidade)
        linhas = self.db.query(ItemVenda.nome_produto, quantidade).filter(
            ItemVenda.tenant_id == tenant_id
        ).group_by(ItemVenda.nome_produto).order_by(quantidade.desc()).limit(limite).all()
        return [(nome, Decimal(str(qtd))) for nome, qtd in linhas]
