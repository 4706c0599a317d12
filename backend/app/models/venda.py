from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from app.models.base import Base, TenantMixin, TimestampMixin


class FormaPagamento(str, enum.Enum):
    DINHEIRO = "DINHEIRO"
    CARTAO_CREDITO = "CARTAO_CREDITO"
    CARTAO_DEBITO = "CARTAO_DEBITO"
    PIX = "PIX"
    FIADO = "FIADO"


class Venda(Base, TenantMixin, TimestampMixin):
    """
    Venda registrada no caixa (PDV)

    valor_final = total - desconto. Cada item baixa o estoque do produto
    na mesma transação em que a venda é gravada.
    """
    __tablename__ = "vendas"

    id = Column(Integer, primary_key=True, index=True)

    total = Column(Numeric(12, 2), nullable=False)  # Soma dos itens
    desconto = Column(Numeric(12, 2), default=0, nullable=False)
    valor_final = Column(Numeric(12, 2), nullable=False)
    forma_pagamento = Column(SQLEnum(FormaPagamento), nullable=False)
    data_venda = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Funcionário ou gerente que registrou (id do token)
    registrada_por = Column(String(50), nullable=True)

    itens = relationship("ItemVenda", back_populates="venda", cascade="all, delete-orphan",
                         order_by="ItemVenda.id")

    def __repr__(self):
        return f"<Venda {self.id} - {self.valor_final}>"

    __table_args__ = (
        Index('ix_vendas_tenant_data', 'tenant_id', 'data_venda'),
    )


class ItemVenda(Base, TenantMixin):
    """
    Item da venda

    O nome do produto é copiado no momento da venda para o histórico
    não mudar quando o cadastro for editado.
    """
    __tablename__ = "itens_venda"

    id = Column(Integer, primary_key=True, index=True)

    venda_id = Column(Integer, ForeignKey("vendas.id", ondelete="CASCADE"), nullable=False, index=True)
    produto_id = Column(Integer, ForeignKey("produtos.id"), nullable=False)

    nome_produto = Column(String(200), nullable=False)
    quantidade = Column(Numeric(12, 3), nullable=False)
    preco_unitario = Column(Numeric(12, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    venda = relationship("Venda", back_populates="itens")
    produto = relationship("Produto")
