from sqlalchemy import Column, Integer, String, Text, Numeric, Enum as SQLEnum, Index, UniqueConstraint
import enum
from app.models.base import Base, TenantMixin, TimestampMixin


class UnidadeMedida(str, enum.Enum):
    UN = "UN"
    KG = "KG"
    LT = "LT"
    MT = "MT"


class StatusProduto(str, enum.Enum):
    ATIVO = "ATIVO"
    INATIVO = "INATIVO"


class Produto(Base, TenantMixin, TimestampMixin):
    """
    Produtos vendidos na loja

    Exemplos:
    - Refrigerante Cola 2L
    - Arroz Branco 5kg

    O estoque é decrementado pelas vendas e incrementado pela importação
    de NFe. Pode ficar negativo quando a venda não é validada.
    """
    __tablename__ = "produtos"

    id = Column(Integer, primary_key=True, index=True)

    # Identificação
    codigo = Column(String(50), nullable=False)  # Código interno da loja
    codigo_barras = Column(String(50), nullable=True)
    nome = Column(String(200), nullable=False)
    descricao = Column(Text, nullable=True)
    categoria = Column(String(100), nullable=False, default="Geral")
    unidade = Column(SQLEnum(UnidadeMedida), nullable=False, default=UnidadeMedida.UN)

    # Preços
    preco_custo = Column(Numeric(12, 2), nullable=False, default=0)
    preco_venda = Column(Numeric(12, 2), nullable=False, default=0)

    # Controle de estoque
    estoque = Column(Numeric(12, 3), nullable=False, default=0)
    estoque_minimo = Column(Numeric(12, 3), nullable=False, default=0)

    status = Column(SQLEnum(StatusProduto), nullable=False, default=StatusProduto.ATIVO)

    def __repr__(self):
        return f"<Produto {self.codigo} - {self.nome}>"

    # Índices compostos para multi-tenant e performance
    __table_args__ = (
        UniqueConstraint('tenant_id', 'codigo', name='uq_produtos_tenant_codigo'),
        Index('idx_produtos_tenant_nome', 'tenant_id', 'nome'),
        Index('idx_produtos_tenant_barras', 'tenant_id', 'codigo_barras'),
    )
