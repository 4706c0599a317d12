from sqlalchemy import Column, Integer, String, UniqueConstraint
from app.models.base import Base, TenantMixin, TimestampMixin


class Fornecedor(Base, TenantMixin, TimestampMixin):
    """
    Fornecedores da loja

    O documento (CNPJ) é a chave natural: a importação de NFe cria
    o fornecedor na primeira nota de um CNPJ ainda não cadastrado.
    """
    __tablename__ = "fornecedores"

    id = Column(Integer, primary_key=True, index=True)

    nome = Column(String(200), nullable=False)  # Razão social ou nome fantasia
    documento = Column(String(20), nullable=False)  # CNPJ como veio na nota

    # Contato
    email = Column(String(200), nullable=True)
    telefone = Column(String(20), nullable=True)
    nome_contato = Column(String(200), nullable=True)

    def __repr__(self):
        return f"<Fornecedor {self.nome} - CNPJ: {self.documento}>"

    __table_args__ = (
        UniqueConstraint('tenant_id', 'documento', name='uq_fornecedores_tenant_documento'),
    )
