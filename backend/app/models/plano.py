from sqlalchemy import Column, String, Integer, Numeric, JSON
from app.models.base import Base, TimestampMixin


class Plano(Base, TimestampMixin):
    """
    Plano de assinatura do SaaS

    Define limites de uso e valores cobrados do tenant:
    - taxa_implantacao: cobrada uma única vez
    - taxa_suporte: mensalidade recorrente
    """
    __tablename__ = "planos"

    id = Column(String(50), primary_key=True)  # Ex: "plan_demo"
    nome = Column(String(100), nullable=False)

    # Limites (-1 = ilimitado)
    limite_produtos = Column(Integer, nullable=False, default=100)
    limite_usuarios = Column(Integer, nullable=False, default=1)

    # Valores
    taxa_implantacao = Column(Numeric(10, 2), nullable=False, default=0)
    taxa_suporte = Column(Numeric(10, 2), nullable=False, default=0)

    # Lista de recursos exibidos na vitrine do plano
    recursos = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Plano {self.nome} ({self.id})>"
