from sqlalchemy import Column, Integer, String, Boolean
from app.models.base import Base, TenantMixin, TimestampMixin


class Funcionario(Base, TenantMixin, TimestampMixin):
    """
    Funcionários (operadores de caixa) cadastrados pelo gerente da loja

    IMPORTANTE: Cada funcionário pertence a UM ÚNICO tenant
    e nunca é obrigado a trocar a senha.
    """
    __tablename__ = "funcionarios"

    id = Column(Integer, primary_key=True, index=True)

    nome = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    senha_hash = Column(String(255), nullable=False)
    ativo = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Funcionario {self.nome} ({self.email})>"
