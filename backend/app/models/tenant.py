from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum
from app.models.base import Base, TimestampMixin


class StatusTenant(str, enum.Enum):
    """Situação da assinatura do tenant"""
    ACTIVE = "Active"
    BLOCKED = "Blocked"
    PENDING = "Pending"


class Tenant(Base, TimestampMixin):
    """
    Representa uma loja cliente do SaaS (Multi-Tenant)

    O tenant é também a credencial do dono da loja (perfil Gerente):
    - email + senha_hash são usados no login
    - deve_trocar_senha força a troca no primeiro acesso e após reset

    Cada tenant é dono dos seus produtos, fornecedores e funcionários.
    """
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)

    # Identificação
    nome_empresa = Column(String(200), nullable=False)
    nome_responsavel = Column(String(200), nullable=False)
    documento = Column(String(20), unique=True, nullable=False, index=True)  # CNPJ

    # Credencial do gerente
    email = Column(String(200), unique=True, nullable=False, index=True)
    senha_hash = Column(String(255), nullable=False)  # Senha hasheada com bcrypt
    deve_trocar_senha = Column(Boolean, default=True, nullable=False)

    # Assinatura
    plano_id = Column(String(50), ForeignKey('planos.id'), nullable=False)
    status = Column(SQLEnum(StatusTenant), default=StatusTenant.ACTIVE, nullable=False)
    mensalidade = Column(Numeric(10, 2), nullable=False, default=0)
    proximo_vencimento = Column(DateTime, nullable=False)
    data_adesao = Column(DateTime, nullable=False)

    plano = relationship("Plano")

    def __repr__(self):
        return f"<Tenant {self.nome_empresa} (ID: {self.id})>"
