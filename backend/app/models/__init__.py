"""
Models do sistema - Multi-tenant

IMPORTANTE: Todos os models de negócio herdam de TenantMixin, que adiciona tenant_id
Isso garante isolamento de dados entre lojas
"""

from app.models.base import Base, TenantMixin, TimestampMixin
from app.models.plano import Plano
from app.models.tenant import Tenant, StatusTenant
from app.models.funcionario import Funcionario
from app.models.produto import Produto, UnidadeMedida, StatusProduto
from app.models.fornecedor import Fornecedor
from app.models.venda import Venda, ItemVenda, FormaPagamento

__all__ = [
    "Base",
    "TenantMixin",
    "TimestampMixin",
    "Plano",
    "Tenant",
    "StatusTenant",
    "Funcionario",
    "Produto",
    "UnidadeMedida",
    "StatusProduto",
    "Fornecedor",
    "Venda",
    "ItemVenda",
    "FormaPagamento",
]
