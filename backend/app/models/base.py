from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import declared_attr, relationship
from datetime import datetime
from app.database import Base


class TenantMixin:
    """
    Mixin para adicionar tenant_id em TODAS as tabelas de negócio
    CRÍTICO para isolamento multi-tenant

    Todas as tabelas que herdam este mixin terão automaticamente:
    - tenant_id (foreign key para tenants.id)
    - relacionamento com Tenant
    """

    @declared_attr
    def tenant_id(cls):
        return Column(Integer, ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False, index=True)

    @declared_attr
    def tenant(cls):
        return relationship("Tenant", foreign_keys=[cls.tenant_id])


class TimestampMixin:
    """
    Mixin para campos de auditoria temporal
    Todas as tabelas terão created_at e updated_at
    """
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


# Base já foi definida em database.py
# Aqui apenas importamos e exportamos para facilitar
__all__ = ['Base', 'TenantMixin', 'TimestampMixin']
