"""
Database Helpers - buscas com isolamento por tenant usadas pelas rotas
"""
from typing import Type, TypeVar, Optional, Any
from sqlalchemy.orm import Session
from fastapi import HTTPException

T = TypeVar('T')


def get_by_id(
    db: Session,
    model: Type[T],
    entity_id: Any,
    tenant_id: Optional[int] = None,
    error_message: str = None
) -> T:
    """
    Busca entidade por ID, restrita ao tenant quando tenant_id é informado.

    Raises:
        HTTPException 404 se a entidade não existir (ou for de outro tenant)

    Usage:
        produto = get_by_id(db, Produto, produto_id, tenant_id)
        plano = get_by_id(db, Plano, "plan_demo")  # entidades globais
    """
    query = db.query(model).filter(model.id == entity_id)
    if tenant_id is not None:
        query = query.filter(model.tenant_id == tenant_id)

    entity = query.first()
    if not entity:
        msg = error_message or f"{model.__name__} não encontrado"
        raise HTTPException(status_code=404, detail=msg)

    return entity


def validate_unique(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    tenant_id: Optional[int] = None,
    exclude_id: Any = None,
    display_name: str = None
) -> None:
    """
    Valida unicidade de campo, dentro do tenant ou global (tenant_id=None).

    Raises:
        HTTPException 400 se valor já existir

    Usage:
        validate_unique(db, Fornecedor, "documento", documento, tenant_id)
        validate_unique(db, Tenant, "email", email, display_name="Email")
    """
    field = getattr(model, field_name)
    query = db.query(model).filter(field == field_value)
    if tenant_id is not None:
        query = query.filter(model.tenant_id == tenant_id)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)

    if query.first():
        name = display_name or field_name
        raise HTTPException(status_code=400, detail=f"{name} já cadastrado")
