"""
Update Helpers - atualização parcial de entidades
"""
from typing import TypeVar, List, Union
from sqlalchemy.orm import Session
from pydantic import BaseModel

T = TypeVar('T')


def update_entity(
    db: Session,
    entity: T,
    update_data: Union[BaseModel, dict],
    exclude_fields: List[str] = None
) -> T:
    """
    Aplica apenas os campos enviados (exclude_unset) e faz commit.

    Usage:
        plano = update_entity(db, plano, plano_update)
        tenant = update_entity(db, tenant, {"status": StatusTenant.BLOCKED})
    """
    if isinstance(update_data, BaseModel):
        data = update_data.model_dump(exclude_unset=True)
    else:
        data = dict(update_data)

    if exclude_fields:
        data = {k: v for k, v in data.items() if k not in exclude_fields}

    for field, value in data.items():
        if hasattr(entity, field):
            setattr(entity, field, value)

    db.commit()
    db.refresh(entity)
    return entity
