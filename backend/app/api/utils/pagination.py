"""
Pagination Helpers - paginação e busca textual nas listagens
"""
from typing import TypeVar, Any, Optional, Tuple, List
from sqlalchemy.orm import Query
from sqlalchemy import or_

T = TypeVar('T')


def paginate_query(
    query: Query,
    page: int = 1,
    page_size: int = 20,
    order_by: Any = None
) -> Tuple[List[T], int]:
    """
    Aplica paginação em uma query e retorna itens + total.

    Usage:
        items, total = paginate_query(query, page=1, page_size=20, order_by=Produto.nome)
    """
    total = query.count()

    if order_by is not None:
        if isinstance(order_by, tuple):
            query = query.order_by(*order_by)
        else:
            query = query.order_by(order_by)

    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return items, total


def apply_search_filter(query: Query, search_term: Optional[str], *fields) -> Query:
    """
    Filtro ILIKE em vários campos (ex: Produto.nome, Produto.codigo)
    """
    if not search_term or not fields:
        return query

    conditions = [field.ilike(f"%{search_term}%") for field in fields]
    return query.filter(or_(*conditions))
