# API Utilities - helpers compartilhados pelas rotas
from app.api.utils.db_helpers import get_by_id, validate_unique
from app.api.utils.pagination import paginate_query, apply_search_filter
from app.api.utils.updates import update_entity
from app.api.utils.erros import raise_for_resultado

__all__ = [
    # db_helpers
    "get_by_id",
    "validate_unique",
    # pagination
    "paginate_query",
    "apply_search_filter",
    # updates
    "update_entity",
    # erros
    "raise_for_resultado",
]
