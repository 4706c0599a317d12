import logging

from app.config import settings
from app.core.tenant_context import get_current_tenant_id

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - [tenant=%(tenant_id)s] %(message)s"


class TenantContextFilter(logging.Filter):
    """Anexa o tenant da requisição atual em cada registro de log"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tenant_id = get_current_tenant_id() or "-"
        return True


def configure_logging(level: str = None) -> None:
    """
    Configura o logger da aplicação (console)
    Chamado uma vez no startup
    """
    root = logging.getLogger("app")
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.addFilter(TenantContextFilter())
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
