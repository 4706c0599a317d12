from contextlib import contextmanager
from threading import Lock
from typing import Dict, Iterator

# Um lock por tenant: serializa as escritas read-modify-write
# (estoque, fornecedor, senha) de um mesmo tenant dentro do processo
_locks: Dict[int, Lock] = {}
_registry_lock = Lock()


def get_tenant_lock(tenant_id: int) -> Lock:
    """
    Retorna o lock do tenant, criando na primeira chamada
    """
    with _registry_lock:
        lock = _locks.get(tenant_id)
        if lock is None:
            lock = Lock()
            _locks[tenant_id] = lock
        return lock


@contextmanager
def tenant_lock(tenant_id: int) -> Iterator[None]:
    """
    Executa o bloco com exclusividade sobre o tenant

    Usage:
        with tenant_lock(tenant_id):
            ...
    """
    lock = get_tenant_lock(tenant_id)
    with lock:
        yield
