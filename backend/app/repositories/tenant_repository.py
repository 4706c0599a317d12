from typing import Optional, List
from sqlalchemy.orm import Session
from app.models.tenant import Tenant


class TenantRepository:
    """
    Acesso a tenants (lojas) e às credenciais do gerente

    Não faz commit: a transação pertence ao serviço que chamou.
    """

    def __init__(self, db: Session):
        self.db = db

    def buscar_por_id(self, tenant_id: int, for_update: bool = False) -> Optional[Tenant]:
        query = self.db.query(Tenant).filter(Tenant.id == tenant_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def buscar_por_email(self, email: str) -> Optional[Tenant]:
        """Busca exata (sem normalizar caixa)"""
        return self.db.query(Tenant).filter(Tenant.email == email).first()

    def listar(self) -> List[Tenant]:
        return self.db.query(Tenant).order_by(Tenant.created_at.desc(), Tenant.id.desc()).all()

    def adicionar(self, tenant: Tenant) -> Tenant:
        self.db.add(tenant)
        self.db.flush()  # Para obter o ID
        return tenant

    def atualizar_senha(self, tenant: Tenant, senha_hash: str, deve_trocar_senha: bool) -> Tenant:
        tenant.senha_hash = senha_hash
        tenant.deve_trocar_senha = deve_trocar_senha
        self.db.flush()
        return tenant
