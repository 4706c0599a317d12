from typing import Optional, List
from sqlalchemy.orm import Session
from app.models.funcionario import Funcionario


class FuncionarioRepository:
    """Acesso aos funcionários (operadores) de todos os tenants"""

    def __init__(self, db: Session):
        self.db = db

    def buscar_por_email(self, email: str) -> Optional[Funcionario]:
        return self.db.query(Funcionario).filter(Funcionario.email == email).first()

    def buscar_ativo_por_email(self, email: str) -> Optional[Funcionario]:
        """Busca em qualquer tenant - o email é único entre funcionários"""
        return self.db.query(Funcionario).filter(
            Funcionario.email == email,
            Funcionario.ativo == True  # noqa: E712
        ).first()

    def buscar_por_id(self, funcionario_id: int, tenant_id: int) -> Optional[Funcionario]:
        return self.db.query(Funcionario).filter(
            Funcionario.id == funcionario_id,
            Funcionario.tenant_id == tenant_id
        ).first()

    def listar_por_tenant(self, tenant_id: int) -> List[Funcionario]:
        return self.db.query(Funcionario).filter(
            Funcionario.tenant_id == tenant_id
        ).order_by(Funcionario.nome).all()

    def contar_ativos(self, tenant_id: int) -> int:
        return self.db.query(Funcionario).filter(
            Funcionario.tenant_id == tenant_id,
            Funcionario.ativo == True  # noqa: E712
        ).count()

    def adicionar(self, funcionario: Funcionario) -> Funcionario:
        self.db.add(funcionario)
        self.db.flush()
        return funcionario
