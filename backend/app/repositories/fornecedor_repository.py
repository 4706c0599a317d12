from typing import Optional
from sqlalchemy.orm import Session
from app.models.fornecedor import Fornecedor


class FornecedorRepository:
    """Acesso aos fornecedores de um tenant"""

    def __init__(self, db: Session):
        self.db = db

    def buscar_por_documento(self, tenant_id: int, documento: str, for_update: bool = False) -> Optional[Fornecedor]:
        """Busca exata pelo CNPJ, como veio na nota"""
        query = self.db.query(Fornecedor).filter(
            Fornecedor.tenant_id == tenant_id,
            Fornecedor.documento == documento
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def adicionar(self, fornecedor: Fornecedor) -> Fornecedor:
        self.db.add(fornecedor)
        self.db.flush()
        return fornecedor
