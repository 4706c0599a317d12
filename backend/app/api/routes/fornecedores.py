"""
Rotas de Fornecedores
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.api.deps import get_db, get_current_tenant_id, require_senha_atualizada
from app.api.utils import get_by_id, validate_unique, paginate_query, apply_search_filter
from app.models.fornecedor import Fornecedor
from app.schemas.fornecedor import FornecedorCreate, FornecedorResponse, FornecedorListResponse

router = APIRouter(dependencies=[Depends(require_senha_atualizada)])


@router.post("", response_model=FornecedorResponse, status_code=201)
def criar_fornecedor(
    fornecedor: FornecedorCreate,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Criar novo fornecedor"""
    validate_unique(db, Fornecedor, "documento", fornecedor.documento, tenant_id, display_name="CNPJ")

    db_fornecedor = Fornecedor(**fornecedor.model_dump(), tenant_id=tenant_id)
    db.add(db_fornecedor)
    db.commit()
    db.refresh(db_fornecedor)
    return db_fornecedor


@router.get("", response_model=FornecedorListResponse)
def listar_fornecedores(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    busca: Optional[str] = Query(None, description="Buscar por nome ou CNPJ"),
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Listar fornecedores com paginação"""
    query = db.query(Fornecedor).filter(Fornecedor.tenant_id == tenant_id)
    query = apply_search_filter(query, busca, Fornecedor.nome, Fornecedor.documento)

    items, total = paginate_query(query, page, page_size, Fornecedor.nome)
    return {"items": items, "total": total}


@router.get("/{fornecedor_id}", response_model=FornecedorResponse)
def obter_fornecedor(
    fornecedor_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    return get_by_id(db, Fornecedor, fornecedor_id, tenant_id, error_message="Fornecedor não encontrado")
