"""
Rotas de Planos de assinatura - exclusivas do MASTER
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.api.deps import get_db, require_master
from app.api.utils import get_by_id, validate_unique, update_entity
from app.models.plano import Plano
from app.models.tenant import Tenant
from app.schemas.plano import PlanoCreate, PlanoUpdate, PlanoResponse

router = APIRouter(dependencies=[Depends(require_master)])


@router.get("", response_model=List[PlanoResponse])
def listar_planos(db: Session = Depends(get_db)):
    return db.query(Plano).order_by(Plano.taxa_suporte, Plano.id).all()


@router.post("", response_model=PlanoResponse, status_code=201)
def criar_plano(
    plano: PlanoCreate,
    db: Session = Depends(get_db)
):
    """Criar novo plano"""
    validate_unique(db, Plano, "id", plano.id, display_name="Plano")

    db_plano = Plano(**plano.model_dump())
    db.add(db_plano)
    db.commit()
    db.refresh(db_plano)
    return db_plano


@router.put("/{plano_id}", response_model=PlanoResponse)
def atualizar_plano(
    plano_id: str,
    plano_update: PlanoUpdate,
    db: Session = Depends(get_db)
):
    """Atualizar plano (a mensalidade das lojas já cadastradas não muda)"""
    plano = get_by_id(db, Plano, plano_id, error_message="Plano não encontrado")
    return update_entity(db, plano, plano_update)


@router.delete("/{plano_id}", status_code=204)
def deletar_plano(
    plano_id: str,
    db: Session = Depends(get_db)
):
    """Deletar plano sem lojas vinculadas"""
    plano = get_by_id(db, Plano, plano_id, error_message="Plano não encontrado")

    if db.query(Tenant).filter(Tenant.plano_id == plano_id).first():
        raise HTTPException(status_code=400, detail="Plano possui lojas vinculadas")

    db.delete(plano)
    db.commit()
    return None
