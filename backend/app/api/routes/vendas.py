"""
Rotas de Vendas - caixa (PDV) e painel de indicadores
"""
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.api.deps import (
    get_db, get_current_user, get_current_tenant_id, get_venda_service, require_senha_atualizada
)
from app.api.utils import raise_for_resultado
from app.repositories import VendaRepository
from app.schemas.venda import VendaCreate, VendaResponse, ResumoVendasResponse
from app.services.auth_service import UsuarioAutenticado
from app.services.venda_service import VendaService

router = APIRouter(dependencies=[Depends(require_senha_atualizada)])


@router.post("", response_model=VendaResponse, status_code=201)
def registrar_venda(
    dados: VendaCreate,
    tenant_id: int = Depends(get_current_tenant_id),
    user: UsuarioAutenticado = Depends(get_current_user),
    service: VendaService = Depends(get_venda_service)
):
    """Fecha a venda e baixa o estoque dos produtos vendidos"""
    resultado = service.registrar(tenant_id, dados, registrada_por=user.id)
    raise_for_resultado(resultado)
    return resultado.venda


@router.get("", response_model=List[VendaResponse])
def listar_vendas(
    limite: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Vendas mais recentes primeiro"""
    return VendaRepository(db).listar_por_tenant(tenant_id, limite)


@router.get("/resumo", response_model=ResumoVendasResponse)
def resumo_vendas(
    inicio: Optional[datetime] = Query(None),
    fim: Optional[datetime] = Query(None),
    tenant_id: int = Depends(get_current_tenant_id),
    service: VendaService = Depends(get_venda_service)
):
    """Faturamento, quantidade de vendas, ticket médio e produtos mais vendidos"""
    return service.resumo(tenant_id, inicio, fim)


@router.get("/{venda_id}", response_model=VendaResponse)
def obter_venda(
    venda_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    venda = VendaRepository(db).buscar_por_id(venda_id, tenant_id)
    if not venda:
        raise HTTPException(status_code=404, detail="Venda não encontrada")
    return venda
