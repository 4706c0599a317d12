"""
Rotas da Equipe - o gerente cadastra os operadores de caixa da própria loja
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.api.deps import get_db, get_current_tenant_id, require_gerente
from app.api.utils import update_entity
from app.config import settings
from app.core.security import hash_password
from app.models.funcionario import Funcionario
from app.models.plano import Plano
from app.models.tenant import Tenant
from app.repositories import FuncionarioRepository
from app.schemas.funcionario import FuncionarioCreate, FuncionarioResponse

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_gerente)])


@router.get("", response_model=List[FuncionarioResponse])
def listar_equipe(
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    return FuncionarioRepository(db).listar_por_tenant(tenant_id)


@router.post("", response_model=FuncionarioResponse, status_code=201)
def criar_funcionario(
    dados: FuncionarioCreate,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """
    Cadastra operador na loja do gerente

    - Email único entre funcionários (e diferente dos emails de gerente/master)
    - Respeita o limite de usuários do plano (-1 = ilimitado)
    """
    funcionarios = FuncionarioRepository(db)

    email_em_uso = (
        dados.email == settings.MASTER_EMAIL
        or funcionarios.buscar_por_email(dados.email) is not None
        or db.query(Tenant).filter(Tenant.email == dados.email).first() is not None
    )
    if email_em_uso:
        raise HTTPException(status_code=400, detail="Email já cadastrado")

    limite = db.query(Plano.limite_usuarios).join(Tenant, Tenant.plano_id == Plano.id).filter(
        Tenant.id == tenant_id
    ).scalar()
    if limite is not None and limite >= 0 and funcionarios.contar_ativos(tenant_id) >= limite:
        raise HTTPException(status_code=400, detail="Limite de usuários do plano atingido")

    funcionario = funcionarios.adicionar(Funcionario(
        tenant_id=tenant_id,
        nome=dados.nome,
        email=dados.email,
        senha_hash=hash_password(dados.senha),
        ativo=True,
    ))
    db.commit()
    db.refresh(funcionario)

    logger.info("Funcionário cadastrado: id=%s", funcionario.id)
    return funcionario


@router.post("/{funcionario_id}/desativar", response_model=FuncionarioResponse)
def desativar_funcionario(
    funcionario_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Desativa o operador (não consegue mais fazer login)"""
    funcionario = FuncionarioRepository(db).buscar_por_id(funcionario_id, tenant_id)
    if not funcionario:
        raise HTTPException(status_code=404, detail="Funcionário não encontrado")
    return update_entity(db, funcionario, {"ativo": False})
