"""
Rotas de administração de tenants (lojas) - exclusivas do MASTER

O tenant é criado com senha temporária: o gerente é obrigado
a trocá-la no primeiro acesso.
"""
import logging
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.api.deps import get_db, get_auth_service, require_master
from app.api.utils import get_by_id, validate_unique, update_entity, raise_for_resultado
from app.config import settings
from app.core.security import hash_password, gerar_senha_temporaria
from app.models.tenant import Tenant
from app.models.plano import Plano
from app.models.funcionario import Funcionario
from app.models.produto import Produto
from app.models.fornecedor import Fornecedor
from app.models.venda import Venda, ItemVenda
from app.repositories import TenantRepository
from app.schemas.tenant import (
    TenantCreate, TenantUpdate, TenantResponse, TenantCriadoResponse, TenantListResponse
)
from app.schemas.usuario import SenhaTemporariaResponse
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_master)])


@router.get("", response_model=TenantListResponse)
def listar_tenants(db: Session = Depends(get_db)):
    """Listar todas as lojas (mais recentes primeiro)"""
    tenants = TenantRepository(db).listar()
    return {"total": len(tenants), "items": tenants}


@router.post("", response_model=TenantCriadoResponse, status_code=status.HTTP_201_CREATED)
def criar_tenant(
    tenant_data: TenantCreate,
    db: Session = Depends(get_db)
):
    """
    Cria uma nova loja

    - O plano precisa existir; a mensalidade vem da taxa de suporte do plano
    - Email e documento são únicos entre lojas
    - A senha temporária do gerente é devolvida uma única vez
    """
    plano = get_by_id(db, Plano, tenant_data.plano_id, error_message="Plano não encontrado")
    validate_unique(db, Tenant, "documento", tenant_data.documento, display_name="Documento")
    validate_unique(db, Tenant, "email", tenant_data.email, display_name="Email")

    # O email do gerente também é usado no login: não pode colidir com master nem funcionário
    if tenant_data.email == settings.MASTER_EMAIL or \
            db.query(Funcionario).filter(Funcionario.email == tenant_data.email).first():
        raise HTTPException(status_code=400, detail="Email já cadastrado")

    senha_temporaria = gerar_senha_temporaria()
    agora = datetime.utcnow()

    tenant = TenantRepository(db).adicionar(Tenant(
        nome_empresa=tenant_data.nome_empresa,
        nome_responsavel=tenant_data.nome_responsavel,
        email=tenant_data.email,
        documento=tenant_data.documento,
        senha_hash=hash_password(senha_temporaria),
        deve_trocar_senha=True,
        plano_id=plano.id,
        status=tenant_data.status,
        mensalidade=plano.taxa_suporte,
        data_adesao=agora,
        proximo_vencimento=agora + timedelta(days=settings.DIAS_CICLO_COBRANCA),
    ))
    db.commit()
    db.refresh(tenant)

    logger.info("Tenant criado: id=%s plano=%s", tenant.id, plano.id)
    return {"tenant": tenant, "senha_temporaria": senha_temporaria}


@router.patch("/{tenant_id}", response_model=TenantResponse)
def atualizar_tenant(
    tenant_id: int,
    tenant_update: TenantUpdate,
    db: Session = Depends(get_db)
):
    """Atualiza dados, plano ou situação (Active/Blocked/Pending) da loja"""
    tenant = get_by_id(db, Tenant, tenant_id, error_message="Loja não encontrada")
    dados = tenant_update.model_dump(exclude_unset=True)

    if dados.get("plano_id") and dados["plano_id"] != tenant.plano_id:
        plano = get_by_id(db, Plano, dados["plano_id"], error_message="Plano não encontrado")
        dados["mensalidade"] = plano.taxa_suporte

    return update_entity(db, tenant, dados)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_tenant(
    tenant_id: int,
    db: Session = Depends(get_db)
):
    """Remove a loja e todos os dados dela"""
    tenant = get_by_id(db, Tenant, tenant_id, error_message="Loja não encontrada")

    # Itens antes das vendas e vendas antes dos produtos (chaves estrangeiras)
    for model in (ItemVenda, Venda, Produto, Fornecedor, Funcionario):
        db.query(model).filter(model.tenant_id == tenant_id).delete(synchronize_session=False)
    db.delete(tenant)
    db.commit()

    logger.info("Tenant removido: id=%s", tenant_id)
    return None


@router.post("/{tenant_id}/resetar-senha", response_model=SenhaTemporariaResponse)
def resetar_senha(
    tenant_id: int,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Gera nova senha temporária para o gerente da loja.
    O gerente será obrigado a trocá-la no próximo acesso.
    """
    resultado = auth.resetar_senha(tenant_id)
    raise_for_resultado(resultado)
    return {"tenant_id": tenant_id, "senha_temporaria": resultado.senha_temporaria}
