"""
Script para popular o banco de dados com a loja de demonstração

Cria (se ainda não existirem):
- Plano "plan_demo"
- Loja "Mercadinho do João" (joao@mercado.com / 123456, sem troca obrigatória)
- Produtos de exemplo da loja

Uso:
    python scripts/seed_data.py
"""
import logging
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

# Adicionar o diretório raiz ao path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from app.config import settings
from app.core.security import hash_password
from app.models.plano import Plano
from app.models.tenant import Tenant, StatusTenant
from app.models.produto import Produto, UnidadeMedida, StatusProduto

logger = logging.getLogger("app.scripts.seed_data")

EMAIL_DEMO = "joao@mercado.com"
SENHA_DEMO = "123456"

PRODUTOS_DEMO = [
    {
        "codigo": "PROD001",
        "codigo_barras": "78910001001",
        "nome": "Refrigerante Cola 2L",
        "categoria": "Bebidas",
        "preco_custo": Decimal("5.50"),
        "preco_venda": Decimal("9.00"),
        "estoque": Decimal("150"),
        "estoque_minimo": Decimal("20"),
    },
    {
        "codigo": "PROD002",
        "codigo_barras": "78910001002",
        "nome": "Arroz Branco 5kg",
        "categoria": "Alimentos",
        "preco_custo": Decimal("18.00"),
        "preco_venda": Decimal("24.90"),
        "estoque": Decimal("45"),
        "estoque_minimo": Decimal("10"),
    },
]


def popular_demo(db: Session) -> Tenant:
    """
    Cria plano, loja e produtos de demonstração. Idempotente.

    Returns:
        Tenant da loja de demonstração
    """
    plano = db.query(Plano).filter(Plano.id == "plan_demo").first()
    if not plano:
        plano = Plano(
            id="plan_demo",
            nome="Plano Pro (Demo)",
            limite_produtos=500,
            limite_usuarios=3,
            taxa_implantacao=Decimal("150.00"),
            taxa_suporte=Decimal("99.90"),
            recursos=["Suporte Prioritário", "Gestão de Estoque", "Múltiplos Usuários"],
        )
        db.add(plano)
        db.flush()
        logger.info("Plano criado: %s", plano.id)

    tenant = db.query(Tenant).filter(Tenant.email == EMAIL_DEMO).first()
    if not tenant:
        agora = datetime.utcnow()
        tenant = Tenant(
            nome_empresa="Mercadinho do João",
            nome_responsavel="João Silva",
            email=EMAIL_DEMO,
            senha_hash=hash_password(SENHA_DEMO),
            deve_trocar_senha=False,
            documento="12.345.678/0001-99",
            plano_id=plano.id,
            status=StatusTenant.ACTIVE,
            mensalidade=plano.taxa_suporte,
            data_adesao=agora,
            proximo_vencimento=agora + timedelta(days=settings.DIAS_CICLO_COBRANCA),
        )
        db.add(tenant)
        db.flush()
        logger.info("Loja criada: %s (id=%s)", tenant.nome_empresa, tenant.id)

    for dados in PRODUTOS_DEMO:
        existe = db.query(Produto).filter(
            Produto.tenant_id == tenant.id,
            Produto.codigo == dados["codigo"]
        ).first()
        if not existe:
            db.add(Produto(
                tenant_id=tenant.id,
                unidade=UnidadeMedida.UN,
                status=StatusProduto.ATIVO,
                **dados
            ))

    db.commit()
    db.refresh(tenant)
    return tenant


if __name__ == "__main__":
    from app.core.logging_config import configure_logging
    from app.database import SessionLocal, create_all_tables

    configure_logging()
    create_all_tables()

    db = SessionLocal()
    try:
        loja = popular_demo(db)
        logger.info("Seed concluído: %d produtos na loja %s",
                    db.query(Produto).filter(Produto.tenant_id == loja.id).count(), loja.nome_empresa)
    except Exception:
        db.rollback()
        logger.exception("Erro ao executar seed")
        raise
    finally:
        db.close()
