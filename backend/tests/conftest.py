import os

# Antes de importar o app: hash rápido e banco em memória
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.security import hash_password
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.models import Plano, Tenant, StatusTenant, Funcionario, Produto
from scripts.seed_data import popular_demo


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def plano(db):
    plano = Plano(
        id="plan_teste",
        nome="Plano Teste",
        limite_produtos=-1,
        limite_usuarios=-1,
        taxa_implantacao=Decimal("0"),
        taxa_suporte=Decimal("49.90"),
        recursos=[],
    )
    db.add(plano)
    db.commit()
    return plano


@pytest.fixture
def criar_tenant(db, plano):
    """Fábrica de lojas: criar_tenant(email, senha, deve_trocar_senha=False)"""

    def _criar(email="loja@teste.com", senha="senha123", deve_trocar_senha=False, documento=None):
        agora = datetime.utcnow()
        tenant = Tenant(
            nome_empresa="Loja Teste",
            nome_responsavel="Maria Souza",
            email=email,
            senha_hash=hash_password(senha),
            deve_trocar_senha=deve_trocar_senha,
            documento=documento or f"00.000.000/0001-{db.query(Tenant).count() + 10}",
            plano_id=plano.id,
            status=StatusTenant.ACTIVE,
            mensalidade=plano.taxa_suporte,
            data_adesao=agora,
            proximo_vencimento=agora + timedelta(days=30),
        )
        db.add(tenant)
        db.commit()
        db.refresh(tenant)
        return tenant

    return _criar


@pytest.fixture
def criar_funcionario(db):
    def _criar(tenant, email="caixa@teste.com", senha="caixa123", ativo=True):
        funcionario = Funcionario(
            tenant_id=tenant.id,
            nome="Carlos Caixa",
            email=email,
            senha_hash=hash_password(senha),
            ativo=ativo,
        )
        db.add(funcionario)
        db.commit()
        db.refresh(funcionario)
        return funcionario

    return _criar


@pytest.fixture
def criar_produto(db):
    def _criar(tenant, nome, codigo, estoque="0", preco_custo="1.00", preco_venda="2.00"):
        produto = Produto(
            tenant_id=tenant.id,
            codigo=codigo,
            nome=nome,
            categoria="Geral",
            preco_custo=Decimal(preco_custo),
            preco_venda=Decimal(preco_venda),
            estoque=Decimal(estoque),
            estoque_minimo=Decimal("5"),
        )
        db.add(produto)
        db.commit()
        db.refresh(produto)
        return produto

    return _criar


@pytest.fixture
def loja_demo(db):
    return popular_demo(db)


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = _get_db
    # Sem "with": o startup (create_all no banco configurado) não roda nos testes
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Faz login e devolve o header Authorization"""

    def _login(email, senha):
        resp = client.post("/api/v1/auth/login", json={"email": email, "senha": senha})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login
