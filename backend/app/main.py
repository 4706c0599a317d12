import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.core.logging_config import configure_logging
from app.database import create_all_tables
from app.middleware.tenant_middleware import TenantMiddleware
from app.api.routes import auth, tenants, planos, equipe, fornecedores, produtos, vendas

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Middleware de Tenant (identifica usuário e loja pelo JWT)
app.add_middleware(TenantMiddleware)


# Rota de health check
@app.get("/health")
def health_check():
    """Health check para monitoramento"""
    return {"status": "healthy"}


@app.get("/")
def root():
    return {
        "message": "Varejo SaaS - API Multi-Tenant",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


# Incluir routers
app.include_router(auth.router, prefix=f"{settings.API_V1_STR}/auth", tags=["auth"])
app.include_router(tenants.router, prefix=f"{settings.API_V1_STR}/tenants", tags=["tenants"])
app.include_router(planos.router, prefix=f"{settings.API_V1_STR}/planos", tags=["planos"])
app.include_router(equipe.router, prefix=f"{settings.API_V1_STR}/equipe", tags=["equipe"])
app.include_router(fornecedores.router, prefix=f"{settings.API_V1_STR}/fornecedores", tags=["fornecedores"])
app.include_router(produtos.router, prefix=f"{settings.API_V1_STR}/produtos", tags=["produtos"])
app.include_router(vendas.router, prefix=f"{settings.API_V1_STR}/vendas", tags=["vendas"])


@app.on_event("startup")
def startup_event():
    configure_logging()
    logger.info("%s iniciado (ambiente: %s)", settings.PROJECT_NAME, settings.ENVIRONMENT)

    # Criar tabelas do banco de dados automaticamente
    create_all_tables()
    logger.info("Tabelas do banco de dados criadas/verificadas")


@app.on_event("shutdown")
def shutdown_event():
    logger.info("Sistema encerrado")
