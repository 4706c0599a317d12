from decimal import Decimal
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """
    Configurações da aplicação
    Carregadas do arquivo .env
    """
    # Database (SQLite local por padrão, PostgreSQL via extra "postgres")
    DATABASE_URL: str = "sqlite:///./varejo.db"

    # JWT
    SECRET_KEY: str = "troque-esta-chave-secreta-em-producao-min-32-caracteres"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720  # 12 horas

    # API
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Varejo SaaS - Gestão Multi-Tenant"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # CORS (string separada por vírgula ou lista)
    BACKEND_CORS_ORIGINS: Union[str, List[str]] = "http://localhost:5173,http://localhost:3000"

    # Usuário master (nunca persistido no banco)
    MASTER_EMAIL: str = "master@varejo.com"
    MASTER_SENHA: str = "123456"

    # Política de senhas
    SENHA_TAMANHO_MINIMO: int = 6
    SENHA_TEMPORARIA_TAMANHO: int = 8
    BCRYPT_ROUNDS: int = 12

    # Importação de NFe
    MARKUP_PADRAO: Decimal = Decimal("1.5")  # Preço de venda = custo x 1.5
    ESTOQUE_MINIMO_PADRAO: int = 5
    CATEGORIA_PADRAO_IMPORTACAO: str = "Geral"

    # Faturamento de tenants
    DIAS_CICLO_COBRANCA: int = 30

    @field_validator("BACKEND_CORS_ORIGINS", mode="after")
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS origins from string or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
