import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.security import decode_access_token
from app.core.tenant_context import set_current_tenant_id, clear_current_tenant_id
from jose import JWTError

logger = logging.getLogger(__name__)


class TenantMiddleware(BaseHTTPMiddleware):
    """
    Middleware que identifica o usuário e o tenant em TODAS as
    requisições autenticadas

    Fluxo:
    1. Extrai o token JWT do header Authorization
    2. Decodifica o token e obtém user_id, tenant_id e perfil
    3. Adiciona ao contexto da request (request.state)
    4. Configura tenant_id no ContextVar (usado também nos logs)

    O master não tem tenant: tenant_id fica None no token.
    Erros de autenticação voltam como 401 direto daqui, sem chegar nas rotas.
    """

    # Rotas públicas que NÃO precisam de autenticação
    PUBLIC_PATHS = [
        "/",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/api/v1/openapi.json",
        "/api/v1/auth/login",
    ]

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Permitir requisições OPTIONS (CORS preflight)
        if request.method == "OPTIONS":
            return await call_next(request)

        if path in self.PUBLIC_PATHS or not path.startswith("/api/"):
            clear_current_tenant_id()
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return self._nao_autorizado("Token de autenticação não fornecido")

        token = auth_header.replace("Bearer ", "", 1)

        try:
            payload = decode_access_token(token)
        except JWTError as e:
            clear_current_tenant_id()
            logger.info("Token recusado: %s", e)
            return self._nao_autorizado("Token inválido ou expirado")

        user_id = payload.get("user_id")
        perfil = payload.get("perfil")
        if not user_id or not perfil:
            return self._nao_autorizado("Token inválido: usuário não identificado")

        # Adicionar ao contexto da request
        request.state.user_id = user_id
        request.state.tenant_id = payload.get("tenant_id")
        request.state.perfil = perfil
        request.state.nome = payload.get("nome", "")
        request.state.email = payload.get("email", "")

        set_current_tenant_id(request.state.tenant_id)
        try:
            return await call_next(request)
        finally:
            clear_current_tenant_id()

    @staticmethod
    def _nao_autorizado(detail: str) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": detail})
