from typing import AsyncIterator, Callable, Optional
import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.db.session import AsyncSessionLocal
from jobboard.core.config import settings
from jobboard.core.errors import AuthenticationFailure
from jobboard.core.permissions import Operation, Principal, Role, check_role, is_public
from jobboard.core.security import InvalidTokenError, decode_identity

logger = logging.getLogger(__name__)

# auto_error=False: a falta de credencial vira AuthenticationFailure no envelope padrão
api_key_scheme = APIKeyHeader(name=settings.API_KEY_HEADER, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)  # fallback do cookie (Swagger, clientes CLI)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session


def require_api_key(api_key: Optional[str] = Depends(api_key_scheme)) -> None:
    if not api_key or not secrets.compare_digest(api_key, settings.API_KEY):
        raise AuthenticationFailure("Invalid API Key")


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    # prioridade: cookie HttpOnly > Authorization: Bearer
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


def principal_from_token(token: Optional[str]) -> Principal:
    if not token:
        raise AuthenticationFailure("Missing token")
    try:
        payload = decode_identity(token, settings.SECRET_KEY)
        return Principal(
            id=int(payload["sub"]),
            email=str(payload["email"]),
            role=Role(payload["role"]),
        )
    except (InvalidTokenError, ValueError, TypeError):
        raise AuthenticationFailure("Invalid or expired token")


def authorize(operation: Operation) -> Callable[..., Optional[Principal]]:
    """
    Dependência única de autorização: API key -> identidade (JWT) -> papel.
    Operações públicas não exigem nada e devolvem None.
    """

    def _dependency(
        request: Request,
        api_key: Optional[str] = Depends(api_key_scheme),
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Optional[Principal]:
        if is_public(operation):
            return None
        require_api_key(api_key)
        principal = principal_from_token(extract_token(request, credentials))
        check_role(principal, operation)
        logger.debug("access granted: user=%s role=%s op=%s", principal.id, principal.role.value, operation.value)
        return principal

    _dependency.__name__ = f"authorize_{operation.name}"
    return _dependency
