# jobboard/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

SECRET_ALG = "HS256"

# claims de identidade; "exp" é validado pelo próprio jose
IDENTITY_CLAIMS = frozenset({"sub", "email", "role"})

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(ValueError):
    pass


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def create_access_token(
    data: dict[str, Any],
    expires_minutes: int = 120,
    secret_key: str = "change-me",
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=SECRET_ALG)

def decode_token(token: str, secret_key: str) -> dict[str, Any]:
    return jwt.decode(token, secret_key, algorithms=[SECRET_ALG])

def decode_identity(token: str, secret_key: str) -> dict[str, Any]:
    """
    Decodifica o token e exige exatamente as claims de identidade (+ exp).
    Assinatura inválida, token expirado ou payload fora do formato -> InvalidTokenError.
    """
    try:
        payload = decode_token(token, secret_key)
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    if set(payload) != IDENTITY_CLAIMS | {"exp"}:
        raise InvalidTokenError("unexpected token claims")
    return payload
