import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.config import settings
from jobboard.core.dependencies import get_db, require_api_key
from jobboard.core.errors import AuthenticationFailure, Conflict
from jobboard.core.permissions import Role
from jobboard.core.responses import ApiResponse, ok
from jobboard.core.security import create_access_token, hash_password, verify_password
from jobboard.modules.users.crud import ensure_email_available, get_user_by_email
from jobboard.modules.users.models import User
from .schemas import AuthOut, LoginRequest, LogoutOut, RegisterRequest

logger = logging.getLogger(__name__)

# todas as rotas de auth exigem só a API key (ainda não há identidade)
router = APIRouter(dependencies=[Depends(require_api_key)])


def issue_token(user: User) -> str:
    return create_access_token(
        {"sub": str(user.id), "email": user.email, "role": user.role.value},
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        secret_key=settings.SECRET_KEY,
    )


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
        httponly=True,
        secure=settings.is_production,   # HTTPS só em produção
        samesite="strict",
    )


def _auth_payload(user: User) -> dict:
    return {"user": {"id": user.id, "name": user.name, "email": user.email, "role": user.role}}


@router.post("/register", response_model=ApiResponse[AuthOut], status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, response: Response, db: AsyncSession = Depends(get_db)):
    email = payload.email.lower().strip()
    await ensure_email_available(db, email)

    # cadastro público é sempre CODER; admin/gestor só via seed ou update de admin
    user = User(
        name=payload.name,
        email=email,
        password_hash=hash_password(payload.password),
        role=Role.coder,
        status="active",
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # outro cadastro com o mesmo email passou pela checagem ao mesmo tempo
        await db.rollback()
        logger.info("register rejected: email %s taken (unique constraint)", email)
        raise Conflict("Email already exists")
    await db.refresh(user)
    logger.info("user %s registered", user.id)

    set_auth_cookie(response, issue_token(user))
    return ok(_auth_payload(user), "User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthOut])
async def login(payload: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    user = await get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("login failed for %s", payload.email)
        raise AuthenticationFailure("Invalid credentials")

    set_auth_cookie(response, issue_token(user))
    logger.info("user %s logged in", user.id)
    return ok(_auth_payload(user), "Login successful")


@router.post("/logout", response_model=ApiResponse[LogoutOut])
async def logout(response: Response):
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return ok({"message": "Session closed"}, "Logout successful")
