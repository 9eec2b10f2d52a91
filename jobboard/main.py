# jobboard/main.py
from contextlib import asynccontextmanager
import json
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.core.config import settings
from jobboard.core.errors import AppError, RuleViolation, kind_for_status
from jobboard.core.logging import setup_logging
from jobboard.core.responses import error_response
from jobboard.api.router import api_router
from jobboard.db.session import engine
from jobboard.db.base import Base

# registra todos os models no metadata antes do create_all
from jobboard.modules.users.models import User  # noqa: F401
from jobboard.modules.vacancies.models import Vacancy  # noqa: F401
from jobboard.modules.applications.models import Application  # noqa: F401

logger = logging.getLogger(__name__)


def _normalize_origins(value) -> list[str]:
    """Aceita lista, JSON string ou CSV e devolve lista de origens."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(o).strip() for o in value if str(o).strip()]
    if isinstance(value, str):
        # tenta JSON primeiro
        try:
            as_json = json.loads(value)
        except ValueError:
            as_json = None
        if isinstance(as_json, (list, tuple)):
            return [str(o).strip() for o in as_json if str(o).strip()]
        # fallback: CSV
        return [o.strip() for o in value.split(",") if o.strip()]
    return [str(value).strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Em dev cria as tabelas automaticamente (não há migrations)."""
    setup_logging()
    env = (settings.ENVIRONMENT or "").lower().strip()
    if env == "dev":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("%s starting (environment=%s)", settings.APP_NAME, env)
    yield
    await engine.dispose()
    logger.info("%s shutting down", settings.APP_NAME)


# --- App ---
app = FastAPI(title=settings.APP_NAME, version="1.0.0", lifespan=lifespan)

# --- CORS (colocado ANTES dos routers) ---
origins = _normalize_origins(getattr(settings, "CORS_ORIGINS", None))
if not origins:
    origins = [
        "http://localhost:3001",
        "http://localhost:5173",
        "http://localhost:8080",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,      # lista explícita: o JWT vai em cookie (allow_credentials=True)
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1fms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


# --- Erros -> envelope padrão ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.info("%s %s -> %s %s: %s", request.method, request.url.path, exc.status_code, exc.kind, exc.message)
    return error_response(request, exc.status_code, exc.kind, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return error_response(request, RuleViolation.status_code, RuleViolation.kind, "; ".join(messages) or "Invalid request")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(request, exc.status_code, kind_for_status(exc.status_code), str(exc.detail))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return error_response(request, 500, AppError.kind, "Internal server error")


# Healthcheck simples
@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


app.include_router(api_router)
