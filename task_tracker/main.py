"""
Главный файл FastAPI приложения.

Запуск:
    uvicorn task_tracker.main:app --reload

API документация:
    http://localhost:8000/docs       - Swagger UI
    http://localhost:8000/redoc      - ReDoc

Все ресурсные endpoints доступны по путям /api/v1/... и требуют заголовков
X-API-Key и X-User-ID.
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .api import projects_router, tasks_router, users_router
from .api.dependencies import verify_api_key
from .api.errors import error_response, register_error_handlers
from .api.middleware import RequestLoggingMiddleware
from .core.config import settings
from .core.database import AsyncSessionLocal
from .core.logging import get_logger, setup_logging
from .schemas import ErrorDetail

# LOG_LEVEL: DEBUG/INFO/WARNING/ERROR - что логировать
# LOG_FORMAT: json (production) / simple (development)
setup_logging(
    log_level=settings.LOG_LEVEL,
    log_format=settings.LOG_FORMAT,
    database_echo=settings.DATABASE_ECHO,
)

logger = get_logger(__name__)

APP_VERSION = "1.0.0"
APP_START_TIME: float = 0.0  # Will be set on startup

# ============================================================================
# RATE LIMITER SETUP
# ============================================================================

# key_func определяет по какому ключу группировать запросы (по IP адресу)
limiter = Limiter(key_func=get_remote_address)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Превышение лимита запросов в едином формате ErrorResponse."""
    return error_response(
        429,
        "RATE_LIMIT_EXCEEDED",
        f"Too many requests. Limit: {exc.detail}",
        [ErrorDetail(field="rate_limit", message=str(exc.detail))],
    )


# ============================================================================
# LIFESPAN EVENT HANDLER
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup/shutdown: фиксируем время старта и пишем в лог."""
    global APP_START_TIME

    APP_START_TIME = time.time()
    logger.info(
        "Application started",
        extra={
            "app_name": settings.APP_NAME,
            "version": APP_VERSION,
            "debug": settings.DEBUG,
            "log_level": settings.LOG_LEVEL,
        },
    )

    yield

    uptime = int(time.time() - APP_START_TIME)
    logger.info("Application stopped", extra={"uptime_seconds": uptime})


# ============================================================================
# CREATE APPLICATION
# ============================================================================

app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="""
    Управление проектами и задачами.

    ## Возможности

    * **Пользователи** - создание, блокировка/разблокировка, учёт времени
    * **Проекты** - владелец, участники, приостановка/активация
    * **Задачи** - приоритет, оценка, исполнитель и проверяющий, время работы

    ## Видимость

    Администратор видит все записи. Остальные пользователи видят только
    активные проекты, в которых участвуют, и задачи этих проектов.

    ## Авторизация

    Заголовки `X-API-Key` и `X-User-ID` (UUID пользователя).
    """,
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.state.limiter = limiter
# slowapi handler имеет специфичный тип, но работает корректно
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшене указать конкретные домены
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ============================================================================
# API VERSIONING
# ============================================================================

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(users_router)
api_v1_router.include_router(projects_router)
api_v1_router.include_router(tasks_router)

# dependencies=[Depends(verify_api_key)] - все endpoints роутера требуют API ключ
app.include_router(api_v1_router, dependencies=[Depends(verify_api_key)])

register_error_handlers(app)


# ============================================================================
# ROOT / HEALTH
# ============================================================================


@app.get("/", tags=["root"], summary="Root endpoint", description="Информация о API")
@limiter.limit(settings.RATE_LIMIT)
async def root(request: Request):
    return {
        "name": settings.APP_NAME,
        "version": APP_VERSION,
        "api_version": "v1",
        "docs": "/docs",
        "redoc": "/redoc",
        "openapi": "/openapi.json",
        "endpoints": {
            "users": "/api/v1/user",
            "projects": "/api/v1/project",
            "tasks": "/api/v1/task",
        },
        "rate_limit": settings.RATE_LIMIT,
    }


@app.get(
    "/health", tags=["health"], summary="Health check", description="Проверка работоспособности API"
)
@limiter.limit(settings.RATE_LIMIT)
async def health_check(request: Request):
    """
    Health check endpoint.

    Проверяет подключение к базе данных.
    200 - {"status": "ok", ...}, 503 - {"status": "error", ...}
    """
    uptime_seconds = int(time.time() - APP_START_TIME) if APP_START_TIME > 0 else 0

    db_status = "disconnected"
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
            db_status = "connected"
    except (SQLAlchemyError, OSError) as e:
        logger.error("Health check: database unavailable", extra={"error": str(e)})

    overall_status = "ok" if db_status == "connected" else "error"

    return JSONResponse(
        status_code=200 if overall_status == "ok" else 503,
        content={
            "status": overall_status,
            "checks": {
                "database": db_status,
                "version": APP_VERSION,
                "uptime_seconds": uptime_seconds,
            },
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )
