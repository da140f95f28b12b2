"""
Dependencies для FastAPI endpoints.

Цепочка для каждого запроса:
    verify_api_key  -> клиент знает API ключ
    get_db          -> одна сессия БД на запрос (commit/rollback)
    get_current_user -> X-User-ID превращается в загруженного пользователя (actor)
    require_admin   -> только для административных действий
    get_*_service   -> сервисы поверх той же сессии

Сервисы получают actor уже проверенным: None туда никогда не попадает.
"""

import uuid
from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import AsyncSessionLocal
from ..core.exceptions import ForbiddenError, UnauthorizedError
from ..core.logging import actor_id_var
from ..models import User
from ..services import ProjectService, TaskService, UserService

# ============================================================================
# API KEY AUTHENTICATION
# ============================================================================

api_key_header = APIKeyHeader(
    name="X-API-Key",
    auto_error=False,  # Не выбрасывать ошибку автоматически, мы сами обработаем
    description="API ключ для авторизации. Передавайте в заголовке X-API-Key",
)

user_id_header = APIKeyHeader(
    name="X-User-ID",
    auto_error=False,
    description="UUID пользователя, от имени которого выполняется запрос",
)


async def verify_api_key(api_key: str | None = Depends(api_key_header)) -> str:
    """
    Dependency для проверки API ключа.

    Пример запроса:
        curl -H "X-API-Key: your-secret-key" -H "X-User-ID: <uuid>" \\
            http://localhost:8000/api/v1/project
    """
    if api_key is None:
        raise UnauthorizedError("API key is missing. Add header: X-API-Key: your-key")

    if api_key != settings.API_KEY:
        raise UnauthorizedError("Invalid API key")

    return api_key


# ============================================================================
# DATABASE SESSION DEPENDENCY
# ============================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency для получения сессии БД.

    Автоматически:
    1. Создаёт сессию
    2. Делает commit() при успехе
    3. Делает rollback() при ошибке
    4. Закрывает сессию
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ============================================================================
# CURRENT USER (ACTOR)
# ============================================================================


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


async def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


async def get_current_user(
    raw_user_id: str | None = Depends(user_id_header),
    service: UserService = Depends(get_user_service),
) -> User:
    """
    Dependency: пользователь, от имени которого выполняется запрос.

    401 если заголовок отсутствует, не является UUID, пользователь не найден
    или заблокирован.
    """
    if raw_user_id is None:
        raise UnauthorizedError("User is missing. Add header: X-User-ID: <uuid>")

    try:
        user_id = uuid.UUID(raw_user_id)
    except ValueError:
        raise UnauthorizedError("Invalid user id")

    user = await service.get_by_id(user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("Unknown or blocked user")

    actor_id_var.set(str(user.id))
    return user


async def require_admin(actor: User = Depends(get_current_user)) -> User:
    """Dependency для административных действий (403 для обычных пользователей)."""
    if not actor.is_admin:
        raise ForbiddenError()
    return actor
