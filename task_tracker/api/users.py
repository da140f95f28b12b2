"""
API endpoints для работы с пользователями.

URL структура:
- GET    /user                    - список (обычный пользователь видит только себя)
- GET    /user/{id}               - один пользователь
- GET    /user/{id}/tracked-time  - учёт времени по задачам
- POST   /user                    - создать (admin)
- PUT    /user/{id}               - обновить (admin)
- DELETE /user/{id}               - заблокировать (admin)
- POST   /user/{id}/unblock       - разблокировать (admin)
"""

import uuid

from fastapi import APIRouter, Depends

from ..core.exceptions import NotFoundError
from ..core.responses import ActionResponse, EntityResponse, ListResponse
from ..models import User
from ..schemas import ErrorResponse, TrackedTimeResponse, UserCreate, UserResponse, UserUpdate
from ..services import TaskService, UserService
from .dependencies import get_current_user, get_task_service, get_user_service, require_admin

router = APIRouter(prefix="/user", tags=["user"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Пользователь не найден"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Недопустимое действие"}}


@router.get("", response_model=ListResponse[UserResponse], summary="Список пользователей")
async def get_users(
    actor: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_all(actor)


@router.get(
    "/{user_id}",
    response_model=EntityResponse[UserResponse],
    summary="Получить пользователя по ID",
    responses=NOT_FOUND,
)
async def get_user(
    user_id: uuid.UUID,
    actor: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get(actor, user_id)


@router.get(
    "/{user_id}/tracked-time",
    response_model=EntityResponse[TrackedTimeResponse],
    summary="Учёт времени пользователя",
    responses=NOT_FOUND,
)
async def get_tracked_time(
    user_id: uuid.UUID,
    actor: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
    tasks: TaskService = Depends(get_task_service),
):
    """Сначала проверяем, что пользователь виден actor, затем считаем время."""
    if await users.find_entity(actor, user_id) is None:
        raise NotFoundError("User")
    return await tasks.get_user_tracked_time(user_id)


@router.post("", response_model=ActionResponse, summary="Создать пользователя", responses=BAD_REQUEST)
async def create_user(
    data: UserCreate,
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return await service.create(data)


@router.put(
    "/{user_id}",
    response_model=ActionResponse,
    summary="Обновить пользователя",
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def update_user(
    user_id: uuid.UUID,
    data: UserUpdate,
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return await service.update(data, user_id)


@router.delete(
    "/{user_id}",
    response_model=ActionResponse,
    summary="Заблокировать пользователя",
    responses=BAD_REQUEST,
)
async def block_user(
    user_id: uuid.UUID,
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return await service.block(user_id)


@router.post(
    "/{user_id}/unblock",
    response_model=ActionResponse,
    summary="Разблокировать пользователя",
    responses=BAD_REQUEST,
)
async def unblock_user(
    user_id: uuid.UUID,
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return await service.unblock(user_id)
