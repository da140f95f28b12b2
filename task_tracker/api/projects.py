"""
API endpoints для работы с проектами.

URL структура:
- GET    /project                        - список видимых проектов
- GET    /project/{id}                   - один проект
- POST   /project                        - создать проект (владелец - текущий пользователь)
- PUT    /project/{id}                   - обновить проект (admin)
- DELETE /project/{id}                   - приостановить проект (admin)
- POST   /project/{id}/activate          - активировать проект (admin)
- POST   /project/{id}/participants      - добавить участников (admin)
- DELETE /project/{id}/participants      - убрать участников (admin)

Роутер только извлекает параметры и вызывает сервис.
"""

import uuid

from fastapi import APIRouter, Depends

from ..core.responses import ActionResponse, EntityResponse, ListResponse
from ..models import User
from ..schemas import (
    ErrorResponse,
    ParticipantsRequest,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    UserResponse,
)
from ..services import ProjectService
from .dependencies import get_current_user, get_project_service, require_admin

router = APIRouter(prefix="/project", tags=["project"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Проект не найден"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Недопустимое действие"}}


@router.get("", response_model=ListResponse[ProjectResponse], summary="Список проектов")
async def get_projects(
    actor: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """
    Администратор видит все проекты, остальные - только активные,
    в которых участвуют. Новые проекты первыми.
    """
    return await service.get_all(actor)


@router.get(
    "/{project_id}",
    response_model=EntityResponse[ProjectResponse],
    summary="Получить проект по ID",
    responses=NOT_FOUND,
)
async def get_project(
    project_id: uuid.UUID,
    actor: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.get(actor, project_id)


@router.post(
    "", response_model=ActionResponse, summary="Создать проект", responses=BAD_REQUEST
)
async def create_project(
    data: ProjectCreate,
    actor: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """
    Пример запроса:
    ```json
    {"name": "Alpha", "description": "Первый проект"}
    ```

    Пример ответа:
    ```json
    {"message": "Project successfully created", "result": {"id": "1b7e..."}}
    ```
    """
    return await service.create(data, actor)


@router.put(
    "/{project_id}",
    response_model=ActionResponse,
    summary="Обновить проект",
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def update_project(
    project_id: uuid.UUID,
    data: ProjectUpdate,
    _: User = Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    return await service.update(data, project_id)


@router.delete(
    "/{project_id}",
    response_model=ActionResponse,
    summary="Приостановить проект",
    description="Логическое удаление: проект становится неактивным.",
    responses=BAD_REQUEST,
)
async def suspend_project(
    project_id: uuid.UUID,
    _: User = Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    return await service.suspend(project_id)


@router.post(
    "/{project_id}/activate",
    response_model=ActionResponse,
    summary="Активировать проект",
    responses=BAD_REQUEST,
)
async def activate_project(
    project_id: uuid.UUID,
    _: User = Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    return await service.activate(project_id)


@router.post(
    "/{project_id}/participants",
    response_model=ListResponse[UserResponse],
    summary="Добавить участников",
    description="Несуществующие ID пропускаются, в ответе - найденные пользователи.",
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def add_participants(
    project_id: uuid.UUID,
    data: ParticipantsRequest,
    actor: User = Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    return await service.add_participants(actor, project_id, data.user_ids)


@router.delete(
    "/{project_id}/participants",
    response_model=ListResponse[UserResponse],
    summary="Убрать участников",
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def remove_participants(
    project_id: uuid.UUID,
    data: ParticipantsRequest,
    actor: User = Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
):
    return await service.remove_participants(actor, project_id, data.user_ids)
