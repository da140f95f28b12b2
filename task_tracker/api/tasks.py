"""
API endpoints для работы с задачами.

URL структура:
- GET  /task       - список видимых задач
- GET  /task/{id}  - одна задача
- POST /task       - создать задачу в видимом проекте
- PUT  /task/{id}  - обновить видимую задачу
"""

import uuid

from fastapi import APIRouter, Depends

from ..core.responses import ActionResponse, EntityResponse, ListResponse
from ..models import User
from ..schemas import ErrorResponse, TaskCreate, TaskResponse, TaskUpdate
from ..services import TaskService
from .dependencies import get_current_user, get_task_service

router = APIRouter(prefix="/task", tags=["task"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Задача, проект или пользователь не найдены"}}


@router.get("", response_model=ListResponse[TaskResponse], summary="Список задач")
async def get_tasks(
    actor: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return await service.get_all(actor)


@router.get(
    "/{task_id}",
    response_model=EntityResponse[TaskResponse],
    summary="Получить задачу по ID",
    responses=NOT_FOUND,
)
async def get_task(
    task_id: uuid.UUID,
    actor: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return await service.get(actor, task_id)


@router.post("", response_model=ActionResponse, summary="Создать задачу", responses=NOT_FOUND)
async def create_task(
    data: TaskCreate,
    actor: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """
    Пример запроса:
    ```json
    {
        "name": "Подготовить релиз",
        "project_id": "1b7e...",
        "priority": "high",
        "estimated_time": 120,
        "executor_id": "6f1c...",
        "checker_id": "9a0d...",
        "time_start": "2026-01-18 09:00:00",
        "time_end": "2026-01-18 11:30:00"
    }
    ```
    """
    return await service.create(data, actor)


@router.put(
    "/{task_id}", response_model=ActionResponse, summary="Обновить задачу", responses=NOT_FOUND
)
async def update_task(
    task_id: uuid.UUID,
    data: TaskUpdate,
    actor: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return await service.update(data, task_id, actor)
