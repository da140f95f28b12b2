"""
Pydantic схемы для API.

DTOs (Data Transfer Objects) - объекты для передачи данных через HTTP.

Входящие схемы (Create/Update) - это граница валидации: сервисы получают
уже проверенные данные (длины строк, enum, диапазоны чисел, формат UUID
и времени). Исходящие схемы (Response) строятся из ORM моделей
(from_attributes=True) и используются в ResponseBuilder.
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, model_validator

from .models import TaskPriority

# ============================================================================
# COMMON TYPES
# ============================================================================

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_ESTIMATED_TIME = 4294967295  # unsigned 32-bit


def parse_timestamp(value):
    """Принимает строку ровно из 19 символов: YYYY-MM-DD HH:MM:SS."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or len(value) != 19:
        raise ValueError("Expected a 19-character 'YYYY-MM-DD HH:MM:SS' string")
    return datetime.strptime(value, TIME_FORMAT)


Timestamp = Annotated[
    datetime,
    BeforeValidator(parse_timestamp),
    PlainSerializer(lambda value: value.strftime(TIME_FORMAT), return_type=str, when_used="json"),
]


# ============================================================================
# USER SCHEMAS
# ============================================================================


class UserBase(BaseModel):
    """Базовые поля пользователя (общие для Create и Update)."""

    email: str = Field(
        ..., max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Email"
    )
    first_name: str = Field(..., min_length=1, max_length=50, description="Имя")
    last_name: str = Field(..., min_length=1, max_length=50, description="Фамилия")
    is_admin: bool = Field(False, description="Администратор видит все записи")


class UserCreate(UserBase):
    """
    Схема для создания пользователя (POST /user).

    Пример запроса:
    {
        "email": "anna@example.com",
        "first_name": "Anna",
        "last_name": "Petrova"
    }
    """

    pass


class UserUpdate(UserBase):
    """Схема для обновления пользователя (PUT /user/{id}) - запись целиком."""

    pass


class UserBrief(BaseModel):
    """Краткое представление пользователя внутри проекта/задачи."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserBrief):
    """Пользователь в ответах API (без ограничений UserBase)."""

    is_admin: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TrackedTimeResponse(BaseModel):
    """
    Учёт времени пользователя (GET /user/{id}/tracked-time).

    Пример ответа:
    {
        "user_id": "6f1c...",
        "tasks_count": 3,
        "tracked_tasks": 2,
        "tracked_seconds": 5400,
        "estimated_time": 240
    }
    """

    user_id: uuid.UUID
    tasks_count: int = Field(..., description="Всего задач, где пользователь исполнитель")
    tracked_tasks: int = Field(..., description="Задачи с заполненными time_start и time_end")
    tracked_seconds: int = Field(..., description="Сумма (time_end - time_start) в секундах")
    estimated_time: int = Field(..., description="Сумма оценок estimated_time")


# ============================================================================
# PROJECT SCHEMAS
# ============================================================================


class ProjectBase(BaseModel):
    """Базовые поля проекта (общие для Create и Update)."""

    name: str = Field(..., min_length=1, max_length=200, description="Название проекта")
    description: str | None = Field(
        None, min_length=1, max_length=5000, description="Описание проекта"
    )


class ProjectCreate(ProjectBase):
    """
    Схема для создания проекта (POST /project).

    Владельцем становится пользователь, создавший проект.

    Пример запроса:
    {
        "name": "Alpha",
        "description": "Первый проект"
    }
    """

    pass


class ProjectUpdate(ProjectBase):
    """Схема для обновления проекта (PUT /project/{id}) - запись целиком."""

    pass


class ProjectResponse(BaseModel):
    """
    Схема для ответа API (GET /project/{id}).

    owner подгружается тем же запросом (см. repositories/scope.py).
    """

    id: uuid.UUID
    name: str
    description: str | None = None
    is_active: bool
    owner_id: uuid.UUID
    owner: UserBrief | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ParticipantsRequest(BaseModel):
    """
    Схема для добавления/удаления участников (POST/DELETE /project/{id}/participants).

    Несуществующие ID молча пропускаются.
    """

    user_ids: list[uuid.UUID] = Field(..., min_length=1, description="ID пользователей")


# ============================================================================
# TASK SCHEMAS
# ============================================================================


class TaskBase(BaseModel):
    """Базовые поля задачи (общие для Create и Update)."""

    name: str = Field(..., min_length=1, max_length=50, description="Название задачи")
    priority: TaskPriority = Field(..., description="Приоритет")
    estimated_time: int = Field(..., ge=1, le=MAX_ESTIMATED_TIME, description="Оценка времени")
    description: str | None = Field(
        None, min_length=1, max_length=5000, description="Описание задачи"
    )
    executor_id: uuid.UUID = Field(..., description="ID исполнителя")
    checker_id: uuid.UUID = Field(..., description="ID проверяющего")
    time_start: Timestamp | None = Field(None, description="Начало работы: YYYY-MM-DD HH:MM:SS")
    time_end: Timestamp | None = Field(None, description="Конец работы: YYYY-MM-DD HH:MM:SS")

    @model_validator(mode="after")
    def check_time_range(self):
        if self.time_start and self.time_end and self.time_end < self.time_start:
            raise ValueError("time_end cannot be earlier than time_start")
        return self


class TaskCreate(TaskBase):
    """
    Схема для создания задачи (POST /task).

    Пример запроса:
    {
        "name": "Подготовить релиз",
        "project_id": "1b7e...",
        "priority": "high",
        "estimated_time": 120,
        "executor_id": "6f1c...",
        "checker_id": "9a0d...",
        "time_start": "2026-01-18 09:00:00"
    }
    """

    project_id: uuid.UUID = Field(..., description="ID проекта")


class TaskUpdate(TaskBase):
    """Схема для обновления задачи (PUT /task/{id}) - запись целиком, без смены проекта."""

    pass


class TaskResponse(BaseModel):
    """
    Задача в ответах API.

    Поля объявлены заново, без ограничений TaskBase: уже сохранённая
    запись отдаётся как есть.
    """

    id: uuid.UUID
    name: str
    description: str | None = None
    priority: TaskPriority
    estimated_time: int
    project_id: uuid.UUID
    executor_id: uuid.UUID
    checker_id: uuid.UUID
    time_start: Timestamp | None = None
    time_end: Timestamp | None = None
    executor: UserBrief | None = None
    checker: UserBrief | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# COMMON SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """
    Детали ошибки для конкретного поля.

    Пример:
    {
        "field": "estimated_time",
        "message": "Input should be less than or equal to 4294967295"
    }
    """

    field: str = Field(..., description="Название поля с ошибкой")
    message: str = Field(..., description="Описание ошибки")


class ErrorBody(BaseModel):
    """
    Тело ошибки с кодом и деталями.

    Коды:
    - VALIDATION_ERROR: ошибка валидации полей (422)
    - BAD_REQUEST: недопустимое действие или ошибка сохранения (400)
    - UNAUTHORIZED: нет/неверный API ключ или пользователь (401)
    - FORBIDDEN: нужны права администратора (403)
    - NOT_FOUND: ресурс не найден или недоступен (404)
    """

    code: str = Field(..., description="Код ошибки (VALIDATION_ERROR, NOT_FOUND, etc.)")
    message: str = Field(..., description="Человекочитаемое сообщение")
    details: list[ErrorDetail] | None = Field(
        default=None, description="Список ошибок по полям (для валидации)"
    )


class ErrorResponse(BaseModel):
    """
    Единый формат ответа для всех ошибок API.

    Пример:
    {
        "error": {
            "code": "BAD_REQUEST",
            "message": "Invalid request",
            "details": null
        }
    }
    """

    error: ErrorBody
