"""Task service with business logic."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..core.responses import ActionResponse, EntityResponse, ListResponse, ResponseBuilder
from ..models import Task, User
from ..repositories import TASK_SCOPE, TaskRepository, UserRepository
from ..schemas import TaskCreate, TaskResponse, TaskUpdate, TrackedTimeResponse
from .crud import CrudService
from .project import ProjectService


class TaskService:
    """
    Сервис для работы с задачами.

    Задача видна пользователю, если ему виден её проект
    (проект активен и пользователь - участник). Администратор видит всё.
    """

    def __init__(self, db: AsyncSession):
        """Инициализация сервиса с несколькими репозиториями."""
        self.db = db
        self.crud: CrudService[Task] = CrudService(db, TASK_SCOPE, TaskResponse, label="task")
        self.projects = ProjectService(db)
        self.task_repo = TaskRepository(db)
        self.user_repo = UserRepository(db)

    async def get_all(self, actor: User) -> ListResponse[TaskResponse]:
        return await self.crud.list(actor)

    async def get(self, actor: User, task_id: uuid.UUID) -> EntityResponse[TaskResponse]:
        return await self.crud.get_one(actor, task_id)

    async def find_entity(self, actor: User, task_id: uuid.UUID) -> Task | None:
        return await self.crud.find_raw(actor, task_id)

    async def create(self, data: TaskCreate, actor: User) -> ActionResponse:
        """
        Создать задачу.

        Бизнес-правила:
        1. Проект существует и виден actor (иначе NotFound)
        2. Исполнитель и проверяющий существуют (иначе NotFound)
        """
        project = await self.projects.find_entity(actor, data.project_id)
        if project is None:
            raise NotFoundError("Project")

        await self._check_users(data.executor_id, data.checker_id)
        return await self.crud.create(data.model_dump())

    async def update(self, data: TaskUpdate, task_id: uuid.UUID, actor: User) -> ActionResponse:
        """Обновить задачу, которая видна actor. Проект задачи не меняется."""
        task = await self.find_entity(actor, task_id)
        if task is None:
            raise NotFoundError("Task")

        await self._check_users(data.executor_id, data.checker_id)
        return await self.crud.update(data.model_dump(), task_id)

    async def get_user_tracked_time(self, user_id: uuid.UUID) -> EntityResponse[TrackedTimeResponse]:
        """
        Учёт времени по задачам, где пользователь - исполнитель.

        Returns:
            tasks_count: все задачи пользователя
            tracked_tasks: задачи с заполненными time_start и time_end
            tracked_seconds: сумма (time_end - time_start), отрицательные интервалы не учитываются
            estimated_time: сумма оценок

        Это бизнес-логика! Repository не должен знать, как считать время.
        """
        tasks = await self.task_repo.get_by_executor(user_id)

        tracked = [t for t in tasks if t.time_start is not None and t.time_end is not None]
        tracked_seconds = sum(
            max(int((t.time_end - t.time_start).total_seconds()), 0) for t in tracked
        )

        summary = TrackedTimeResponse(
            user_id=user_id,
            tasks_count=len(tasks),
            tracked_tasks=len(tracked),
            tracked_seconds=tracked_seconds,
            estimated_time=sum(t.estimated_time for t in tasks),
        )
        return ResponseBuilder.entity(summary, TrackedTimeResponse)

    # Вспомогательные методы (private)

    async def _check_users(self, *user_ids: uuid.UUID) -> None:
        wanted = set(user_ids)
        found = await self.user_repo.get_by_ids(list(wanted))
        if len(found) != len(wanted):
            raise NotFoundError("User")
