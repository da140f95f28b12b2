"""Task repository with specific queries."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Task
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Репозиторий для работы с задачами."""

    def __init__(self, db: AsyncSession):
        super().__init__(Task, db)

    async def get_by_executor(self, user_id: uuid.UUID) -> list[Task]:
        """
        Получить все задачи, которые выполняет пользователь.

        SQL эквивалент:
            SELECT * FROM tasks WHERE executor_id = {user_id};
        """
        return await self.find(select(Task).where(Task.executor_id == user_id))
