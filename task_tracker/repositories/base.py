"""Base repository with common persistence operations."""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import Base

# TypeVar для Generic класса - позволяет работать с любой моделью
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Базовый репозиторий - единственное место, где выполняются запросы к БД.

    Generic[ModelType] означает, что этот класс работает с любой моделью,
    наследующейся от Base.

    Правила видимости (кто что видит) сюда НЕ входят: запросы на чтение
    строятся в repositories/scope.py и передаются в find()/find_one().

    Пример использования:
        repo = BaseRepository(Project, db_session)
        projects = await repo.find(select(Project).where(Project.is_active))
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        """
        Args:
            model: Класс модели SQLAlchemy (например, Project, Task)
            db: Асинхронная сессия базы данных
        """
        self.model = model
        self.db = db

    async def find(self, query: Select) -> list[ModelType]:
        """Выполнить SELECT и вернуть все найденные объекты."""
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_one(self, query: Select) -> ModelType | None:
        """Выполнить SELECT и вернуть первый объект или None."""
        result = await self.db.execute(query.limit(1))
        return result.scalars().first()

    async def get_by_id(self, id: uuid.UUID) -> ModelType | None:
        """
        Получить объект по ID без каких-либо фильтров видимости.

        SQL эквивалент:
            SELECT * FROM table WHERE id = {id};
        """
        return await self.db.get(self.model, id)

    async def get_by_ids(self, ids: list[uuid.UUID]) -> list[ModelType]:
        """
        Получить объекты по списку ID. Несуществующие ID просто пропускаются.

        SQL эквивалент:
            SELECT * FROM table WHERE id IN (...);
        """
        if not ids:
            return []
        return await self.find(select(self.model).where(self.model.id.in_(ids)))

    async def insert(self, obj: ModelType) -> ModelType:
        """
        Создать новую запись в БД.

        flush() отправляет INSERT, но не делает commit - транзакцией
        управляет get_db() (commit в конце запроса).
        """
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def update(self, id: uuid.UUID, values: dict[str, Any], *criteria) -> int:
        """
        Обновить запись по ID одним UPDATE.

        Args:
            id: Первичный ключ записи
            values: Поля для обновления
            *criteria: Дополнительные условия WHERE (например, ожидаемый статус)

        Returns:
            Количество затронутых строк (0 - запись не найдена или не прошла условие)

        SQL эквивалент:
            UPDATE table SET ... WHERE id = {id} AND {criteria};
        """
        result = await self.db.execute(
            update(self.model).where(self.model.id == id, *criteria).values(**values)
        )
        return result.rowcount
