"""Generic CRUD service shared by the project, task and user services."""

import uuid
from typing import Any, Generic

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import BadRequestError, NotFoundError
from ..core.logging import get_logger
from ..core.responses import ActionResponse, EntityResponse, ListResponse, ResponseBuilder
from ..models import User
from ..repositories.base import BaseRepository, ModelType
from ..repositories.scope import ScopeRule

logger = get_logger(__name__)


class CrudService(Generic[ModelType]):
    """
    Общие операции list/get/create/update/смена статуса для любой модели.

    Сервис не наследуется: сущностные сервисы создают его у себя, передавая
    модель и её правило видимости.

        self.crud = CrudService(
            db, PROJECT_SCOPE, ProjectResponse, label="project", author_field="owner_id"
        )

    Все чтения идут через scope (правило видимости), поэтому запись,
    которая существует, но скрыта от пользователя, выглядит как
    несуществующая (NotFound).

    Ошибки БД при записи не пробрасываются наружу: транзакция
    откатывается, а клиент получает BadRequest с фиксированным текстом.
    """

    def __init__(
        self,
        db: AsyncSession,
        scope: ScopeRule,
        schema: type[BaseModel],
        label: str,
        author_field: str | None = None,
        status_field: str = "is_active",
    ):
        """
        Args:
            db: Асинхронная сессия БД
            scope: Правило видимости (содержит и модель)
            schema: Read-схема для ответов (from_attributes=True)
            label: Название сущности в сообщениях ("project" -> "Project successfully ...")
            author_field: Поле, куда записывается автор при create (None - не записывать)
            status_field: Булево поле активности для set_status
        """
        self.db = db
        self.scope = scope
        self.schema = schema
        self.label = label
        self.title = label.capitalize()
        self.author_field = author_field
        self.status_field = status_field
        self.repo: BaseRepository[ModelType] = BaseRepository(scope.model, db)

    # ------------------------------------------------------------------
    # Чтение
    # ------------------------------------------------------------------

    async def list(self, actor: User) -> ListResponse:
        """Все видимые записи, новые сверху. Без пагинации."""
        query = self.scope(actor).order_by(self.scope.model.created_at.desc())
        items = await self.repo.find(query)
        return ResponseBuilder.list(items, self.schema)

    async def find_raw(self, actor: User, entity_id: uuid.UUID) -> ModelType | None:
        """Запись как ORM объект (или None) - для проверок в других сервисах."""
        return await self.repo.find_one(self.scope(actor, entity_id))

    async def get_one(self, actor: User, entity_id: uuid.UUID) -> EntityResponse:
        entity = await self.find_raw(actor, entity_id)
        if entity is None:
            raise NotFoundError(self.title)
        return ResponseBuilder.entity(entity, self.schema)

    # ------------------------------------------------------------------
    # Запись
    # ------------------------------------------------------------------

    async def create(self, values: dict[str, Any], actor: User | None = None) -> ActionResponse:
        """
        Создать запись.

        Если задан author_field, автором записывается actor
        (для проекта это владелец).
        """
        values = dict(values)
        if self.author_field and actor is not None:
            values[self.author_field] = actor.id

        try:
            entity = await self.repo.insert(self.scope.model(**values))
        except SQLAlchemyError as e:
            await self._fail(f"An error occurred while creating {self.label}", e)

        logger.info(f"{self.title} created", extra={"entity": self.label, "id": str(entity.id)})
        return ResponseBuilder.action(
            f"{self.title} successfully created", {"id": str(entity.id)}
        )

    async def update(self, values: dict[str, Any], entity_id: uuid.UUID) -> ActionResponse:
        """
        Обновить запись целиком одним UPDATE.

        0 затронутых строк - записи нет, это NotFound (а не "успех").
        """
        try:
            affected = await self.repo.update(entity_id, values)
        except SQLAlchemyError as e:
            await self._fail(f"An error occurred while updating {self.label}", e)

        if affected == 0:
            raise NotFoundError(self.title)

        logger.info(f"{self.title} updated", extra={"entity": self.label, "id": str(entity_id)})
        return ResponseBuilder.action(f"{self.title} successfully updated", {"affected": affected})

    async def set_status(
        self,
        entity_id: uuid.UUID,
        new_status: bool,
        completed_verb: str,
        progressing_verb: str,
    ) -> ActionResponse:
        """
        Переключить статус активности.

        Разрешены только переходы inactive -> active и active -> inactive.
        Проверка текущего статуса и запись нового - один условный UPDATE:

            UPDATE table SET is_active = :new WHERE id = :id AND is_active = :old

        Поэтому два одновременных запроса не могут оба "успешно" переключить
        одну запись: второй получит 0 строк.

        Raises:
            BadRequestError("Invalid request"): записи нет или она уже в нужном статусе
            BadRequestError("An error occurred while <progressing_verb> <label>"): ошибка БД
        """
        status_column = getattr(self.scope.model, self.status_field)

        try:
            affected = await self.repo.update(
                entity_id,
                {self.status_field: new_status},
                status_column == (not new_status),
            )
        except SQLAlchemyError as e:
            await self._fail(f"An error occurred while {progressing_verb} {self.label}", e)

        if affected == 0:
            raise BadRequestError("Invalid request")

        logger.info(
            f"{self.title} {completed_verb}",
            extra={"entity": self.label, "id": str(entity_id), "status": new_status},
        )
        return ResponseBuilder.action(
            f"{self.title} successfully {completed_verb}", {"affected": affected}
        )

    async def _fail(self, message: str, error: SQLAlchemyError):
        """Откатить транзакцию и превратить ошибку БД в BadRequest."""
        logger.warning(message, extra={"entity": self.label, "error": str(error)})
        await self.db.rollback()
        raise BadRequestError(message) from error
