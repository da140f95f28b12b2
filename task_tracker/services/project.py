"""Project service with business logic."""

import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import BadRequestError, NotFoundError
from ..core.logging import get_logger
from ..core.responses import ActionResponse, EntityResponse, ListResponse, ResponseBuilder
from ..models import Project, User
from ..repositories import PROJECT_SCOPE, ProjectRepository, UserRepository
from ..schemas import ProjectCreate, ProjectResponse, ProjectUpdate, UserResponse
from .crud import CrudService

logger = get_logger(__name__)


class ProjectService:
    """
    Сервис для работы с проектами.

    Бизнес-правила:
    - Обычный пользователь видит только активные проекты, где он участник
    - Владелец проекта - пользователь, который его создал
    - Проект не удаляется: suspend/activate переключают is_active
    - Участников можно добавить только в активный проект
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.crud: CrudService[Project] = CrudService(
            db, PROJECT_SCOPE, ProjectResponse, label="project", author_field="owner_id"
        )
        self.project_repo = ProjectRepository(db)
        self.user_repo = UserRepository(db)

    async def get_all(self, actor: User) -> ListResponse[ProjectResponse]:
        return await self.crud.list(actor)

    async def get(self, actor: User, project_id: uuid.UUID) -> EntityResponse[ProjectResponse]:
        return await self.crud.get_one(actor, project_id)

    async def find_entity(self, actor: User, project_id: uuid.UUID) -> Project | None:
        return await self.crud.find_raw(actor, project_id)

    async def create(self, data: ProjectCreate, author: User) -> ActionResponse:
        return await self.crud.create(data.model_dump(), author)

    async def update(self, data: ProjectUpdate, project_id: uuid.UUID) -> ActionResponse:
        return await self.crud.update(data.model_dump(), project_id)

    async def suspend(self, project_id: uuid.UUID) -> ActionResponse:
        return await self.crud.set_status(project_id, False, "suspended", "suspending")

    async def activate(self, project_id: uuid.UUID) -> ActionResponse:
        return await self.crud.set_status(project_id, True, "activated", "activating")

    async def add_participants(
        self, actor: User, project_id: uuid.UUID, user_ids: list[uuid.UUID]
    ) -> ListResponse[UserResponse]:
        """
        Добавить пользователей в участники проекта.

        Args:
            actor: Кто выполняет действие (проект должен быть ему виден)
            project_id: ID проекта
            user_ids: ID пользователей

        Returns:
            Найденные пользователи (несуществующие ID молча пропускаются)

        Бизнес-правила:
        1. Проект существует и виден actor, иначе NotFound
        2. Проект активен, иначе BadRequest("Invalid request")
        3. Уже состоящие в проекте пользователи повторно не добавляются
        4. Все изменения записываются одним flush
        """
        project, users = await self._resolve(actor, project_id, user_ids)

        participants = await self.project_repo.load_participants(project)
        present = {user.id for user in participants}
        added = [user for user in users if user.id not in present]
        participants.extend(added)

        await self._save(project, "adding participants to")
        logger.info(
            "Participants added",
            extra={"project_id": str(project_id), "added": [str(u.id) for u in added]},
        )
        return ResponseBuilder.list(users, UserResponse)

    async def remove_participants(
        self, actor: User, project_id: uuid.UUID, user_ids: list[uuid.UUID]
    ) -> ListResponse[UserResponse]:
        """Убрать пользователей из участников. Правила поиска - как в add_participants."""
        project, users = await self._resolve(actor, project_id, user_ids)

        removing = {user.id for user in users}
        participants = await self.project_repo.load_participants(project)
        project.participants = [user for user in participants if user.id not in removing]

        await self._save(project, "removing participants from")
        logger.info(
            "Participants removed",
            extra={"project_id": str(project_id), "removed": [str(u) for u in removing]},
        )
        return ResponseBuilder.list(users, UserResponse)

    # Вспомогательные методы (private)

    async def _resolve(
        self, actor: User, project_id: uuid.UUID, user_ids: list[uuid.UUID]
    ) -> tuple[Project, list[User]]:
        project = await self.find_entity(actor, project_id)
        if project is None:
            raise NotFoundError("Project")
        if not project.is_active:
            raise BadRequestError("Invalid request")

        # dict.fromkeys - убираем повторы, сохраняя порядок
        users = await self.user_repo.get_by_ids(list(dict.fromkeys(user_ids)))
        return project, users

    async def _save(self, project: Project, progressing: str) -> None:
        try:
            await self.project_repo.save_participants(project)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise BadRequestError(f"An error occurred while {progressing} project") from e
