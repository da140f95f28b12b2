"""Project repository with specific queries."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Project, User
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """
    Репозиторий для работы с проектами.

    Наследуется от BaseRepository и добавляет работу с участниками.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Project, db)

    async def load_participants(self, project: Project) -> list[User]:
        """
        Подгрузить участников проекта (в async нельзя лениво обращаться к связи).

        SQL эквивалент:
            SELECT users.* FROM users
            JOIN project_participants ON project_participants.user_id = users.id
            WHERE project_participants.project_id = {project.id};
        """
        await self.db.refresh(project, attribute_names=["participants"])
        return project.participants

    async def save_participants(self, project: Project) -> None:
        """Записать изменения участников одним flush (INSERT/DELETE в project_participants)."""
        self.db.add(project)
        await self.db.flush()
