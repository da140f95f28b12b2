"""User repository with specific queries."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Репозиторий для работы с пользователями."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> User | None:
        """
        Найти пользователя по email.

        SQL эквивалент:
            SELECT * FROM users WHERE email = {email};
        """
        return await self.find_one(select(User).where(User.email == email))
