"""User service with business logic."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.responses import ActionResponse, EntityResponse, ListResponse
from ..models import User
from ..repositories import USER_SCOPE, UserRepository
from ..schemas import UserCreate, UserResponse, UserUpdate
from .crud import CrudService


class UserService:
    """
    Сервис для работы с пользователями.

    Пользователи не удаляются: block/unblock переключают is_active.
    Обычный пользователь видит только себя.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.crud: CrudService[User] = CrudService(db, USER_SCOPE, UserResponse, label="user")
        self.user_repo = UserRepository(db)

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Пользователь без фильтров видимости - только для аутентификации."""
        return await self.user_repo.get_by_id(user_id)

    async def get_all(self, actor: User) -> ListResponse[UserResponse]:
        return await self.crud.list(actor)

    async def get(self, actor: User, user_id: uuid.UUID) -> EntityResponse[UserResponse]:
        return await self.crud.get_one(actor, user_id)

    async def find_entity(self, actor: User, user_id: uuid.UUID) -> User | None:
        return await self.crud.find_raw(actor, user_id)

    async def create(self, data: UserCreate) -> ActionResponse:
        return await self.crud.create(data.model_dump())

    async def update(self, data: UserUpdate, user_id: uuid.UUID) -> ActionResponse:
        return await self.crud.update(data.model_dump(), user_id)

    async def block(self, user_id: uuid.UUID) -> ActionResponse:
        return await self.crud.set_status(user_id, False, "blocked", "blocking")

    async def unblock(self, user_id: uuid.UUID) -> ActionResponse:
        return await self.crud.set_status(user_id, True, "unblocked", "unblocking")
