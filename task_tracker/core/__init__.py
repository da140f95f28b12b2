"""Core application components."""

from .config import Settings, settings
from .database import AsyncSessionLocal, engine, init_db
from .exceptions import (
    APIError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from .responses import ActionResponse, EntityResponse, ListResponse, ResponseBuilder

__all__ = [
    "settings",
    "Settings",
    "engine",
    "AsyncSessionLocal",
    "init_db",
    "APIError",
    "BadRequestError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ActionResponse",
    "EntityResponse",
    "ListResponse",
    "ResponseBuilder",
]
