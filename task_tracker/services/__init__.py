"""Service layer with business logic."""

from .crud import CrudService
from .project import ProjectService
from .task import TaskService
from .user import UserService

__all__ = [
    "CrudService",
    "ProjectService",
    "TaskService",
    "UserService",
]
