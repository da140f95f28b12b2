"""Repository layer for data access."""

from .base import BaseRepository
from .project import ProjectRepository
from .scope import PROJECT_SCOPE, TASK_SCOPE, USER_SCOPE, ScopeRule, visibility_filters
from .task import TaskRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "TaskRepository",
    "UserRepository",
    "ScopeRule",
    "visibility_filters",
    "PROJECT_SCOPE",
    "TASK_SCOPE",
    "USER_SCOPE",
]
