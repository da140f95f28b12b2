"""SQLAlchemy models for Task Tracker."""

from .base import Base, TimestampMixin, UUIDMixin
from .project import Project
from .project_participant import project_participants
from .task import Task, TaskPriority
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "Project",
    "Task",
    "TaskPriority",
    "User",
    "project_participants",
]
