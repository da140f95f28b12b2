"""Task model."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDMixin


class TaskPriority(str, enum.Enum):
    """Task priority enum."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Task(Base, UUIDMixin, TimestampMixin):
    """
    Task model.

    executor - кто выполняет задачу, checker - кто проверяет.
    time_start/time_end - фактически затраченное время (для учёта времени).
    """

    __tablename__ = "tasks"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[TaskPriority] = mapped_column(
        SQLEnum(TaskPriority, native_enum=False), default=TaskPriority.MEDIUM, nullable=False
    )
    # Up to 4294967295 (unsigned 32-bit), does not fit into a signed INTEGER
    estimated_time: Mapped[int] = mapped_column(BigInteger, nullable=False)
    time_start: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    time_end: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Foreign Keys
    project_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("projects.id"), nullable=False)
    executor_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    checker_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="tasks")
    executor: Mapped["User"] = relationship("User", foreign_keys=[executor_id])
    checker: Mapped["User"] = relationship("User", foreign_keys=[checker_id])

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, name='{self.name}', priority={self.priority.value})>"
