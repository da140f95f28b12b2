"""Project-User junction table (participants)."""

from sqlalchemy import Column, DateTime, ForeignKey, Table, Uuid

from .base import Base, utc_now

# Many-to-many junction table for projects and their participants
project_participants = Table(
    "project_participants",
    Base.metadata,
    Column("project_id", Uuid, ForeignKey("projects.id"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id"), primary_key=True),
    Column("created_at", DateTime, default=utc_now, nullable=False),
)
