"""
SQLAlchemy ORM Models.

Table: todos
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from service_starter.database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TodoORM(Base):
    """
    Todo item owned by a user.

    Table: todos
    Primary Key: id (UUID)
    Index: user_id, created_at
    """

    __tablename__ = "todos"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Owner identity comes from the auth layer; stored as an opaque string
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (Index("idx_todos_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<TodoORM(id={self.id}, user_id={self.user_id}, title={self.title!r})>"
