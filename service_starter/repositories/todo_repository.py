"""
Todo Repository.

Repository for todo database operations. Passed by reference into the todo
pipeline context; concurrent pipelines sharing it rely on each one using its
own session.
"""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from service_starter.models.todo import Todo
from service_starter.orm.models import TodoORM

logger = structlog.get_logger(__name__)


class TodoRepository:
    """
    Repository for todo database operations.

    Provides operations for:
    - Creating a todo
    - Getting a todo by id
    - Listing a user's todos
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session
        """
        self.session = session

    async def create(self, title: str, user_id: str, description: str | None = None) -> Todo:
        """
        Insert a new, not yet completed todo.

        Args:
            title: Todo title
            user_id: Owner identity
            description: Optional description

        Returns:
            Created Todo
        """
        orm_todo = TodoORM(
            title=title,
            description=description,
            user_id=user_id,
            completed=False,
        )

        self.session.add(orm_todo)
        await self.session.commit()
        await self.session.refresh(orm_todo)

        logger.info("todo_created", todo_id=str(orm_todo.id), user_id=user_id)

        return Todo.model_validate(orm_todo)

    async def get(self, todo_id: UUID) -> Todo | None:
        """
        Get a todo by id.

        Returns:
            Todo if found, None otherwise
        """
        orm_todo = await self.session.get(TodoORM, todo_id)
        return Todo.model_validate(orm_todo) if orm_todo else None

    async def list_for_user(self, user_id: str) -> list[Todo]:
        """
        List a user's todos, oldest first.

        Args:
            user_id: Owner identity

        Returns:
            List of Todo ordered by created_at
        """
        stmt = (
            select(TodoORM)
            .where(TodoORM.user_id == user_id)
            .order_by(TodoORM.created_at.asc())
        )

        result = await self.session.execute(stmt)
        orm_todos = result.scalars().all()

        logger.debug("todos_retrieved", user_id=user_id, count=len(orm_todos))

        return [Todo.model_validate(t) for t in orm_todos]
