"""SQLAlchemy ORM models."""

from service_starter.orm.models import TodoORM

__all__ = ["TodoORM"]
