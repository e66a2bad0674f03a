"""
Base service with the record-store operations used by the importers.

Provides async methods for:
- insert()
- update_by_uuid()

Every write commits on its own. A failed write is rolled back and raised as
WriteError, leaving the session usable for the next row.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.models.base import BaseTableModel
from flithub.services.exceptions import WriteError

ModelType = TypeVar("ModelType", bound=BaseTableModel)


def describe_db_error(error: Exception) -> str:
    """Prefer the driver's message over SQLAlchemy's wrapped one."""
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class BaseService(Generic[ModelType]):
    """
    Generic base service over one table model.

    Usage:
        class ResourceService(BaseService[Resource]):
            def __init__(self, db: AsyncSession):
                super().__init__(db, Resource)
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    async def insert(self, values: dict[str, Any]) -> ModelType:
        """
        Insert and commit a new record.

        Raises:
            WriteError: if the database or driver rejects the row
        """
        db_obj = self.model(**values)
        self.db.add(db_obj)
        try:
            await self.db.commit()
        except Exception as e:
            # Drivers raise some errors (e.g. integer overflow) unwrapped
            await self.db.rollback()
            raise WriteError(self.entity_name, describe_db_error(e)) from e
        await self.db.refresh(db_obj)
        return db_obj

    async def update_by_uuid(self, uuid: UUID, values: dict[str, Any]) -> None:
        """
        Overwrite the given columns of an existing record and commit.

        Raises:
            WriteError: if the database rejects the update or the record is gone
        """
        stmt = (
            update(self.model)
            .where(
                self.model.uuid == uuid,
                self.model.deleted_at.is_(None),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except Exception as e:
            # Drivers raise some errors (e.g. integer overflow) unwrapped
            await self.db.rollback()
            raise WriteError(self.entity_name, describe_db_error(e)) from e

        if result.rowcount == 0:
            raise WriteError(
                self.entity_name,
                f"{self.entity_name} with identifier '{uuid}' no longer exists",
            )
