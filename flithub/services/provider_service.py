"""
Provider service for store reads/writes used by the importers.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.models.provider import Provider
from flithub.services.base import BaseService


class ProviderService(BaseService[Provider]):
    """Service for Provider records."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Provider)

    async def list_names(self) -> list[tuple[UUID, str]]:
        """Get (uuid, name) for every active provider in one query."""
        stmt = select(Provider.uuid, Provider.name).where(Provider.deleted_at.is_(None))
        result = await self.db.execute(stmt)
        return [(row.uuid, row.name) for row in result.all()]

