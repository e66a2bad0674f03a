"""
Resource service for store reads/writes used by the importers.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.models.resource import Resource
from flithub.services.base import BaseService


class ResourceService(BaseService[Resource]):
    """Service for Resource records."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Resource)

    async def list_titles(self) -> list[tuple[UUID, str, UUID | None]]:
        """Get (uuid, title, provider_id) for every active resource in one query."""
        stmt = select(Resource.uuid, Resource.title, Resource.provider_id).where(
            Resource.deleted_at.is_(None)
        )
        result = await self.db.execute(stmt)
        return [(row.uuid, row.title, row.provider_id) for row in result.all()]

