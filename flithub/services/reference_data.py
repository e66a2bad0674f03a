"""
Reference data loaded once per import batch.

Both lookups are keyed by normalize_key(): trimmed, lower-cased text.
ProviderLookup is read-only for the whole batch. ExistingResourceIndex is
owned by the batch and grows as rows are inserted, so a repeated title later
in the same batch is seen as a duplicate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.services.exceptions import ReferenceDataError
from flithub.services.normalization import normalize_key
from flithub.services.provider_service import ProviderService
from flithub.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExistingResource:
    """Minimal view of a stored resource used for duplicate detection."""

    id: UUID
    title: str
    provider_id: UUID | None = None


class ProviderLookup:
    """Provider name -> provider id."""

    def __init__(self, providers: Iterable[tuple[UUID, str]] = ()):
        self._ids: dict[str, UUID] = {}
        for provider_id, name in providers:
            self._ids[normalize_key(name)] = provider_id

    def __contains__(self, name: str) -> bool:
        return normalize_key(name) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def resolve(self, name: str) -> UUID | None:
        return self._ids.get(normalize_key(name))


class ExistingResourceIndex:
    """Resource title -> ExistingResource."""

    def __init__(self, resources: Iterable[ExistingResource] = ()):
        self._records: dict[str, ExistingResource] = {}
        for record in resources:
            self.add(record)

    def __contains__(self, title: str) -> bool:
        return normalize_key(title) in self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, title: str) -> ExistingResource | None:
        return self._records.get(normalize_key(title))

    def add(self, record: ExistingResource) -> None:
        self._records[normalize_key(record.title)] = record


@dataclass
class ReferenceData:
    providers: ProviderLookup
    resources: ExistingResourceIndex


async def load_provider_lookup(db: AsyncSession) -> ProviderLookup:
    """
    Build the provider lookup from the full providers table.

    Raises:
        ReferenceDataError: if the providers table cannot be read
    """
    try:
        rows = await ProviderService(db).list_names()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching providers: {e}")
        raise ReferenceDataError("Failed to fetch providers") from e

    lookup = ProviderLookup(rows)
    logger.info(f"Loaded {len(lookup)} providers for lookup")
    return lookup


async def load_resource_index(db: AsyncSession) -> ExistingResourceIndex:
    """
    Build the duplicate-detection index from the full resources table.

    Raises:
        ReferenceDataError: if the resources table cannot be read
    """
    try:
        rows = await ResourceService(db).list_titles()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching existing resources: {e}")
        raise ReferenceDataError("Failed to check existing resources") from e

    index = ExistingResourceIndex(
        ExistingResource(id=uuid, title=title, provider_id=provider_id)
        for uuid, title, provider_id in rows
    )
    logger.info(f"Found {len(index)} existing resources")
    return index


async def load_reference_data(db: AsyncSession) -> ReferenceData:
    """Load providers then resources; either failure aborts the batch."""
    providers = await load_provider_lookup(db)
    resources = await load_resource_index(db)
    return ReferenceData(providers=providers, resources=resources)
