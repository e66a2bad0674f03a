"""
Provider import pipeline.

Simpler sibling of the resource importer:
- duplicates (case-insensitive trimmed name) are always skipped, never updated
- provider type goes through a fixed mapping table and falls back to
  "independent" instead of failing validation
- imported providers start unverified
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.core.config import ImportSettings, get_settings
from flithub.schemas.enums import ProviderType
from flithub.schemas.imports import (
    ErroredProvider,
    ProviderImportResult,
    ProviderImportRow,
    SkippedProvider,
)
from flithub.services.exceptions import ReferenceDataError, ValidationError, WriteError
from flithub.services.normalization import (
    format_validation_errors,
    is_blank,
    mapped_enum_with_fallback,
    normalize_key,
    parse_array_field,
)
from flithub.services.provider_service import ProviderService

logger = logging.getLogger(__name__)

# Free-text type labels used in provider spreadsheets -> ProviderType
PROVIDER_TYPE_MAPPING: dict[str, ProviderType] = {
    "government body": ProviderType.GOVERNMENT,
    "government service": ProviderType.GOVERNMENT,
    "government/regulatory": ProviderType.GOVERNMENT,
    "government department": ProviderType.GOVERNMENT,
    "government/education": ProviderType.GOVERNMENT,
    "education sector": ProviderType.COMMUNITY,
    "independent/ngo": ProviderType.INDEPENDENT,
    "independent/charity": ProviderType.INDEPENDENT,
    "charity": ProviderType.COMMUNITY,
    "commercial bank": ProviderType.INDEPENDENT,
    "industry body": ProviderType.INDEPENDENT,
    "credit union sector": ProviderType.COMMUNITY,
    "international": ProviderType.INTERNATIONAL,
    "european/regulatory": ProviderType.INTERNATIONAL,
    "international (uk)": ProviderType.INTERNATIONAL,
    "international (usa)": ProviderType.INTERNATIONAL,
}

UNKNOWN_PROVIDER_NAME = "Unknown"


def _raw_name(raw: Any) -> str:
    name = raw.get("name") if isinstance(raw, dict) else None
    if isinstance(name, str) and name.strip():
        return name.strip()
    return UNKNOWN_PROVIDER_NAME


def map_provider_type(value: str | None) -> ProviderType:
    """Map a free-text type label, defaulting to independent."""
    return mapped_enum_with_fallback(value, PROVIDER_TYPE_MAPPING, ProviderType.INDEPENDENT)


class ProviderImportService:
    """Inserts new providers from a batch, skipping names that already exist."""

    def __init__(self, db: AsyncSession, settings: ImportSettings | None = None):
        self.db = db
        self.settings = settings or get_settings().imports
        self.providers = ProviderService(db)

    async def _load_existing_names(self) -> set[str]:
        try:
            rows = await self.providers.list_names()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching existing providers: {e}")
            raise ReferenceDataError("Failed to fetch providers") from e
        return {normalize_key(name) for _, name in rows}

    def build_record(self, row: ProviderImportRow) -> dict[str, Any]:
        """Column values for a new provider row."""
        target_audience = parse_array_field(row.target_audience)
        return {
            "name": row.name.strip(),
            "provider_type": map_provider_type(row.type),
            "website_url": None if is_blank(row.website) else row.website.strip(),
            "description": None if is_blank(row.description) else row.description.strip(),
            "target_audience": target_audience or None,
            "is_verified": False,
            "country": self.settings.default_provider_country,
        }

    async def import_providers(self, rows: list[Any]) -> ProviderImportResult:
        """
        Import a batch of raw provider rows.

        Raises:
            ValidationError: if the batch is empty
            ReferenceDataError: if existing providers cannot be read
        """
        if not rows:
            raise ValidationError("Invalid or empty providers array", field="providers")

        logger.info(f"Processing {len(rows)} providers for import")
        existing_names = await self._load_existing_names()
        result = ProviderImportResult()

        for raw in rows:
            try:
                row = ProviderImportRow.model_validate(raw)
            except PydanticValidationError as e:
                result.errors.append(
                    ErroredProvider(
                        name=_raw_name(raw),
                        error="; ".join(format_validation_errors(e)),
                    )
                )
                continue

            if is_blank(row.name):
                result.errors.append(
                    ErroredProvider(name=UNKNOWN_PROVIDER_NAME, error="Missing name")
                )
                continue

            name = row.name.strip()
            key = normalize_key(name)
            if key in existing_names:
                result.skipped.append(SkippedProvider(name=name, reason="Already exists"))
                logger.info(f"Skipped existing provider: {name}")
                continue

            try:
                await self.providers.insert(self.build_record(row))
            except WriteError as e:
                logger.error(f"Error inserting provider {name}: {e.message}")
                result.errors.append(ErroredProvider(name=name, error=e.message))
                continue

            result.imported.append(name)
            # Catch repeats later in the same batch
            existing_names.add(key)

        logger.info(
            f"Import complete: {len(result.imported)} imported, "
            f"{len(result.skipped)} skipped, {len(result.errors)} errors"
        )
        return result


def get_provider_import_service(db: AsyncSession) -> ProviderImportService:
    """Factory function for ProviderImportService."""
    return ProviderImportService(db)
