"""
Resource import pipeline.

Per batch:
1. Load reference data (providers by name, resources by title)
2. For each row, in order: validate, classify, write
3. Return a ResourceImportResult accounting for every row

Row state machine:
received -> invalid                                  (errors)
         -> validated -> new -> inserted | errored
                      -> duplicate + insert mode -> skipped
                      -> duplicate + upsert mode -> updated | errored

There is no batch transaction: each successful write is committed before the
next row starts, and a failed row never aborts the rest of the batch.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from flithub.core.config import ImportSettings, get_settings
from flithub.schemas.enums import ImportMode, ReviewStatus
from flithub.schemas.imports import ImportRow, ResourceImportResult
from flithub.services.exceptions import ValidationError, WriteError
from flithub.services.normalization import is_blank
from flithub.services.reference_data import (
    ExistingResource,
    ExistingResourceIndex,
    ProviderLookup,
    load_reference_data,
)
from flithub.services.resource_service import ResourceService
from flithub.services.resource_validator import (
    RowShapeError,
    parse_import_row,
    row_label,
    transform_import_row,
    validate_import_row,
)

logger = logging.getLogger(__name__)

SKIP_REASON_EXISTS = "Already exists (insert mode)"


class ResourceImportService:
    """Validates and reconciles a batch of resource rows against the store."""

    def __init__(self, db: AsyncSession, settings: ImportSettings | None = None):
        self.db = db
        self.settings = settings or get_settings().imports
        self.resources = ResourceService(db)

    @property
    def default_review_status(self) -> ReviewStatus:
        return ReviewStatus(self.settings.default_review_status)

    async def import_resources(
        self,
        rows: list[Any],
        mode: ImportMode = ImportMode.INSERT,
    ) -> ResourceImportResult:
        """
        Import a batch of raw rows.

        Raises:
            ValidationError: if the batch is empty
            ReferenceDataError: if existing providers/resources cannot be read
        """
        if not rows:
            raise ValidationError("No resources provided", field="resources")

        logger.info(f"Processing {len(rows)} resources in {mode} mode")
        reference = await load_reference_data(self.db)

        result = ResourceImportResult()
        result.summary.total = len(rows)

        for row_number, raw in enumerate(rows, start=1):
            await self._process_row(
                raw,
                row_number,
                mode,
                reference.providers,
                reference.resources,
                result,
            )

        summary = result.summary
        logger.info(
            f"Import complete: {summary.inserted} inserted, {summary.updated} updated, "
            f"{summary.skipped} skipped, {summary.errors} errors"
        )
        return result

    async def _process_row(
        self,
        raw: Any,
        row_number: int,
        mode: ImportMode,
        providers: ProviderLookup,
        existing: ExistingResourceIndex,
        result: ResourceImportResult,
    ) -> None:
        """Move one row to a terminal outcome and record it in result."""
        try:
            row = parse_import_row(raw)
        except RowShapeError as e:
            self._record_invalid(result, row_label(raw, row_number), row_number, e.errors)
            return

        label = row.title.strip() if not is_blank(row.title) else f"Row {row_number}"

        errors = validate_import_row(row, providers)
        if errors:
            self._record_invalid(result, label, row_number, errors)
            return

        match = existing.get(row.title)
        if match is None:
            await self._insert(row, label, row_number, providers, existing, result)
        elif mode == ImportMode.INSERT:
            result.record_skipped(label, SKIP_REASON_EXISTS)
            logger.info(f"Skipped duplicate: {label}")
        else:
            await self._update(row, match, label, row_number, providers, result)

    def _record_invalid(
        self,
        result: ResourceImportResult,
        label: str,
        row_number: int,
        errors: list[str],
    ) -> None:
        result.record_error(label, row_number, errors)
        logger.warning(f"Validation failed for row {row_number}: {', '.join(errors)}")

    async def _insert(
        self,
        row: ImportRow,
        label: str,
        row_number: int,
        providers: ProviderLookup,
        existing: ExistingResourceIndex,
        result: ResourceImportResult,
    ) -> None:
        record = transform_import_row(row, providers, self.default_review_status)
        try:
            created = await self.resources.insert(record.model_dump())
        except WriteError as e:
            result.record_error(label, row_number, [e.message])
            logger.error(f"Insert failed for {label}: {e.message}")
            return

        result.record_inserted(label)
        # Later rows with the same title are now duplicates
        existing.add(
            ExistingResource(id=created.uuid, title=record.title, provider_id=record.provider_id)
        )
        logger.info(f"Inserted: {label}")

    async def _update(
        self,
        row: ImportRow,
        match: ExistingResource,
        label: str,
        row_number: int,
        providers: ProviderLookup,
        result: ResourceImportResult,
    ) -> None:
        record = transform_import_row(row, providers, self.default_review_status)
        try:
            await self.resources.update_by_uuid(match.id, record.model_dump())
        except WriteError as e:
            result.record_error(label, row_number, [e.message])
            logger.error(f"Update failed for {label}: {e.message}")
            return

        result.record_updated(label)
        logger.info(f"Updated: {label}")


def get_resource_import_service(db: AsyncSession) -> ResourceImportService:
    """Factory function for ResourceImportService."""
    return ResourceImportService(db)
