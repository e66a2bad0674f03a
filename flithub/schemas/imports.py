"""
Bulk import request/response schemas.

Patterns:
- ImportRow / ProviderImportRow: lax per-row input, parsed one row at a time
  so a malformed row becomes a row error instead of failing the request
- NormalizedResource: strict record written to the resources table
- ResourceImportResult / ProviderImportResult: per-row accounting returned
  to the admin UI
"""

from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from flithub.models.base import utc_now
from flithub.schemas.enums import ImportMode, ResourceLevel, ResourceType, ReviewStatus

__all__ = [
    "ImportRow",
    "NormalizedResource",
    "ResourceImportRequest",
    "ImportSummary",
    "SkippedRow",
    "ErroredRow",
    "ResourceImportResult",
    "ProviderImportRow",
    "ProviderImportRequest",
    "SkippedProvider",
    "ErroredProvider",
    "ProviderImportResult",
]


# ============================================================================
# Resource import
# ============================================================================


class ImportRow(BaseModel):
    """
    One candidate resource as supplied in JSON or CSV.

    Array fields accept a list or a delimited string. duration_minutes and
    is_featured are kept as-is and interpreted by the validator/normalizer.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str | None = None
    description: str | None = None
    external_url: str | None = None
    resource_type: str | None = None
    topics: str | list[str] | None = None
    levels: str | list[str] | None = None
    segments: str | list[str] | None = None
    duration_minutes: Any = None
    learning_outcomes: str | list[str] | None = None
    curriculum_tags: str | list[str] | None = None
    provider_name: str | None = None
    provider_id: str | None = None
    is_featured: Any = None
    review_status: str | None = None


class NormalizedResource(BaseModel):
    """A validated row in the shape stored in the resources table."""

    model_config = ConfigDict(use_enum_values=True)

    title: str
    description: str
    external_url: str | None = None
    resource_type: ResourceType
    topics: list[str] = Field(default_factory=list)
    levels: list[ResourceLevel] = Field(default_factory=list)
    segments: list[str] = Field(default_factory=list)
    duration_minutes: int | None = Field(default=None, ge=0)
    learning_outcomes: list[str] = Field(default_factory=list)
    curriculum_tags: list[str] = Field(default_factory=list)
    provider_id: uuid_lib.UUID | None = None
    is_featured: bool = False
    review_status: ReviewStatus = ReviewStatus.APPROVED
    updated_at: datetime = Field(default_factory=utc_now)


class ResourceImportRequest(BaseModel):
    """POST /imports/resources body."""

    mode: ImportMode = Field(
        default=ImportMode.INSERT,
        description="insert skips existing titles, upsert updates them",
    )
    resources: list[Any] = Field(
        default_factory=list,
        description="Rows to import; each row is validated independently",
    )


class ImportSummary(BaseModel):
    """Outcome counts for a resource import batch."""

    total: int = 0
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0


class SkippedRow(BaseModel):
    title: str
    reason: str


class ErroredRow(BaseModel):
    title: str
    row: int = Field(description="1-indexed position in the submitted batch")
    errors: list[str]


class ResourceImportResult(BaseModel):
    """
    Per-row accounting for a resource import.

    Every submitted row lands in exactly one of inserted, updated, skipped
    or errors, and the summary counts always match the list lengths.
    """

    success: bool = True
    summary: ImportSummary = Field(default_factory=ImportSummary)
    inserted: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    skipped: list[SkippedRow] = Field(default_factory=list)
    errors: list[ErroredRow] = Field(default_factory=list)

    def record_inserted(self, title: str) -> None:
        self.inserted.append(title)
        self.summary.inserted += 1

    def record_updated(self, title: str) -> None:
        self.updated.append(title)
        self.summary.updated += 1

    def record_skipped(self, title: str, reason: str) -> None:
        self.skipped.append(SkippedRow(title=title, reason=reason))
        self.summary.skipped += 1

    def record_error(self, title: str, row: int, errors: list[str]) -> None:
        self.errors.append(ErroredRow(title=title, row=row, errors=errors))
        self.summary.errors += 1

    @property
    def processed(self) -> int:
        """Rows that reached a terminal outcome so far."""
        return len(self.inserted) + len(self.updated) + len(self.skipped) + len(self.errors)


# ============================================================================
# Provider import
# ============================================================================


class ProviderImportRow(BaseModel):
    """One candidate provider as supplied in JSON or CSV."""

    model_config = ConfigDict(
        extra="ignore",
        coerce_numbers_to_str=True,
        populate_by_name=True,
    )

    name: str | None = None
    type: str | None = None
    website: str | None = None
    description: str | None = None
    target_audience: str | list[str] | None = Field(default=None, alias="targetAudience")


class ProviderImportRequest(BaseModel):
    """POST /imports/providers body."""

    providers: list[Any] = Field(default_factory=list)


class SkippedProvider(BaseModel):
    name: str
    reason: str


class ErroredProvider(BaseModel):
    name: str
    error: str


class ProviderImportResult(BaseModel):
    """Per-row accounting for a provider import."""

    imported: list[str] = Field(default_factory=list)
    skipped: list[SkippedProvider] = Field(default_factory=list)
    errors: list[ErroredProvider] = Field(default_factory=list)
