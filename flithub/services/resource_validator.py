"""
Row-level validation and transformation for resource imports.

validate_import_row() evaluates every rule and returns all violations, so a
spreadsheet author sees every problem with a row at once. transform_import_row()
must only be called on rows that validated cleanly.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from flithub.models.base import utc_now
from flithub.schemas.enums import ResourceLevel, ResourceType, ReviewStatus
from flithub.schemas.imports import ImportRow, NormalizedResource
from flithub.services.normalization import (
    InvalidEnumValueError,
    coerce_duration,
    format_validation_errors,
    is_blank,
    parse_array_field,
    parse_featured_flag,
    parse_pipe_array,
    strict_enum,
)
from flithub.services.reference_data import ProviderLookup

__all__ = [
    "RowShapeError",
    "parse_import_row",
    "validate_import_row",
    "transform_import_row",
]

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


class RowShapeError(ValueError):
    """A raw row could not be read into an ImportRow at all."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def parse_import_row(raw: Any) -> ImportRow:
    """
    Read one raw JSON/CSV row into an ImportRow.

    Raises:
        RowShapeError: if the row is not an object or a field has an
            unusable type (e.g. an object where text is expected)
    """
    try:
        return ImportRow.model_validate(raw)
    except PydanticValidationError as e:
        raise RowShapeError(format_validation_errors(e)) from e


def row_label(raw: Any, row_number: int) -> str:
    """Title used to report a row, falling back to "Row N"."""
    title = raw.get("title") if isinstance(raw, dict) else None
    if isinstance(title, str) and title.strip():
        return title.strip()
    return f"Row {row_number}"


def _is_valid_url(value: str) -> bool:
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def validate_import_row(row: ImportRow, providers: ProviderLookup) -> list[str]:
    """Return every rule violation for the row (empty list means valid)."""
    errors: list[str] = []

    if is_blank(row.title):
        errors.append("Missing required field: title")
    if is_blank(row.description):
        errors.append("Missing required field: description")

    if is_blank(row.resource_type):
        errors.append("Missing required field: resource_type")
    else:
        try:
            strict_enum(row.resource_type, ResourceType, "resource_type")
        except InvalidEnumValueError as e:
            errors.append(str(e))

    if not parse_array_field(row.topics):
        errors.append("Missing required field: topics")

    levels = parse_array_field(row.levels)
    if not levels:
        errors.append("Missing required field: levels")
    for level in levels:
        try:
            strict_enum(level, ResourceLevel, "level")
        except InvalidEnumValueError as e:
            errors.append(str(e))

    if not is_blank(row.review_status):
        try:
            strict_enum(row.review_status, ReviewStatus, "review_status")
        except InvalidEnumValueError as e:
            errors.append(str(e))

    if not is_blank(row.external_url) and not _is_valid_url(row.external_url.strip()):
        errors.append(f"Invalid external_url: '{row.external_url}'")

    if not is_blank(row.provider_id):
        try:
            UUID(row.provider_id.strip())
        except ValueError:
            errors.append(f"Invalid provider_id: '{row.provider_id}'")
    elif not is_blank(row.provider_name) and row.provider_name not in providers:
        errors.append(f"Provider not found: '{row.provider_name}'")

    try:
        coerce_duration(row.duration_minutes)
    except ValueError:
        errors.append(
            f"Invalid duration_minutes: '{row.duration_minutes}'. "
            "Must be a non-negative number"
        )

    return errors


def resolve_provider_id(row: ImportRow, providers: ProviderLookup) -> UUID | None:
    """A supplied provider_id is trusted as-is; otherwise look the name up."""
    if not is_blank(row.provider_id):
        return UUID(row.provider_id.strip())
    if not is_blank(row.provider_name):
        return providers.resolve(row.provider_name)
    return None


def transform_import_row(
    row: ImportRow,
    providers: ProviderLookup,
    default_review_status: ReviewStatus = ReviewStatus.APPROVED,
) -> NormalizedResource:
    """Convert a validated row into the record written to the resources table."""
    duration = coerce_duration(row.duration_minutes)
    review_status = (
        default_review_status
        if is_blank(row.review_status)
        else strict_enum(row.review_status, ReviewStatus, "review_status")
    )

    return NormalizedResource(
        title=row.title.strip(),
        description=row.description.strip(),
        external_url=None if is_blank(row.external_url) else row.external_url.strip(),
        resource_type=strict_enum(row.resource_type, ResourceType, "resource_type"),
        topics=parse_array_field(row.topics),
        levels=[
            strict_enum(level, ResourceLevel, "level")
            for level in parse_array_field(row.levels)
        ],
        segments=parse_array_field(row.segments),
        duration_minutes=None if duration is None else round(duration),
        learning_outcomes=parse_pipe_array(row.learning_outcomes),
        curriculum_tags=parse_array_field(row.curriculum_tags),
        provider_id=resolve_provider_id(row, providers),
        is_featured=parse_featured_flag(row.is_featured),
        review_status=review_status,
        updated_at=utc_now(),
    )
