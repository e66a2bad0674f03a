"""
Pydantic schemas for request/response validation.

Re-exports all schemas for convenient importing:
    from flithub.schemas import ImportRow, ResourceImportResult, ResourceType
"""

# Common schemas
from flithub.schemas.common import (
    ErrorResponse,
    HealthResponse,
)

# Enums
from flithub.schemas.enums import (
    AppRole,
    ImportMode,
    ProviderType,
    ResourceLevel,
    ResourceType,
    ReviewStatus,
)

# Import schemas
from flithub.schemas.imports import (
    ErroredProvider,
    ErroredRow,
    ImportRow,
    ImportSummary,
    NormalizedResource,
    ProviderImportRequest,
    ProviderImportResult,
    ProviderImportRow,
    ResourceImportRequest,
    ResourceImportResult,
    SkippedProvider,
    SkippedRow,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Enums
    "AppRole",
    "ImportMode",
    "ProviderType",
    "ResourceLevel",
    "ResourceType",
    "ReviewStatus",
    # Imports
    "ErroredProvider",
    "ErroredRow",
    "ImportRow",
    "ImportSummary",
    "NormalizedResource",
    "ProviderImportRequest",
    "ProviderImportResult",
    "ProviderImportRow",
    "ResourceImportRequest",
    "ResourceImportResult",
    "SkippedProvider",
    "SkippedRow",
]
