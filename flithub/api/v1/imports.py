"""
Bulk import API endpoints (admin only).

- POST /imports/resources - Import resources from JSON rows
- POST /imports/resources/csv - Import resources from a CSV upload
- POST /imports/providers - Import providers from JSON rows
- POST /imports/providers/csv - Import providers from a CSV upload

A completed batch always returns 200, even when some rows failed; the body
accounts for every row.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Query

from flithub.api.deps import AdminUser, DbSession
from flithub.schemas.common import ErrorResponse
from flithub.schemas.enums import ImportMode
from flithub.schemas.imports import (
    ProviderImportRequest,
    ProviderImportResult,
    ResourceImportRequest,
    ResourceImportResult,
)
from flithub.services.csv_parser import parse_provider_csv, parse_resource_csv
from flithub.services.provider_import_service import get_provider_import_service
from flithub.services.resource_import_service import get_resource_import_service

logger = logging.getLogger(__name__)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Empty or malformed batch"},
        401: {"model": ErrorResponse, "description": "Missing or invalid credentials"},
        403: {"model": ErrorResponse, "description": "Caller is not an admin"},
        500: {"model": ErrorResponse, "description": "Reference data could not be loaded"},
        503: {"model": ErrorResponse, "description": "Identity provider unavailable"},
    }
)


@router.post("/resources", response_model=ResourceImportResult)
async def import_resources(
    db: DbSession,
    admin: AdminUser,
    data: ResourceImportRequest,
):
    """Insert or upsert resources; rows are reconciled by title."""
    logger.info(f"Resource import requested by {admin.id}")
    service = get_resource_import_service(db)
    return await service.import_resources(data.resources, data.mode)


@router.post("/resources/csv", response_model=ResourceImportResult)
async def import_resources_csv(
    db: DbSession,
    admin: AdminUser,
    csv_text: str = Body(..., media_type="text/csv"),
    mode: ImportMode = Query(
        default=ImportMode.INSERT,
        description="insert skips existing titles, upsert updates them",
    ),
):
    """Import resources from CSV; headers name the row fields."""
    logger.info(f"Resource CSV import requested by {admin.id}")
    rows = parse_resource_csv(csv_text)
    service = get_resource_import_service(db)
    return await service.import_resources(rows, mode)


@router.post("/providers", response_model=ProviderImportResult)
async def import_providers(
    db: DbSession,
    admin: AdminUser,
    data: ProviderImportRequest,
):
    """Insert providers that do not exist yet (by name)."""
    logger.info(f"Provider import requested by {admin.id}")
    service = get_provider_import_service(db)
    return await service.import_providers(data.providers)


@router.post("/providers/csv", response_model=ProviderImportResult)
async def import_providers_csv(
    db: DbSession,
    admin: AdminUser,
    csv_text: str = Body(..., media_type="text/csv"),
):
    """Import providers from CSV; a "name" column is required."""
    logger.info(f"Provider CSV import requested by {admin.id}")
    rows = parse_provider_csv(csv_text)
    service = get_provider_import_service(db)
    return await service.import_providers(rows)
