"""
Services package - business logic layer.

Re-exports the import pipelines for convenient importing.
"""

from flithub.services.base import BaseService
from flithub.services.provider_import_service import ProviderImportService
from flithub.services.resource_import_service import ResourceImportService

__all__ = [
    "BaseService",
    "ProviderImportService",
    "ResourceImportService",
]
