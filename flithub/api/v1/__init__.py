"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from flithub.api.v1.imports import router as imports_router

api_router = APIRouter()

api_router.include_router(imports_router, prefix="/imports", tags=["Imports"])
