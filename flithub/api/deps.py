"""
API dependencies for FastAPI route handlers.

Provides:
- Database session dependency
- Identity provider client dependency
- Admin gate dependency (401/403 before any import work starts)
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.database import get_db
from flithub.services.auth_service import AuthService, AuthUser, IdentityService

__all__ = [
    "AdminUser",
    "DbSession",
    "get_identity_service",
    "require_admin",
]


# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_identity_service() -> AsyncGenerator[IdentityService, None]:
    """Dependency that provides an identity provider client for one request."""
    async with IdentityService() as service:
        yield service


async def require_admin(
    db: DbSession,
    identity: Annotated[IdentityService, Depends(get_identity_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthUser:
    """Resolve the caller and require the admin role."""
    return await AuthService(db, identity).authorize_admin(authorization)


# Type alias for the admin gate
AdminUser = Annotated[AuthUser, Depends(require_admin)]
