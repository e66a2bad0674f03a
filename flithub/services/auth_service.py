"""
Authorization gate for admin-only endpoints.

Identity is resolved by the external identity provider over HTTP
(niquests AsyncSession); role grants are read from the user_roles table.
Nothing is written by either step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import niquests
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.core.config import AuthSettings, get_settings
from flithub.models.user_role import UserRole
from flithub.services.exceptions import (
    ForbiddenError,
    IdentityServiceError,
    ServiceError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass
class AuthUser:
    """Caller identity as reported by the identity provider."""

    id: UUID
    email: str | None = None


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pull the token out of an Authorization header.

    Raises:
        UnauthorizedError: if the header is missing or carries no token
    """
    token = (authorization or "").strip()
    scheme, _, credentials = token.partition(" ")
    if scheme == BEARER_PREFIX.strip():
        token = credentials.strip()
    if not token:
        raise UnauthorizedError("Authorization required")
    return token


class IdentityService:
    """
    Client for the identity provider's "current user" endpoint.

    Uses niquests AsyncSession for async HTTP requests.
    """

    def __init__(self, settings: AuthSettings | None = None):
        self.settings = settings or get_settings().auth
        self._session: niquests.AsyncSession | None = None

    async def __aenter__(self) -> "IdentityService":
        """Context manager entry - creates session."""
        self._session = niquests.AsyncSession()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Context manager exit - closes session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def _get_session(self) -> niquests.AsyncSession:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = niquests.AsyncSession()
        return self._session

    @property
    def user_url(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}{self.settings.user_path}"

    async def get_user(self, token: str) -> AuthUser:
        """
        Resolve a bearer token to the user it was issued for.

        Raises:
            UnauthorizedError: if the provider rejects the token
            IdentityServiceError: on network errors or malformed responses
        """
        session = await self._get_session()
        headers = {"Authorization": f"{BEARER_PREFIX}{token}"}
        if self.settings.api_key:
            headers["apikey"] = self.settings.api_key

        try:
            response = await session.get(
                self.user_url,
                headers=headers,
                timeout=self.settings.timeout,
            )
        except niquests.exceptions.Timeout as e:
            logger.error(f"Identity provider timeout: {e}")
            raise IdentityServiceError(
                f"Identity provider timed out after {self.settings.timeout}s"
            ) from e
        except niquests.exceptions.RequestException as e:
            logger.error(f"Identity provider request error: {e}")
            raise IdentityServiceError(f"Identity provider unavailable: {e}") from e

        if response.status_code in (400, 401, 403, 404):
            logger.warning(f"Identity provider rejected token ({response.status_code})")
            raise UnauthorizedError("Invalid authentication")
        if response.status_code != 200:
            logger.error(f"Identity provider returned HTTP {response.status_code}")
            raise IdentityServiceError(
                f"Identity provider returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
            return AuthUser(id=UUID(str(data["id"])), email=data.get("email"))
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Malformed identity provider response: {e}")
            raise IdentityServiceError("Malformed identity provider response") from e


class AuthService:
    """Combines identity resolution with the role-grant check."""

    def __init__(
        self,
        db: AsyncSession,
        identity: IdentityService,
        settings: AuthSettings | None = None,
    ):
        self.db = db
        self.identity = identity
        self.settings = settings or get_settings().auth

    async def get_user_roles(self, user_id: UUID) -> list[str]:
        """Get every role granted to the user."""
        stmt = select(UserRole.role).where(
            UserRole.user_id == user_id,
            UserRole.deleted_at.is_(None),
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user roles: {e}")
            raise ServiceError("Failed to verify permissions") from e
        return [str(role) for role in result.scalars().all()]

    async def authorize_admin(self, authorization: str | None) -> AuthUser:
        """
        Verify the caller is an authenticated admin.

        Raises:
            UnauthorizedError: missing or invalid token (401)
            ForbiddenError: authenticated but not an admin (403)
        """
        token = extract_bearer_token(authorization)
        user = await self.identity.get_user(token)

        roles = await self.get_user_roles(user.id)
        if self.settings.admin_role not in roles:
            logger.warning(f"User is not an admin: {user.id}")
            raise ForbiddenError("Admin access required")
        return user
