"""
UserRole model - role grants for identity-provider users.

Users themselves live in the external identity provider; this table only
records which roles a user id holds. A user may hold several roles.
"""

from __future__ import annotations

import uuid as uuid_lib

import sqlalchemy as sa
from sqlalchemy import Column, Index, String, UniqueConstraint
from sqlmodel import Field

from flithub.models.base import BaseTableModel
from flithub.schemas.enums import AppRole

__all__ = ["UserRole"]


class UserRole(BaseTableModel, table=True):
    """A single (user, role) grant."""

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
        Index("idx_user_roles_user", "user_id"),
    )

    user_id: uuid_lib.UUID = Field(
        sa_column=Column(sa.Uuid, nullable=False),
    )
    role: AppRole = Field(
        default=AppRole.USER,
        sa_column=Column(String(50), nullable=False),
    )
