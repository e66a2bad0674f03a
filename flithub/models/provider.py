"""
Provider model - an organisation that publishes learning resources.

Design notes:
- name is matched case-insensitively by both importers, but is not unique
  at the database level (legacy rows differ only in case or spacing)
- provider_type is stored as VARCHAR, validated as ProviderType in Python
- is_verified starts false for imported providers until an admin reviews them
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, Column, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field

from flithub.models.base import BaseTableModel
from flithub.schemas.enums import ProviderType

__all__ = ["Provider"]


class Provider(BaseTableModel, table=True):
    """A government body, charity, bank or other publisher of resources."""

    __tablename__ = "providers"
    __table_args__ = (
        Index("idx_providers_name", "name"),
        Index("idx_providers_type", "provider_type"),
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        max_length=255,
    )
    country: str = Field(
        default="Ireland",
        sa_column=Column(String(100), nullable=False),
    )
    provider_type: ProviderType = Field(
        default=ProviderType.INDEPENDENT,
        sa_column=Column(String(50), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )
    target_audience: list[Any] | None = Field(
        default=None,
        sa_column=Column(JSONB, nullable=True),
    )
    website_url: str | None = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )
    logo_url: str | None = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )
    is_verified: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="false"),
    )
