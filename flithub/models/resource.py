"""
Resource model - a learning resource listed in the public directory.

Design notes:
- Array-valued fields (topics, levels, ...) are JSONB lists of strings
- provider_id references providers.uuid, so a caller-supplied provider UUID
  can be stored without translating it to an internal key first
- title is the duplicate-detection key for imports (case-insensitive,
  trimmed), enforced in the import service rather than by a constraint
"""

from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field

from flithub.models.base import BaseTableModel
from flithub.schemas.enums import ResourceType, ReviewStatus

__all__ = ["Resource"]


class Resource(BaseTableModel, table=True):
    """
    A lesson plan, worksheet, video or other resource published by a provider.

    Only approved resources are shown publicly; bulk imports default to
    approved because admins upload them.
    """

    __tablename__ = "resources"
    __table_args__ = (
        Index("idx_resources_title", "title"),
        Index("idx_resources_provider", "provider_id"),
        Index("idx_resources_review_status", "review_status"),
    )

    title: str = Field(
        sa_column=Column(String(500), nullable=False),
        max_length=500,
    )
    description: str = Field(
        sa_column=Column(Text, nullable=False),
    )
    external_url: str | None = Field(
        default=None,
        sa_column=Column(String(1000), nullable=True),
    )
    resource_type: ResourceType = Field(
        sa_column=Column(String(50), nullable=False),
    )

    topics: list[Any] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )
    levels: list[Any] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )
    segments: list[Any] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )
    learning_outcomes: list[Any] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )
    curriculum_tags: list[Any] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )

    duration_minutes: int | None = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
    )

    provider_id: uuid_lib.UUID | None = Field(
        default=None,
        sa_column=Column(sa.Uuid, ForeignKey("providers.uuid"), nullable=True),
    )
    submitted_by: uuid_lib.UUID | None = Field(
        default=None,
        sa_column=Column(sa.Uuid, nullable=True),
    )

    # Review workflow
    review_status: ReviewStatus = Field(
        default=ReviewStatus.PENDING,
        sa_column=Column(String(50), nullable=False),
    )
    review_notes: str | None = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )
    reviewed_by: uuid_lib.UUID | None = Field(
        default=None,
        sa_column=Column(sa.Uuid, nullable=True),
    )
    reviewed_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),
    )

    is_featured: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="false"),
    )
    view_count: int = Field(default=0)
    download_count: int = Field(default=0)
