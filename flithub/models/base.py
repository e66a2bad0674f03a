"""
Base SQLModel classes with common fields.

Design decisions:
- Internal integer primary keys stay inside the database
- UUID is the identifier the admin UI and import payloads refer to
  (a resource row's provider_id points at providers.uuid)
- Soft-deleted rows are invisible to imports
"""

from __future__ import annotations

import uuid as uuid_lib
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

__all__ = [
    "SQLModel",
    "BaseTableModel",
    "utc_now",
]


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


class BaseTableModel(SQLModel):
    """
    Base class for all database table models.

    Provides:
    - id: Internal primary key (never exposed via API)
    - uuid: Public identifier
    - created_at, updated_at: Automatic timestamps
    - deleted_at: Soft-delete support

    Subclasses must set table=True to create actual tables.
    """

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    uuid: uuid_lib.UUID = Field(
        default_factory=uuid_lib.uuid4,
        unique=True,
        index=True,
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
    )
    # Import transforms stamp this explicitly on every write
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
    )

    # null means active
    deleted_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),
    )
