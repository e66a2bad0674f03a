"""
SQLModel/SQLAlchemy ORM models.

Models are imported lazily to avoid circular import issues.
Import specific models directly:
    from flithub.models.resource import Resource

Or through the package:
    from flithub.models import Provider, Resource, UserRole
"""

from sqlmodel import SQLModel

__all__ = [
    "SQLModel",
    "BaseTableModel",
    "Provider",
    "Resource",
    "UserRole",
]


def __getattr__(name: str):
    """Resolve model classes on first access."""
    if name == "BaseTableModel":
        from flithub.models.base import BaseTableModel
        return BaseTableModel
    elif name == "Provider":
        from flithub.models.provider import Provider
        return Provider
    elif name == "Resource":
        from flithub.models.resource import Resource
        return Resource
    elif name == "UserRole":
        from flithub.models.user_role import UserRole
        return UserRole

    raise AttributeError(f"module 'flithub.models' has no attribute '{name}'")
