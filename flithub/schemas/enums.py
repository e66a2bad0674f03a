"""
Enum definitions for the FLITHUB import service.

All enums are defined as StrEnum for JSON serialization compatibility.
Database stores these as VARCHAR - validation happens in the import pipeline.
"""

from enum import StrEnum

__all__ = [
    "AppRole",
    "ProviderType",
    "ResourceType",
    "ResourceLevel",
    "ReviewStatus",
    "ImportMode",
]


class AppRole(StrEnum):
    """Role grants stored in the user_roles table."""

    ADMIN = "admin"
    SUBMITTER = "submitter"
    USER = "user"


class ProviderType(StrEnum):
    """Kind of organisation publishing resources."""

    GOVERNMENT = "government"
    INDEPENDENT = "independent"
    INTERNATIONAL = "international"
    COMMUNITY = "community"


class ResourceType(StrEnum):
    """Format of a learning resource."""

    LESSON_PLAN = "lesson_plan"
    SLIDES = "slides"
    WORKSHEET = "worksheet"
    PROJECT_BRIEF = "project_brief"
    VIDEO = "video"
    QUIZ = "quiz"
    GUIDE = "guide"
    INTERACTIVE = "interactive"
    PODCAST = "podcast"


class ResourceLevel(StrEnum):
    """Education level a resource targets (Irish school system)."""

    PRIMARY = "primary"
    JUNIOR_CYCLE = "junior_cycle"
    TRANSITION_YEAR = "transition_year"
    SENIOR_CYCLE = "senior_cycle"
    LCA = "lca"
    ADULT_COMMUNITY = "adult_community"


class ReviewStatus(StrEnum):
    """
    Resource review states.

    State machine:
    pending -> approved
            -> needs_changes -> pending
            -> rejected
    """

    PENDING = "pending"
    APPROVED = "approved"
    NEEDS_CHANGES = "needs_changes"
    REJECTED = "rejected"


class ImportMode(StrEnum):
    """How a resource import treats titles that already exist."""

    INSERT = "insert"
    UPSERT = "upsert"
