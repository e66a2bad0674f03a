"""Tests for resource row validation and transformation."""

import uuid

import pytest

from flithub.schemas.enums import ReviewStatus
from flithub.schemas.imports import ImportRow
from flithub.services.reference_data import ProviderLookup
from flithub.services.resource_validator import (
    RowShapeError,
    parse_import_row,
    row_label,
    transform_import_row,
    validate_import_row,
)

CCPC_ID = uuid.UUID("33333333-3333-3333-3333-333333333333")


@pytest.fixture
def providers() -> ProviderLookup:
    return ProviderLookup([(CCPC_ID, "CCPC")])


def valid_row(**overrides) -> ImportRow:
    values = {
        "title": "Budget Basics",
        "description": "Build a weekly budget",
        "resource_type": "Lesson Plan",
        "topics": "Budgeting, Saving",
        "levels": "Junior Cycle",
    }
    values.update(overrides)
    return ImportRow.model_validate(values)


class TestValidateImportRow:
    """validate_import_row reports every violation at once."""

    def test_valid_row(self, providers):
        assert validate_import_row(valid_row(), providers) == []

    def test_empty_row_reports_all_required_fields(self, providers):
        errors = validate_import_row(ImportRow(), providers)
        assert errors == [
            "Missing required field: title",
            "Missing required field: description",
            "Missing required field: resource_type",
            "Missing required field: topics",
            "Missing required field: levels",
        ]

    def test_whitespace_only_is_missing(self, providers):
        errors = validate_import_row(valid_row(title="   ", topics=" , "), providers)
        assert "Missing required field: title" in errors
        assert "Missing required field: topics" in errors

    def test_multiple_invalid_levels(self, providers):
        errors = validate_import_row(valid_row(levels="Primary, College, Kindergarten"), providers)
        assert len(errors) == 2
        assert errors[0].startswith("Invalid level: 'College'")
        assert errors[1].startswith("Invalid level: 'Kindergarten'")

    def test_invalid_review_status(self, providers):
        errors = validate_import_row(valid_row(review_status="published"), providers)
        assert errors[0].startswith("Invalid review_status: 'published'")

    def test_review_status_with_spaces(self, providers):
        assert validate_import_row(valid_row(review_status="Needs Changes"), providers) == []

    def test_invalid_url(self, providers):
        errors = validate_import_row(valid_row(external_url="not a url"), providers)
        assert errors == ["Invalid external_url: 'not a url'"]

    def test_invalid_duration(self, providers):
        errors = validate_import_row(valid_row(duration_minutes="-10"), providers)
        assert errors == ["Invalid duration_minutes: '-10'. Must be a non-negative number"]

    def test_oversized_duration(self, providers):
        errors = validate_import_row(valid_row(duration_minutes=1e20), providers)
        assert errors == ["Invalid duration_minutes: '1e+20'. Must be a non-negative number"]

    def test_unknown_provider_name(self, providers):
        errors = validate_import_row(valid_row(provider_name="Acme Bank"), providers)
        assert errors == ["Provider not found: 'Acme Bank'"]

    def test_provider_name_matched_case_insensitively(self, providers):
        assert validate_import_row(valid_row(provider_name=" ccpc "), providers) == []

    def test_provider_id_skips_name_lookup(self, providers):
        row = valid_row(provider_id=str(uuid.uuid4()), provider_name="Acme Bank")
        assert validate_import_row(row, providers) == []

    def test_malformed_provider_id(self, providers):
        errors = validate_import_row(valid_row(provider_id="ccpc"), providers)
        assert errors == ["Invalid provider_id: 'ccpc'"]

    def test_combined_errors(self, providers):
        row = valid_row(description="", resource_type="essay", provider_name="Nobody")
        errors = validate_import_row(row, providers)
        assert errors[0] == "Missing required field: description"
        assert errors[1].startswith("Invalid resource_type: 'essay'")
        assert errors[2] == "Provider not found: 'Nobody'"


class TestParseImportRow:
    """Tests for reading raw rows."""

    def test_numbers_coerced_to_text(self):
        row = parse_import_row({"title": 2024, "duration_minutes": 30})
        assert row.title == "2024"
        assert row.duration_minutes == 30

    def test_unknown_columns_ignored(self):
        row = parse_import_row({"title": "A", "notes": "internal"})
        assert row.title == "A"

    def test_non_object_row(self):
        with pytest.raises(RowShapeError):
            parse_import_row("Budget Basics")

    def test_object_in_text_field(self):
        with pytest.raises(RowShapeError) as exc_info:
            parse_import_row({"title": {"en": "Budget"}})
        assert exc_info.value.errors[0].startswith("Invalid title")

    def test_row_label(self):
        assert row_label({"title": "  Budget  "}, 3) == "Budget"
        assert row_label({"title": ""}, 3) == "Row 3"
        assert row_label(["not", "a", "row"], 4) == "Row 4"


class TestTransformImportRow:
    """Tests for converting validated rows to stored records."""

    def test_full_transform(self, providers):
        row = valid_row(
            title="  Budget Basics ",
            levels=["Junior Cycle", "Senior Cycle"],
            segments="Students",
            learning_outcomes="Track spending, weekly|Set a goal",
            curriculum_tags="Business Studies",
            duration_minutes="44.6",
            provider_name="ccpc",
            is_featured="Yes",
            external_url=" https://example.ie/budget ",
        )

        record = transform_import_row(row, providers)

        assert record.title == "Budget Basics"
        assert record.resource_type == "lesson_plan"
        assert record.topics == ["Budgeting", "Saving"]
        assert record.levels == ["junior_cycle", "senior_cycle"]
        assert record.segments == ["Students"]
        assert record.learning_outcomes == ["Track spending, weekly", "Set a goal"]
        assert record.curriculum_tags == ["Business Studies"]
        assert record.duration_minutes == 45
        assert record.provider_id == CCPC_ID
        assert record.is_featured is True
        assert record.external_url == "https://example.ie/budget"
        assert record.review_status == "approved"

    def test_defaults(self, providers):
        record = transform_import_row(valid_row(), providers)
        assert record.provider_id is None
        assert record.duration_minutes is None
        assert record.is_featured is False
        assert record.segments == []
        assert record.external_url is None

    def test_default_review_status_applied(self, providers):
        record = transform_import_row(valid_row(), providers, ReviewStatus.PENDING)
        assert record.review_status == "pending"

    def test_explicit_review_status(self, providers):
        record = transform_import_row(valid_row(review_status="Rejected"), providers)
        assert record.review_status == "rejected"

    def test_supplied_provider_id_trusted(self, providers):
        supplied = uuid.uuid4()
        record = transform_import_row(
            valid_row(provider_id=str(supplied), provider_name="CCPC"), providers
        )
        assert record.provider_id == supplied

    def test_zero_duration_kept(self, providers):
        record = transform_import_row(valid_row(duration_minutes=0), providers)
        assert record.duration_minutes == 0
