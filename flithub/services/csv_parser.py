"""
CSV parsing for bulk imports.

Uses the standard csv module: comma separator, double-quote quoting with
doubled quotes as escape, quoted commas and newlines preserved. Columns are
matched by header name, case-insensitively, so column order is irrelevant.
"""

from __future__ import annotations

import csv
import io
import re
from typing import Any

from flithub.services.exceptions import ValidationError

__all__ = [
    "normalize_header",
    "parse_csv",
    "parse_provider_csv",
    "parse_resource_csv",
]

_HEADER_SEPARATORS = re.compile(r"[\s-]+")

PROVIDER_HEADER_ALIASES = {
    "targetaudience": "target_audience",
}


def normalize_header(header: str) -> str:
    """'Target Audience' -> 'target_audience'."""
    return _HEADER_SEPARATORS.sub("_", header.strip().lower())


def parse_csv(text: str, aliases: dict[str, str] | None = None) -> list[dict[str, str]]:
    """
    Parse CSV text into one dict per data row, keyed by normalized header.

    Cells are trimmed; short rows are padded with empty strings and cells
    beyond the header are dropped. Blank lines are ignored.

    Raises:
        ValidationError: if there is no header row or no data row
    """
    aliases = aliases or {}
    text = text.lstrip("\ufeff")
    reader = csv.reader(io.StringIO(text.strip()))

    try:
        raw_headers = next(reader)
    except StopIteration:
        raw_headers = []
    except csv.Error as e:
        raise ValidationError(f"Invalid CSV: {e}", field="csv") from e

    headers = [normalize_header(h) for h in raw_headers]
    headers = [aliases.get(h, h) for h in headers]

    rows: list[dict[str, str]] = []
    try:
        for values in reader:
            if not any(value.strip() for value in values):
                continue
            padded = values + [""] * (len(headers) - len(values))
            rows.append(
                {header: padded[i].strip() for i, header in enumerate(headers) if header}
            )
    except csv.Error as e:
        raise ValidationError(f"Invalid CSV: {e}", field="csv") from e

    if not headers or not rows:
        raise ValidationError(
            "CSV must have a header row and at least one data row", field="csv"
        )
    return rows


def parse_provider_csv(text: str) -> list[dict[str, Any]]:
    """
    Parse a provider CSV. A "name" column is required; rows with a blank
    name are dropped.
    """
    rows = parse_csv(text, aliases=PROVIDER_HEADER_ALIASES)
    if "name" not in rows[0]:
        raise ValidationError('CSV must have a "name" column', field="csv")
    return [row for row in rows if row["name"]]


def parse_resource_csv(text: str) -> list[dict[str, Any]]:
    """
    Parse a resource CSV. Headers name ImportRow fields; a "title" column is
    required. Blank cells are treated as absent values.
    """
    rows = parse_csv(text)
    if "title" not in rows[0]:
        raise ValidationError('CSV must have a "title" column', field="csv")
    return [{key: value for key, value in row.items() if value} for row in rows]
