"""Base configurations and common column types for database models."""

from decimal import Decimal
from typing import Any
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field

# JSONB on PostgreSQL, generic JSON elsewhere (SQLite in tests)
JSONVariant = JSON().with_variant(JSONB(), "postgresql")

ZERO = Decimal("0.00")


def money_field(max_digits: int = 12, decimal_places: int = 2) -> Any:
    """Decimal column defaulting to zero, used for every money and ratio field."""
    default = Decimal(0).quantize(Decimal(1).scaleb(-decimal_places))
    return Field(default=default, max_digits=max_digits, decimal_places=decimal_places)
