# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def is_blank(value: str | UUID | None) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, UUID):
        return False
    return not str(value).strip()


# =============================================================================
# Money Utilities
# =============================================================================

def to_decimal(value: Any) -> Decimal:
    """
    Convert a database value to Decimal.

    PostgREST returns numeric columns as JSON numbers or strings depending on
    precision, so floats go through str() to avoid binary noise.

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a decimal value: {value!r}") from e


def money_to_db(value: Decimal) -> str:
    """Serialize a Decimal for a numeric(14,2) column."""
    return str(value.quantize(Decimal("0.01")))
