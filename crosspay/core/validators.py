"""
Input validation helpers shared by the services.

Each helper returns the value unchanged when it is acceptable and raises
:class:`~crosspay.core.errors.ValidationError` otherwise.
"""

import re

from crosspay.core.constants import ADDRESS_PATTERN, BASE_UNITS_PATTERN
from crosspay.core.errors import ValidationError

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)
_BASE_UNITS_RE = re.compile(BASE_UNITS_PATTERN, re.ASCII)


def validate_address(value: str | None, field: str) -> str:
    """Check a 0x-prefixed 40 hex digit account address."""
    if not isinstance(value, str) or not _ADDRESS_RE.fullmatch(value):
        raise ValidationError(details=f'"{field}" must be a 0x-prefixed 40 hex digit address')
    return value


def validate_base_units(value: str | None, field: str) -> str:
    """Check a non-negative integer amount written in token base units."""
    # Strings only; floats and scientific notation lose precision
    if not isinstance(value, str) or not _BASE_UNITS_RE.fullmatch(value):
        raise ValidationError(details=f'"{field}" must be an integer string of token base units')
    return value


def validate_chain_id(value: int | None, field: str, supported: list[int]) -> int:
    """Check that a chain id belongs to the supported set."""
    if isinstance(value, bool) or not isinstance(value, int) or value not in supported:
        allowed = ", ".join(str(chain_id) for chain_id in supported)
        raise ValidationError(details=f'"{field}" must be one of [{allowed}]')
    return value


def validate_expires_in_hours(value: float, minimum: float, maximum: float) -> float:
    """Check the payment link lifetime in hours; fractions such as 1.5 are allowed."""
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not minimum <= value <= maximum
    ):
        raise ValidationError(
            details=f'"expiresInHours" must be between {minimum} and {maximum}'
        )
    return value


def validate_page_limit(value: int, maximum: int) -> int:
    """Check a requested page size against the configured maximum."""
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= maximum:
        raise ValidationError(details=f'"limit" must be between 1 and {maximum}')
    return value
