"""Helpers for Decimal normalization."""

from decimal import Decimal

ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Missing values (``None``) become zero. This is the only place where
    absent amounts are defaulted, so arithmetic downstream never sees
    ``None``.

    Args:
        value: Raw numeric value from the ledger input.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Cannot coerce boolean {value!r} to Decimal")
    return Decimal(str(value))


def coerce_optional_decimal(value) -> Decimal | None:
    """Normalize a value to Decimal while keeping ``None`` as ``None``."""
    if value is None:
        return None
    return coerce_decimal(value)


__all__ = ["ZERO", "coerce_decimal", "coerce_optional_decimal"]
