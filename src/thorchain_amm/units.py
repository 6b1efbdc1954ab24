from __future__ import annotations

from decimal import ROUND_DOWN, Decimal


def scale_decimals(value: int, decimals: int, target_decimals: int) -> int:
    """Rescale an integer base amount between decimal precisions.

    Args:
        value: Integer amount expressed with ``decimals`` decimal places.
        decimals: Current decimal precision of ``value``.
        target_decimals: Precision to express the amount in.

    Returns:
        The amount at ``target_decimals`` precision.

    Notes:
        - Scaling up multiplies by a power of ten and is exact.
        - Scaling down uses integer division (truncates toward zero).
    """
    if decimals == target_decimals:
        return value
    if decimals < target_decimals:
        return value * (10 ** (target_decimals - decimals))
    return value // (10 ** (decimals - target_decimals))


def to_base_amount(asset_amount: Decimal | int | str, decimals: int) -> Decimal:
    """Convert a human-readable asset amount into integral base units (truncated)."""
    scaled = Decimal(asset_amount).scaleb(decimals)
    return scaled.to_integral_value(ROUND_DOWN)


def to_asset_amount(base_amount: Decimal | int, decimals: int) -> Decimal:
    """Convert integral base units back into an asset amount."""
    return Decimal(base_amount).scaleb(-decimals)
