"""
Core math modules для Rustaceans

Целочисленные примитивы для сумм в wei и счётчиков supply.
"""

from rustaceans.core.math.safe_uint import (
    BPS_DENOMINATOR,
    apply_bps_down,
    checked_add,
    checked_sub,
    clamp_int,
    validate_bps,
)

__all__ = [
    "BPS_DENOMINATOR",
    "apply_bps_down",
    "checked_add",
    "checked_sub",
    "clamp_int",
    "validate_bps",
]
