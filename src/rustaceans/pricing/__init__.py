"""Pricing — расчёт требуемой оплаты crafting."""

from .engine import (
    DEFAULT_BASE_PRICE_WEI,
    DEFAULT_DEVELOPMENT_FEE_WEI,
    DiscountConfig,
    PriceQuote,
    PricingEngine,
)

__all__ = [
    "DEFAULT_BASE_PRICE_WEI",
    "DEFAULT_DEVELOPMENT_FEE_WEI",
    "DiscountConfig",
    "PriceQuote",
    "PricingEngine",
]
