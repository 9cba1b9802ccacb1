"""Конфигурация коллекции Rustaceans."""

from dataclasses import dataclass, field
from typing import Final

from rustaceans.pricing.engine import (
    DEFAULT_BASE_PRICE_WEI,
    DEFAULT_DEVELOPMENT_FEE_WEI,
    DiscountConfig,
)


# Идентичность коллекции фиксирована и не настраивается
COLLECTION_NAME: Final[str] = "Rustaceans"
COLLECTION_SYMBOL: Final[str] = "RUST"


@dataclass(frozen=True)
class CollectionConfig:
    """Конфигурация коллекции.

    - owner_mint_cranes_required: Crane у получателя для owner mint
    - craft_cranes_required: Crane у вызывающего для craft
    - начальные ценовые параметры (дальше меняются администратором)
    """

    owner_mint_cranes_required: int = 1
    craft_cranes_required: int = 2

    initial_base_price_wei: int = DEFAULT_BASE_PRICE_WEI
    initial_development_fee_wei: int = DEFAULT_DEVELOPMENT_FEE_WEI
    discount: DiscountConfig = field(default_factory=DiscountConfig)
