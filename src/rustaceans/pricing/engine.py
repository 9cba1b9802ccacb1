"""Pricing Engine — требуемая оплата crafting.

required_payment = base_price + development_fee − early_supply_discount

- base_price и development_fee задаются администратором независимо
- Значение вычисляется при каждом вызове (без кэша): изменение параметров
  действует со следующей транзакции и никогда не ретроактивно
- Скидка раннего supply: пока total_issued < discount_supply_threshold,
  сумма уменьшается на discount_bps (округление скидки вниз)
"""

import logging
import threading
from dataclasses import dataclass

from rustaceans.core.domain.collection_state import PricingParameters
from rustaceans.core.domain.units import ether_to_wei, validate_amount
from rustaceans.core.math.safe_uint import apply_bps_down, checked_add, checked_sub, validate_bps

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class DiscountConfig:
    """Конфигурация скидки раннего supply.

    По умолчанию скидка выключена (threshold=0).
    """

    discount_supply_threshold: int = 0
    discount_bps: int = 0


DEFAULT_BASE_PRICE_WEI = ether_to_wei("0.018")
DEFAULT_DEVELOPMENT_FEE_WEI = ether_to_wei("0.002")


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class PriceQuote:
    """Расчёт требуемой оплаты на момент вызова."""

    base_price_wei: int
    development_fee_wei: int
    gross_wei: int
    discount_wei: int
    required_wei: int

    # Детали
    details: str


# =============================================================================
# ENGINE
# =============================================================================


class PricingEngine:
    """Расчёт required_payment из двух независимых компонент."""

    def __init__(
        self,
        base_price_wei: int = DEFAULT_BASE_PRICE_WEI,
        development_fee_wei: int = DEFAULT_DEVELOPMENT_FEE_WEI,
        discount_config: DiscountConfig | None = None
    ):
        validate_amount(base_price_wei, "base_price_wei")
        validate_amount(development_fee_wei, "development_fee_wei")

        self.discount_config = discount_config or DiscountConfig()
        validate_amount(self.discount_config.discount_supply_threshold, "discount_supply_threshold")
        validate_bps(self.discount_config.discount_bps, "discount_bps")

        self._lock = threading.Lock()
        self._base_price_wei = base_price_wei
        self._development_fee_wei = development_fee_wei

    @property
    def base_price_wei(self) -> int:
        return self._base_price_wei

    @property
    def development_fee_wei(self) -> int:
        return self._development_fee_wei

    def quote(self, total_issued: int) -> PriceQuote:
        """Полный расчёт требуемой оплаты.

        Args:
            total_issued: выпущено токенов на момент вызова (для скидки)

        Returns:
            PriceQuote с разбивкой суммы
        """
        with self._lock:
            base = self._base_price_wei
            fee = self._development_fee_wei

        gross = checked_add(base, fee)
        discount = 0
        if total_issued < self.discount_config.discount_supply_threshold:
            discount = apply_bps_down(gross, self.discount_config.discount_bps)

        required = checked_sub(gross, discount)
        return PriceQuote(
            base_price_wei=base,
            development_fee_wei=fee,
            gross_wei=gross,
            discount_wei=discount,
            required_wei=required,
            details=f"base={base} + fee={fee} - discount={discount} = {required}"
        )

    def required_payment(self, total_issued: int) -> int:
        """Требуемая оплата (wei) на момент вызова."""
        return self.quote(total_issued).required_wei

    def set_base_price(self, amount_wei: int) -> None:
        """Новая базовая цена. Авторизация выполняется контроллером.

        Raises:
            ValueError: Если сумма отрицательная или не int
        """
        validate_amount(amount_wei, "base_price_wei")
        with self._lock:
            previous = self._base_price_wei
            self._base_price_wei = amount_wei
        logger.info("base price changed %d -> %d wei", previous, amount_wei)

    def set_development_fee(self, amount_wei: int) -> None:
        """Новая комиссия разработки. Авторизация выполняется контроллером.

        Raises:
            ValueError: Если сумма отрицательная или не int
        """
        validate_amount(amount_wei, "development_fee_wei")
        with self._lock:
            previous = self._development_fee_wei
            self._development_fee_wei = amount_wei
        logger.info("development fee changed %d -> %d wei", previous, amount_wei)

    def parameters(self) -> PricingParameters:
        """Снапшот ценовых параметров как immutable модель."""
        with self._lock:
            return PricingParameters(
                base_price_wei=self._base_price_wei,
                development_fee_wei=self._development_fee_wei,
                discount_supply_threshold=self.discount_config.discount_supply_threshold,
                discount_bps=self.discount_config.discount_bps,
            )
