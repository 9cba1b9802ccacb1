"""
CollectionState — Модель снапшота состояния коллекции

Immutable Pydantic модель, представляющая снапшот глобального состояния:
счётчики supply, ценовые параметры, treasury и конфигурацию companion-коллекции.
Полная совместимость с JSON Schema (core/contracts/schema/collection_state.json).
"""

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# NESTED MODELS
# =============================================================================


class SupplyCounters(BaseModel):
    """
    Счётчики выпуска.

    Инвариант: year_issued <= total_issued.
    """

    total_issued: int = Field(..., ge=0, description="Выпущено за всё время (монотонно)")
    year_issued: int = Field(..., ge=0, description="Выпущено в текущем календарном году")
    year_anchor_ts_utc_s: int = Field(
        ..., ge=0, description="Начало текущего годового окна (1 января 00:00 UTC, секунды)"
    )

    model_config = {"frozen": True}

    @field_validator("year_issued")
    @classmethod
    def validate_year_within_total(cls, v: int, info) -> int:
        """Проверка инварианта year_issued <= total_issued"""
        if "total_issued" in info.data:
            total = info.data["total_issued"]
            if v > total:
                raise ValueError(f"year_issued {v} exceeds total_issued {total}")
        return v


class PricingParameters(BaseModel):
    """
    Ценовые параметры crafting.

    Обе компоненты задаются администратором независимо.
    """

    base_price_wei: int = Field(..., ge=0, description="Базовая цена (wei)")
    development_fee_wei: int = Field(..., ge=0, description="Комиссия разработки (wei)")
    discount_supply_threshold: int = Field(
        0, ge=0, description="Скидка действует пока total_issued < threshold"
    )
    discount_bps: int = Field(0, ge=0, le=10_000, description="Размер скидки (bps)")

    model_config = {"frozen": True}

    def gross_price_wei(self) -> int:
        """Сумма без скидки: base_price + development_fee"""
        return self.base_price_wei + self.development_fee_wei


# =============================================================================
# COLLECTION STATE MODEL
# =============================================================================


class CollectionState(BaseModel):
    """
    Модель состояния коллекции (collection snapshot).

    Immutable модель (frozen=True). Содержит:
    - Идентичность коллекции (name, symbol)
    - Администратора
    - Счётчики supply
    - Ценовые параметры и требуемую оплату на момент снапшота
    - Баланс treasury
    - Признак подключённой companion-коллекции
    """

    schema_version: str = Field(..., pattern="^1$", description="Версия схемы")
    name: str = Field(..., min_length=1, description="Имя коллекции")
    symbol: str = Field(..., min_length=1, description="Тикер коллекции")
    owner: str = Field(..., min_length=1, description="Адрес администратора")

    supply: SupplyCounters = Field(..., description="Счётчики выпуска")
    pricing: PricingParameters = Field(..., description="Ценовые параметры")
    required_payment_wei: int = Field(..., ge=0, description="Требуемая оплата craft (wei)")
    treasury_wei: int = Field(..., ge=0, description="Накопленные платежи (wei)")
    cranes_configured: bool = Field(..., description="Companion-коллекция подключена")

    model_config = {"frozen": True}
