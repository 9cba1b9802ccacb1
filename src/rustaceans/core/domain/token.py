"""
Token — Модели выпущенного токена и квитанции выпуска

Immutable Pydantic модели:
- Token: идентичность токена (id) и текущий владелец
- IssuanceReceipt: запись об успешном выпуске (mint/craft) с платёжными деталями

Визуальные атрибуты токена НЕ хранятся: они детерминированно выводятся из token_id
в rustaceans.rendering.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class IssuancePath(str, Enum):
    """Путь выпуска токена"""

    OWNER_MINT = "owner_mint"  # Бесплатный mint администратором
    CRAFT_FOR_SELF = "craft_for_self"  # Платный craft на себя
    CRAFT_FOR_FRIEND = "craft_for_friend"  # Платный craft на другой адрес


# =============================================================================
# TOKEN MODEL
# =============================================================================


class Token(BaseModel):
    """
    Модель выпущенного токена.

    Immutable модель (frozen=True). Смена владельца создаёт новый экземпляр.
    """

    token_id: int = Field(..., ge=0, description="Последовательный идентификатор токена")
    owner: str = Field(..., min_length=1, description="Адрес текущего владельца")

    model_config = {"frozen": True}


# =============================================================================
# ISSUANCE RECEIPT MODEL
# =============================================================================


class IssuanceReceipt(BaseModel):
    """
    Квитанция успешного выпуска.

    Фиксирует условия выпуска на момент транзакции: путь, плательщика, получателя,
    требуемую и уплаченную сумму. Переплата не возвращается и учитывается явно.
    """

    token_id: int = Field(..., ge=0, description="Выпущенный токен")
    path: IssuancePath = Field(..., description="Путь выпуска")
    caller: str = Field(..., min_length=1, description="Адрес инициатора транзакции")
    recipient: str = Field(..., min_length=1, description="Адрес получателя токена")

    # Оплата
    required_wei: int = Field(..., ge=0, description="Требуемая оплата на момент вызова (wei)")
    payment_wei: int = Field(..., ge=0, description="Приложенная оплата (wei)")

    # Supply после выпуска
    total_issued_after: int = Field(..., ge=1, description="Выпущено всего после выпуска")
    year_issued_after: int = Field(..., ge=1, description="Выпущено в текущем году после выпуска")

    ts_utc_s: float = Field(..., ge=0, description="Время транзакции (UTC, секунды)")

    model_config = {"frozen": True}  # Immutable

    @field_validator("payment_wei")
    @classmethod
    def validate_payment_covers_required(cls, v: int, info) -> int:
        """Квитанция создаётся только для успешного выпуска: оплата >= требуемой"""
        if "required_wei" in info.data:
            required = info.data["required_wei"]
            if v < required:
                raise ValueError(f"payment_wei {v} below required_wei {required}")
        return v

    @field_validator("year_issued_after")
    @classmethod
    def validate_year_within_total(cls, v: int, info) -> int:
        """Инвариант supply: year_issued <= total_issued"""
        if "total_issued_after" in info.data:
            total = info.data["total_issued_after"]
            if v > total:
                raise ValueError(f"year_issued_after {v} exceeds total_issued_after {total}")
        return v

    @property
    def overpayment_wei(self) -> int:
        """Переплата сверх требуемой суммы (не возвращается)"""
        return self.payment_wei - self.required_wei

    def is_paid(self) -> bool:
        """True для платных путей (craft)"""
        return self.path != IssuancePath.OWNER_MINT
