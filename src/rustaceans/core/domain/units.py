"""
Units — Централизованный модуль денежных единиц

Единственный допустимый способ преобразований между:
- wei (целое число, базовая единица платежа)
- ether (десятичная запись для конфигурации и диагностики)

Все суммы внутри системы хранятся в wei (int). float для денег ЗАПРЕЩЁН:
конверсия из ether выполняется только через Decimal.
"""

from decimal import Decimal, InvalidOperation
from typing import Final, Union


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество wei в одном ether
WEI_PER_ETHER: Final[int] = 10**18

# Верхняя граница суммы (uint256)
UINT256_MAX: Final[int] = 2**256 - 1

# Нулевой адрес: mint/transfer на него запрещён
ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def ether_to_wei(amount_ether: Union[str, int, Decimal]) -> int:
    """
    Конверсия: ether → wei

    Args:
        amount_ether: Сумма в ether ("0.02", 1, Decimal("0.018"))

    Returns:
        Сумма в wei (int)

    Raises:
        ValueError: Если сумма отрицательная, не число или дробная в wei

    Examples:
        >>> ether_to_wei("0.02")
        20000000000000000
        >>> ether_to_wei(1)
        1000000000000000000
    """
    if isinstance(amount_ether, float):
        raise ValueError(f"Float amounts are not allowed, use str or Decimal: {amount_ether}")

    try:
        value = Decimal(amount_ether) * WEI_PER_ETHER
    except InvalidOperation:
        raise ValueError(f"Invalid ether amount: {amount_ether!r}")

    if value != value.to_integral_value():
        raise ValueError(f"Ether amount {amount_ether} has more than 18 decimals")

    wei = int(value)
    validate_amount(wei)
    return wei


def wei_to_ether(amount_wei: int) -> Decimal:
    """
    Конверсия: wei → ether (для логов и диагностики)

    Args:
        amount_wei: Сумма в wei

    Returns:
        Сумма в ether (Decimal, без потери точности)
    """
    return Decimal(amount_wei) / WEI_PER_ETHER


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(amount_wei: int, name: str = "amount") -> None:
    """
    Проверка, что сумма — неотрицательное целое в диапазоне uint256.

    Args:
        amount_wei: Сумма в wei
        name: Имя параметра для сообщения об ошибке

    Raises:
        ValueError: Если сумма не int, отрицательная или больше uint256
    """
    if isinstance(amount_wei, bool) or not isinstance(amount_wei, int):
        raise ValueError(f"{name} must be an integer amount of wei, got {amount_wei!r}")

    if amount_wei < 0:
        raise ValueError(f"{name} cannot be negative: {amount_wei}")

    if amount_wei > UINT256_MAX:
        raise ValueError(f"{name} exceeds uint256: {amount_wei}")


def is_valid_address(address: str) -> bool:
    """
    Проверка адреса получателя.

    Адрес валиден, если это непустая строка и не нулевой адрес.
    Формат (checksum, длина) не проверяется — это зона кошелька.
    """
    if not isinstance(address, str):
        return False
    stripped = address.strip()
    return bool(stripped) and stripped.lower() != ZERO_ADDRESS
