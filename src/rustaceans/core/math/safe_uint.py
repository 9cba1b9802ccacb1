"""
Safe UInt — целочисленная арифметика для денежных сумм и счётчиков

Модуль обеспечивает корректность всех операций над суммами в wei и счётчиками supply:
- Checked сложение/вычитание в диапазоне [0, UINT256_MAX]
- Применение basis points с округлением вниз (скидки)
- Clamp для целых значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float никогда не участвует в расчёте денег
2. Результат никогда не выходит за [0, UINT256_MAX] (иначе ValueError)
3. Все операции детерминированы и воспроизводимы
"""

from typing import Final

from rustaceans.core.domain.units import UINT256_MAX, validate_amount

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Знаменатель basis points (10000 bps = 100%)
BPS_DENOMINATOR: Final[int] = 10_000


# =============================================================================
# CHECKED АРИФМЕТИКА
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения uint256.

    Args:
        a: Первое слагаемое (wei или счётчик)
        b: Второе слагаемое

    Returns:
        a + b

    Raises:
        ValueError: Если аргументы вне диапазона или результат > UINT256_MAX

    Examples:
        >>> checked_add(18, 2)
        20
    """
    validate_amount(a, "a")
    validate_amount(b, "b")

    result = a + b
    if result > UINT256_MAX:
        raise ValueError(f"uint256 overflow: {a} + {b}")

    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание с проверкой underflow.

    Raises:
        ValueError: Если b > a
    """
    validate_amount(a, "a")
    validate_amount(b, "b")

    if b > a:
        raise ValueError(f"uint256 underflow: {a} - {b}")

    return a - b


# =============================================================================
# BASIS POINTS
# =============================================================================


def validate_bps(bps: int, name: str = "bps") -> None:
    """
    Проверка basis points в диапазоне [0, 10000].

    Raises:
        ValueError: Если bps не int или вне диапазона
    """
    if isinstance(bps, bool) or not isinstance(bps, int):
        raise ValueError(f"{name} must be an integer, got {bps!r}")

    if not 0 <= bps <= BPS_DENOMINATOR:
        raise ValueError(f"{name} must be in [0, {BPS_DENOMINATOR}], got {bps}")


def apply_bps_down(amount: int, bps: int) -> int:
    """
    Доля amount в basis points, округление вниз.

    Используется для расчёта скидки: скидка никогда не превышает
    точное значение, поэтому продавец не теряет на округлении.

    Examples:
        >>> apply_bps_down(20_000, 2_500)
        5000
        >>> apply_bps_down(3, 5_000)
        1
    """
    validate_amount(amount, "amount")
    validate_bps(bps)
    return amount * bps // BPS_DENOMINATOR


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp_int(value: int, min_value: int | None = None, max_value: int | None = None) -> int:
    """
    Ограничение целого значения в диапазоне [min_value, max_value].

    Examples:
        >>> clamp_int(5, 0, 3)
        3
        >>> clamp_int(-1, 0)
        0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result
