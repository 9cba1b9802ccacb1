"""GATE 0: Crane Ownership

Первый gate в цепочке выпуска.
- Owner mint: получатель должен владеть >= 1 Crane
- Craft (self/friend): вызывающий должен владеть >= 2 Crane

Семантика count-based: проверяется текущий balance_of(holder) в companion-коллекции.
Ничего не сжигается и не резервируется: баланс Crane — единственный источник истины.

Fail-closed:
- companion-коллекция не подключена → блокировка (crane_collection_unset)
- companion-коллекция выбросила исключение → блокировка (crane_collection_unreachable)
- в companion-коллекции нет ни одного токена → блокировка (crane_nonexistent_token)
- баланс ниже требуемого → блокировка (insufficient_cranes)

Все четыре причины видны вызывающему одинаково (InsufficientCranes),
но различаются в block_reason и в логах.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from rustaceans.gatekeeper.balance_source import BalanceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    entry_allowed: bool
    block_reason: str

    # Входные параметры для диагностики
    holder: str
    required: int
    crane_balance: Optional[int]
    crane_total_supply: Optional[int]

    # Ошибка конфигурации (а не пользователя)
    is_configuration_error: bool

    # Детали
    details: str


class Gate00CraneOwnership:
    """GATE 0: проверка владения Crane.

    Порядок проверок:
    1. Companion-коллекция подключена
    2. Companion-коллекция отвечает (total_supply, balance_of)
    3. В companion-коллекции есть хотя бы один токен
    4. balance_of(holder) >= required
    """

    def __init__(self):
        """GATE 0 не хранит состояния: источник передаётся в evaluate."""
        pass

    def evaluate(
        self,
        balance_source: Optional[BalanceSource],
        holder: str,
        required: int
    ) -> Gate00Result:
        """Оценка GATE 0: владеет ли holder хотя бы required Crane.

        Args:
            balance_source: companion-коллекция (None если не подключена)
            holder: адрес, чей баланс проверяется
            required: минимальное количество Crane

        Returns:
            Gate00Result с решением о допуске
        """
        if required < 0:
            raise ValueError(f"required must be non-negative, got {required}")

        # 1. Конфигурация
        if balance_source is None:
            logger.error("crane collection is not configured, rejecting holder=%s", holder)
            return self._blocked(
                "crane_collection_unset", holder, required, None, None,
                is_configuration_error=True,
                details="Crane collection is not configured"
            )

        # 2. Доступность
        try:
            total_supply = balance_source.total_supply()
            balance = balance_source.balance_of(holder)
        except Exception:
            logger.exception("crane collection query failed, rejecting holder=%s", holder)
            return self._blocked(
                "crane_collection_unreachable", holder, required, None, None,
                is_configuration_error=True,
                details="Crane collection query failed"
            )

        # 3. Companion-коллекция пуста
        if total_supply == 0 and required > 0:
            logger.warning("no crane has been minted yet, rejecting holder=%s", holder)
            return self._blocked(
                "crane_nonexistent_token", holder, required, balance, total_supply,
                is_configuration_error=False,
                details="Crane collection has no tokens yet"
            )

        # 4. Баланс
        if balance < required:
            logger.info(
                "holder=%s owns %d cranes, %d required", holder, balance, required
            )
            return self._blocked(
                "insufficient_cranes", holder, required, balance, total_supply,
                is_configuration_error=False,
                details=f"Holder owns {balance} cranes, {required} required"
            )

        # 5. PASS
        return Gate00Result(
            entry_allowed=True,
            block_reason="",
            holder=holder,
            required=required,
            crane_balance=balance,
            crane_total_supply=total_supply,
            is_configuration_error=False,
            details=f"PASS: holder owns {balance} cranes (required {required})"
        )

    def has_sufficient_cranes(
        self,
        balance_source: Optional[BalanceSource],
        holder: str,
        required: int
    ) -> bool:
        """Булева форма GATE 0."""
        return self.evaluate(balance_source, holder, required).entry_allowed

    def _blocked(
        self,
        block_reason: str,
        holder: str,
        required: int,
        crane_balance: Optional[int],
        crane_total_supply: Optional[int],
        is_configuration_error: bool,
        details: str
    ) -> Gate00Result:
        """Создание результата блокировки."""
        return Gate00Result(
            entry_allowed=False,
            block_reason=block_reason,
            holder=holder,
            required=required,
            crane_balance=crane_balance,
            crane_total_supply=crane_total_supply,
            is_configuration_error=is_configuration_error,
            details=details
        )
