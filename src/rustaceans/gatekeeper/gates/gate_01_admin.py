"""GATE 1: Administrator

Owner-only операции (mint, set_price, set_development_fee, set_cranes, withdraw,
transfer_ownership) допускаются только для единственного привилегированного адреса.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    entry_allowed: bool
    block_reason: str

    caller: str
    owner: str
    operation: str

    # Детали
    details: str


class Gate01Admin:
    """GATE 1: вызывающий должен быть администратором коллекции."""

    def __init__(self):
        """GATE 1 не требует зависимостей (stateless)."""
        pass

    def evaluate(self, caller: str, owner: str, operation: str) -> Gate01Result:
        """Оценка GATE 1.

        Args:
            caller: адрес вызывающего
            owner: адрес администратора коллекции
            operation: имя owner-only операции (для диагностики)

        Returns:
            Gate01Result с решением о допуске
        """
        if caller != owner:
            logger.info("caller=%s is not the owner, %s rejected", caller, operation)
            return Gate01Result(
                entry_allowed=False,
                block_reason="caller_not_owner",
                caller=caller,
                owner=owner,
                operation=operation,
                details=f"{operation}: caller {caller} is not the owner"
            )

        return Gate01Result(
            entry_allowed=True,
            block_reason="",
            caller=caller,
            owner=owner,
            operation=operation,
            details=f"PASS: {operation} by owner"
        )
