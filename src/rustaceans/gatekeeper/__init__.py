"""Gatekeeper — система гейтов для допуска транзакций выпуска.

Гейты stateless: всё состояние (источник Crane, администратор, цена)
передаётся в evaluate контроллером на момент вызова.
"""

from .balance_source import BalanceSource, InMemoryCraneCollection
from .gates import (
    Gate00CraneOwnership,
    Gate00Result,
    Gate01Admin,
    Gate01Result,
    Gate02Payment,
    Gate02Result,
)

__all__ = [
    "BalanceSource",
    "InMemoryCraneCollection",
    "Gate00CraneOwnership",
    "Gate00Result",
    "Gate01Admin",
    "Gate01Result",
    "Gate02Payment",
    "Gate02Result",
]
