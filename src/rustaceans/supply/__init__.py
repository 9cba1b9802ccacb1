"""Supply — учёт выпуска токенов.

- Последовательное выделение token_id
- Годовое окно с ленивым rollover
"""

from .ledger import SupplyAllocation, SupplyLedger, year_of, year_start_ts

__all__ = [
    "SupplyAllocation",
    "SupplyLedger",
    "year_of",
    "year_start_ts",
]
