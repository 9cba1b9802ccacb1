"""Gates — индивидуальные гейты допуска к выпуску.

- GATE 0: Crane Ownership (count-based, fail-closed)
- GATE 1: Administrator (owner-only операции)
- GATE 2: Payment (оплата >= требуемой на момент вызова)
"""

from .gate_00_crane_ownership import Gate00CraneOwnership, Gate00Result
from .gate_01_admin import Gate01Admin, Gate01Result
from .gate_02_payment import Gate02Payment, Gate02Result

__all__ = [
    "Gate00CraneOwnership",
    "Gate00Result",
    "Gate01Admin",
    "Gate01Result",
    "Gate02Payment",
    "Gate02Result",
]
