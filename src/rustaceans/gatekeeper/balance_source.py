"""
BalanceSource — capability доступа к companion-коллекции Crane

Rustaceans читает из companion-коллекции только два значения:
- balance_of(address): сколько Crane у адреса
- total_supply(): сколько Crane выпущено всего

Реальная коллекция подключается через set_cranes на контроллере.
InMemoryCraneCollection — локальная реализация для devnet и тестов.
"""

import logging
from typing import Dict, Protocol, runtime_checkable

from rustaceans.core.domain.units import is_valid_address

logger = logging.getLogger(__name__)


@runtime_checkable
class BalanceSource(Protocol):
    """Read-only интерфейс companion-коллекции."""

    def balance_of(self, address: str) -> int:
        ...

    def total_supply(self) -> int:
        ...


class InMemoryCraneCollection:
    """
    Companion-коллекция Crane в памяти.

    Выпускает последовательные token_id начиная с 0, как и Rustaceans.
    """

    def __init__(self):
        self._owners: Dict[int, str] = {}
        self._balances: Dict[str, int] = {}

    def mint(self, recipient: str) -> int:
        """
        Выпуск Crane на адрес.

        Returns:
            token_id нового Crane

        Raises:
            ValueError: Если адрес невалиден
        """
        if not is_valid_address(recipient):
            raise ValueError(f"invalid recipient address: {recipient!r}")

        token_id = len(self._owners)
        self._owners[token_id] = recipient
        self._balances[recipient] = self._balances.get(recipient, 0) + 1
        logger.debug("crane %d minted to %s", token_id, recipient)
        return token_id

    def transfer(self, token_id: int, recipient: str) -> None:
        """Перевод Crane другому адресу (баланс отправителя уменьшается)."""
        if not is_valid_address(recipient):
            raise ValueError(f"invalid recipient address: {recipient!r}")

        sender = self.owner_of(token_id)
        self._balances[sender] -= 1
        self._balances[recipient] = self._balances.get(recipient, 0) + 1
        self._owners[token_id] = recipient

    def owner_of(self, token_id: int) -> str:
        try:
            return self._owners[token_id]
        except KeyError:
            raise KeyError(f"crane {token_id} does not exist") from None

    def balance_of(self, address: str) -> int:
        return self._balances.get(address, 0)

    def total_supply(self) -> int:
        return len(self._owners)
