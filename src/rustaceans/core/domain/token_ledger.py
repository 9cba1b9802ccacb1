"""
TokenLedger — Реестр владения токенами (ERC-721 style)

Хранит отображение token_id → owner и балансы владельцев.
Не выполняет проверок авторизации вызывающего: это зона IssuanceController.

Инварианты:
- token_id присваивается ровно один раз и никогда не переиспользуется
- sum(balances) == число выпущенных токенов
- Нулевой/пустой адрес не может быть владельцем
"""

import logging
from typing import Dict, Iterator

from rustaceans.core.domain.token import Token
from rustaceans.core.domain.units import is_valid_address

logger = logging.getLogger(__name__)


class TokenLedger:
    """Реестр владения: token_id → owner, owner → balance."""

    def __init__(self):
        self._owners: Dict[int, str] = {}
        self._balances: Dict[str, int] = {}

    def __contains__(self, token_id: int) -> bool:
        return token_id in self._owners

    def __len__(self) -> int:
        return len(self._owners)

    def exists(self, token_id: int) -> bool:
        """True если токен выпущен"""
        return token_id in self._owners

    def owner_of(self, token_id: int) -> str:
        """
        Владелец токена.

        Raises:
            KeyError: Если токен не выпущен
        """
        try:
            return self._owners[token_id]
        except KeyError:
            raise KeyError(f"token {token_id} does not exist") from None

    def balance_of(self, address: str) -> int:
        """Количество токенов у адреса (0 для неизвестного адреса)"""
        return self._balances.get(address, 0)

    def token(self, token_id: int) -> Token:
        """Снапшот токена как immutable модель"""
        return Token(token_id=token_id, owner=self.owner_of(token_id))

    def tokens_of(self, address: str) -> Iterator[int]:
        """Итератор по token_id, принадлежащим адресу (в порядке выпуска)"""
        return (tid for tid, owner in sorted(self._owners.items()) if owner == address)

    def assign(self, token_id: int, recipient: str) -> None:
        """
        Запись нового токена на получателя.

        Raises:
            ValueError: Если токен уже существует или адрес невалиден
        """
        if token_id in self._owners:
            raise ValueError(f"token {token_id} already assigned")
        if not is_valid_address(recipient):
            raise ValueError(f"invalid recipient address: {recipient!r}")

        self._owners[token_id] = recipient
        self._balances[recipient] = self._balances.get(recipient, 0) + 1
        logger.debug("token %d assigned to %s", token_id, recipient)

    def move(self, token_id: int, sender: str, recipient: str) -> None:
        """
        Перевод токена sender → recipient.

        Raises:
            KeyError: Если токен не выпущен
            ValueError: Если sender не владелец или recipient невалиден
        """
        current = self.owner_of(token_id)
        if current != sender:
            raise ValueError(f"token {token_id} is not owned by {sender}")
        if not is_valid_address(recipient):
            raise ValueError(f"invalid recipient address: {recipient!r}")

        self._balances[sender] -= 1
        if self._balances[sender] == 0:
            del self._balances[sender]
        self._balances[recipient] = self._balances.get(recipient, 0) + 1
        self._owners[token_id] = recipient
        logger.debug("token %d moved %s -> %s", token_id, sender, recipient)
