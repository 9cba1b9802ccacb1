"""Issuance Controller — транзакции выпуска Rustaceans.

Операции:
- mint(caller, recipient): только администратор; получатель владеет >= 1 Crane; бесплатно
- craft_for_self(caller, payment): любой; вызывающий владеет >= 2 Crane; оплата >= required
- craft_for_friend(caller, recipient, payment): как craft_for_self, токен получает recipient

Модель исполнения:
- Каждая мутирующая операция — одна сериализованная транзакция под общей блокировкой
- Все проверки выполняются до любых изменений; при ошибке состояние не меняется
- token_uri читает только зафиксированное состояние и не берёт блокировку

Порядок проверок craft:
1. Получатель валиден
2. GATE 2: оплата >= required_payment (цена вычисляется в момент вызова)
3. GATE 0: Crane у вызывающего
"""

import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from rustaceans.core.domain.collection_state import CollectionState
from rustaceans.core.domain.token import IssuancePath, IssuanceReceipt, Token
from rustaceans.core.domain.token_ledger import TokenLedger
from rustaceans.core.domain.units import is_valid_address, validate_amount
from rustaceans.core.math.safe_uint import checked_add
from rustaceans.gatekeeper.balance_source import BalanceSource
from rustaceans.gatekeeper.gates import Gate00CraneOwnership, Gate01Admin, Gate02Payment
from rustaceans.issuance.config import COLLECTION_NAME, COLLECTION_SYMBOL, CollectionConfig
from rustaceans.issuance.errors import (
    InsufficientCranes,
    InvalidRecipient,
    NotAuthorized,
    PaymentTooLow,
    UnknownToken,
)
from rustaceans.pricing.engine import PricingEngine
from rustaceans.rendering.metadata import MetadataRenderer
from rustaceans.supply.ledger import SupplyLedger

logger = logging.getLogger(__name__)

COLLECTION_STATE_SCHEMA_VERSION = "1"


class RustaceansCollection:
    """Коллекция Rustaceans: состояние, администрирование и выпуск."""

    def __init__(
        self,
        owner: str,
        config: Optional[CollectionConfig] = None,
        cranes: Optional[BalanceSource] = None,
        renderer: Optional[MetadataRenderer] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            owner: адрес администратора
            config: конфигурация коллекции (default: CollectionConfig())
            cranes: companion-коллекция Crane (можно подключить позже через set_cranes)
            renderer: генератор metadata (default: MetadataRenderer())
            clock: источник времени (Unix, секунды)
        """
        if not is_valid_address(owner):
            raise InvalidRecipient(owner)

        self.config = config or CollectionConfig()
        self._owner = owner
        self._cranes = cranes
        self._clock = clock

        self._lock = threading.RLock()
        self._ledger = TokenLedger()
        self._supply = SupplyLedger(genesis_ts_utc_s=clock())
        self._pricing = PricingEngine(
            base_price_wei=self.config.initial_base_price_wei,
            development_fee_wei=self.config.initial_development_fee_wei,
            discount_config=self.config.discount,
        )
        self._renderer = renderer or MetadataRenderer()
        self._treasury_wei = 0
        self._receipts: List[IssuanceReceipt] = []

        self._gate00 = Gate00CraneOwnership()
        self._gate01 = Gate01Admin()
        self._gate02 = Gate02Payment()

    # =========================================================================
    # IDENTITY / READ
    # =========================================================================

    def name(self) -> str:
        return COLLECTION_NAME

    def symbol(self) -> str:
        return COLLECTION_SYMBOL

    @property
    def owner(self) -> str:
        return self._owner

    def total_supply(self) -> int:
        return self._supply.total()

    def current_year_total_supply(self) -> int:
        return self._supply.current_year_total()

    def required_payment(self) -> int:
        """Требуемая оплата craft для следующей транзакции (wei)."""
        return self._pricing.required_payment(self._supply.total())

    def balance_of(self, address: str) -> int:
        return self._ledger.balance_of(address)

    def owner_of(self, token_id: int) -> str:
        self._require_token(token_id)
        return self._ledger.owner_of(token_id)

    def token(self, token_id: int) -> Token:
        """Снапшот токена (id и текущий владелец).

        Raises:
            UnknownToken: Если токен не выпускался
        """
        self._require_token(token_id)
        return self._ledger.token(token_id)

    def treasury_balance(self) -> int:
        return self._treasury_wei

    def receipt_count(self) -> int:
        return len(self._receipts)

    def receipts(self, start: int = 0, limit: Optional[int] = None) -> Tuple[IssuanceReceipt, ...]:
        """Квитанции успешных выпусков в порядке выпуска.

        Args:
            start: индекс первой квитанции
            limit: максимум квитанций в ответе (None: до конца журнала)
        """
        if start < 0 or (limit is not None and limit < 0):
            raise ValueError(f"start and limit must be non-negative, got start={start}, limit={limit}")
        stop = None if limit is None else start + limit
        with self._lock:
            return tuple(self._receipts[start:stop])

    def has_sufficient_cranes(self, address: str, required: int) -> bool:
        return self._gate00.has_sufficient_cranes(self._cranes, address, required)

    def token_uri(self, token_id: int) -> str:
        """
        Inline metadata токена.

        Raises:
            UnknownToken: Если токен не выпускался (или id не является int)
        """
        self._require_token(token_id)
        return self._renderer.render(token_id)

    def snapshot(self) -> CollectionState:
        """Снапшот глобального состояния коллекции."""
        with self._lock:
            return CollectionState(
                schema_version=COLLECTION_STATE_SCHEMA_VERSION,
                name=COLLECTION_NAME,
                symbol=COLLECTION_SYMBOL,
                owner=self._owner,
                supply=self._supply.snapshot(),
                pricing=self._pricing.parameters(),
                required_payment_wei=self.required_payment(),
                treasury_wei=self._treasury_wei,
                cranes_configured=self._cranes is not None,
            )

    # =========================================================================
    # ISSUANCE
    # =========================================================================

    def mint(self, caller: str, recipient: str) -> int:
        """Owner mint: бесплатный выпуск администратором.

        Returns:
            token_id нового токена

        Raises:
            NotAuthorized: caller не администратор
            InvalidRecipient: пустой/нулевой получатель
            InsufficientCranes: получатель владеет < owner_mint_cranes_required Crane
        """
        with self._lock:
            self._require_owner(caller, "mint")
            self._require_recipient(recipient)
            self._require_cranes(recipient, self.config.owner_mint_cranes_required)
            return self._issue(IssuancePath.OWNER_MINT, caller, recipient, 0, 0)

    def craft_for_self(self, caller: str, payment_wei: int) -> int:
        """Платный craft, токен получает вызывающий.

        Raises:
            PaymentTooLow: payment_wei < required_payment()
            InsufficientCranes: вызывающий владеет < craft_cranes_required Crane
        """
        return self._craft(IssuancePath.CRAFT_FOR_SELF, caller, caller, payment_wei)

    def craft_for_friend(self, caller: str, recipient: str, payment_wei: int) -> int:
        """Платный craft, токен получает recipient (вызывающий платит, но не владеет).

        Raises:
            InvalidRecipient: пустой/нулевой получатель
            PaymentTooLow: payment_wei < required_payment()
            InsufficientCranes: вызывающий владеет < craft_cranes_required Crane
        """
        return self._craft(IssuancePath.CRAFT_FOR_FRIEND, caller, recipient, payment_wei)

    def transfer_from(self, caller: str, sender: str, recipient: str, token_id: int) -> None:
        """Перевод токена его владельцем.

        Raises:
            UnknownToken: токен не выпускался
            NotAuthorized: caller или sender не владелец токена
            InvalidRecipient: пустой/нулевой получатель
        """
        with self._lock:
            current = self.owner_of(token_id)
            if caller != current or sender != current:
                logger.info("transfer of token %d by %s rejected, owner is %s", token_id, caller, current)
                raise NotAuthorized(
                    f"NOT_OWNER: token {token_id} is not owned by {caller}",
                    block_reason="caller_not_token_owner",
                )
            self._require_recipient(recipient)
            self._ledger.move(token_id, sender, recipient)
            logger.info("token %d transferred %s -> %s", token_id, sender, recipient)

    # =========================================================================
    # ADMINISTRATION
    # =========================================================================

    def set_price(self, caller: str, amount_wei: int) -> None:
        """Новая базовая цена (действует со следующей транзакции)."""
        with self._lock:
            self._require_owner(caller, "set_price")
            self._pricing.set_base_price(amount_wei)

    def set_development_fee(self, caller: str, amount_wei: int) -> None:
        """Новая комиссия разработки (действует со следующей транзакции)."""
        with self._lock:
            self._require_owner(caller, "set_development_fee")
            self._pricing.set_development_fee(amount_wei)

    def set_cranes(self, caller: str, cranes: Optional[BalanceSource]) -> None:
        """Подключение (или отключение, None) companion-коллекции Crane."""
        with self._lock:
            self._require_owner(caller, "set_cranes")
            self._cranes = cranes
            logger.info("crane collection %s", "configured" if cranes is not None else "cleared")

    def withdraw(self, caller: str) -> int:
        """Вывод накопленных платежей администратором.

        Returns:
            Выведенная сумма (wei); treasury обнуляется
        """
        with self._lock:
            self._require_owner(caller, "withdraw")
            amount = self._treasury_wei
            self._treasury_wei = 0
            logger.info("withdrew %d wei to %s", amount, caller)
            return amount

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Передача роли администратора."""
        with self._lock:
            self._require_owner(caller, "transfer_ownership")
            self._require_recipient(new_owner)
            self._owner = new_owner
            logger.info("ownership transferred %s -> %s", caller, new_owner)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _craft(self, path: IssuancePath, caller: str, recipient: str, payment_wei: int) -> int:
        with self._lock:
            self._require_recipient(recipient)
            required = self._pricing.required_payment(self._supply.total())

            payment_gate = self._gate02.evaluate(payment_wei, required)
            if not payment_gate.entry_allowed:
                raise PaymentTooLow(sent=payment_wei, required=required)

            self._require_cranes(caller, self.config.craft_cranes_required)
            return self._issue(path, caller, recipient, payment_wei, required)

    def _issue(
        self,
        path: IssuancePath,
        caller: str,
        recipient: str,
        payment_wei: int,
        required_wei: int
    ) -> int:
        """Фиксация выпуска. Вызывается под блокировкой после всех проверок."""
        validate_amount(payment_wei, "payment_wei")
        new_treasury = checked_add(self._treasury_wei, payment_wei)
        now = self._clock()

        counters_before = self._supply.snapshot()
        allocation = self._supply.next_id(now)
        try:
            receipt = IssuanceReceipt(
                token_id=allocation.token_id,
                path=path,
                caller=caller,
                recipient=recipient,
                required_wei=required_wei,
                payment_wei=payment_wei,
                total_issued_after=allocation.total_issued,
                year_issued_after=allocation.year_issued,
                ts_utc_s=now,
            )
            self._ledger.assign(allocation.token_id, recipient)
        except Exception:
            self._supply.restore(counters_before)
            raise

        self._treasury_wei = new_treasury
        self._receipts.append(receipt)

        logger.info(
            "issued token %d via %s to %s (payment=%d, required=%d, total=%d, year=%d)",
            allocation.token_id, path.value, recipient, payment_wei, required_wei,
            allocation.total_issued, allocation.year_issued
        )
        return allocation.token_id

    def _require_owner(self, caller: str, operation: str) -> None:
        result = self._gate01.evaluate(caller, self._owner, operation)
        if not result.entry_allowed:
            raise NotAuthorized(result.details, block_reason=result.block_reason)

    def _require_recipient(self, recipient: str) -> None:
        if not is_valid_address(recipient):
            logger.info("invalid recipient %r rejected", recipient)
            raise InvalidRecipient(recipient)

    def _require_cranes(self, holder: str, required: int) -> None:
        result = self._gate00.evaluate(self._cranes, holder, required)
        if not result.entry_allowed:
            raise InsufficientCranes(result.details, block_reason=result.block_reason)

    def _require_token(self, token_id: int) -> None:
        # Только int: 0.0 и True совпали бы с ключами 0 и 1
        if not isinstance(token_id, int) or isinstance(token_id, bool):
            raise UnknownToken(token_id)
        if not self._ledger.exists(token_id):
            raise UnknownToken(token_id)
