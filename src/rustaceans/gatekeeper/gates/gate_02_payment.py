"""GATE 2: Payment

Платный путь (craft_for_self / craft_for_friend):
- payment < required → блокировка (PRICE_NOT_MET)
- payment == required → PASS
- payment > required → PASS, переплата принимается целиком без возврата

required вычисляется PricingEngine в момент вызова и передаётся сюда
как есть: гейт не кэширует цену.
"""

import logging
from dataclasses import dataclass

from rustaceans.core.domain.units import validate_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    entry_allowed: bool
    block_reason: str

    payment_wei: int
    required_wei: int
    overpayment_wei: int

    # Детали
    details: str


class Gate02Payment:
    """GATE 2: приложенная оплата покрывает требуемую сумму."""

    def __init__(self):
        """GATE 2 не требует зависимостей (stateless)."""
        pass

    def evaluate(self, payment_wei: int, required_wei: int) -> Gate02Result:
        """Оценка GATE 2.

        Args:
            payment_wei: приложенная оплата (wei)
            required_wei: требуемая оплата на момент вызова (wei)

        Returns:
            Gate02Result с решением о допуске

        Raises:
            ValueError: Если суммы не являются неотрицательными целыми
        """
        validate_amount(payment_wei, "payment_wei")
        validate_amount(required_wei, "required_wei")

        if payment_wei < required_wei:
            logger.info("payment %d wei below required %d wei", payment_wei, required_wei)
            return Gate02Result(
                entry_allowed=False,
                block_reason="payment_below_required",
                payment_wei=payment_wei,
                required_wei=required_wei,
                overpayment_wei=0,
                details=f"Payment {payment_wei} < required {required_wei}"
            )

        overpayment = payment_wei - required_wei
        if overpayment:
            logger.info("accepting overpayment of %d wei without refund", overpayment)

        return Gate02Result(
            entry_allowed=True,
            block_reason="",
            payment_wei=payment_wei,
            required_wei=required_wei,
            overpayment_wei=overpayment,
            details=f"PASS: payment {payment_wei} >= required {required_wei}"
        )
