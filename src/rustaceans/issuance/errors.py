"""
Ошибки выпуска — отклонённые транзакции

Каждое исключение несёт:
- reason: короткая машиночитаемая строка (стабильная, для вызывающей стороны)
- block_reason: диагностическая причина из гейта (для логов), может совпадать с reason

Любая ошибка из этого модуля означает, что транзакция отклонена целиком
и состояние коллекции не изменилось.
"""

from typing import Optional


class IssuanceError(Exception):
    """Базовый класс отклонённой транзакции."""

    reason: str = "REJECTED"

    def __init__(self, message: str = "", block_reason: Optional[str] = None):
        super().__init__(message or self.reason)
        self.block_reason = block_reason or self.reason.lower()


class NotAuthorized(IssuanceError):
    """Вызов owner-only операции не администратором (или перевод чужого токена)."""

    reason = "NOT_OWNER"


class InsufficientCranes(IssuanceError):
    """
    Гейт владения Crane не пройден.

    block_reason различает:
    - insufficient_cranes: у адреса меньше Crane, чем требуется
    - crane_nonexistent_token: в companion-коллекции ещё нет ни одного токена
    - crane_collection_unset: companion-коллекция не подключена
    - crane_collection_unreachable: companion-коллекция не ответила
    """

    reason = "NOT_ENOUGH_CRANES"


class PaymentTooLow(IssuanceError):
    """Приложенная оплата ниже требуемой на момент вызова."""

    reason = "PRICE_NOT_MET"

    def __init__(self, sent: int, required: int):
        super().__init__(
            f"{self.reason}: sent={sent} wei, required={required} wei",
            block_reason="payment_below_required",
        )
        self.sent = sent
        self.required = required


class UnknownToken(IssuanceError):
    """Запрос к token_id, который никогда не выпускался."""

    reason = "UNKNOWN_TOKEN"

    def __init__(self, token_id: int):
        super().__init__(f"{self.reason}: token {token_id} does not exist")
        self.token_id = token_id


class InvalidRecipient(IssuanceError):
    """Получатель — пустой или нулевой адрес."""

    reason = "INVALID_RECIPIENT"

    def __init__(self, recipient: str):
        super().__init__(f"{self.reason}: {recipient!r}")
        self.recipient = recipient
