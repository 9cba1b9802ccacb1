"""Issuance — контроллер выпуска Rustaceans (owner mint и платный craft)."""

from .config import COLLECTION_NAME, COLLECTION_SYMBOL, CollectionConfig
from .controller import RustaceansCollection
from .errors import (
    InsufficientCranes,
    InvalidRecipient,
    IssuanceError,
    NotAuthorized,
    PaymentTooLow,
    UnknownToken,
)

__all__ = [
    "COLLECTION_NAME",
    "COLLECTION_SYMBOL",
    "CollectionConfig",
    "RustaceansCollection",
    "IssuanceError",
    "NotAuthorized",
    "InsufficientCranes",
    "PaymentTooLow",
    "UnknownToken",
    "InvalidRecipient",
]
