"""
Contract Validation Module

Модуль для валидации JSON контрактов Rustaceans.
"""

from .validators import (
    CollectionStateValidator,
    ContractValidator,
    SchemaLoader,
    TokenMetadataValidator,
    validate_collection_state,
    validate_token_metadata,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TokenMetadataValidator",
    "CollectionStateValidator",
    # Functions
    "validate_token_metadata",
    "validate_collection_state",
]
