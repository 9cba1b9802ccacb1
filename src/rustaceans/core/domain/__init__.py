"""
Domain models and value objects.

Contains fundamental domain entities like Token, IssuanceReceipt, CollectionState.
"""

from rustaceans.core.domain.collection_state import (
    CollectionState,
    PricingParameters,
    SupplyCounters,
)
from rustaceans.core.domain.metadata import TokenAttribute, TokenMetadata
from rustaceans.core.domain.token import IssuancePath, IssuanceReceipt, Token
from rustaceans.core.domain.token_ledger import TokenLedger
from rustaceans.core.domain.units import (
    UINT256_MAX,
    WEI_PER_ETHER,
    ZERO_ADDRESS,
    ether_to_wei,
    is_valid_address,
    validate_amount,
    wei_to_ether,
)

__all__ = [
    # Units module
    "WEI_PER_ETHER",
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "ether_to_wei",
    "wei_to_ether",
    "validate_amount",
    "is_valid_address",
    # Token models
    "Token",
    "IssuancePath",
    "IssuanceReceipt",
    "TokenLedger",
    # Collection state
    "CollectionState",
    "SupplyCounters",
    "PricingParameters",
    # Metadata
    "TokenMetadata",
    "TokenAttribute",
]
