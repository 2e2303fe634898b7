"""Value types, relay records and input schemas."""

from bancorx.models.relay import (
    ChoppedRelay,
    Converter,
    HydratedRelay,
    Relay,
    TokenAmount,
    TokenSymbol,
)
from bancorx.models.schema import RelayModel, RelaySetModel, TokenModel
from bancorx.models.types import AccountId, Amount, Symbol, is_valid_account

__all__ = [
    # Types
    "AccountId",
    "Amount",
    "Symbol",
    "is_valid_account",
    # Relay records
    "ChoppedRelay",
    "Converter",
    "HydratedRelay",
    "Relay",
    "TokenAmount",
    "TokenSymbol",
    # Input schemas
    "RelayModel",
    "RelaySetModel",
    "TokenModel",
]
