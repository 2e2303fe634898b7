"""Pydantic models for relay records supplied as JSON.

Relay sets usually come from an on-chain registry export. These models
validate that data and convert it to the immutable domain records.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from bancorx.models.relay import Relay, TokenSymbol
from bancorx.models.types import Symbol, is_valid_account


def validate_symbol(value: Any) -> str:
    """Validate a ``"<precision>,<CODE>"`` symbol string.

    Args:
        value: Value to validate

    Returns:
        Canonical symbol string

    Raises:
        ValueError: If value is not a valid symbol string
    """
    if not isinstance(value, str):
        raise ValueError(f"Symbol must be a string, got {type(value).__name__}")
    return str(Symbol.parse(value))


def validate_account(value: Any) -> str:
    """Validate an account name.

    Args:
        value: Value to validate

    Returns:
        The account name

    Raises:
        ValueError: If value is not a valid account name
    """
    if not is_valid_account(value):
        raise ValueError(f"Invalid account name: {value!r}")
    return value


# Account name (a-z, 1-5 and '.', up to 12 chars)
Account = Annotated[str, BeforeValidator(validate_account)]

# Symbol as "<precision>,<CODE>" (validated)
SymbolText = Annotated[
    str,
    BeforeValidator(validate_symbol),
    Field(description="Token symbol as '<precision>,<CODE>'"),
]


class TokenModel(BaseModel):
    """A token issued by a contract."""

    contract: Account
    symbol: SymbolText

    def to_token(self) -> TokenSymbol:
        return TokenSymbol(contract=self.contract, symbol=Symbol.parse(self.symbol))


class RelayModel(BaseModel):
    """A relay as found in registry data."""

    contract: Account
    reserves: list[TokenModel] = Field(min_length=2, max_length=2)
    smart_token: TokenModel = Field(alias="smartToken")
    is_multi_contract: bool = Field(default=False, alias="isMultiContract")
    fee: Decimal = Field(default=Decimal(0), ge=0, lt=1)

    model_config = {"populate_by_name": True}

    def to_relay(self) -> Relay:
        """Convert to a domain Relay.

        Raises:
            ValueError: If both reserves carry the same symbol
        """
        first, second = self.reserves
        return Relay(
            contract=self.contract,
            reserves=(first.to_token(), second.to_token()),
            smart_token=self.smart_token.to_token(),
            is_multi_contract=self.is_multi_contract,
            fee=self.fee,
        )


class RelaySetModel(BaseModel):
    """A list of relays, in the order used for path tie-breaks."""

    relays: list[RelayModel]

    def to_relays(self) -> list[Relay]:
        return [relay.to_relay() for relay in self.relays]


__all__ = [
    "Account",
    "RelayModel",
    "RelaySetModel",
    "SymbolText",
    "TokenModel",
    "validate_account",
    "validate_symbol",
]
