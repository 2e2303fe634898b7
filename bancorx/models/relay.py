"""Relay records: the edges of the conversion graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from bancorx.models.types import AccountId, Amount, Symbol


@dataclass(frozen=True)
class TokenSymbol:
    """A token: the contract that issues it plus its symbol."""

    contract: AccountId
    symbol: Symbol


@dataclass(frozen=True)
class TokenAmount:
    """A reserve token paired with a live balance."""

    contract: AccountId
    amount: Amount

    @property
    def symbol(self) -> Symbol:
        return self.amount.symbol


@dataclass(frozen=True)
class Relay:
    """A two-reserve liquidity pool with its smart (pool share) token.

    Attributes:
        contract: Converter account holding the reserves
        reserves: Exactly two reserve tokens with distinct symbols
        smart_token: Pool share token of this relay
        is_multi_contract: True when the reserves are fetched jointly by the
            smart token code rather than per converter account
        fee: Proportional conversion fee in [0, 1)
    """

    contract: AccountId
    reserves: tuple[TokenSymbol, TokenSymbol]
    smart_token: TokenSymbol
    is_multi_contract: bool = False
    fee: Decimal = field(default=Decimal(0))

    def __post_init__(self) -> None:
        # Frozen: normalise through object.__setattr__
        object.__setattr__(self, "reserves", tuple(self.reserves))
        if not isinstance(self.fee, Decimal):
            object.__setattr__(self, "fee", Decimal(str(self.fee)))
        if len(self.reserves) != 2:
            raise ValueError(f"Relay {self.contract} needs exactly two reserves")
        if self.reserves[0].symbol == self.reserves[1].symbol:
            raise ValueError(
                f"Relay {self.contract} reserves share symbol {self.reserves[0].symbol}"
            )
        if not Decimal(0) <= self.fee < Decimal(1):
            raise ValueError(f"Relay fee must be in [0, 1), got {self.fee}")

    @property
    def symbols(self) -> tuple[Symbol, Symbol, Symbol]:
        """Both reserve symbols followed by the smart token symbol."""
        return (self.reserves[0].symbol, self.reserves[1].symbol, self.smart_token.symbol)

    def has_reserve(self, symbol: Symbol) -> bool:
        return any(reserve.symbol == symbol for reserve in self.reserves)


@dataclass(frozen=True)
class ChoppedRelay:
    """One half of a relay: a reserve paired with the relay's smart token."""

    contract: AccountId
    reserves: tuple[TokenSymbol, TokenSymbol]

    @property
    def symbols(self) -> tuple[Symbol, Symbol]:
        return (self.reserves[0].symbol, self.reserves[1].symbol)

    def contains(self, symbol: Symbol) -> bool:
        return symbol in self.symbols

    def opposite(self, symbol: Symbol) -> Symbol:
        """Get the other endpoint of this edge.

        Raises:
            ValueError: If symbol is not an endpoint
        """
        first, second = self.symbols
        if symbol == first:
            return second
        if symbol == second:
            return first
        raise ValueError(f"Symbol {symbol} not in relay {self.contract}")


@dataclass(frozen=True)
class HydratedRelay:
    """A relay with live reserve balances attached."""

    contract: AccountId
    reserves: tuple[TokenAmount, TokenAmount]
    smart_token: TokenSymbol
    is_multi_contract: bool = False
    fee: Decimal = field(default=Decimal(0))

    def reserve_for(self, symbol: Symbol) -> TokenAmount | None:
        """Reserve holding the given symbol, or None."""
        for reserve in self.reserves:
            if reserve.symbol == symbol:
                return reserve
        return None

    def opposite_reserve(self, symbol: Symbol) -> TokenAmount | None:
        """Reserve not holding the given symbol, or None if symbol is absent."""
        if self.reserve_for(symbol) is None:
            return None
        for reserve in self.reserves:
            if reserve.symbol != symbol:
                return reserve
        return None


@dataclass(frozen=True)
class Converter:
    """One hop of a conversion memo: destination account and symbol code."""

    account: AccountId
    symbol: str
    multi_contract_symbol: str | None = None


__all__ = [
    "ChoppedRelay",
    "Converter",
    "HydratedRelay",
    "Relay",
    "TokenAmount",
    "TokenSymbol",
]
