"""Data source protocol for live relay balances."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from bancorx.models.relay import Relay
from bancorx.models.types import AccountId, Amount


@runtime_checkable
class RelayDataSource(Protocol):
    """Capabilities the calculator needs from the chain.

    Implementations own transport, timeouts and retries. Whatever they
    raise propagates through the calculator unchanged.
    """

    async def fetch_single_relay_reserves(self, contract: AccountId) -> list[Amount]:
        """Reserve balances of a converter holding a single relay."""
        ...

    async def fetch_multi_relay_reserves(
        self,
        contract: AccountId,
        smart_symbol: str,
    ) -> list[Amount]:
        """Reserve balances of one relay inside a multi-relay converter.

        Args:
            contract: Converter account
            smart_symbol: Smart token code identifying the relay
        """
        ...

    async def fetch_smart_token_supply(self, contract: AccountId, symbol_code: str) -> Amount:
        """Current supply of a smart token."""
        ...

    async def fetch_relays(self) -> list[Relay]:
        """Relay universe to route through, in tie-break order."""
        ...


__all__ = ["RelayDataSource"]
