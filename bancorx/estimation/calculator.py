"""Multi-hop return and cost estimation against live balances.

The calculator resolves a relay path, hydrates every relay on it with
balances from the injected data source, then folds the conversion math over
the hops:
1. estimate_return walks forward from the amount sold
2. estimate_cost walks backward from the amount desired
Slippage reported is the worst single hop.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from bancorx.errors import PathNotFound, ReserveMismatch
from bancorx.estimation.source import RelayDataSource
from bancorx.math.config import DEFAULT_MATH_CONFIG, MathConfig
from bancorx.math.conversion import (
    ConversionResult,
    calculate_cost,
    calculate_return,
    charge_fee,
    fund,
    liquidate,
    reverse_fee,
)
from bancorx.models.relay import HydratedRelay, Relay, TokenAmount
from bancorx.models.types import Amount, Symbol
from bancorx.routing.pathfinding import RelayPathFinder

logger = structlog.get_logger()


def hydrate_relay(balances: Sequence[Amount], relay: Relay) -> HydratedRelay:
    """Attach fetched balances to a relay's reserves.

    Args:
        balances: Balances returned by the data source (any order, may
            contain extra symbols)
        relay: Relay to hydrate

    Returns:
        HydratedRelay with one balance per reserve

    Raises:
        ReserveMismatch: If a reserve symbol has no balance
    """
    reserves: list[TokenAmount] = []
    for reserve in relay.reserves:
        balance = next((b for b in balances if b.symbol == reserve.symbol), None)
        if balance is None:
            raise ReserveMismatch(
                f"No balance for reserve {reserve.symbol} of relay {relay.contract}"
            )
        reserves.append(TokenAmount(contract=reserve.contract, amount=balance))

    first, second = reserves
    return HydratedRelay(
        contract=relay.contract,
        reserves=(first, second),
        smart_token=relay.smart_token,
        is_multi_contract=relay.is_multi_contract,
        fee=relay.fee,
    )


def _split_reserves(relay: HydratedRelay, symbol: Symbol) -> tuple[TokenAmount, TokenAmount]:
    """Return (reserve holding symbol, the other reserve)."""
    own = relay.reserve_for(symbol)
    other = relay.opposite_reserve(symbol)
    if own is None or other is None:
        raise ReserveMismatch(f"Relay {relay.contract} has no reserve for {symbol}")
    return own, other


def _require_reserve_route(origin: Symbol, destination: Symbol, path: Sequence[Relay]) -> None:
    """Check that every hop of a path trades one reserve for the other.

    Paths into or out of a smart token cross a relay that does not hold
    the running symbol as a reserve.

    Raises:
        PathNotFound: If a hop does not hold the running symbol as a reserve,
            or the path does not end at destination
    """
    current = origin
    for relay in path:
        if not relay.has_reserve(current):
            raise PathNotFound(
                f"Relay {relay.contract} has no reserve for {current} on the route "
                f"from {origin} to {destination}"
            )
        current = next(r.symbol for r in relay.reserves if r.symbol != current)
    if current != destination:
        raise PathNotFound(f"No reserve route from {origin} to {destination}")


class BancorCalculator:
    """Estimate conversions through relays using a live data source.

    Usage:
        calculator = BancorCalculator(source, relays)
        reward, slippage = await calculator.estimate_return(amount, BNT)
    """

    def __init__(
        self,
        source: RelayDataSource,
        relays: Sequence[Relay] | None = None,
        config: MathConfig = DEFAULT_MATH_CONFIG,
    ) -> None:
        """Initialize the calculator.

        Args:
            source: Data source for balances, supplies and (optionally) relays
            relays: Relay universe. If omitted it is loaded from the source
                on first use.
            config: Decimal working precision for the math
        """
        self._source = source
        self._config = config
        self._finder: RelayPathFinder | None = (
            RelayPathFinder(relays) if relays is not None else None
        )

    @property
    def relays(self) -> tuple[Relay, ...]:
        """Current relay universe (empty until loaded)."""
        if self._finder is None:
            return ()
        return self._finder.relays

    async def refresh_relays(self) -> tuple[Relay, ...]:
        """Reload the relay universe from the data source."""
        finder = await self._load_relays()
        return finder.relays

    async def _load_relays(self) -> RelayPathFinder:
        relays = await self._source.fetch_relays()
        finder = self._finder
        if finder is None:
            finder = RelayPathFinder(relays)
            self._finder = finder
        else:
            finder.invalidate(relays)
        logger.debug("relays_refreshed", count=len(relays))
        return finder

    async def _path_finder(self) -> RelayPathFinder:
        if self._finder is None:
            return await self._load_relays()
        return self._finder

    async def hydrate_relay(self, relay: Relay) -> HydratedRelay:
        """Fetch balances for one relay and attach them."""
        if relay.is_multi_contract:
            balances = await self._source.fetch_multi_relay_reserves(
                relay.contract, relay.smart_token.symbol.code
            )
        else:
            balances = await self._source.fetch_single_relay_reserves(relay.contract)

        hydrated = hydrate_relay(balances, relay)
        logger.debug(
            "relay_hydrated",
            contract=relay.contract,
            multi_contract=relay.is_multi_contract,
            reserves=[str(reserve.amount) for reserve in hydrated.reserves],
        )
        return hydrated

    async def hydrate_relays(self, relays: Sequence[Relay]) -> list[HydratedRelay]:
        """Hydrate relays one at a time, in path order."""
        hydrated: list[HydratedRelay] = []
        for relay in relays:
            hydrated.append(await self.hydrate_relay(relay))
        return hydrated

    async def estimate_return(self, amount: Amount, to: Symbol) -> ConversionResult:
        """Estimate what ``amount`` converts to in the ``to`` symbol.

        Raises:
            PathNotFound: If no route exists through relay reserves
            ReserveMismatch: If fetched balances do not match the relays
            ReserveExhausted: If a hop would drain a reserve
        """
        finder = await self._path_finder()
        path = finder.find_path(amount.symbol, to)
        _require_reserve_route(amount.symbol, to, path)
        hydrated = await self.hydrate_relays(path)

        current = amount
        worst_slippage = 0.0
        for relay in hydrated:
            from_reserve, to_reserve = _split_reserves(relay, current.symbol)
            result = calculate_return(
                from_reserve.amount, to_reserve.amount, current, config=self._config
            )
            current = result.amount
            if relay.fee:
                current = charge_fee(current, relay.fee, config=self._config)
            worst_slippage = max(worst_slippage, result.slippage)

        logger.debug(
            "estimate_return_complete",
            amount=str(amount),
            reward=str(current),
            hops=len(hydrated),
            slippage=worst_slippage,
        )
        return ConversionResult(amount=current, slippage=worst_slippage)

    async def estimate_cost(self, amount_desired: Amount, from_: Symbol) -> ConversionResult:
        """Estimate how much of ``from_`` buys ``amount_desired``.

        The path is resolved from the desired symbol back to ``from_`` and
        walked in that order, each hop pricing what the next one needs.

        Raises:
            PathNotFound: If no route exists through relay reserves
            ReserveMismatch: If fetched balances do not match the relays
            ReserveExhausted: If a hop would drain a reserve
        """
        finder = await self._path_finder()
        reverse_path = finder.find_path(amount_desired.symbol, from_)
        _require_reserve_route(amount_desired.symbol, from_, reverse_path)
        hydrated = await self.hydrate_relays(reverse_path)

        current = amount_desired
        worst_slippage = 0.0
        for relay in hydrated:
            if relay.fee:
                current = reverse_fee(current, relay.fee, config=self._config)
            bought_reserve, paid_reserve = _split_reserves(relay, current.symbol)
            result = calculate_cost(
                paid_reserve.amount, bought_reserve.amount, current, config=self._config
            )
            current = result.amount
            worst_slippage = max(worst_slippage, result.slippage)

        logger.debug(
            "estimate_cost_complete",
            desired=str(amount_desired),
            cost=str(current),
            hops=len(hydrated),
            slippage=worst_slippage,
        )
        return ConversionResult(amount=current, slippage=worst_slippage)

    def _relay_for_smart_token(self, symbol: Symbol) -> Relay:
        for relay in self.relays:
            if relay.smart_token.symbol == symbol:
                return relay
        raise PathNotFound(f"No relay issues smart token {symbol}")

    async def _hydrate_with_supply(self, smart_tokens: Amount) -> tuple[HydratedRelay, Amount]:
        await self._path_finder()
        relay = self._relay_for_smart_token(smart_tokens.symbol)
        hydrated = await self.hydrate_relay(relay)
        supply = await self._source.fetch_smart_token_supply(
            relay.smart_token.contract, relay.smart_token.symbol.code
        )
        return hydrated, supply

    async def estimate_liquidate(self, smart_tokens: Amount) -> list[Amount]:
        """Reserve tokens returned for burning ``smart_tokens``, per reserve.

        Raises:
            PathNotFound: If no relay issues the smart token
            ReserveExhausted: If burning more than the supply
        """
        relay, supply = await self._hydrate_with_supply(smart_tokens)
        return [
            liquidate(smart_tokens, reserve.amount, supply, config=self._config)
            for reserve in relay.reserves
        ]

    async def estimate_fund_cost(self, smart_tokens: Amount) -> list[Amount]:
        """Reserve deposits needed to mint ``smart_tokens``, per reserve.

        Raises:
            PathNotFound: If no relay issues the smart token
        """
        relay, supply = await self._hydrate_with_supply(smart_tokens)
        return [
            fund(smart_tokens, reserve.amount, supply, config=self._config)
            for reserve in relay.reserves
        ]


__all__ = ["BancorCalculator", "hydrate_relay"]
