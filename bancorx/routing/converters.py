"""Projection of a relay path into memo converters."""

from __future__ import annotations

from collections.abc import Sequence

from bancorx.models.relay import Converter, Relay
from bancorx.models.types import Symbol


def relays_to_converters(origin: Symbol, path: Sequence[Relay]) -> list[Converter]:
    """Describe each hop of a relay path as a converter.

    For every relay, each reserve whose symbol differs from the running
    symbol becomes a converter owned by the relay contract, and the running
    symbol moves on to it. Multi-contract relays tag their converters with
    the smart token code. Converters are deduplicated by symbol, keeping the
    first occurrence.

    Args:
        origin: Symbol the conversion starts from
        path: Relays in conversion order (as returned by create_path)

    Returns:
        Converters in hop order. Empty for an empty path.
    """
    converters: list[Converter] = []
    seen: set[str] = set()
    current = origin

    for relay in path:
        targets = [reserve for reserve in relay.reserves if reserve.symbol != current]
        multi_contract_symbol = relay.smart_token.symbol.code if relay.is_multi_contract else None
        for reserve in targets:
            code = reserve.symbol.code
            if code not in seen:
                seen.add(code)
                converters.append(
                    Converter(
                        account=relay.contract,
                        symbol=code,
                        multi_contract_symbol=multi_contract_symbol,
                    )
                )
        if targets:
            current = targets[-1].symbol

    return converters


__all__ = ["relays_to_converters"]
