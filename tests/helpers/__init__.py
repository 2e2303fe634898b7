"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Symbols, token contracts and converter accounts
- factories: Relay and amount factory functions
- fakes: In-memory relay data source
"""

from tests.helpers.constants import (
    BNT,
    BNTCUSD,
    BNTEDT,
    BNTEOS,
    BTC,
    BTCDOG,
    CUSD,
    DOG,
    EDTBTC,
    EOS,
    EOSDT,
)
from tests.helpers.factories import amount, make_relay, make_token
from tests.helpers.fakes import FakeRelayDataSource

__all__ = [
    # Constants
    "EOS",
    "BNT",
    "EOSDT",
    "BTC",
    "DOG",
    "CUSD",
    "BNTEOS",
    "BNTEDT",
    "EDTBTC",
    "BTCDOG",
    "BNTCUSD",
    # Factories
    "amount",
    "make_relay",
    "make_token",
    # Fakes
    "FakeRelayDataSource",
]
