"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from bancorx.models import Relay, RelaySetModel
from tests.helpers import (
    BNT,
    BNTEDT,
    BNTEOS,
    BTC,
    BTCDOG,
    DOG,
    EDTBTC,
    EOS,
    EOSDT,
    FakeRelayDataSource,
    amount,
    make_relay,
)
from tests.helpers.constants import (
    BNT_BALANCE,
    BNT_EOSDT_CONVERTER,
    EOS_BALANCE,
    EOS_BNT_CONVERTER,
    EOSDT_BTC_CONVERTER,
    MULTI_CONVERTER,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


def load_relay_fixture(name: str) -> list[Relay]:
    """Load a relay set fixture by name.

    Args:
        name: Fixture name without extension (e.g., "relays")

    Returns:
        Relays in file order
    """
    path = FIXTURES_DIR / f"{name}.json"
    with open(path) as f:
        data = json.load(f)
    return RelaySetModel.model_validate(data).to_relays()


# =============================================================================
# Relay fixtures
# =============================================================================


@pytest.fixture
def eos_bnt_relay() -> Relay:
    """The EOS/BNT relay."""
    return make_relay(EOS, BNT, BNTEOS, contract=EOS_BNT_CONVERTER)


@pytest.fixture
def chain_relays(eos_bnt_relay: Relay) -> list[Relay]:
    """EOS-BNT, BNT-EOSDT, EOSDT-BTC, BTC-DOG (last one multi-contract)."""
    return [
        eos_bnt_relay,
        make_relay(BNT, EOSDT, BNTEDT, contract=BNT_EOSDT_CONVERTER),
        make_relay(EOSDT, BTC, EDTBTC, contract=EOSDT_BTC_CONVERTER),
        make_relay(BTC, DOG, BTCDOG, contract=MULTI_CONVERTER, is_multi_contract=True),
    ]


@pytest.fixture
def fixture_relays() -> list[Relay]:
    """Relays loaded from tests/fixtures/relays.json."""
    return load_relay_fixture("relays")


# =============================================================================
# Data source fixtures
# =============================================================================


@pytest.fixture
def chain_balances() -> dict[str, list]:
    """Reserve balances for the single-contract relays of chain_relays."""
    return {
        EOS_BNT_CONVERTER: [amount(EOS_BALANCE), amount(BNT_BALANCE)],
        BNT_EOSDT_CONVERTER: [amount("250000.0000000000 BNT"), amount("50000.000000000 EOSDT")],
        EOSDT_BTC_CONVERTER: [amount("40000.000000000 EOSDT"), amount("4.00000000 BTC")],
    }


@pytest.fixture
def fake_source(chain_balances: dict[str, list], chain_relays: list[Relay]) -> FakeRelayDataSource:
    """A data source serving balances and supplies for chain_relays."""
    return FakeRelayDataSource(
        single=chain_balances,
        multi={(MULTI_CONVERTER, "BTCDOG"): [amount("900000.0000 DOG"), amount("3.00000000 BTC")]},
        supplies={"BNTEOS": amount("200000.0000 BNTEOS")},
        relays=chain_relays,
    )
