"""Tests for relay pathfinding."""

import pytest

from bancorx.errors import PathNotFound
from bancorx.models import ChoppedRelay, Symbol
from bancorx.routing import (
    RelayPathFinder,
    chop_relay,
    chop_relays,
    create_path,
    find_path,
    unchop_relays,
)
from bancorx.routing import pathfinding
from tests.helpers import (
    BNT,
    BNTCUSD,
    BNTEDT,
    BNTEOS,
    BTC,
    BTCDOG,
    CUSD,
    DOG,
    EOS,
    EOSDT,
    make_relay,
    make_token,
)

EDTEOS = Symbol("EDTEOS", 4)
EOSBNT = Symbol("EOSBNT", 4)


@pytest.fixture
def eos_bnt_cusd_relays():
    """EOS-BNT and BNT-CUSD relays."""
    return [
        make_relay(EOS, BNT, BNTEOS, contract="bnt2eoscnvrt"),
        make_relay(BNT, CUSD, BNTCUSD, contract="bancorc11144"),
    ]


class TestChop:
    def test_chop_relay(self, eos_bnt_relay):
        first, second = chop_relay(eos_bnt_relay)
        assert first.contract == second.contract == "bnt2eoscnvrt"
        assert first.symbols == (EOS, BNTEOS)
        assert second.symbols == (BNT, BNTEOS)

    def test_chop_relays_keeps_order(self, chain_relays):
        edges = chop_relays(chain_relays)
        assert len(edges) == 2 * len(chain_relays)
        assert [edge.contract for edge in edges[::2]] == [r.contract for r in chain_relays]


class TestFindPath:
    def test_same_symbol_is_empty(self, chain_relays):
        assert find_path(EOS, EOS, chop_relays(chain_relays)) == []

    def test_same_symbol_with_no_relays(self):
        assert create_path(EOS, EOS, []) == []

    def test_empty_universe(self):
        with pytest.raises(PathNotFound):
            find_path(EOS, BNT, [])

    def test_unknown_symbol(self, chain_relays):
        with pytest.raises(PathNotFound):
            create_path(EOS, CUSD, chain_relays)

    def test_edges_connect(self, chain_relays):
        path = find_path(EOS, DOG, chop_relays(chain_relays))
        assert path[0].contains(EOS)
        assert path[-1].contains(DOG)
        for previous, edge in zip(path, path[1:]):
            assert set(previous.symbols) & set(edge.symbols)

    def test_smart_token_destination(self, chain_relays):
        """Converting into a relay's own smart token takes one edge."""
        path = find_path(EOS, BNTEOS, chop_relays(chain_relays))
        assert [edge.symbols for edge in path] == [(EOS, BNTEOS)]


class TestCreatePath:
    def test_single_relay(self, eos_bnt_relay):
        assert create_path(EOS, BNT, [eos_bnt_relay]) == [eos_bnt_relay]

    def test_direction_reversed(self, eos_bnt_relay):
        assert create_path(BNT, EOS, [eos_bnt_relay]) == [eos_bnt_relay]

    def test_two_hops(self, eos_bnt_cusd_relays):
        assert create_path(EOS, CUSD, eos_bnt_cusd_relays) == eos_bnt_cusd_relays

    def test_full_chain(self, chain_relays):
        assert create_path(EOS, DOG, chain_relays) == chain_relays

    def test_full_chain_reversed(self, chain_relays):
        assert create_path(DOG, EOS, chain_relays) == chain_relays[::-1]

    def test_from_fixture(self, fixture_relays):
        path = create_path(BNT, BTC, fixture_relays)
        assert [relay.contract for relay in path] == ["bancorc11222", "bancorc11213"]

    def test_dead_end_restarts(self):
        """A walk into a dead end is retried without the edges it consumed."""
        dead_end = make_relay(EOS, DOG, BTCDOG, contract="deadendcnvrt")
        eos_bnt = make_relay(EOS, BNT, BNTEOS, contract="bnt2eoscnvrt")
        bnt_cusd = make_relay(BNT, CUSD, BNTCUSD, contract="bancorc11144")

        assert create_path(EOS, CUSD, [dead_end, eos_bnt, bnt_cusd]) == [eos_bnt, bnt_cusd]

    def test_dead_end_after_shared_prefix(self):
        """Edges before the dead end stay usable on the next walk."""
        eos_bnt = make_relay(EOS, BNT, BNTEOS, contract="bnt2eoscnvrt")
        dead_end = make_relay(BNT, DOG, BTCDOG, contract="deadendcnvrt")
        bnt_cusd = make_relay(BNT, CUSD, BNTCUSD, contract="bancorc11144")

        assert create_path(EOS, CUSD, [eos_bnt, dead_end, bnt_cusd]) == [eos_bnt, bnt_cusd]

    def test_dead_end_after_shared_prefix_edges(self):
        eos_bnt = make_relay(EOS, BNT, BNTEOS, contract="bnt2eoscnvrt")
        dead_end = make_relay(BNT, DOG, BTCDOG, contract="deadendcnvrt")
        bnt_cusd = make_relay(BNT, CUSD, BNTCUSD, contract="bancorc11144")

        path = find_path(EOS, CUSD, chop_relays([eos_bnt, dead_end, bnt_cusd]))

        assert [edge.symbols for edge in path] == [
            (EOS, BNTEOS),
            (BNT, BNTEOS),
            (BNT, BNTCUSD),
            (CUSD, BNTCUSD),
        ]

    def test_tie_break_by_relay_order(self):
        first = make_relay(EOS, BNT, BNTEOS, contract="bnt2eoscnvrt")
        second = make_relay(EOS, BNT, EOSBNT, contract="eosbntcnvrt")

        assert create_path(EOS, BNT, [first, second]) == [first]
        assert create_path(EOS, BNT, [second, first]) == [second]

    def test_cycle_without_route_terminates(self):
        relays = [
            make_relay(EOS, BNT, BNTEOS, contract="bnt2eoscnvrt"),
            make_relay(BNT, EOSDT, BNTEDT, contract="bancorc11222"),
            make_relay(EOSDT, EOS, EDTEOS, contract="bancorc11333"),
            make_relay(BTC, DOG, BTCDOG, contract="thisisbancor"),
        ]
        with pytest.raises(PathNotFound):
            create_path(EOS, DOG, relays)

    def test_relays_not_mutated(self, chain_relays):
        snapshot = list(chain_relays)
        create_path(EOS, DOG, chain_relays)
        assert chain_relays == snapshot


class TestUnchop:
    def test_relay_reached_twice_appears_once(self, eos_bnt_relay):
        edges = list(chop_relay(eos_bnt_relay))
        assert unchop_relays(edges, [eos_bnt_relay]) == [eos_bnt_relay]

    def test_matches_by_contract_and_symbols(self):
        """Relays sharing a multi-contract converter are told apart by symbols."""
        btc_dog = make_relay(BTC, DOG, BTCDOG, contract="thisisbancor", is_multi_contract=True)
        bnt_cusd = make_relay(BNT, CUSD, BNTCUSD, contract="thisisbancor", is_multi_contract=True)
        edge = ChoppedRelay(contract="thisisbancor", reserves=(make_token(CUSD), make_token(BNTCUSD)))

        assert unchop_relays([edge], [btc_dog, bnt_cusd]) == [bnt_cusd]

    def test_unknown_edge(self, eos_bnt_relay):
        edge = ChoppedRelay(contract="bancorc11144", reserves=(make_token(CUSD), make_token(BNTCUSD)))
        with pytest.raises(ValueError):
            unchop_relays([edge], [eos_bnt_relay])


class TestRelayPathFinder:
    @pytest.fixture
    def search_calls(self, monkeypatch):
        """Count calls into the module-level edge search."""
        calls = []
        original = pathfinding.find_path

        def counting(*args, **kwargs):
            calls.append(args[:2])
            return original(*args, **kwargs)

        monkeypatch.setattr(pathfinding, "find_path", counting)
        return calls

    def test_find_path(self, chain_relays):
        finder = RelayPathFinder(chain_relays)
        assert finder.find_path(EOS, DOG) == chain_relays
        assert finder.relays == tuple(chain_relays)
        assert len(finder.edges) == 8

    def test_caches_paths(self, chain_relays, search_calls):
        finder = RelayPathFinder(chain_relays)
        first = finder.find_path(EOS, DOG)
        second = finder.find_path(EOS, DOG)

        assert first == second
        assert search_calls == [(EOS, DOG)]

    def test_returns_copies(self, chain_relays):
        finder = RelayPathFinder(chain_relays)
        finder.find_path(EOS, DOG).clear()
        assert finder.find_path(EOS, DOG) == chain_relays

    def test_failures_not_cached(self, chain_relays, search_calls):
        finder = RelayPathFinder(chain_relays)
        for _ in range(2):
            with pytest.raises(PathNotFound):
                finder.find_path(EOS, CUSD)
        assert len(search_calls) == 2

    def test_invalidate_replaces_relays(self, chain_relays, eos_bnt_cusd_relays):
        finder = RelayPathFinder(chain_relays)
        with pytest.raises(PathNotFound):
            finder.find_path(EOS, CUSD)

        finder.invalidate(eos_bnt_cusd_relays)

        assert finder.find_path(EOS, CUSD) == eos_bnt_cusd_relays
        with pytest.raises(PathNotFound):
            finder.find_path(EOS, DOG)

    def test_invalidate_clears_cache(self, chain_relays, search_calls):
        finder = RelayPathFinder(chain_relays)
        finder.find_path(EOS, BNT)
        finder.invalidate()
        finder.find_path(EOS, BNT)
        assert len(search_calls) == 2
