"""Relay graph pathfinding.

Every relay is chopped into two uniform edges, each pairing one reserve with
the relay's smart token. The search then walks those edges from the origin
symbol, hopping through shared symbols, and the resulting edge path is
mapped back to the relays it came from.

The search returns *a* path, not the shortest or best-priced one. Ties are
broken by the order of the relay list the caller supplies.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from bancorx.errors import PathNotFound
from bancorx.models.relay import ChoppedRelay, Relay
from bancorx.models.types import Symbol

logger = structlog.get_logger()


def chop_relay(relay: Relay) -> tuple[ChoppedRelay, ChoppedRelay]:
    """Split a relay into one reserve/smart-token edge per reserve."""
    first, second = relay.reserves
    return (
        ChoppedRelay(contract=relay.contract, reserves=(first, relay.smart_token)),
        ChoppedRelay(contract=relay.contract, reserves=(second, relay.smart_token)),
    )


def chop_relays(relays: Sequence[Relay]) -> list[ChoppedRelay]:
    """Chop every relay, keeping the caller's order."""
    return [edge for relay in relays for edge in chop_relay(relay)]


def _same_pair(edge: ChoppedRelay, other: ChoppedRelay) -> bool:
    return set(edge.symbols) == set(other.symbols)


def find_path(
    origin: Symbol,
    destination: Symbol,
    edges: Sequence[ChoppedRelay],
) -> list[ChoppedRelay]:
    """Find a connected sequence of edges from origin to destination.

    Each walk starts at the origin with the current universe of edges:
    1. Any edge in scope holding both the current symbol and the destination
       ends the path.
    2. After the first hop, edges with the same symbol pair as the last
       consumed edge leave the scope for the rest of the walk.
    3. The first in-scope edge holding the current symbol extends the path.
       If there is none the walk is abandoned and the search restarts from
       the origin with the last consumed edge pair dropped from the
       universe. Edges consumed earlier in the walk stay available, so a
       route sharing a prefix with the dead end can still be found.

    The scope shrinks on every hop after the first and the universe loses at
    least one edge per restart, so each walk and the search as a whole
    terminate.

    Args:
        origin: Symbol to convert from
        destination: Symbol to convert to
        edges: Chopped relays, in tie-break order

    Returns:
        Edges in path order. Empty when origin equals destination.

    Raises:
        PathNotFound: If the edges do not connect origin and destination
    """
    if origin == destination:
        return []

    # Edges are referenced by index; scopes are ordered index lists
    universe = list(range(len(edges)))
    restarts = 0

    while True:
        attempt = origin
        path: list[int] = []
        scope = universe

        while True:
            hit = next(
                (i for i in scope if edges[i].contains(attempt) and edges[i].contains(destination)),
                None,
            )
            if hit is not None:
                path.append(hit)
                logger.debug(
                    "path_found",
                    origin=origin.code,
                    destination=destination.code,
                    edges=len(path),
                    restarts=restarts,
                )
                return [edges[i] for i in path]

            if path:
                last = edges[path[-1]]
                scope = [i for i in scope if not _same_pair(edges[i], last)]

            step = next((i for i in scope if edges[i].contains(attempt)), None)
            if step is None:
                break

            attempt = edges[step].opposite(attempt)
            path.append(step)

        if not path:
            logger.debug(
                "path_not_found",
                origin=origin.code,
                destination=destination.code,
                restarts=restarts,
            )
            raise PathNotFound(f"No path from {origin} to {destination}")

        # Dead end: retry from the origin without the last edge tried
        last = edges[path[-1]]
        universe = [i for i in universe if not _same_pair(edges[i], last)]
        restarts += 1


def unchop_relays(path: Sequence[ChoppedRelay], relays: Sequence[Relay]) -> list[Relay]:
    """Map chopped edges back to the relays they came from.

    Each edge belongs to the first relay with the same contract whose
    reserve and smart token symbols include both edge symbols. A relay
    reached through both of its edges appears once, at its first position.

    Raises:
        ValueError: If an edge matches no relay
    """
    resolved: list[Relay] = []
    seen: set[int] = set()

    for edge in path:
        wanted = set(edge.symbols)
        for index, relay in enumerate(relays):
            if relay.contract == edge.contract and wanted <= set(relay.symbols):
                break
        else:
            raise ValueError(f"Edge {edge.contract} {edge.symbols} matches no relay")

        if index not in seen:
            seen.add(index)
            resolved.append(relay)

    return resolved


def create_path(origin: Symbol, destination: Symbol, relays: Sequence[Relay]) -> list[Relay]:
    """Find the relays to convert through, in conversion order.

    Args:
        origin: Symbol to convert from
        destination: Symbol to convert to
        relays: Relay universe, in tie-break order

    Returns:
        Relays on the path, deduplicated. Empty when origin equals destination.

    Raises:
        PathNotFound: If no route exists
    """
    edges = chop_relays(relays)
    return unchop_relays(find_path(origin, destination, edges), relays)


class RelayPathFinder:
    """Facade for pathfinding over a fixed relay set with caching.

    Chops the relay set once and caches resolved relay paths per
    (origin, destination). Failed searches are not cached.

    Usage:
        finder = RelayPathFinder(relays)
        path = finder.find_path(EOS, BNT)
    """

    def __init__(self, relays: Sequence[Relay]) -> None:
        self._relays: tuple[Relay, ...] = tuple(relays)
        self._edges: list[ChoppedRelay] | None = None
        self._path_cache: dict[tuple[Symbol, Symbol], list[Relay]] = {}

    @property
    def relays(self) -> tuple[Relay, ...]:
        return self._relays

    @property
    def edges(self) -> list[ChoppedRelay]:
        """Chopped edges of the relay set (lazy)."""
        if self._edges is None:
            self._edges = chop_relays(self._relays)
        return self._edges

    def invalidate(self, relays: Sequence[Relay] | None = None) -> None:
        """Drop cached edges and paths, optionally replacing the relay set."""
        if relays is not None:
            self._relays = tuple(relays)
        self._edges = None
        self._path_cache.clear()

    def find_path(self, origin: Symbol, destination: Symbol) -> list[Relay]:
        """Relays from origin to destination (see create_path).

        Raises:
            PathNotFound: If no route exists
        """
        cache_key = (origin, destination)
        if cache_key not in self._path_cache:
            edge_path = find_path(origin, destination, self.edges)
            self._path_cache[cache_key] = unchop_relays(edge_path, self._relays)
        return list(self._path_cache[cache_key])


__all__ = [
    "RelayPathFinder",
    "chop_relay",
    "chop_relays",
    "create_path",
    "find_path",
    "unchop_relays",
]
