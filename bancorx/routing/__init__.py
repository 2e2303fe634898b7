"""Routing through relays: pathfinding, converter projection, memos."""

from bancorx.routing.converters import relays_to_converters
from bancorx.routing.memo import compose_memo, format_converter
from bancorx.routing.pathfinding import (
    RelayPathFinder,
    chop_relay,
    chop_relays,
    create_path,
    find_path,
    unchop_relays,
)

__all__ = [
    # Pathfinding
    "RelayPathFinder",
    "chop_relay",
    "chop_relays",
    "create_path",
    "find_path",
    "unchop_relays",
    # Converters and memos
    "relays_to_converters",
    "compose_memo",
    "format_converter",
]
