"""Relay pathfinding and fixed-point conversion pricing."""

from bancorx.errors import (
    BancorError,
    PathNotFound,
    ReserveExhausted,
    ReserveMismatch,
    SymbolMismatch,
)
from bancorx.estimation import BancorCalculator, RelayDataSource
from bancorx.math import (
    DEFAULT_MATH_CONFIG,
    ConversionResult,
    MathConfig,
    calculate_cost,
    calculate_fund_return,
    calculate_liquidate_cost,
    calculate_reserve_to_smart,
    calculate_return,
    calculate_smart_to_reserve,
    charge_fee,
    fund,
    liquidate,
    reverse_fee,
)
from bancorx.models import (
    Amount,
    ChoppedRelay,
    Converter,
    HydratedRelay,
    Relay,
    Symbol,
    TokenAmount,
    TokenSymbol,
)
from bancorx.routing import (
    RelayPathFinder,
    chop_relay,
    compose_memo,
    create_path,
    find_path,
    relays_to_converters,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "BancorError",
    "PathNotFound",
    "ReserveExhausted",
    "ReserveMismatch",
    "SymbolMismatch",
    # Models
    "Amount",
    "ChoppedRelay",
    "Converter",
    "HydratedRelay",
    "Relay",
    "Symbol",
    "TokenAmount",
    "TokenSymbol",
    # Math
    "ConversionResult",
    "DEFAULT_MATH_CONFIG",
    "MathConfig",
    "calculate_cost",
    "calculate_fund_return",
    "calculate_liquidate_cost",
    "calculate_reserve_to_smart",
    "calculate_return",
    "calculate_smart_to_reserve",
    "charge_fee",
    "fund",
    "liquidate",
    "reverse_fee",
    # Routing
    "RelayPathFinder",
    "chop_relay",
    "compose_memo",
    "create_path",
    "find_path",
    "relays_to_converters",
    # Estimation
    "BancorCalculator",
    "RelayDataSource",
]
