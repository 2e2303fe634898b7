"""Fixed-point conversion math for relays.

This package provides:
- MathConfig: working precision for the decimal contexts
- Conversion functions: return/cost, fees, bonding curve, fund/liquidate
"""

from bancorx.math.config import DEFAULT_MATH_CONFIG, MathConfig
from bancorx.math.conversion import (
    ConversionResult,
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

__all__ = [
    # Config
    "MathConfig",
    "DEFAULT_MATH_CONFIG",
    # Conversion
    "ConversionResult",
    "calculate_return",
    "calculate_cost",
    "charge_fee",
    "reverse_fee",
    "calculate_reserve_to_smart",
    "calculate_smart_to_reserve",
    "liquidate",
    "calculate_liquidate_cost",
    "fund",
    "calculate_fund_return",
]
