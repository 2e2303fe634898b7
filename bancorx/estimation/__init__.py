"""Conversion estimation against live relay balances.

Usage:
    from bancorx.estimation import BancorCalculator, RelayDataSource

    calculator = BancorCalculator(source=my_source)
    reward, slippage = await calculator.estimate_return(amount, to_symbol)
"""

from bancorx.estimation.calculator import BancorCalculator, hydrate_relay
from bancorx.estimation.source import RelayDataSource

__all__ = ["BancorCalculator", "RelayDataSource", "hydrate_relay"]
