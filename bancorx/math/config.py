"""Decimal working-precision configuration for conversion math."""

import decimal
import os
from dataclasses import dataclass

# Lowest working precision that keeps multi-hop results stable
MIN_WORKING_PRECISION = 15

# Overridable once at import via the environment
DEFAULT_WORKING_PRECISION = int(os.environ.get("BANCORX_DECIMAL_PRECISION", "40"))


@dataclass(frozen=True)
class MathConfig:
    """Configuration for the conversion math.

    Each operation builds its own ``decimal.Context`` from this config and
    runs inside ``decimal.localcontext``, so concurrent calls never share
    rounding state.

    Attributes:
        working_precision: Significant digits for intermediate results
            (default: 40, minimum 15)
    """

    working_precision: int = DEFAULT_WORKING_PRECISION

    def __post_init__(self) -> None:
        if self.working_precision < MIN_WORKING_PRECISION:
            raise ValueError(
                f"working_precision must be >= {MIN_WORKING_PRECISION}, "
                f"got {self.working_precision}"
            )

    def context(self, rounding: str) -> decimal.Context:
        """Build a trapping decimal context with the given rounding mode."""
        return decimal.Context(
            prec=self.working_precision,
            rounding=rounding,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )


# Default configuration instance
DEFAULT_MATH_CONFIG = MathConfig()
