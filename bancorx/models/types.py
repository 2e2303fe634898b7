"""Token symbol and amount value types.

Amounts are integer mantissas scaled by the symbol precision. They are never
held as floats; conversion to ``Decimal`` is exact.
"""

from __future__ import annotations

import decimal
import re
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal

from bancorx.errors import SymbolMismatch

# Account (contract) name on the chain, e.g. "bnt2eoscnvrt"
AccountId = str

MAX_PRECISION = 18

# Exact context for rescaling between mantissa and Decimal form.
# scaleb only moves the exponent, so the coefficient never needs rounding
# as long as it fits in prec digits.
_EXACT_CONTEXT = decimal.Context(
    prec=120,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

_SYMBOL_CODE_RE = re.compile(r"^[A-Z]{1,7}$")
_ACCOUNT_RE = re.compile(r"^[a-z1-5.]{1,12}$")
_AMOUNT_RE = re.compile(r"^(-?)(\d+)(?:\.(\d+))?\s+([A-Z]{1,7})$")


def is_valid_account(name: str) -> bool:
    """Check if a string is a valid account name.

    Args:
        name: String to validate

    Returns:
        True if the name uses only a-z, 1-5 and '.' and is 1-12 chars long
    """
    if not isinstance(name, str):
        return False
    return _ACCOUNT_RE.match(name) is not None


@dataclass(frozen=True)
class Symbol:
    """Token symbol: code plus fixed decimal precision.

    Two symbols are equal when both code and precision match.
    """

    code: str
    precision: int

    def __post_init__(self) -> None:
        if not _SYMBOL_CODE_RE.match(self.code):
            raise ValueError(f"Invalid symbol code: {self.code!r}")
        if not 0 <= self.precision <= MAX_PRECISION:
            raise ValueError(f"Symbol precision out of range: {self.precision}")

    @classmethod
    def parse(cls, text: str) -> Symbol:
        """Parse the ``"<precision>,<CODE>"`` form, e.g. ``"4,EOS"``.

        Raises:
            ValueError: If the text is not a valid symbol
        """
        precision, sep, code = text.strip().partition(",")
        if not sep or not precision.isdigit():
            raise ValueError(f"Symbol must look like '4,EOS': {text!r}")
        return cls(code=code.strip(), precision=int(precision))

    def __str__(self) -> str:
        return f"{self.precision},{self.code}"


@dataclass(frozen=True)
class Amount:
    """A token quantity: integer mantissa with the symbol's precision."""

    mantissa: int
    symbol: Symbol

    @classmethod
    def from_decimal(
        cls,
        value: Decimal,
        symbol: Symbol,
        rounding: str = ROUND_DOWN,
    ) -> Amount:
        """Quantize a Decimal to the symbol precision.

        Args:
            value: Decimal value in whole token units
            symbol: Target symbol
            rounding: decimal rounding mode applied when dropping digits

        Returns:
            Amount with the quantized mantissa
        """
        with decimal.localcontext(_EXACT_CONTEXT):
            mantissa = value.scaleb(symbol.precision).to_integral_value(rounding=rounding)
        return cls(mantissa=int(mantissa), symbol=symbol)

    @classmethod
    def parse(cls, text: str) -> Amount:
        """Parse a balance string such as ``"10.0000 EOS"``.

        The precision is the number of fractional digits written.

        Raises:
            ValueError: If the text is not a valid balance string
        """
        match = _AMOUNT_RE.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid balance string: {text!r}")
        sign, whole, fraction, code = match.groups()
        fraction = fraction or ""
        mantissa = int(whole + fraction)
        if sign:
            mantissa = -mantissa
        return cls(mantissa=mantissa, symbol=Symbol(code=code, precision=len(fraction)))

    def to_decimal(self) -> Decimal:
        """Exact Decimal value in whole token units."""
        with decimal.localcontext(_EXACT_CONTEXT):
            return Decimal(self.mantissa).scaleb(-self.symbol.precision)

    def __str__(self) -> str:
        precision = self.symbol.precision
        sign = "-" if self.mantissa < 0 else ""
        whole, fraction = divmod(abs(self.mantissa), 10**precision)
        if precision == 0:
            return f"{sign}{whole} {self.symbol.code}"
        return f"{sign}{whole}.{fraction:0{precision}d} {self.symbol.code}"

    def _check_symbol(self, other: Amount) -> None:
        if not isinstance(other, Amount):
            raise TypeError(f"Expected Amount, got {type(other).__name__}")
        if other.symbol != self.symbol:
            raise SymbolMismatch(f"{self.symbol} does not match {other.symbol}")

    def __add__(self, other: Amount) -> Amount:
        self._check_symbol(other)
        return Amount(self.mantissa + other.mantissa, self.symbol)

    def __sub__(self, other: Amount) -> Amount:
        self._check_symbol(other)
        return Amount(self.mantissa - other.mantissa, self.symbol)

    def __lt__(self, other: Amount) -> bool:
        self._check_symbol(other)
        return self.mantissa < other.mantissa

    def __le__(self, other: Amount) -> bool:
        self._check_symbol(other)
        return self.mantissa <= other.mantissa

    def __gt__(self, other: Amount) -> bool:
        self._check_symbol(other)
        return self.mantissa > other.mantissa

    def __ge__(self, other: Amount) -> bool:
        self._check_symbol(other)
        return self.mantissa >= other.mantissa


__all__ = ["AccountId", "Amount", "Symbol", "is_valid_account", "MAX_PRECISION"]
