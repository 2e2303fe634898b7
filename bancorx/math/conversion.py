"""Fixed-point relay conversion math.

Relays price conversions with the constant-weight bonding curve. With equal
reserve weights a conversion between the two reserves reduces to:

    reward = amount / (balance_from + amount) * balance_to
    cost   = balance_from / (1 - desired / balance_to) - balance_from

All inputs are Amounts (integer mantissa + symbol). Math runs in Decimal
under a local context from MathConfig and each result is quantized once, at
the boundary, to the output symbol's precision. Forward results round down;
costs round up so the caller never under-pays.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_CEILING, ROUND_DOWN, Decimal
from typing import NamedTuple

from bancorx.errors import ReserveExhausted, SymbolMismatch
from bancorx.math.config import DEFAULT_MATH_CONFIG, MathConfig
from bancorx.models.types import Amount

DecimalLike = Decimal | float | int | str


class ConversionResult(NamedTuple):
    """Converted amount plus the price impact of the trade."""

    amount: Amount
    slippage: float


def _as_decimal(value: DecimalLike) -> Decimal:
    # str() keeps 0.02 as 0.02 instead of its binary expansion
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _require_same_symbol(amount: Amount, reference: Amount, name: str) -> None:
    if amount.symbol != reference.symbol:
        raise SymbolMismatch(f"{name} is {amount.symbol}, expected {reference.symbol}")


def _require_non_negative(*amounts: Amount) -> None:
    for amount in amounts:
        if amount.mantissa < 0:
            raise ValueError(f"Amount cannot be negative: {amount}")


def _require_fee(decimal_fee: Decimal, magnitude: int) -> None:
    if not Decimal(0) <= decimal_fee < Decimal(1):
        raise ValueError(f"Fee must be in [0, 1), got {decimal_fee}")
    if magnitude < 0:
        raise ValueError(f"Fee magnitude cannot be negative: {magnitude}")


def _require_ratio(ratio: Decimal) -> None:
    if not Decimal(0) < ratio <= Decimal(1):
        raise ValueError(f"Reserve ratio must be in (0, 1], got {ratio}")


# =============================================================================
# Reserve to reserve conversion
# =============================================================================


def calculate_return(
    balance_from: Amount,
    balance_to: Amount,
    amount: Amount,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> ConversionResult:
    """Calculate the reward for converting ``amount`` through a relay.

    Example (EOS/BNT relay):
        balance_from = 77814.0638 EOS, balance_to = 429519.5539120331 BNT
        1.0000 EOS -> 5.5197481430 BNT

    Args:
        balance_from: Relay reserve of the token being sold
        balance_to: Relay reserve of the token being bought
        amount: Amount sold, in balance_from's symbol

    Returns:
        ConversionResult with the reward (truncated to balance_to precision)
        and slippage = amount / balance_from

    Raises:
        SymbolMismatch: If amount is not in balance_from's symbol
        ReserveExhausted: If amount is not smaller than balance_from
    """
    _require_same_symbol(amount, balance_from, "amount")
    _require_non_negative(balance_from, balance_to, amount)
    if amount.mantissa >= balance_from.mantissa:
        raise ReserveExhausted(f"Cannot convert {amount} against a reserve of {balance_from}")

    with decimal.localcontext(config.context(ROUND_DOWN)):
        sold = amount.to_decimal()
        reserve_in = balance_from.to_decimal()
        # Multiply first so the division is the only inexact step
        reward = sold * balance_to.to_decimal() / (reserve_in + sold)
        slippage = sold / reserve_in

    return ConversionResult(
        amount=Amount.from_decimal(reward, balance_to.symbol, ROUND_DOWN),
        slippage=float(slippage),
    )


def calculate_cost(
    balance_from: Amount,
    balance_to: Amount,
    amount_desired: Amount,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> ConversionResult:
    """Calculate how much of balance_from's token buys ``amount_desired``.

    Example (EOS/BNT relay):
        balance_from = 77814.0638 EOS, balance_to = 429519.5539120331 BNT
        1.0000000000 BNT costs 0.18116577989... EOS, charged as 0.1812 EOS

    Args:
        balance_from: Relay reserve of the token being paid
        balance_to: Relay reserve of the token being bought
        amount_desired: Amount to receive, in balance_to's symbol

    Returns:
        ConversionResult with the cost (rounded up to balance_from precision)
        and slippage = amount_desired / balance_to

    Raises:
        SymbolMismatch: If amount_desired is not in balance_to's symbol
        ReserveExhausted: If amount_desired is not smaller than balance_to
    """
    _require_same_symbol(amount_desired, balance_to, "amount_desired")
    _require_non_negative(balance_from, balance_to, amount_desired)
    if amount_desired.mantissa >= balance_to.mantissa:
        raise ReserveExhausted(
            f"Cannot buy {amount_desired} from a reserve of {balance_to}"
        )

    with decimal.localcontext(config.context(ROUND_CEILING)):
        desired = amount_desired.to_decimal()
        reserve_in = balance_from.to_decimal()
        reserve_out = balance_to.to_decimal()
        # b / (1 - d / t) - b == b * d / (t - d)
        cost = reserve_in * desired / (reserve_out - desired)
        slippage = desired / reserve_out

    return ConversionResult(
        amount=Amount.from_decimal(cost, balance_from.symbol, ROUND_CEILING),
        slippage=float(slippage),
    )


# =============================================================================
# Fees
# =============================================================================


def charge_fee(
    amount: Amount,
    decimal_fee: DecimalLike,
    magnitude: int = 1,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Deduct a proportional fee compounded over ``magnitude`` hops.

    ``amount - amount * (1 - (1 - fee) ** magnitude)``, floored.

    Example:
        charge_fee(1.0000 EOS, 0.02, 2) -> 0.9604 EOS
    """
    fee = _as_decimal(decimal_fee)
    _require_fee(fee, magnitude)
    _require_non_negative(amount)

    with decimal.localcontext(config.context(ROUND_DOWN)):
        net = amount.to_decimal() * (1 - fee) ** magnitude

    return Amount.from_decimal(net, amount.symbol, ROUND_DOWN)


def reverse_fee(
    amount: Amount,
    decimal_fee: DecimalLike,
    magnitude: int = 1,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Gross amount that still yields ``amount`` after charge_fee.

    ``amount / (1 - fee) ** magnitude``, rounded up.
    """
    fee = _as_decimal(decimal_fee)
    _require_fee(fee, magnitude)
    _require_non_negative(amount)

    with decimal.localcontext(config.context(ROUND_CEILING)):
        gross = amount.to_decimal() / (1 - fee) ** magnitude

    return Amount.from_decimal(gross, amount.symbol, ROUND_CEILING)


# =============================================================================
# Bonding curve (reserve <-> smart token)
# =============================================================================


def calculate_reserve_to_smart(
    reserve_amount: Amount,
    reserve_balance: Amount,
    smart_supply: Amount,
    ratio: DecimalLike = Decimal("0.5"),
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Smart tokens minted for depositing ``reserve_amount`` into one reserve.

    ``supply * ((1 + deposit / balance) ** ratio - 1)``, floored to the
    supply precision.

    Raises:
        SymbolMismatch: If reserve_amount is not in reserve_balance's symbol
        ReserveExhausted: If the reserve is empty
    """
    weight = _as_decimal(ratio)
    _require_ratio(weight)
    _require_same_symbol(reserve_amount, reserve_balance, "reserve_amount")
    _require_non_negative(reserve_amount, reserve_balance, smart_supply)
    if reserve_balance.mantissa == 0:
        raise ReserveExhausted(f"Reserve {reserve_balance.symbol} is empty")

    with decimal.localcontext(config.context(ROUND_DOWN)):
        growth = 1 + reserve_amount.to_decimal() / reserve_balance.to_decimal()
        minted = smart_supply.to_decimal() * (growth**weight - 1)

    return Amount.from_decimal(minted, smart_supply.symbol, ROUND_DOWN)


def calculate_smart_to_reserve(
    smart_tokens: Amount,
    reserve_balance: Amount,
    smart_supply: Amount,
    ratio: DecimalLike = Decimal("0.5"),
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Reserve tokens returned for redeeming ``smart_tokens``.

    ``balance * (1 - (1 - smart / supply) ** (1 / ratio))``, floored to the
    reserve precision.

    Raises:
        SymbolMismatch: If smart_tokens is not in smart_supply's symbol
        ReserveExhausted: If redeeming more than the supply
    """
    weight = _as_decimal(ratio)
    _require_ratio(weight)
    _require_same_symbol(smart_tokens, smart_supply, "smart_tokens")
    _require_non_negative(smart_tokens, reserve_balance, smart_supply)
    if smart_supply.mantissa == 0 or smart_tokens.mantissa > smart_supply.mantissa:
        raise ReserveExhausted(f"Cannot redeem {smart_tokens} from a supply of {smart_supply}")

    with decimal.localcontext(config.context(ROUND_DOWN)):
        remaining = 1 - smart_tokens.to_decimal() / smart_supply.to_decimal()
        returned = reserve_balance.to_decimal() * (1 - remaining ** (1 / weight))

    return Amount.from_decimal(returned, reserve_balance.symbol, ROUND_DOWN)


# =============================================================================
# Proportional liquidity (fund / liquidate)
# =============================================================================


def _proportion(
    numerator: Amount,
    scale: Amount,
    denominator: Amount,
    config: MathConfig,
) -> Amount:
    """``numerator * scale / denominator`` floored to scale's precision."""
    with decimal.localcontext(config.context(ROUND_DOWN)):
        value = numerator.to_decimal() * scale.to_decimal() / denominator.to_decimal()
    return Amount.from_decimal(value, scale.symbol, ROUND_DOWN)


def liquidate(
    smart_tokens: Amount,
    reserve_balance: Amount,
    smart_supply: Amount,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Reserve tokens returned for burning ``smart_tokens`` proportionally.

    Example:
        liquidate(100.0000 BNTEOS, 2.0000 EOS, 200.0000 BNTEOS) -> 1.0000 EOS
    """
    _require_same_symbol(smart_tokens, smart_supply, "smart_tokens")
    _require_non_negative(smart_tokens, reserve_balance, smart_supply)
    if smart_supply.mantissa == 0 or smart_tokens.mantissa > smart_supply.mantissa:
        raise ReserveExhausted(f"Cannot liquidate {smart_tokens} from a supply of {smart_supply}")
    return _proportion(smart_tokens, reserve_balance, smart_supply, config)


def calculate_liquidate_cost(
    reserve_tokens: Amount,
    reserve_balance: Amount,
    smart_supply: Amount,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Smart tokens to burn for receiving ``reserve_tokens`` (inverse of liquidate)."""
    _require_same_symbol(reserve_tokens, reserve_balance, "reserve_tokens")
    _require_non_negative(reserve_tokens, reserve_balance, smart_supply)
    if reserve_balance.mantissa == 0 or reserve_tokens.mantissa > reserve_balance.mantissa:
        raise ReserveExhausted(
            f"Cannot withdraw {reserve_tokens} from a reserve of {reserve_balance}"
        )
    return _proportion(reserve_tokens, smart_supply, reserve_balance, config)


def fund(
    smart_tokens: Amount,
    reserve_balance: Amount,
    smart_supply: Amount,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Reserve deposit required to mint exactly ``smart_tokens``."""
    _require_same_symbol(smart_tokens, smart_supply, "smart_tokens")
    _require_non_negative(smart_tokens, reserve_balance, smart_supply)
    if smart_supply.mantissa == 0:
        raise ReserveExhausted(f"Smart token {smart_supply.symbol} has no supply")
    return _proportion(smart_tokens, reserve_balance, smart_supply, config)


def calculate_fund_return(
    reserve_tokens: Amount,
    reserve_balance: Amount,
    smart_supply: Amount,
    *,
    config: MathConfig = DEFAULT_MATH_CONFIG,
) -> Amount:
    """Smart tokens minted for depositing ``reserve_tokens`` proportionally."""
    _require_same_symbol(reserve_tokens, reserve_balance, "reserve_tokens")
    _require_non_negative(reserve_tokens, reserve_balance, smart_supply)
    if reserve_balance.mantissa == 0:
        raise ReserveExhausted(f"Reserve {reserve_balance.symbol} is empty")
    return _proportion(reserve_tokens, smart_supply, reserve_balance, config)


__all__ = [
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
