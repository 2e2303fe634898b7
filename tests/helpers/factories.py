"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_relay, amount

    relay = make_relay(EOS, BNT, BNTEOS, contract="bnt2eoscnvrt")
    balance = amount("1.0000 EOS")
"""

from decimal import Decimal

from bancorx.models import Amount, Relay, Symbol, TokenSymbol
from tests.helpers.constants import TOKEN_CONTRACTS


def amount(text: str) -> Amount:
    """Shorthand for Amount.parse."""
    return Amount.parse(text)


def make_token(symbol: Symbol, contract: str | None = None) -> TokenSymbol:
    """Create a token, defaulting the contract from TOKEN_CONTRACTS."""
    if contract is None:
        contract = TOKEN_CONTRACTS.get(symbol.code, "tokenissuer1")
    return TokenSymbol(contract=contract, symbol=symbol)


def make_relay(
    first: Symbol,
    second: Symbol,
    smart: Symbol,
    contract: str = "bancorc11111",
    is_multi_contract: bool = False,
    fee: Decimal | str = "0",
) -> Relay:
    """Create a relay between two reserves with the given smart token.

    Args:
        first: First reserve symbol
        second: Second reserve symbol
        smart: Smart token symbol
        contract: Converter account (default: bancorc11111)
        is_multi_contract: Whether the relay lives in a multi-relay converter
        fee: Proportional conversion fee (default: 0)

    Returns:
        Relay instance ready for testing
    """
    return Relay(
        contract=contract,
        reserves=(make_token(first), make_token(second)),
        smart_token=make_token(smart),
        is_multi_contract=is_multi_contract,
        fee=Decimal(fee),
    )
