"""Conversion memo composition."""

from __future__ import annotations

from collections.abc import Sequence

from bancorx.models.relay import Converter


def format_converter(converter: Converter) -> str:
    """Render one hop as ``"<account> <SYM>"``.

    Multi-contract hops render as ``"<account>:<SMART> <SYM>"``.
    """
    account = converter.account
    if converter.multi_contract_symbol:
        account = f"{account}:{converter.multi_contract_symbol}"
    return f"{account} {converter.symbol}"


def compose_memo(
    converters: Sequence[Converter],
    min_return: str,
    dest_account: str,
    version: int = 1,
) -> str:
    """Compose the memo carried by a conversion transfer.

    Examples:
        # Single converter (BNT => CUSD)
        compose_memo([Converter("bancorc11144", "CUSD")], "3.17", "<account>")
        # => "1,bancorc11144 CUSD,3.17,<account>"

        # Multi converter (EOS => BNT => CUSD)
        # => "1,bnt2eoscnvrt BNT bancorc11144 CUSD,3.17,<account>"

    Args:
        converters: Hops in conversion order
        min_return: Minimum acceptable return, already formatted
        dest_account: Account receiving the converted tokens
        version: Memo protocol version

    Returns:
        Memo string
    """
    hops = " ".join(format_converter(converter) for converter in converters)
    return f"{version},{hops},{min_return},{dest_account}"


__all__ = ["compose_memo", "format_converter"]
