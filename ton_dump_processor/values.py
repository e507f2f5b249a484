"""Signed token amount extraction and per-transaction netting."""

import re
from collections.abc import Iterable
from decimal import Decimal

from ton_dump_processor.config import TokenValue

MINUS_SIGNS = {"-", "−"}
THOUSANDS_SEPARATORS = " ,\u00a0\u202f\u2009"

VALUE_PATTERN = re.compile(
    r"(?<!\S)(?P<sign>[+\-−])\s*"
    rf"(?P<amount>(?:\d{{1,3}}(?:[{THOUSANDS_SEPARATORS}]\d{{3}})+|\d[\d,]*)(?:\.\d*)?)"
    r"\s+(?P<token>[A-Za-z0-9₮_\-]+)"
)


def extract_value(line: str) -> TokenValue | None:
    """Return the first signed `<sign> <amount> <token>` value found in line."""
    if (match := VALUE_PATTERN.search(line)) is None:
        return None
    digits = match["amount"].translate(str.maketrans("", "", THOUSANDS_SEPARATORS))
    amount = Decimal(digits)
    if match["sign"] in MINUS_SIGNS:
        amount = -amount
    return TokenValue(token=match["token"], amount=amount)


def calculate_net_values(values: Iterable[TokenValue]) -> list[TokenValue]:
    """Collapse repeated tokens into net amounts, keeping first-encounter order."""
    net: dict[str, Decimal] = {}
    for value in values:
        net[value.token] = net.get(value.token, Decimal(0)) + value.amount
    return [TokenValue(token=token, amount=amount) for token, amount in net.items()]


def render_values(values: Iterable[TokenValue]) -> str:
    """Render net values as `<amount> <token> | <amount> <token>`."""
    return " | ".join(
        f"{format(abs(value.amount), 'f')} {value.token}" for value in calculate_net_values(values)
    )
