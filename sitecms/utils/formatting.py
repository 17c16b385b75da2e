"""
Formatting helpers used by email templates.

Dates follow the French day-first layout and amounts are rendered in euros
with a decimal comma, e.g. ``1 234,50 €``.
"""
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sitecms.utils.datetime_utils import local


def format_currency(amount: float) -> str:
    cents = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    integer, _, decimals = f"{cents:.2f}".partition(".")
    sign = ""
    if integer.startswith("-"):
        sign, integer = "-", integer[1:]
    groups = []
    while len(integer) > 3:
        groups.insert(0, integer[-3:])
        integer = integer[:-3]
    groups.insert(0, integer)
    return f"{sign}{' '.join(groups)},{decimals} €"


def format_date(dt: datetime) -> str:
    return local(dt).strftime("%d/%m/%Y")


def format_datetime(dt: datetime) -> str:
    return local(dt).strftime("%d/%m/%Y %H:%M")


def format_time(dt: datetime) -> str:
    return local(dt).strftime("%H:%M")


def round_money(amount: float) -> float:
    """Round a money amount to cents, half up."""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
