# payoff/utils.py
import calendar
from datetime import date
from typing import Optional

from .config import get_settings


def money(x: float, symbol: Optional[str] = None) -> str:
    symbol = get_settings().currency_symbol if symbol is None else symbol
    try:
        return f"{x:,.0f} {symbol}".rstrip()
    except (TypeError, ValueError):
        return f"{x} {symbol}".rstrip()


def format_months(months: int) -> str:
    """12 -> '1 year', 14 -> '1 year and 2 months', 5 -> '5 months'."""
    years, rest = divmod(max(0, int(months)), 12)

    def _plural(n: int, word: str) -> str:
        return f"{n} {word}{'s' if n != 1 else ''}"

    if years == 0:
        return _plural(rest, "month")
    if rest == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')} and {_plural(rest, 'month')}"


def add_months(start: date, months: int) -> date:
    # clamp the day so Jan 31 + 1 month lands on the last day of February
    idx = start.month - 1 + months
    year, month = start.year + idx // 12, idx % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)

