#tests/test_utils.py
from datetime import date

import pytest

from payoff.schemas import PaymentStrategy
from payoff.strategies import (
    get_collection_strategy_description,
    get_collection_strategy_name,
    get_strategy_description,
    get_strategy_name,
)
from payoff.utils import add_months, format_months, money


@pytest.mark.parametrize("months, text", [
    (0, "0 months"),
    (1, "1 month"),
    (5, "5 months"),
    (12, "1 year"),
    (24, "2 years"),
    (14, "1 year and 2 months"),
    (25, "2 years and 1 month"),
])
def test_format_months(months, text):
    assert format_months(months) == text


def test_money():
    assert money(1234.4, "€") == "1,234 €"
    assert money(1500, "") == "1,500"
    assert money(99.6) == "100 €"


def test_add_months_clamps_day():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)
    assert add_months(date(2026, 5, 1), 0) == date(2026, 5, 1)



def test_strategy_lookup():
    assert get_strategy_name(PaymentStrategy.AVALANCHE).startswith("Avalanche")
    assert get_strategy_name("snowball").startswith("Snowball")
    assert "interest" in get_strategy_description("avalanche")
    assert get_strategy_name("bogus") == "Unknown"
    assert get_strategy_description("bogus") == ""
    assert get_collection_strategy_name("aggressive").startswith("Aggressive")
    assert get_collection_strategy_description("nope") == ""
