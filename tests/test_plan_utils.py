#tests/test_plan_utils.py
from datetime import date

from payoff.optimization import calculate_debt_projections, compute_projection
from payoff.plan_utils import (
    balance_series,
    breakdown_to_dataframe,
    comparison_dataframe,
    plan_to_dataframe,
)
from payoff.schemas import Debt


def simple_plan():
    debt = Debt(id="loan", balance=300, annual_rate=0, minimum_payment=100)
    return compute_projection([debt], start_date=date(2026, 1, 1))


def test_plan_to_dataframe():
    df = plan_to_dataframe(simple_plan())
    assert list(df.columns) == ["month", "debt", "payment", "paid_off"]
    assert len(df) == 3
    assert df["payment"].sum() == 300
    assert df["paid_off"].tolist() == [False, False, True]


def test_breakdown_and_series():
    plan = simple_plan()
    df = breakdown_to_dataframe(plan)
    assert df["remaining_balance"].tolist() == [200, 100, 0]
    assert balance_series(plan) == [300, 200, 100, 0]


def test_empty_plan_frames():
    debt = Debt(id="loan", balance=300, annual_rate=0, minimum_payment=100)
    res = compute_projection([debt], monthly_budget=50, start_date=date(2026, 1, 1))
    assert plan_to_dataframe(res).empty
    assert breakdown_to_dataframe(res).empty
    assert balance_series(res) == [300]


def test_comparison_dataframe():
    debts = [
        Debt(id="A", balance=500, annual_rate=24, minimum_payment=25),
        Debt(id="B", balance=2000, annual_rate=6, minimum_payment=50),
    ]
    df = comparison_dataframe(calculate_debt_projections(debts, monthly_budget=150, start_date=date(2026, 1, 1)))
    assert df["strategy"].tolist() == ["avalanche", "snowball", "combined"]
    assert df["name"].iloc[0].startswith("Avalanche")
    assert (df["status"] == "paid_off").all()
