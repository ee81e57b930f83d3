#tests/test_scenarios.py
from datetime import date

import pytest

from payoff.optimization import calculate_debt_projections
from payoff.scenarios import (
    best_plan,
    compare_baseline_vs_extra,
    fastest_plan,
    simulate_payoff,
    summarize_debts,
)
from payoff.schemas import Debt, PaymentStrategy, ProjectionStatus

START = date(2026, 1, 1)


def sample_debts():
    return [
        Debt(id="high-card", balance=120000, annual_rate=36, minimum_payment=3000),
        Debt(id="low-loan", balance=240000, annual_rate=12, minimum_payment=2500),
        Debt(id="medium-loan", balance=80000, annual_rate=18, minimum_payment=2000),
    ]


def test_extra_payment_saves_time_and_interest():
    cmp = compare_baseline_vs_extra(sample_debts(), 5000, strategy="avalanche",
                                    monthly_budget=20000, start_date=START)
    assert cmp.baseline.monthly_payment == pytest.approx(20000)
    assert cmp.scenario.monthly_payment == pytest.approx(25000)
    assert cmp.months_saved > 0
    assert cmp.interest_saved > 0
    assert cmp.comparable is True
    assert cmp.total_saved == pytest.approx(cmp.interest_saved, abs=0.02)


def test_compare_without_baseline_payoff_reports_no_savings():
    debts = [
        Debt(id="A", balance=500, annual_rate=24, minimum_payment=25),
        Debt(id="B", balance=2000, annual_rate=6, minimum_payment=50),
    ]
    cmp = compare_baseline_vs_extra(debts, 100, monthly_budget=50, start_date=START)
    assert cmp.baseline.status == ProjectionStatus.INSUFFICIENT_PAYMENT
    assert cmp.scenario.converged
    assert cmp.comparable is False
    assert cmp.months_saved is None
    assert cmp.interest_saved is None
    assert cmp.total_saved is None


def test_compare_with_no_debts():
    assert compare_baseline_vs_extra([], 100) is None


def test_best_and_fastest_plan():
    results = calculate_debt_projections(sample_debts(), monthly_budget=20000, start_date=START)
    assert best_plan(results).strategy == PaymentStrategy.AVALANCHE
    assert fastest_plan(results).converged


def test_best_plan_ignores_unconverged():
    results = calculate_debt_projections(sample_debts(), monthly_budget=1000, start_date=START)
    assert best_plan(results) is None
    assert fastest_plan(results) is None


def test_simulate_payoff_reports_names():
    out = simulate_payoff(sample_debts(), monthly_budget=20000, start_date=START)
    assert len(out["results"]) == 3
    assert out["best_plan"] == "avalanche"


def test_summarize_debts():
    debts = [
        Debt(id="A", balance=500, original_amount=1000, annual_rate=24, minimum_payment=25),
        Debt(id="B", balance=2000, annual_rate=6, minimum_payment=50),
        Debt(id="paid", balance=0, annual_rate=6, minimum_payment=0),
    ]
    s = summarize_debts(debts, payments_made=500)
    assert s.debt_count == 2
    assert s.total_current == 2500
    assert s.total_original == 3000
    assert s.total_minimums == 75
    assert s.weighted_rate == pytest.approx(9.6)
    assert s.progress_pct == pytest.approx(16.67)
    assert s.naive_months == 34
    assert s.total_payments_made == 500


def test_summarize_nothing():
    s = summarize_debts([])
    assert s.debt_count == 0 and s.naive_months == 0 and s.weighted_rate == 0
