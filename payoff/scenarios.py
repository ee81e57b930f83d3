# payoff/scenarios.py
import math
from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel

from .optimization import StrategyArg, active_debts, calculate_debt_projections, compute_projection
from .schemas import DebtLike, PaymentStrategy, ProjectionResult, coerce_debts


class SavingsComparison(BaseModel):
    baseline: ProjectionResult
    scenario: ProjectionResult
    comparable: bool
    # None unless both plans pay the debts off
    months_saved: Optional[int] = None
    interest_saved: Optional[float] = None
    total_saved: Optional[float] = None


class DebtSummary(BaseModel):
    debt_count: int
    total_current: float
    total_original: float
    total_minimums: float
    weighted_rate: float
    total_payments_made: float
    progress_pct: float
    naive_months: int


def compare_baseline_vs_extra(
    debts: Iterable[DebtLike],
    extra: float,
    strategy: StrategyArg = PaymentStrategy.AVALANCHE,
    monthly_budget: Optional[float] = None,
    start_date: Optional[date] = None,
    max_months: Optional[int] = None,
) -> Optional[SavingsComparison]:
    """Same strategy with and without an extra monthly payment."""
    debts = coerce_debts(debts)
    base = compute_projection(debts, strategy, extra_payment=0.0, monthly_budget=monthly_budget,
                              start_date=start_date, max_months=max_months)
    scen = compute_projection(debts, strategy, extra_payment=extra, monthly_budget=monthly_budget,
                              start_date=start_date, max_months=max_months)
    if base is None or scen is None:
        return None
    if not (base.converged and scen.converged):
        return SavingsComparison(baseline=base, scenario=scen, comparable=False)
    return SavingsComparison(
        baseline=base,
        scenario=scen,
        comparable=True,
        months_saved=base.months_to_pay_off - scen.months_to_pay_off,
        interest_saved=round(base.total_interest - scen.total_interest, 2),
        total_saved=round(base.total_paid - scen.total_paid, 2),
    )


def best_plan(results: Iterable[ProjectionResult]) -> Optional[ProjectionResult]:
    # pick best by total interest then months to debt free
    done = [r for r in results if r.converged]
    if not done:
        return None
    return min(done, key=lambda r: (r.total_interest, r.months_to_pay_off))


def fastest_plan(results: Iterable[ProjectionResult]) -> Optional[ProjectionResult]:
    done = [r for r in results if r.converged]
    if not done:
        return None
    return min(done, key=lambda r: (r.months_to_pay_off, r.total_paid))


def summarize_debts(debts: Iterable[DebtLike], payments_made: float = 0.0) -> DebtSummary:
    ds = active_debts(coerce_debts(debts))
    total_cur = sum(d.balance for d in ds)
    total_orig = sum(d.original_amount or 0.0 for d in ds)
    total_min = sum(d.minimum_payment for d in ds)
    w_rate = sum(d.annual_rate * d.balance for d in ds) / total_cur if total_cur > 0 else 0.0
    progress = (total_orig - total_cur) / total_orig * 100.0 if total_orig > 0 else 0.0
    naive = math.ceil(total_cur / total_min) if total_cur > 0 and total_min > 0 else 0
    return DebtSummary(
        debt_count=len(ds),
        total_current=round(total_cur, 2),
        total_original=round(total_orig, 2),
        total_minimums=round(total_min, 2),
        weighted_rate=round(w_rate, 4),
        total_payments_made=round(float(payments_made), 2),
        progress_pct=round(progress, 2),
        naive_months=naive,
    )


def simulate_payoff(debts: Iterable[DebtLike], extra_payment: float = 0.0,
                    monthly_budget: Optional[float] = None,
                    start_date: Optional[date] = None) -> dict:
    """Every strategy side by side, plus the names of the cheapest and fastest."""
    results: List[ProjectionResult] = calculate_debt_projections(
        debts, extra_payment=extra_payment, monthly_budget=monthly_budget, start_date=start_date,
    )
    best = best_plan(results)
    fastest = fastest_plan(results)
    return {
        "results": results,
        "best_plan": best.strategy.value if best else None,
        "fastest_plan": fastest.strategy.value if fastest else None,
    }
