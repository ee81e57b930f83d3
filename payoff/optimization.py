# payoff/optimization.py
import math
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .config import get_settings
from .errors import InvalidBudgetError
from .logging_config import get_logger
from .schemas import (
    Debt,
    DebtLike,
    MonthBreakdown,
    PaymentStrategy,
    ProjectionResult,
    ProjectionStatus,
    coerce_debts,
)
from .strategies import ALL_STRATEGIES, ORDER_KEYS
from .utils import add_months

logger = get_logger(__name__)

CENT = Decimal("0.01")
StrategyArg = Union[PaymentStrategy, str]


def _to_money(x) -> Decimal:
    return Decimal(str(x)).quantize(CENT, rounding=ROUND_HALF_UP)


def _monthly_rate(annual_rate: float) -> Decimal:
    return Decimal(str(annual_rate)) / Decimal(1200)


@dataclass
class _WorkingDebt:
    id: str
    balance: Decimal
    minimum: Decimal
    monthly_rate: Decimal
    annual_rate: float
    original: float


def _clone_debts(debts: List[Debt]) -> List[_WorkingDebt]:
    return [
        _WorkingDebt(
            id=d.id,
            balance=_to_money(d.balance),
            minimum=_to_money(d.minimum_payment),
            monthly_rate=_monthly_rate(d.annual_rate),
            annual_rate=d.annual_rate,
            original=float(d.original_amount or 0.0),
        )
        for d in debts
    ]


def _check_amount(name: str, value) -> Decimal:
    try:
        f = float(value)
    except (TypeError, ValueError):
        raise InvalidBudgetError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(f) or f < 0:
        raise InvalidBudgetError(f"{name} must be a finite, non-negative amount, got {value!r}")
    return _to_money(f)


def _check_cap(max_months: Optional[int]) -> int:
    cap = get_settings().max_months if max_months is None else max_months
    if isinstance(cap, bool) or not isinstance(cap, int) or cap <= 0:
        raise InvalidBudgetError(f"max_months must be a positive integer, got {cap!r}")
    return cap


def resolve_strategies(strategies: Union[None, StrategyArg, Iterable[StrategyArg]]) -> List[PaymentStrategy]:
    """None -> every strategy; a single id or an iterable of ids -> those, deduplicated."""
    if strategies is None:
        return list(ALL_STRATEGIES)
    if isinstance(strategies, (str, PaymentStrategy)):
        strategies = [strategies]
    resolved: List[PaymentStrategy] = []
    for s in strategies:
        try:
            strat = PaymentStrategy(s.strip().lower() if isinstance(s, str) else s)
        except ValueError:
            raise InvalidBudgetError(f"Unknown payment strategy '{s}'")
        if strat not in resolved:
            resolved.append(strat)
    return resolved


def active_debts(debts: Iterable[Debt], epsilon: Optional[float] = None) -> List[Debt]:
    eps = get_settings().epsilon if epsilon is None else epsilon
    return [d for d in debts if d.balance >= eps]


def total_minimums(debts: Iterable[Debt]) -> Decimal:
    return sum((_to_money(d.minimum_payment) for d in debts), Decimal(0))


def _simulate(debts: List[Debt], strategy: PaymentStrategy, budget: Decimal,
              start: date, cap: int, epsilon: Decimal) -> ProjectionResult:
    ws = _clone_debts(debts)
    order_key = ORDER_KEYS[strategy]
    max_original = max(w.original for w in ws)
    starting = sum((w.balance for w in ws), Decimal(0))
    # priority is fixed from the starting snapshot
    ordered = sorted(ws, key=lambda w: order_key(w.id, float(w.balance), w.annual_rate, w.original, max_original))

    breakdown: List[MonthBreakdown] = []
    payoff_order: List[str] = []
    total_paid = Decimal(0)
    month = 0

    while month < cap and any(w.balance > 0 for w in ws):
        month += 1
        active = [w for w in ordered if w.balance > 0]

        month_interest = Decimal(0)
        for w in active:
            interest = (w.balance * w.monthly_rate).quantize(CENT, rounding=ROUND_HALF_UP)
            w.balance += interest
            month_interest += interest

        payments: Dict[str, Decimal] = {}
        for w in active:
            pay = min(w.minimum, w.balance)
            w.balance -= pay
            payments[w.id] = pay

        # leftover budget (extra + freed minimums) cascades down the priority list
        leftover = budget - sum(payments.values(), Decimal(0))
        for w in ordered:
            if leftover <= 0:
                break
            if w.balance <= 0:
                continue
            extra = min(leftover, w.balance)
            w.balance -= extra
            payments[w.id] += extra
            leftover -= extra

        paid_off: List[str] = []
        for w in active:
            if w.balance < epsilon:
                w.balance = Decimal(0)
                paid_off.append(w.id)
        payoff_order.extend(paid_off)

        month_paid = sum(payments.values(), Decimal(0))
        total_paid += month_paid
        breakdown.append(MonthBreakdown(
            month=month,
            total_payment=float(month_paid),
            principal_payment=float(month_paid - month_interest),
            interest_payment=float(month_interest),
            remaining_balance=float(sum((w.balance for w in ws), Decimal(0))),
            payments={k: float(v) for k, v in payments.items()},
            paid_off=paid_off,
        ))

    remaining = sum((w.balance for w in ws), Decimal(0))
    if remaining > 0:
        status = ProjectionStatus.NON_CONVERGENT
        months = cap
        logger.warning(
            "Projection did not converge",
            extra={"strategy": strategy.value, "cap": cap, "remaining": str(remaining)},
        )
    else:
        status = ProjectionStatus.PAID_OFF
        months = month

    # interest = everything paid beyond the principal actually retired
    total_interest = total_paid - (starting - remaining)
    return ProjectionResult(
        strategy=strategy,
        status=status,
        months_to_pay_off=months,
        total_paid=float(total_paid),
        total_interest=float(total_interest),
        monthly_payment=float(budget),
        starting_balance=float(starting),
        remaining_balance=float(remaining),
        payoff_date=add_months(start, months),
        payoff_order=payoff_order,
        monthly_breakdown=breakdown,
    )


def _insufficient(debts: List[Debt], strategy: PaymentStrategy, budget: Decimal,
                  start: date, cap: int) -> ProjectionResult:
    starting = float(sum((_to_money(d.balance) for d in debts), Decimal(0)))
    return ProjectionResult(
        strategy=strategy,
        status=ProjectionStatus.INSUFFICIENT_PAYMENT,
        months_to_pay_off=cap,
        total_paid=0.0,
        total_interest=0.0,
        monthly_payment=float(budget),
        starting_balance=starting,
        remaining_balance=starting,
        payoff_date=add_months(start, cap),
    )


def resolve_budget(debts: List[Debt], monthly_budget=None, extra_payment=0.0) -> Tuple[Decimal, Decimal]:
    """Return (budget per month, sum of minimums) for already-active debts."""
    minimums = total_minimums(debts)
    base = minimums if monthly_budget is None else _check_amount("monthly_budget", monthly_budget)
    extra = _check_amount("extra_payment", extra_payment or 0.0)
    return base + extra, minimums


def calculate_debt_projections(
    debts: Iterable[DebtLike],
    extra_payment: float = 0.0,
    monthly_budget: Optional[float] = None,
    strategies: Union[None, StrategyArg, Iterable[StrategyArg]] = None,
    start_date: Optional[date] = None,
    max_months: Optional[int] = None,
) -> List[ProjectionResult]:
    """
    Simulate every requested strategy against the same snapshot of debts.

    Returns one ProjectionResult per strategy, or an empty list when no debt
    carries a balance. Malformed debts, budgets or strategies raise a
    ProjectionError before any simulation runs; an under-funded budget or a
    plan that outlives the month cap comes back as a flagged result.
    """
    settings = get_settings()
    records = coerce_debts(debts)
    strats = resolve_strategies(strategies)
    cap = _check_cap(max_months)
    active = active_debts(records, settings.epsilon)
    budget, minimums = resolve_budget(active, monthly_budget, extra_payment)
    start = start_date or date.today()

    if not active:
        logger.debug("Nothing to project", extra={"debts": len(records)})
        return []

    logger.debug(
        "Running projections",
        extra={"debts": len(active), "budget": str(budget), "strategies": [s.value for s in strats], "cap": cap},
    )
    if budget < minimums:
        logger.warning(
            "Monthly budget below total minimum payments",
            extra={"budget": str(budget), "minimums": str(minimums)},
        )
        return [_insufficient(active, s, budget, start, cap) for s in strats]

    eps = Decimal(str(settings.epsilon))
    return [_simulate(active, s, budget, start, cap, eps) for s in strats]


def compute_projection(
    debts: Iterable[DebtLike],
    strategy: StrategyArg = PaymentStrategy.AVALANCHE,
    extra_payment: float = 0.0,
    monthly_budget: Optional[float] = None,
    start_date: Optional[date] = None,
    max_months: Optional[int] = None,
) -> Optional[ProjectionResult]:
    results = calculate_debt_projections(
        debts, extra_payment=extra_payment, monthly_budget=monthly_budget,
        strategies=[strategy], start_date=start_date, max_months=max_months,
    )
    return results[0] if results else None
