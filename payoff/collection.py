# payoff/collection.py
"""Projections for money owed *to* the user (incoming debts).

No interest accrues; each month every open debt is expected to yield
``minimum_payment * multiplier * type probability * base probability``.
"""
import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Union

from .config import get_settings
from .errors import InvalidBudgetError
from .logging_config import get_logger
from .optimization import CENT, _check_cap, _to_money, active_debts
from .schemas import (
    CollectionResult,
    CollectionStrategy,
    DebtLike,
    DebtType,
    MonthBreakdown,
    ProjectionStatus,
    coerce_debts,
)
from .utils import add_months

logger = get_logger(__name__)

COLLECTION_PROBABILITY: Dict[DebtType, float] = {
    DebtType.CREDIT_CARD: 0.75,
    DebtType.PERSONAL_LOAN: 0.85,
    DebtType.MORTGAGE: 0.95,
    DebtType.STUDENT_LOAN: 0.80,
    DebtType.CAR_LOAN: 0.90,
    DebtType.OTHER: 0.80,
}

COLLECTION_MULTIPLIER: Dict[CollectionStrategy, float] = {
    CollectionStrategy.AGGRESSIVE: 1.5,
    CollectionStrategy.CONSERVATIVE: 0.75,
}

CollectionArg = Union[CollectionStrategy, str]


def get_collection_probability(debt_type: Union[DebtType, str]) -> float:
    try:
        return COLLECTION_PROBABILITY[DebtType(debt_type)]
    except ValueError:
        return COLLECTION_PROBABILITY[DebtType.OTHER]


def _check_probability(probability: Optional[float]) -> float:
    p = get_settings().collection_probability if probability is None else probability
    try:
        p = float(p)
    except (TypeError, ValueError):
        raise InvalidBudgetError(f"probability must be a number, got {probability!r}")
    if not math.isfinite(p) or not 0.0 <= p <= 1.0:
        raise InvalidBudgetError(f"probability must be within [0, 1], got {probability!r}")
    return p


def resolve_collection_strategies(strategies) -> List[CollectionStrategy]:
    if strategies is None:
        return list(CollectionStrategy)
    if isinstance(strategies, (str, CollectionStrategy)):
        strategies = [strategies]
    resolved: List[CollectionStrategy] = []
    for s in strategies:
        try:
            strat = CollectionStrategy(s.strip().lower() if isinstance(s, str) else s)
        except ValueError:
            raise InvalidBudgetError(f"Unknown collection strategy '{s}'")
        if strat not in resolved:
            resolved.append(strat)
    return resolved


def _project_collection(debts, strategy: CollectionStrategy, probability: float,
                        start: date, cap: int) -> CollectionResult:
    multiplier = Decimal(str(COLLECTION_MULTIPLIER[strategy]))
    base_p = Decimal(str(probability))
    balances = {d.id: _to_money(d.balance) for d in debts}
    yields = {
        d.id: (_to_money(d.minimum_payment) * multiplier * Decimal(str(get_collection_probability(d.debt_type))) * base_p)
        .quantize(CENT, rounding=ROUND_HALF_UP)
        for d in debts
    }
    expected = sum(
        (_to_money(d.balance) * Decimal(str(get_collection_probability(d.debt_type))) * base_p for d in debts),
        Decimal(0),
    ).quantize(CENT, rounding=ROUND_HALF_UP)
    monthly = sum((_to_money(d.minimum_payment) * multiplier for d in debts), Decimal(0))
    monthly = monthly.quantize(CENT, rounding=ROUND_HALF_UP)

    breakdown: List[MonthBreakdown] = []
    total = Decimal(0)
    month = 0
    # a debt that yields nothing per month would only spin until the cap
    stalled = any(balances[k] > 0 and yields[k] <= 0 for k in balances)

    while not stalled and month < cap and any(b > 0 for b in balances.values()):
        month += 1
        collected: Dict[str, Decimal] = {}
        closed: List[str] = []
        for debt_id, bal in balances.items():
            if bal <= 0:
                continue
            amount = min(yields[debt_id], bal)
            balances[debt_id] = bal - amount
            collected[debt_id] = amount
            if balances[debt_id] <= 0:
                closed.append(debt_id)
        month_total = sum(collected.values(), Decimal(0))
        total += month_total
        breakdown.append(MonthBreakdown(
            month=month,
            total_payment=float(month_total),
            principal_payment=float(month_total),
            interest_payment=0.0,
            remaining_balance=float(sum(balances.values(), Decimal(0))),
            payments={k: float(v) for k, v in collected.items()},
            paid_off=closed,
        ))

    if any(b > 0 for b in balances.values()):
        status, months = ProjectionStatus.NON_CONVERGENT, cap
        logger.warning("Collection projection did not converge", extra={"strategy": strategy.value, "cap": cap})
    else:
        status, months = ProjectionStatus.PAID_OFF, month

    return CollectionResult(
        collection_strategy=strategy,
        status=status,
        months_to_collect=months,
        total_collected=float(total),
        monthly_collection=float(monthly),
        expected_collection=float(expected),
        probability=probability,
        completion_date=add_months(start, months),
        monthly_breakdown=breakdown,
    )


def calculate_collection_projections(
    debts: Iterable[DebtLike],
    strategies: Union[None, CollectionArg, Iterable[CollectionArg]] = None,
    probability: Optional[float] = None,
    start_date: Optional[date] = None,
    max_months: Optional[int] = None,
) -> List[CollectionResult]:
    """One CollectionResult per strategy (aggressive, conservative by default)."""
    records = coerce_debts(debts)
    strats = resolve_collection_strategies(strategies)
    p = _check_probability(probability)
    cap = _check_cap(max_months)
    active = active_debts(records)
    if not active:
        return []
    start = start_date or date.today()
    return [_project_collection(active, s, p, start, cap) for s in strats]
