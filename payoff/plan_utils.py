# payoff/plan_utils.py
from typing import Iterable, List

import pandas as pd

from .schemas import ProjectionResult
from .strategies import get_strategy_name

SCHEDULE_COLUMNS = ["month", "debt", "payment", "paid_off"]
BREAKDOWN_COLUMNS = ["month", "total_payment", "principal_payment", "interest_payment", "remaining_balance"]


def plan_to_dataframe(result: ProjectionResult) -> pd.DataFrame:
    rows = []
    for m in result.monthly_breakdown:
        for debt_id, amount in m.payments.items():
            rows.append({
                "month": m.month,
                "debt": debt_id,
                "payment": amount,
                "paid_off": debt_id in m.paid_off,
            })
    if not rows:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def breakdown_to_dataframe(result: ProjectionResult) -> pd.DataFrame:
    rows = [m.model_dump(include=set(BREAKDOWN_COLUMNS)) for m in result.monthly_breakdown]
    if not rows:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


def balance_series(result: ProjectionResult) -> List[float]:
    """Starting balance followed by the remaining balance after each month."""
    return [result.starting_balance] + [m.remaining_balance for m in result.monthly_breakdown]


def comparison_dataframe(results: Iterable[ProjectionResult]) -> pd.DataFrame:
    rows = [{
        "strategy": r.strategy.value,
        "name": get_strategy_name(r.strategy),
        "status": r.status.value,
        "months": r.months_to_pay_off,
        "total_paid": r.total_paid,
        "total_interest": r.total_interest,
        "monthly_payment": r.monthly_payment,
        "payoff_date": r.payoff_date,
    } for r in results]
    return pd.DataFrame(rows, columns=["strategy", "name", "status", "months", "total_paid",
                                       "total_interest", "monthly_payment", "payoff_date"])
