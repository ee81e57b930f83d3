# payoff/schemas.py
import math
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, computed_field, field_validator, model_validator

from .errors import InvalidDebtError


class DebtType(str, Enum):
    CREDIT_CARD = "credit_card"
    PERSONAL_LOAN = "personal_loan"
    MORTGAGE = "mortgage"
    STUDENT_LOAN = "student_loan"
    CAR_LOAN = "car_loan"
    OTHER = "other"


class PaymentStrategy(str, Enum):
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"
    COMBINED = "combined"


class CollectionStrategy(str, Enum):
    AGGRESSIVE = "aggressive"
    CONSERVATIVE = "conservative"


class ProjectionStatus(str, Enum):
    PAID_OFF = "paid_off"
    NON_CONVERGENT = "non_convergent"
    INSUFFICIENT_PAYMENT = "insufficient_payment"


class Debt(BaseModel):
    """
    A liability snapshot as supplied by the data layer.
     - balance: current outstanding amount
     - original_amount: amount at origination (defaults to balance)
     - annual_rate: percent per year, e.g. 19.9
     - minimum_payment: required monthly payment, > 0 while balance > 0
    Dates and description are descriptive only.
    """
    id: str = Field(min_length=1)
    debt_type: DebtType = DebtType.OTHER
    original_amount: Optional[float] = Field(default=None, ge=0.0)
    balance: float = Field(ge=0.0)
    annual_rate: float = Field(ge=0.0)
    minimum_payment: float = Field(ge=0.0)
    due_date: Optional[date] = None
    created_at: Optional[date] = None
    description: Optional[str] = None

    @field_validator("original_amount", "balance", "annual_rate", "minimum_payment")
    @classmethod
    def _finite(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v

    @model_validator(mode="after")
    def _check_minimum(self) -> "Debt":
        if self.original_amount is None:
            self.original_amount = self.balance
        if self.balance > 0 and self.minimum_payment <= 0:
            raise ValueError("minimum_payment must be positive while a balance is outstanding")
        return self


DebtLike = Union[Debt, Mapping[str, Any]]


def coerce_debts(records: Iterable[DebtLike]) -> List[Debt]:
    """Validate a batch of records into Debt models, failing on the first bad one."""
    debts: List[Debt] = []
    seen = set()
    for i, rec in enumerate(records):
        if isinstance(rec, Debt):
            debt = rec
        else:
            try:
                debt = Debt.model_validate(rec)
            except ValidationError as e:
                debt_id = rec.get("id") if isinstance(rec, Mapping) else None
                msgs = [f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}" for err in e.errors()]
                raise InvalidDebtError(
                    f"Invalid debt #{i}" + (f" ('{debt_id}')" if debt_id else "") + ": " + "; ".join(msgs),
                    index=i, debt_id=debt_id, errors=e.errors(),
                ) from e
        if debt.id in seen:
            raise InvalidDebtError(f"Duplicate debt id '{debt.id}'", index=i, debt_id=debt.id)
        seen.add(debt.id)
        debts.append(debt)
    return debts


# Result types
class MonthBreakdown(BaseModel):
    month: int
    total_payment: float
    principal_payment: float
    interest_payment: float
    remaining_balance: float
    payments: Dict[str, float] = Field(default_factory=dict)
    paid_off: List[str] = Field(default_factory=list)


class ProjectionResult(BaseModel):
    strategy: PaymentStrategy
    status: ProjectionStatus
    months_to_pay_off: int = Field(ge=0)
    total_paid: float
    total_interest: float
    monthly_payment: float
    starting_balance: float
    remaining_balance: float
    payoff_date: date
    payoff_order: List[str] = Field(default_factory=list)
    monthly_breakdown: List[MonthBreakdown] = Field(default_factory=list)

    @computed_field
    @property
    def converged(self) -> bool:
        return self.status == ProjectionStatus.PAID_OFF


class CollectionResult(BaseModel):
    collection_strategy: CollectionStrategy
    status: ProjectionStatus
    months_to_collect: int = Field(ge=0)
    total_collected: float
    monthly_collection: float
    expected_collection: float
    probability: float
    completion_date: date
    monthly_breakdown: List[MonthBreakdown] = Field(default_factory=list)

    @computed_field
    @property
    def converged(self) -> bool:
        return self.status == ProjectionStatus.PAID_OFF
