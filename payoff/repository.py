# payoff/repository.py
from typing import Any, Iterable, List, Optional, Protocol, Union

from .collection import calculate_collection_projections
from .optimization import active_debts, calculate_debt_projections
from .schemas import CollectionResult, Debt, DebtLike, DebtType, ProjectionResult, coerce_debts


class DebtSource(Protocol):
    """Whatever persistence/sync layer holds the user's debts."""

    def list_debts(self) -> Iterable[DebtLike]:
        """Return the current snapshot of debt records."""
        ...


class InMemoryDebtSource:
    def __init__(self, debts: Optional[Iterable[DebtLike]] = None):
        self._debts: List[Debt] = coerce_debts(debts or [])

    def list_debts(self) -> List[Debt]:
        return list(self._debts)

    def add(self, debt: DebtLike) -> Debt:
        self._debts = coerce_debts(self._debts + [debt])
        return self._debts[-1]

    def remove(self, debt_id: str) -> None:
        self._debts = [d for d in self._debts if d.id != debt_id]


def select_active_debts(debts: Iterable[DebtLike],
                        debt_type: Union[None, DebtType, str] = None) -> List[Debt]:
    """Debts still carrying a balance, optionally limited to one type ('all' means no filter)."""
    ds = active_debts(coerce_debts(debts))
    if debt_type is None or debt_type == "all":
        return ds
    wanted = DebtType(debt_type)
    return [d for d in ds if d.debt_type == wanted]


def project_from_source(source: DebtSource, debt_type: Union[None, DebtType, str] = None,
                        **kwargs: Any) -> List[ProjectionResult]:
    return calculate_debt_projections(select_active_debts(source.list_debts(), debt_type), **kwargs)


def collections_from_source(source: DebtSource, debt_type: Union[None, DebtType, str] = None,
                            **kwargs: Any) -> List[CollectionResult]:
    return calculate_collection_projections(select_active_debts(source.list_debts(), debt_type), **kwargs)
