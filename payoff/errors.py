# payoff/errors.py
from typing import Any, List, Optional


class ProjectionError(ValueError):
    """Base class for inputs the projection engine refuses to simulate."""


class InvalidDebtError(ProjectionError):
    """A debt record is malformed (negative balance, missing minimum, ...)."""

    def __init__(self, message: str, index: Optional[int] = None,
                 debt_id: Optional[str] = None, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.index = index
        self.debt_id = debt_id
        self.errors = errors or []


class InvalidBudgetError(ProjectionError):
    """Budget, extra payment, strategy or cap cannot be used for a projection."""
