"""
Exceptions raised when a proposed budget configuration is rejected.

Every error is a validation-time rejection: the caller must discard the
proposed configuration in its entirety.  Message wording is part of the
contract with the parameter-update interface and must stay stable.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal


class BudgetError(Exception):
    """Base class for budget configuration rejections."""


class DuplicateBudgetNameError(BudgetError):
    """Raised when two or more budgets in a set share a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name}: duplicate budget name")


class InvalidTotalBudgetRateError(BudgetError):
    """Raised when overlapping budgets of one source commit more than 100%."""

    def __init__(self, source_address: str, total_rate: Decimal) -> None:
        self.source_address = source_address
        self.total_rate = total_rate
        super().__init__(
            f"{source_address}: invalid total rate of the budgets "
            f"with the same source address"
        )


class InvalidParameterTypeError(BudgetError):
    """Raised when a raw parameter value is not of the required kind.

    ``kind`` is ``"<nil>"`` for ``None`` and the Python type name otherwise.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"invalid parameter type: {kind}")

    @classmethod
    def of(cls, value: object) -> "InvalidParameterTypeError":
        """Build the error for an observed value."""
        if value is None:
            return cls("<nil>")
        return cls(type(value).__name__)


class InvalidTimeRangeError(BudgetError):
    """Raised when a budget window does not end strictly after it starts."""

    def __init__(self, name: str, start_time: datetime, end_time: datetime) -> None:
        self.name = name
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(f"{name}: end time must be after start time")


class UnknownParameterError(BudgetError):
    """Raised when a parameter update names a key outside the key table."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"unknown parameter: {key}")
