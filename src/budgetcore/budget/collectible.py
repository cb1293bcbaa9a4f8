"""
Collectibility query: which budgets may disburse in the current epoch.

Called once per epoch by the external trigger with the current block time.
The returned list is what the external disbursement mechanism acts upon;
input order is preserved so disbursement order stays deterministic.

Usage::

    from budgetcore.budget.collectible import collectible_budgets

    for budget in collectible_budgets(params.budgets, block_time):
        ...
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from budgetcore.budget.schema import Budget, as_utc


def collectible_budgets(budgets: Iterable[Budget], at: datetime) -> list[Budget]:
    """Return the budgets whose window ``[start_time, end_time)`` contains ``at``.

    Args:
        budgets: Budget records in caller order.
        at: Timestamp to evaluate; a naive value is read as UTC.

    Returns:
        Matching budgets in input order (possibly empty).
    """
    at = as_utc(at)
    return [budget for budget in budgets if budget.collectible(at)]
