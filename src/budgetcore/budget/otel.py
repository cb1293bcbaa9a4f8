"""
OTel span event emission helpers for budget validation and collection.

Log line + span event on the current span, following the
``_otel_helpers.add_span_event`` pattern.

Usage::

    from budgetcore.budget.otel import emit_collectible, emit_params_validation

    emit_params_validation(params, error)
    emit_collectible(block_time, collected)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from budgetcore._otel_helpers import add_span_event
from budgetcore.budget.errors import BudgetError
from budgetcore.budget.schema import Budget, Params

logger = logging.getLogger(__name__)


def emit_params_validation(params: Params, error: Optional[BudgetError]) -> None:
    """Emit the outcome of validating a proposed parameter set.

    Event name: ``budget.params.valid`` or ``budget.params.invalid``.
    """
    attrs: dict[str, str | int | float | bool | list[str]] = {
        "budget.epoch_blocks": params.epoch_blocks,
        "budget.count": len(params.budgets),
        "budget.passed": error is None,
    }

    if error is None:
        logger.debug(
            "Budget params valid: epoch_blocks=%d budgets=%d",
            params.epoch_blocks,
            len(params.budgets),
        )
        add_span_event("budget.params.valid", attrs)
        return

    attrs["budget.error.kind"] = type(error).__name__
    attrs["budget.error.message"] = str(error)
    logger.warning("Budget params rejected: %s", error)
    add_span_event("budget.params.invalid", attrs)


def emit_collectible(at: datetime, collected: Sequence[Budget]) -> None:
    """Emit the set of budgets found collectible for an epoch.

    Event name: ``budget.collectible``
    """
    names = [budget.name for budget in collected]
    attrs: dict[str, str | int | float | bool | list[str]] = {
        "budget.at": at.isoformat(),
        "budget.collectible_count": len(names),
        "budget.collectible_names": names,
    }

    logger.info("Collectible budgets at %s: %d", at.isoformat(), len(names))
    add_span_event("budget.collectible", attrs)
