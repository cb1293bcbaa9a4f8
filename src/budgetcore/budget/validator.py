"""
Validators for the budget parameter set.

Two checks gate every proposed change to the parameter set:

- :func:`validate_budgets` rejects duplicate names, malformed windows and any
  source address whose overlapping budgets commit more than 100% at some
  instant.
- :func:`validate_epoch_blocks` guards the untyped update path for the epoch
  length.

Validation is all-or-nothing: the first violation raises and the caller
rejects the whole proposal.  Nothing here logs or mutates its input.

Usage::

    from budgetcore.budget.validator import validate_budgets, validate_param_update

    validate_budgets(params.budgets)
    validate_param_update(KEY_EPOCH_BLOCKS, raw_value)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Iterator, NamedTuple, Optional, Sequence

from budgetcore.budget.errors import (
    DuplicateBudgetNameError,
    InvalidParameterTypeError,
    InvalidTimeRangeError,
    InvalidTotalBudgetRateError,
    UnknownParameterError,
)
from budgetcore.budget.schema import MAX_EPOCH_BLOCKS, Budget, Params

MAX_TOTAL_RATE = Decimal(1)

KEY_EPOCH_BLOCKS = "EpochBlocks"
KEY_BUDGETS = "Budgets"

# Sort rank within one instant: windows are half-open, so a budget ending at
# ``t`` is released before one starting at ``t`` is counted.
_END = 0
_START = 1


# ---------------------------------------------------------------------------
# Grouping and overlap helpers
# ---------------------------------------------------------------------------


@dataclass
class BudgetsBySource:
    """Budgets sharing one source address."""

    source_address: str
    budgets: list[Budget] = field(default_factory=list)
    total_rate: Decimal = Decimal(0)


def budgets_by_source(budgets: Iterable[Budget]) -> dict[str, BudgetsBySource]:
    """Group budgets by source address, in first-seen order.

    ``total_rate`` is the plain sum of rates in the group, regardless of
    whether the windows overlap.
    """
    groups: dict[str, BudgetsBySource] = {}
    for budget in budgets:
        group = groups.get(budget.source_address)
        if group is None:
            group = groups[budget.source_address] = BudgetsBySource(budget.source_address)
        group.budgets.append(budget)
        group.total_rate += budget.rate
    return groups


def date_ranges_overlap(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime
) -> bool:
    """True if half-open ranges ``[start_a, end_a)`` and ``[start_b, end_b)`` intersect."""
    return start_a < end_b and start_b < end_a


def _sweep(budgets: Sequence[Budget]) -> Iterator[tuple[int, Decimal]]:
    """Yield ``(active_count, rate_sum)`` after each window boundary, in time order.

    Zero-rate budgets commit nothing and are not counted as active.
    """
    events: list[tuple[datetime, int, Decimal]] = []
    for budget in budgets:
        if budget.rate == 0:
            continue
        events.append((budget.start_time, _START, budget.rate))
        events.append((budget.end_time, _END, budget.rate))
    events.sort(key=lambda event: (event[0], event[1]))

    active = 0
    running = Decimal(0)
    for _, kind, rate in events:
        if kind == _START:
            active += 1
            running += rate
        else:
            active -= 1
            running -= rate
        yield active, running


def _first_rate_violation(budgets: Sequence[Budget]) -> Optional[Decimal]:
    """Return the first rate sum above the limit among overlapping budgets.

    A lone committing budget is never a violation, whatever its own rate.
    """
    for active, running in _sweep(budgets):
        if active > 1 and running > MAX_TOTAL_RATE:
            return running
    return None


def peak_rate(budgets: Sequence[Budget]) -> Decimal:
    """Largest rate sum of simultaneously active budgets in ``budgets``.

    Intended for a single source group; mixing sources gives a meaningless
    number.
    """
    peak = Decimal(0)
    for _, running in _sweep(budgets):
        peak = max(peak, running)
    return peak


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_budgets(budgets: Iterable[Budget]) -> None:
    """Validate a complete budget set.

    Checks run in precedence order: duplicate names, then window shape, then
    the per-source aggregate rate.  ``budgets`` may be any iterable; it is
    read once.

    Raises:
        DuplicateBudgetNameError: On the first repeated name.
        InvalidTimeRangeError: If a window does not end after it starts.
        InvalidTotalBudgetRateError: If overlapping budgets of one source sum
            above 1 at any instant.
    """
    budgets = list(budgets)
    names: set[str] = set()
    for budget in budgets:
        if budget.name in names:
            raise DuplicateBudgetNameError(budget.name)
        names.add(budget.name)

    for budget in budgets:
        if budget.start_time >= budget.end_time:
            raise InvalidTimeRangeError(budget.name, budget.start_time, budget.end_time)

    for source, group in budgets_by_source(budgets).items():
        # Windows can only push the sum past the limit if the plain sum does.
        if group.total_rate <= MAX_TOTAL_RATE:
            continue
        total = _first_rate_violation(group.budgets)
        if total is not None:
            raise InvalidTotalBudgetRateError(source, total)


def validate_epoch_blocks(value: Any) -> None:
    """Validate a raw epoch length from the untyped update path.

    Only an ``int`` in the unsigned 32-bit range is accepted; zero is valid.

    Raises:
        InvalidParameterTypeError: Naming the observed kind (``<nil>`` for
            ``None``, ``int`` for an out-of-range integer).
    """
    if type(value) is not int or not 0 <= value <= MAX_EPOCH_BLOCKS:
        raise InvalidParameterTypeError.of(value)


def validate_budgets_param(value: Any) -> None:
    """Validate a raw budgets value from the untyped update path."""
    if not isinstance(value, (list, tuple)):
        raise InvalidParameterTypeError.of(value)
    for item in value:
        if not isinstance(item, Budget):
            raise InvalidParameterTypeError.of(value)
    validate_budgets(value)


def validate_params(params: Params) -> None:
    """Validate both fields of a parameter set."""
    validate_epoch_blocks(params.epoch_blocks)
    validate_budgets(params.budgets)


# ---------------------------------------------------------------------------
# Parameter key table
# ---------------------------------------------------------------------------


class ParamSetPair(NamedTuple):
    """A parameter key with its current value and validator."""

    key: str
    value: Any
    validator: Callable[[Any], None]


_VALIDATORS: dict[str, Callable[[Any], None]] = {
    KEY_EPOCH_BLOCKS: validate_epoch_blocks,
    KEY_BUDGETS: validate_budgets_param,
}


def param_set_pairs(params: Params) -> list[ParamSetPair]:
    """Key/value/validator triples for every field of ``params``."""
    return [
        ParamSetPair(KEY_EPOCH_BLOCKS, params.epoch_blocks, _VALIDATORS[KEY_EPOCH_BLOCKS]),
        ParamSetPair(KEY_BUDGETS, params.budgets, _VALIDATORS[KEY_BUDGETS]),
    ]


def validate_param_update(key: str, value: Any) -> None:
    """Validate a proposed change to a single parameter.

    Raises:
        UnknownParameterError: If ``key`` is not in the key table.
        BudgetError: Whatever the key's validator raises.
    """
    validator = _VALIDATORS.get(key)
    if validator is None:
        raise UnknownParameterError(key)
    validator(value)
