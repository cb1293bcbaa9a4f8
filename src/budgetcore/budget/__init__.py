"""
Budget parameter validation and collectibility query.

Public API::

    from budgetcore.budget import (
        # Schema models
        Budget,
        Params,
        default_params,
        parse_time,
        # Queries and validators
        collectible_budgets,
        validate_budgets,
        validate_epoch_blocks,
        validate_params,
        validate_param_update,
        # Loader
        ParamsLoader,
        # Errors
        BudgetError,
        DuplicateBudgetNameError,
        InvalidTotalBudgetRateError,
        InvalidParameterTypeError,
    )
"""

from budgetcore.budget.collectible import collectible_budgets
from budgetcore.budget.errors import (
    BudgetError,
    DuplicateBudgetNameError,
    InvalidParameterTypeError,
    InvalidTimeRangeError,
    InvalidTotalBudgetRateError,
    UnknownParameterError,
)
from budgetcore.budget.loader import ParamsLoader
from budgetcore.budget.otel import emit_collectible, emit_params_validation
from budgetcore.budget.schema import (
    DEFAULT_EPOCH_BLOCKS,
    Budget,
    Params,
    default_params,
    must_parse_rfc3339,
    parse_time,
)
from budgetcore.budget.validator import (
    KEY_BUDGETS,
    KEY_EPOCH_BLOCKS,
    BudgetsBySource,
    ParamSetPair,
    budgets_by_source,
    date_ranges_overlap,
    param_set_pairs,
    peak_rate,
    validate_budgets,
    validate_budgets_param,
    validate_epoch_blocks,
    validate_param_update,
    validate_params,
)

__all__ = [
    # Schema
    "Budget",
    "Params",
    "DEFAULT_EPOCH_BLOCKS",
    "default_params",
    "parse_time",
    "must_parse_rfc3339",
    # Query
    "collectible_budgets",
    # Validators
    "validate_budgets",
    "validate_budgets_param",
    "validate_epoch_blocks",
    "validate_params",
    "validate_param_update",
    "param_set_pairs",
    "ParamSetPair",
    "KEY_BUDGETS",
    "KEY_EPOCH_BLOCKS",
    "budgets_by_source",
    "BudgetsBySource",
    "date_ranges_overlap",
    "peak_rate",
    # Loader
    "ParamsLoader",
    # Errors
    "BudgetError",
    "DuplicateBudgetNameError",
    "InvalidTotalBudgetRateError",
    "InvalidParameterTypeError",
    "InvalidTimeRangeError",
    "UnknownParameterError",
    # OTel
    "emit_params_validation",
    "emit_collectible",
]
