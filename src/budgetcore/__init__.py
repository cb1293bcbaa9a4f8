"""
budgetcore - Scheduled-disbursement budget validation and collection queries.

A budget commits a fraction (``rate``) of a source address's pool to a
destination address for every epoch inside a half-open time window.  This
package validates proposed budget parameter sets (unique names, no source
committing more than 100% at any overlapping instant) and answers which
budgets are collectible at a given time.

Example usage:
    from budgetcore import collectible_budgets, validate_budgets

    validate_budgets(params.budgets)          # raises BudgetError on rejection
    for budget in collectible_budgets(params.budgets, block_time):
        ...
"""

__version__ = "0.1.0"
__all__ = [
    "Budget",
    "Params",
    "collectible_budgets",
    "validate_budgets",
    "validate_epoch_blocks",
    "__version__",
]


# Lazy imports to avoid loading pydantic at import time
def __getattr__(name: str):
    if name in ("Budget", "Params"):
        from budgetcore.budget import schema
        return getattr(schema, name)
    if name == "collectible_budgets":
        from budgetcore.budget.collectible import collectible_budgets
        return collectible_budgets
    if name in ("validate_budgets", "validate_epoch_blocks"):
        from budgetcore.budget import validator
        return getattr(validator, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
