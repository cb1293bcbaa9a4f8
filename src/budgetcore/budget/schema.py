"""
Pydantic v2 models for budget records and the budget parameter set.

A :class:`Budget` is a named, time-windowed, rate-bounded disbursement
commitment from a source address to a destination address.  :class:`Params`
is the two-field parameter set (``epoch_blocks``, ``budgets``) owned by the
surrounding configuration layer and loaded from YAML (or constructed
programmatically).

All models use ``extra="forbid"`` to reject unknown keys at parse time, and
records are frozen: nothing in this package mutates them.

Usage::

    from budgetcore.budget.schema import Params
    import yaml

    with open("budget-params.yaml") as fh:
        raw = yaml.safe_load(fh)
    params = Params.model_validate(raw)
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import yaml
from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

DEFAULT_EPOCH_BLOCKS = 1
MAX_EPOCH_BLOCKS = 2**32 - 1


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def parse_time(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Raises:
        ValueError: If the string is not a valid timestamp or has no offset.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp has no UTC offset: {value!r}")
    return parsed.astimezone(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def must_parse_rfc3339(value: str) -> datetime:
    """Parse a timestamp that is known to be well formed (fixtures, defaults)."""
    return parse_time(value)


# ---------------------------------------------------------------------------
# Budget record
# ---------------------------------------------------------------------------


class Budget(BaseModel):
    """A scheduled disbursement from ``source_address`` to ``destination_address``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Unique budget name within a parameter set")
    rate: Decimal = Field(
        ..., ge=0, description="Fraction of the source pool disbursed per epoch"
    )
    source_address: str = Field(..., description="Payer account")
    destination_address: str = Field(..., description="Payee account")
    start_time: AwareDatetime = Field(..., description="Inclusive window start")
    end_time: AwareDatetime = Field(..., description="Exclusive window end")

    def collectible(self, at: datetime) -> bool:
        """True if ``at`` falls inside the half-open window ``[start, end)``.

        A naive ``at`` is read as UTC.
        """
        return self.start_time <= as_utc(at) < self.end_time


# ---------------------------------------------------------------------------
# Parameter set
# ---------------------------------------------------------------------------


class Params(BaseModel):
    """Root model for the budget parameter set."""

    model_config = ConfigDict(extra="forbid")

    epoch_blocks: int = Field(
        DEFAULT_EPOCH_BLOCKS,
        ge=0,
        le=MAX_EPOCH_BLOCKS,
        description="Number of blocks per budget collection epoch",
    )
    budgets: list[Budget] = Field(
        default_factory=list,
        description="Budgets eligible for collection",
    )

    def to_yaml(self) -> str:
        """Render the parameter set as YAML, preserving field order."""
        return yaml.safe_dump(
            self.model_dump(mode="json"),
            sort_keys=False,
            default_flow_style=False,
        )

    def __str__(self) -> str:
        return self.to_yaml()


def default_params() -> Params:
    """Parameter set used when no configuration has been supplied."""
    return Params(epoch_blocks=DEFAULT_EPOCH_BLOCKS, budgets=[])
