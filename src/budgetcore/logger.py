"""
Logging setup and structured event logging for budget parameter changes.

Event lines are JSON objects so log shippers can filter on ``event`` and
``service`` without parsing free text.

Logged events:
- params.accepted
- params.rejected
- budgets.collected

Usage:
    from budgetcore.logger import BudgetEventLogger, configure_logging

    configure_logging("info", "json")
    events = BudgetEventLogger()
    events.log_params_rejected(source="params.yaml", error=err)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, Sequence, TextIO

from budgetcore.budget.errors import BudgetError
from budgetcore.budget.schema import Budget, Params

EVENTS_LOGGER = "budgetcore.events"

_events_logger = logging.getLogger(EVENTS_LOGGER)
_events_logger.setLevel(logging.INFO)


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "info", fmt: str = "json", stream: Optional[TextIO] = None
) -> None:
    """Install a single handler on the ``budgetcore`` logger.

    Logs go to stderr unless ``stream`` is given, keeping stdout for command
    output.  Event lines from :class:`BudgetEventLogger` are already JSON and
    are written through unchanged.
    """
    stream = stream or sys.stderr
    root = logging.getLogger("budgetcore")
    root.setLevel(level.upper())
    root.handlers.clear()

    handler = logging.StreamHandler(stream)
    if fmt == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    root.addHandler(handler)

    _events_logger.setLevel(level.upper())
    _events_logger.handlers.clear()
    _events_logger.propagate = False
    events_handler = logging.StreamHandler(stream)
    events_handler.setFormatter(logging.Formatter("%(message)s"))
    _events_logger.addHandler(events_handler)


class BudgetEventLogger:
    """
    Structured logger for budget parameter events.

    Each entry carries ``timestamp``, ``level``, ``event`` and ``service``
    plus event-specific fields.
    """

    def __init__(self, service_name: str = "budgetcore") -> None:
        self.service_name = service_name
        self._logger = _events_logger

    def _emit(self, event: str, level: str = "info", **fields: Any) -> None:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "service": self.service_name,
        }
        entry.update(fields)

        log_line = json.dumps(entry, default=str)

        if level == "warn":
            self._logger.warning(log_line)
        else:
            self._logger.info(log_line)

    def log_params_accepted(self, source: str, params: Params) -> None:
        """Log a parameter set that passed validation."""
        self._emit(
            event="params.accepted",
            source=source,
            epoch_blocks=params.epoch_blocks,
            budget_count=len(params.budgets),
        )

    def log_params_rejected(self, source: str, error: BudgetError) -> None:
        """Log a parameter set that failed validation."""
        self._emit(
            event="params.rejected",
            level="warn",
            source=source,
            error_kind=type(error).__name__,
            error=str(error),
        )

    def log_collected(
        self,
        at: datetime,
        budgets: Sequence[Budget],
        source: Optional[str] = None,
    ) -> None:
        """Log the budgets found collectible at ``at``."""
        self._emit(
            event="budgets.collected",
            source=source,
            at=at.isoformat(),
            budgets=[budget.name for budget in budgets],
        )
