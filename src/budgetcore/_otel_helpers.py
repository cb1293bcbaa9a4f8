"""
Shared OTel span event emission helper.

Usage::

    from budgetcore._otel_helpers import add_span_event

    add_span_event("budget.params.valid", {"budget.count": 3})
"""

from __future__ import annotations

from opentelemetry import trace as otel_trace


def add_span_event(
    name: str, attributes: dict[str, str | int | float | bool | list[str]]
) -> None:
    """Add an event to the current OTel span if it is recording.

    Args:
        name: Event name (e.g. ``"budget.collectible"``).
        attributes: Flat dict of span event attributes.
    """
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)
