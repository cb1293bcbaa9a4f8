"""
budgetcore CLI - Validate budget parameter files and query collectible budgets.

Commands:
    budgetcore defaults     Print the default parameter set
    budgetcore validate     Validate a parameter file
    budgetcore collectible  List budgets collectible at a timestamp
    budgetcore check-epoch  Validate an epoch length
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click
import yaml
from opentelemetry import trace
from pydantic import ValidationError

from budgetcore.budget.collectible import collectible_budgets
from budgetcore.budget.errors import BudgetError
from budgetcore.budget.loader import ParamsLoader
from budgetcore.budget.otel import emit_collectible, emit_params_validation
from budgetcore.budget.schema import Params, default_params, parse_time
from budgetcore.budget.validator import validate_epoch_blocks, validate_params
from budgetcore.config import get_config
from budgetcore.logger import BudgetEventLogger, configure_logging

tracer = trace.get_tracer(__name__)


def _resolve_path(params_file: Optional[Path]) -> Path:
    return params_file if params_file is not None else get_config().get_params_path()


def _load_params(path: Path) -> Params:
    """Load a params file, turning load failures into CLI errors."""
    try:
        return ParamsLoader().load(path)
    except FileNotFoundError as exc:
        raise click.ClickException(str(exc))
    except (TypeError, yaml.YAMLError, ValidationError) as exc:
        raise click.ClickException(f"{path} is not a valid params file: {exc}")


def _parse_at(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        return parse_time(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


@click.group()
@click.version_option(package_name="budgetcore")
def main():
    """budgetcore - Budget parameter validation and collection queries."""
    config = get_config()
    configure_logging(config.log_level, config.log_format)


@main.command()
def defaults():
    """Print the default parameter set as YAML."""
    click.echo(default_params().to_yaml(), nl=False)


@main.command()
@click.argument("params_file", required=False, type=click.Path(path_type=Path))
def validate(params_file: Optional[Path]):
    """Validate a budget parameter file.

    Exits non-zero if the budgets or the epoch length would be rejected.
    """
    path = _resolve_path(params_file)
    params = _load_params(path)
    events = BudgetEventLogger(get_config().service_name)

    with tracer.start_as_current_span("budgetcore.validate"):
        try:
            validate_params(params)
        except BudgetError as exc:
            emit_params_validation(params, exc)
            events.log_params_rejected(str(path), exc)
            click.echo(f"Invalid: {exc}", err=True)
            sys.exit(1)
        emit_params_validation(params, None)

    events.log_params_accepted(str(path), params)
    click.echo(f"OK: epoch_blocks={params.epoch_blocks} budgets={len(params.budgets)}")


@main.command()
@click.argument("params_file", required=False, type=click.Path(path_type=Path))
@click.option(
    "--at",
    callback=_parse_at,
    help="RFC 3339 timestamp to evaluate (default: now, UTC)",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["text", "json", "yaml"]),
    default="text",
    help="Output format",
)
def collectible(params_file: Optional[Path], at: datetime, output: str):
    """List the budgets collectible at a point in time."""
    path = _resolve_path(params_file)
    params = _load_params(path)

    with tracer.start_as_current_span("budgetcore.collectible"):
        collected = collectible_budgets(params.budgets, at)
        emit_collectible(at, collected)

    BudgetEventLogger(get_config().service_name).log_collected(at, collected, source=str(path))

    rows = [budget.model_dump(mode="json") for budget in collected]
    if output == "json":
        click.echo(json.dumps(rows, indent=2))
    elif output == "yaml":
        click.echo(yaml.safe_dump(rows, sort_keys=False, default_flow_style=False), nl=False)
    else:
        if not collected:
            click.echo("No collectible budgets")
        for budget in collected:
            click.echo(
                f"{budget.name}\t{budget.source_address} -> "
                f"{budget.destination_address}\t{budget.rate}"
            )


@main.command("check-epoch")
@click.argument("value", type=int)
def check_epoch(value: int):
    """Validate an epoch length in blocks."""
    try:
        validate_epoch_blocks(value)
    except BudgetError as exc:
        click.echo(f"Invalid: {exc}", err=True)
        sys.exit(1)
    click.echo(f"OK: epoch_blocks={value}")


if __name__ == "__main__":
    main()
