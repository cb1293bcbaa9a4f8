"""
Budget parameter files: YAML in, structurally checked ``Params`` out.

A params file holds the two fields owned by the configuration layer,
``epoch_blocks`` and ``budgets``.  Parsed sets are kept per resolved path so
the CLI and the epoch trigger can re-read the same file cheaply.  Parsing
checks shape only: duplicate names and overlapping rates are left to
:func:`~budgetcore.budget.validator.validate_params`, which the caller runs
before accepting the set.

Usage::

    from budgetcore.budget.loader import ParamsLoader

    params = ParamsLoader().load(Path("budget-params.yaml"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, ClassVar

import yaml

from budgetcore.budget.schema import Params

logger = logging.getLogger(__name__)


def _to_params(raw: Any, origin: str) -> Params:
    if not isinstance(raw, dict):
        raise TypeError(
            f"{origin}: budget params must be a mapping with epoch_blocks and "
            f"budgets, got {type(raw).__name__}"
        )
    return Params.model_validate(raw)


class ParamsLoader:
    """Reads budget params files, keeping one parsed set per resolved path."""

    _cache: ClassVar[dict[str, Params]] = {}

    @classmethod
    def clear_cache(cls) -> None:
        """Forget every parsed set so the next ``load`` re-reads from disk."""
        cls._cache.clear()

    def load(self, path: Path) -> Params:
        """Parse the params file at ``path``.

        Raises:
            FileNotFoundError: No file at ``path``.
            TypeError: The document root is not a mapping.
            yaml.YAMLError: The file is not YAML.
            pydantic.ValidationError: Fields are missing, unknown or mistyped.
        """
        key = str(path.resolve())
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Reusing parsed budget params for %s", key)
            return cached

        if not path.is_file():
            raise FileNotFoundError(f"Budget params file not found: {path}")

        params = _to_params(yaml.safe_load(path.read_text()), str(path))
        self._cache[key] = params
        logger.debug(
            "Parsed %s: %d budget(s), epoch length %d blocks",
            path,
            len(params.budgets),
            params.epoch_blocks,
        )
        return params

    def load_from_string(self, yaml_str: str) -> Params:
        """Parse an inline params document; nothing is cached."""
        return _to_params(yaml.safe_load(yaml_str), "<inline>")
