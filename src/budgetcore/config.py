"""
Centralized configuration for budgetcore.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (BUDGETCORE_*)
3. .env file
4. Default values

Example:
    from budgetcore.config import get_config

    config = get_config()
    print(config.params_file)  # From BUDGETCORE_PARAMS_FILE or default
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BudgetCoreConfig(BaseSettings):
    """
    Central configuration for budgetcore.

    All settings can be overridden via environment variables
    prefixed with BUDGETCORE_.

    Example:
        export BUDGETCORE_PARAMS_FILE=/etc/budget/params.yaml
        export BUDGETCORE_LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="BUDGETCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = Field(
        default="budgetcore",
        description="Service name for log and telemetry attribution",
    )

    params_file: str = Field(
        default="budget-params.yaml",
        description="Budget parameter file used when none is given",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for budgetcore",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format (json for log shippers, text for console)",
    )

    @field_validator("params_file")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    def get_params_path(self) -> Path:
        return Path(self.params_file)


# Global singleton
_config: Optional[BudgetCoreConfig] = None


def get_config(**overrides) -> BudgetCoreConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.
    """
    global _config

    if overrides or _config is None:
        _config = BudgetCoreConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
