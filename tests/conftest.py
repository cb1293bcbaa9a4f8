"""
Pytest configuration and fixtures for budgetcore tests.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Generator

import pytest

from budgetcore.budget.loader import ParamsLoader
from budgetcore.budget.schema import Budget, must_parse_rfc3339
from budgetcore.config import reset_config


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def test_env() -> Dict[str, str]:
    """Test environment variables."""
    return {
        "BUDGETCORE_LOG_LEVEL": "error",
        "BUDGETCORE_LOG_FORMAT": "text",
    }


@pytest.fixture(autouse=True)
def set_test_env(test_env: Dict[str, str]) -> Generator[None, None, None]:
    """Set test environment variables and reset global state for each test."""
    original = {}
    for key, value in test_env.items():
        original[key] = os.environ.get(key)
        os.environ[key] = value
    reset_config()
    ParamsLoader.clear_cache()

    yield

    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    reset_config()
    ParamsLoader.clear_cache()
    # CLI runs bind handlers to streams that are closed after the run.
    for name in ("budgetcore", "budgetcore.events"):
        logging.getLogger(name).handlers.clear()


# ============================================================================
# Budget Fixtures
# ============================================================================


SOURCE_1 = "source1"
SOURCE_2 = "source2"
DESTINATION_1 = "destination1"
DESTINATION_2 = "destination2"


def make_budget(
    name: str,
    rate: str,
    source: str,
    start: str,
    end: str,
    destination: str = DESTINATION_2,
) -> Budget:
    return Budget(
        name=name,
        rate=rate,
        source_address=source,
        destination_address=destination,
        start_time=must_parse_rfc3339(start),
        end_time=must_parse_rfc3339(end),
    )


@pytest.fixture
def budgets() -> list[Budget]:
    """Reference budget records shared by validator and query tests."""
    return [
        make_budget("test", "1", SOURCE_1, "2021-08-01T00:00:00Z", "2021-08-03T00:00:00Z",
                    destination=DESTINATION_1),
        make_budget("test1", "1", SOURCE_2, "2021-07-01T00:00:00Z", "2021-07-10T00:00:00Z"),
        make_budget("test2", "0.1", SOURCE_2, "2021-07-01T00:00:00Z", "2021-07-10T00:00:00Z"),
        make_budget("test3", "0.1", SOURCE_2, "2021-08-01T00:00:00Z", "2021-08-10T00:00:00Z"),
        make_budget("test4", "1", SOURCE_2, "2021-08-01T00:00:00Z", "2021-08-20T00:00:00Z"),
        make_budget("test5", "0.1", SOURCE_2, "2021-08-19T00:00:00Z", "2021-08-25T00:00:00Z"),
    ]


PARAMS_YAML = """\
epoch_blocks: 1
budgets:
  - name: test4
    rate: "1"
    source_address: source2
    destination_address: destination2
    start_time: "2021-08-01T00:00:00Z"
    end_time: "2021-08-20T00:00:00Z"
  - name: test5
    rate: "0.1"
    source_address: source1
    destination_address: destination2
    start_time: "2021-08-19T00:00:00Z"
    end_time: "2021-08-25T00:00:00Z"
"""

INVALID_PARAMS_YAML = """\
epoch_blocks: 1
budgets:
  - name: test4
    rate: "1"
    source_address: source2
    destination_address: destination2
    start_time: "2021-08-01T00:00:00Z"
    end_time: "2021-08-20T00:00:00Z"
  - name: test5
    rate: "0.1"
    source_address: source2
    destination_address: destination2
    start_time: "2021-08-19T00:00:00Z"
    end_time: "2021-08-25T00:00:00Z"
"""


@pytest.fixture
def budget_factory():
    """Builder for ad-hoc budget records."""
    return make_budget


@pytest.fixture
def params_yaml() -> str:
    return PARAMS_YAML


@pytest.fixture
def invalid_params_yaml() -> str:
    return INVALID_PARAMS_YAML
