"""Pytest configuration and fixtures."""

import pytest

from savingsube.kit import SavingsCELOWithUbeKit, new_savings_celo_with_ube_kit
from tests.helpers.constants import WRAPPER
from tests.helpers.world import FakeWorld


@pytest.fixture
def world() -> FakeWorld:
    """Fresh simulated deployment with an empty pool."""
    return FakeWorld()


@pytest.fixture
def kit(world: FakeWorld) -> SavingsCELOWithUbeKit:
    """Kit wired to the simulated wrapper, CELO resolved via the registry."""
    return new_savings_celo_with_ube_kit(world.chain, WRAPPER)
