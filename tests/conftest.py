"""
Shared pytest configuration and fixtures for server-matchers tests.

This file contains:
- A deterministic fake clock for calibration and benchmark tests
- The matcher registry, injected as the composition root
- Markers for different test categories
"""

from pathlib import Path
import sys

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from server_matchers import ConfigSchema, MatcherRegistry  # noqa: E402
from server_matchers.config import BenchmarkConfig  # noqa: E402


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "performance: Tests that time real callables")
    config.addinivalue_line("markers", "slow: Tests that take longer than a second")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "performance" in str(item.fspath):
            item.add_marker(pytest.mark.performance)
        else:
            item.add_marker(pytest.mark.unit)


class FakeClock:
    """Clock that only moves when told to.

    Subjects call ``advance`` to simulate a fixed per-call cost. Costs that
    are powers of two keep the arithmetic exact.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.current = start
        self.reads = 0

    def now(self) -> float:
        self.reads += 1
        return self.current

    def elapsed(self, start: float) -> float:
        return self.now() - start

    def advance(self, seconds: float) -> None:
        self.current += seconds


class CallCounter:
    """Zero-argument subject that advances a fake clock by a fixed cost."""

    def __init__(self, clock: FakeClock, cost: float) -> None:
        self.clock = clock
        self.cost = cost
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1
        self.clock.advance(self.cost)


@pytest.fixture()
def fake_clock():
    """Provide a fresh fake clock."""
    return FakeClock()


@pytest.fixture()
def subject_factory(fake_clock):
    """Build fake-clock subjects with a given per-call cost."""

    def _factory(cost: float) -> CallCounter:
        return CallCounter(fake_clock, cost)

    return _factory


@pytest.fixture()
def test_config():
    """Configuration with the default calibration floor and a 0.1s window."""
    return ConfigSchema(
        benchmark=BenchmarkConfig(
            min_sample_seconds=0.01,
            clock_target_seconds=0.1,
            max_calibration_rounds=10,
        )
    )


@pytest.fixture()
def registry(test_config, fake_clock):
    """Registry wired to the fake clock."""
    return MatcherRegistry(config=test_config, clock=fake_clock)


@pytest.fixture()
def real_registry(test_config):
    """Registry wired to the system clock."""
    return MatcherRegistry(config=test_config)
