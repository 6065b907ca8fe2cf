"""Root pytest configuration for all tests.

Provides deterministic NoiseSource doubles so that generation tests can
predict every height exactly.
"""

from __future__ import annotations

from collections.abc import Iterable

import pytest


class SequenceNoise:
    """NoiseSource replaying a fixed list of perturbations.

    Raises AssertionError when more values are requested than supplied, so
    a test notices if generation consumes an unexpected number of draws.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self.values = list(values)
        self.calls = 0

    def perturbation(self) -> float:
        assert self.calls < len(self.values), "noise sequence exhausted"
        value = self.values[self.calls]
        self.calls += 1
        return value


class ConstantNoise:
    """NoiseSource returning the same perturbation forever."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def perturbation(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def zero_noise() -> ConstantNoise:
    return ConstantNoise(0.0)


@pytest.fixture
def unit_noise() -> ConstantNoise:
    return ConstantNoise(1.0)


@pytest.fixture
def sequence_noise() -> type[SequenceNoise]:
    """Factory: ``sequence_noise([0.5, 0.25])`` builds a SequenceNoise."""
    return SequenceNoise
