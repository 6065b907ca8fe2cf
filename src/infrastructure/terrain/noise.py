"""numpy-backed NoiseSource.

Draws uniform perturbations in [0, amplitude) from a numpy Generator.
Seeded sources replay the same sequence, which makes generation
reproducible end to end.
"""

from __future__ import annotations

import numpy as np

DEFAULT_NOISE_AMPLITUDE = 0.25


class UniformNoiseSource:
    """Uniform perturbations in [0, amplitude).

    Parameters
    ----------
    amplitude: float
        Upper bound of the perturbation; the same at every level.
    seed: int | None
        Seed for ``numpy.random.default_rng``. None draws fresh entropy.
    """

    def __init__(
        self, amplitude: float = DEFAULT_NOISE_AMPLITUDE, seed: int | None = None
    ) -> None:
        if amplitude < 0:
            raise ValueError(f"amplitude must be >= 0, got {amplitude}")
        self.amplitude = amplitude
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def perturbation(self) -> float:
        return float(self._rng.random()) * self.amplitude
