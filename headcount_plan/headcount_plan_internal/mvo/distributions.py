"""
PURPOSE: Triangular distribution sampler for workload, productivity, people-risk and cost inputs.

RESPONSIBILITIES:
- Sample from a three-point (minimum, most likely, maximum) triangular distribution
- Handle the zero-width range (minimum == maximum) by returning the constant
- Hold an explicit, seedable random source so runs are reproducible
- Single responsibility: only sampling, no I/O or aggregation
"""
from typing import Optional, Union

import numpy as np
from scipy.stats import triang

from headcount_plan_internal.mvo.models import RangeValue

RandomSource = Union[int, np.random.Generator, np.random.SeedSequence, None]


def make_rng(random_state: RandomSource = None) -> np.random.Generator:
    """Return a Generator from a seed, a SeedSequence, an existing Generator or None."""
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def _triangular(min_val: float, likely_val: float, max_val: float, size: int, rng: np.random.Generator) -> np.ndarray:
    if not (min_val <= likely_val <= max_val):
        raise ValueError(
            f"triangular parameters must satisfy min <= likely <= max, got ({min_val}, {likely_val}, {max_val})"
        )
    if max_val == min_val:
        return np.full(size, float(min_val))

    # Scipy triangular requires normalized parameters: c = (mode - a) / (b - a)
    scale = max_val - min_val
    c = (likely_val - min_val) / scale
    samples = triang.rvs(c, loc=min_val, scale=scale, size=size, random_state=rng)
    # Floating point on loc + c * scale can land one ulp outside the range.
    return np.clip(samples, min_val, max_val)


class TriangularSampler:
    """Draws triangular samples from RangeValues using its own Generator."""

    def __init__(self, random_state: RandomSource = None):
        """
        Args:
            random_state: Seed, SeedSequence or Generator. None draws fresh OS entropy.
        """
        self.rng = make_rng(random_state)

    def sample(self, range_value: RangeValue) -> float:
        """Draw a single value in [minimum, maximum]."""
        return float(self.sample_many(range_value, 1)[0])

    def sample_many(self, range_value: RangeValue, size: int) -> np.ndarray:
        """Draw `size` independent values; used to vectorise a batch of trials."""
        if size < 1:
            raise ValueError(f"size must be >= 1, got {size}")
        return _triangular(range_value.minimum, range_value.most_likely, range_value.maximum, size, self.rng)

    def sample_fraction(self, range_value: RangeValue, size: int) -> np.ndarray:
        """Draw percentages and return them as fractions (percent / 100)."""
        return self.sample_many(range_value, size) / 100.0

    def uniform(self, low: float, high: float, size: int) -> np.ndarray:
        return self.rng.uniform(low, high, size=size)


# Module-level convenience function for direct import
def sample_triangular(min_val, likely_val, max_val, size=1, random_state: Optional[RandomSource] = None):
    """Module-level wrapper for triangular sampling. Returns a float for size=1, else an array."""
    samples = _triangular(min_val, likely_val, max_val, size, make_rng(random_state))
    if size == 1:
        return float(samples[0])
    return samples


def make_seed_sequence(random_state: RandomSource = None) -> np.random.SeedSequence:
    """
    Root SeedSequence for a multi-candidate run.

    Child streams spawned from it are independent and depend only on the
    spawn order, so parallel and sequential runs give identical results.
    """
    if isinstance(random_state, np.random.SeedSequence):
        return random_state
    if isinstance(random_state, np.random.Generator):
        return np.random.SeedSequence(int(random_state.integers(0, 2**63 - 1)))
    return np.random.SeedSequence(random_state)
