from typing import List
import numpy as np
from .probing import Array


def random_sequence(rng: np.random.RandomState, length, low=0.0, high=1.0):
    """Random sequence."""
    return rng.uniform(low=low, high=high, size=(length,))

def random_integers(rng: np.random.RandomState, length, low=0, high=100):
    """Random integer sequence in [low, high)."""
    return rng.randint(low, high=high, size=(length,))

def _sample(rng: np.random.RandomState, length: int, low, high, integer: bool) -> Array:
    if integer:
        return random_integers(rng=rng, length=length, low=int(low), high=int(high))
    return random_sequence(rng=rng, length=length, low=low, high=high)

# Divide and Conquer
def max_subarray_sampler(
    rng: np.random.RandomState,
    length: int,
    low: float = -1.,
    high: float = 1.,
    integer: bool = False,
) -> List[Array]:
    arr = _sample(rng, length, low, high, integer)
    return [arr]

# Sorting
def sorting_sampler(
    rng: np.random.RandomState,
    length: int,
    low: float = 0.,
    high: float = 1.,
    integer: bool = False,
) -> List[Array]:
    arr = _sample(rng, length, low, high, integer)
    return [arr]


SAMPLER_REGISTRY = {
    # Divide and Conquer
    'find_maximum_subarray': max_subarray_sampler,
    'find_maximum_subarray_kad': max_subarray_sampler,

    # Sorting
    'insertion_sort': sorting_sampler,
    'merge_sort': sorting_sampler,
}
