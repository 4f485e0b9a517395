import abc
import copy
import hashlib
import inspect
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, List, Tuple, Union
import numpy as np
from .specs import RAW_SPECS, AlgorithmEnum
from .probing import ProbesDict
from .sampler import SAMPLER_REGISTRY
from . import algorithms


logger = logging.getLogger(__name__)


class Algorithm(abc.ABC):
    def __init__(self, name: Union[str, AlgorithmEnum], seed: int=42, **sampler_kwargs):
        assert name in list(AlgorithmEnum), f"Algorithm {name} not in {list(AlgorithmEnum)}"
        self._name = AlgorithmEnum(name)
        self._runner: Callable = None
        self._seed = seed

        self._rng = np.random.RandomState(seed)
        self._sampler = SAMPLER_REGISTRY[self.name]
        self._sampler_kwargs = self.clean_sampler_kwargs(sampler_kwargs)

    @property
    def name(self) -> AlgorithmEnum:
        return self._name

    @property
    def rng(self):
        return self._rng

    @property
    def sampler_kwargs(self) -> dict:
        return dict(self._sampler_kwargs)

    def reset(self):
        self._rng = np.random.RandomState(self._seed)

    def clean_sampler_kwargs(self, sampler_overrides: dict) -> dict:
        sampler_args = inspect.signature(self._sampler).parameters
        default_kwargs = copy.deepcopy(self.default_sampler_kwargs)
        default_kwargs.update(sampler_overrides)
        return {k: default_kwargs[k] for k in default_kwargs if k in sampler_args}

    @property
    def default_sampler_kwargs(self) -> dict:
        return {
            'length': 16,
        }

    @property
    def runner(self) -> Callable:
        if self._runner is None:
            self._runner = getattr(algorithms, self.name.value)
        return self._runner

    def sample(self) -> List[Any]:
        """Draws one random input for the algorithm."""
        return self._sampler(self._rng, **self._sampler_kwargs)

    def run(self, *args) -> Tuple[Any, ProbesDict]:
        """Runs the algorithm on `args` with tracing enabled."""
        probes = ProbesDict(RAW_SPECS[self.name])
        result = self.runner(*args, probes=probes)
        logger.debug("Ran %s on %d elements in %d hint steps", self.name.value, len(args[0]), probes.num_steps)
        return result, probes

    def sample_trace(self) -> Tuple[Any, ProbesDict]:
        sample = self.sample()
        logger.debug("Sampled input for %s with %s", self.name.value, self._sampler_kwargs)
        return self.run(*sample)

    def unique_hash(self):
        """
        Returns a unique hash for the algorithm based on its name, seed, and sampler kwargs.
        """
        hash_dict = {
            'name': self.name.value,
            'seed': self._seed,
        }
        hash_dict.update(self._sampler_kwargs)

        sorted_hash_dict = sorted(hash_dict.items())
        return hashlib.md5(str(sorted_hash_dict).encode()).hexdigest()


@dataclass
class AlgorithmConfig:
    name: AlgorithmEnum = AlgorithmEnum.merge_sort
    seed: int = 42                 # Random seed used for input generation
    length: int = 16               # Number of elements per sampled input
    low: float = 0.                # Lower bound of sampled values
    high: float = 1.               # Upper bound of sampled values (exclusive for integers)
    integer: bool = False          # Sample integers instead of floats

    def to_dict(self) -> dict:
        config = asdict(self)
        config['name'] = AlgorithmEnum(self.name).value
        return config

    def get_algorithm(self) -> Algorithm:
        return Algorithm(self.name,
                         seed=self.seed,
                         length=self.length,
                         low=self.low,
                         high=self.high,
                         integer=self.integer)
