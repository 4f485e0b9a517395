from typing import Dict, List, NamedTuple, Sequence, Tuple, Union
import numpy as np
from .specs import Location, Stage, Type, Trace, Spec
from .utils import np_one_hot

Array = np.ndarray
Data = Union[Array, List[Array]]
DataOrType = Union[Data, Type]
ProbeKey = str
NextProbe = Dict[ProbeKey, Data]
ProbeValue = Dict[str, DataOrType]
Probe = Dict[ProbeKey, ProbeValue]
StageProbes = Dict[Location, Probe]
ProbesDictType = Dict[Stage, StageProbes]


class DataPoint(NamedTuple):
  """Describes a data point."""
  name: ProbeKey
  location: Location
  type_: Type
  data: Array

  def __repr__(self) -> str:
    return f"DataPoint(name={self.name}, location={self.location}, type_={self.type_}, data={self.data.shape})"

  def is_compatible_with(self, other: 'DataPoint') -> bool:
    """Checks if this DataPoint has the same name, location and type as another.

    The actual data content is not compared.
    """
    if not isinstance(other, DataPoint):
        return False
    return (self.name == other.name and
            self.location == other.location and
            self.type_ == other.type_)

  def __ne__(self, other: 'DataPoint') -> bool:
    return not self.__eq__(other)

  def __eq__(self, other: 'DataPoint') -> bool:
    if not isinstance(other, DataPoint):
        return False

    if self.data.shape != other.data.shape:
        data_close = False
    else:
        data_close = np.allclose(self.data, other.data)

    return self.is_compatible_with(other) and data_close


class ProbeError(Exception):
    """Custom exception for errors during probe operations."""
    pass


class ProbesDict:
    """
    Manages a collection of probes, organized by stage and location,
    corresponding to a given trace schema. Provides dictionary-like access.
    """

    def __init__(self, spec: Spec):
        """Initializes the ProbesDict structure based on the provided spec."""
        self._probes: ProbesDictType = {}
        self._finalized: bool = False
        self.spec: Spec = spec

        for stage in Stage:
            self._probes[stage] = {}
            for loc in Location:
                self._probes[stage][loc] = {}

        for name, (stage, loc, type_) in spec.items():
            self._probes[stage][loc][name] = {'data': [], 'type_': type_}

    def push(self, stage: Stage, next_probe: NextProbe):
        """Pushes a probe into an existing `ProbesDict`."""
        if self._finalized:
            raise ProbeError('Attemping to push to finalized `ProbesDict`.')
        for loc in Location:
            for name in self._probes[stage][loc]:
                if name not in next_probe:
                    raise ProbeError(f'Missing probe for {name}.')
                self._probes[stage][loc][name]['data'].append(next_probe[name])

    def finalize(self):
        """Finalizes the ProbesDict by converting list data into NumPy arrays."""
        if self._finalized:
            raise ProbeError('Attempting to re-finalize a finalized ProbesDict.')

        for stage in Stage:
            for loc in Location:
                for name, probe_info in self._probes[stage][loc].items():
                    current_data = probe_info['data']
                    if not current_data:
                        raise ProbeError(f'No data pushed for probe {name}.')
                    if stage == Stage.HINT:
                        probe_info['data'] = np.stack(current_data)
                    else:
                        probe_info['data'] = np.squeeze(np.array(current_data), axis=0)
        self._finalized = True

    def __getitem__(self, stage: Stage) -> StageProbes:
        """
        Allows dictionary-style access by stage (e.g., probes[Stage.INPUT]).
        Returns the inner dictionary for that stage, allowing further nested access.
        """
        return self._probes[stage]

    @property
    def finalized(self) -> bool:
        """Returns True if the ProbesDict has been finalized."""
        return self._finalized

    @property
    def num_steps(self) -> int:
        """Number of hint steps recorded so far."""
        for probe in self._probes[Stage.HINT].values():
            for probe_info in probe.values():
                return len(probe_info['data'])
        return 0

    def get(self, name: ProbeKey) -> Array:
        """Returns the data of a probe by name, wherever it lives."""
        stage, loc, _ = self.spec[name]
        return self._probes[stage][loc][name]['data']

    def split_stages(self) -> Tuple[List[DataPoint], List[DataPoint], List[DataPoint]]:
        """Splits the ProbesDict into input, output, and hint probes."""
        if not self.finalized:
            raise ProbeError('ProbesDict must be finalized before splitting into stages.')
        inputs = []
        outputs = []
        hints = []

        for name in self.spec:
            stage, loc, t = self.spec[name]

            if t != self._probes[stage][loc][name]['type_']:
                raise ProbeError(f'Probe {name} of incorrect type {t}.')

            data = self._probes[stage][loc][name]['data']

            if t in [Type.MASK, Type.MASK_ONE, Type.CATEGORICAL]:
                if not ((data == 0) | (data == 1) | (data == -1)).all():
                    raise ProbeError(f'0|1|-1 `data` for probe "{name}"')
            if t in [Type.MASK_ONE, Type.CATEGORICAL] and not np.all(np.sum(np.abs(data), -1) == 1):
                raise ProbeError(f'Expected one-hot `data` for probe "{name}"')

            if t == Type.POINTER:
              # Pointers are always handed out one-hot encoded
              data = np_one_hot(data.astype(int), data.shape[-1])

            data_point = DataPoint(name=name, location=loc, type_=t, data=data)

            if stage == Stage.INPUT:
              inputs.append(data_point)
            elif stage == Stage.OUTPUT:
              outputs.append(data_point)
            else:
              hints.append(data_point)

        inputs = sorted(inputs, key=lambda x: x.name)
        outputs = sorted(outputs, key=lambda x: x.name)
        hints = sorted(hints, key=lambda x: x.name)
        return inputs, outputs, hints

    def to_trace(self) -> Trace:
        """Flattens the probes into stage -> (name -> data), with pointers one-hot encoded."""
        inputs, outputs, hints = self.split_stages()
        trace: Trace = {}
        for stage, data_points in zip((Stage.INPUT, Stage.OUTPUT, Stage.HINT), (inputs, outputs, hints)):
            trace[stage] = {dp.name: dp.data for dp in data_points}
        return trace


def check_traceable(A: Sequence) -> None:
  """Tracing needs at least one node to point at."""
  if len(A) == 0:
    raise ProbeError('Cannot trace an empty sequence.')


def pos(A_pos: np.ndarray) -> np.ndarray:
  """Constructs the `pos` input probe."""
  return np.copy(A_pos) * 1.0 / A_pos.shape[0]


def array(A_pos: np.ndarray) -> np.ndarray:
  """Constructs an `array` probe."""
  probe = np.arange(A_pos.shape[0])
  for i in range(1, A_pos.shape[0]):
    probe[A_pos[i]] = A_pos[i - 1]
  return probe


def mask_one(i: int, n: int) -> np.ndarray:
  """Constructs a `mask_one` probe."""
  assert n > i
  probe = np.zeros(n)
  probe[i] = 1
  return probe
