"""Numeric capability shared by the sorting and searching algorithms.

The algorithms are generic over the element type of the sequence they are
given. What they need from that type is captured here:

- total ordering and addition (the `Number` protocol);
- a minimum bound, used as the "no candidate yet" sentinel of running maxima;
- a maximum bound and a zero (additive identity).

Sums are accumulated in the element type itself. For numpy integer types an
overflow raises `NumericOverflowError` inside `overflow_checked(bounds)`;
floating point sums overflow to inf. Picking a dtype wide enough for the sums
is up to the caller.
"""

import contextlib
import math
import sys
from typing import Any, Iterator, NamedTuple, Protocol, Sequence, Union

import numpy as np


class Number(Protocol):
  """Static contract of a value the algorithms can order and accumulate."""

  def __lt__(self, other: Any) -> bool: ...

  def __le__(self, other: Any) -> bool: ...

  def __gt__(self, other: Any) -> bool: ...

  def __ge__(self, other: Any) -> bool: ...

  def __add__(self, other: Any) -> Any: ...


Numeric = Union[int, float, np.integer, np.floating]


class NumericBounds(NamedTuple):
  """Extremes and additive identity of a numeric type."""
  min: Numeric
  max: Numeric
  zero: Numeric


class NumericOverflowError(ArithmeticError):
  """Raised when a running sum leaves the range of its element type."""
  pass


def _dtype_bounds(dtype: np.dtype) -> NumericBounds:
  if np.issubdtype(dtype, np.integer):
    info = np.iinfo(dtype)
  elif np.issubdtype(dtype, np.floating):
    info = np.finfo(dtype)
  else:
    raise TypeError(f'Unsupported numeric dtype {dtype}.')
  return NumericBounds(min=dtype.type(info.min),
                       max=dtype.type(info.max),
                       zero=dtype.type(0))


def bounds_of(A: Sequence[Numeric]) -> NumericBounds:
  """Returns the numeric bounds of the element type of `A`.

  numpy arrays are resolved from their dtype. Plain Python sequences are
  resolved from their first element: `float` maps to the finite double range,
  `int` has no representable bound and maps to -inf/+inf.
  """
  if isinstance(A, np.ndarray):
    return _dtype_bounds(A.dtype)

  sample = A[0]
  if isinstance(sample, (np.integer, np.floating)):
    return _dtype_bounds(np.dtype(type(sample)))
  if isinstance(sample, bool):
    raise TypeError('Booleans are not a numeric type for these algorithms.')
  if isinstance(sample, int):
    return NumericBounds(min=-math.inf, max=math.inf, zero=0)
  if isinstance(sample, float):
    return NumericBounds(min=-sys.float_info.max,
                         max=sys.float_info.max,
                         zero=0.0)
  raise TypeError(f'Unsupported numeric type {type(sample).__name__}.')


def minimum_bound(A: Sequence[Numeric]) -> Numeric:
  return bounds_of(A).min


def maximum_bound(A: Sequence[Numeric]) -> Numeric:
  return bounds_of(A).max


def zero(A: Sequence[Numeric]) -> Numeric:
  return bounds_of(A).zero


@contextlib.contextmanager
def overflow_checked(bounds: NumericBounds) -> Iterator[None]:
  """Turns silent numpy integer overflow into `NumericOverflowError`.

  Floating point types keep IEEE semantics: a sum past the finite range
  becomes +/-inf instead of raising.
  """
  over = 'raise' if isinstance(bounds.zero, np.integer) else 'ignore'
  try:
    with np.errstate(over=over):
      yield
  except FloatingPointError as e:
    raise NumericOverflowError(str(e)) from e
