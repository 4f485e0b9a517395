"""Divide and conquer algorithms.

Currently implements the following:
- Maximum subarray
- Kadane's variant of Maximum subarray (Bentley, 1984)

Both return `(left, right, sum)` with inclusive bounds. Sums are accumulated
in the element type of the input; for numpy integer dtypes an overflow raises
`NumericOverflowError`; floating point sums overflow to inf.

See "Introduction to Algorithms" 3ed (CLRS3) for more information.

"""

from typing import Optional, Sequence
import numpy as np

from ..number import Number, NumericBounds, bounds_of, overflow_checked
from ..specs import Stage, Subarray
from ..probing import ProbesDict, array, check_traceable, mask_one, pos


def _check_range(A: Sequence[Number], low: int, high: int) -> None:
  n = len(A)
  if n == 0:
    raise IndexError('Maximum subarray of an empty sequence.')
  if not 0 <= low <= high < n:
    raise IndexError(f'Invalid range [{low}, {high}] for a sequence of length {n}.')


def find_cross_subarray(A: Sequence[Number], low: int, mid: int, high: int,
                        bounds: Optional[NumericBounds] = None) -> Subarray:
  """Maximum subarray of A[low..high] that contains both A[mid] and A[mid + 1].

  The best suffix of A[low..mid] and the best prefix of A[mid + 1..high] are
  found independently and concatenated. Each scan starts from the minimum
  bound of the element type and only moves on a strict improvement, so the
  shortest best range is kept.
  """
  if bounds is None:
    bounds = bounds_of(A)

  with overflow_checked(bounds):
    left_sum = bounds.min
    sum_ = bounds.zero
    max_left = mid
    for i in range(mid, low - 1, -1):
      sum_ += A[i]
      if sum_ > left_sum:
        left_sum = sum_
        max_left = i

    right_sum = bounds.min
    sum_ = bounds.zero
    max_right = mid + 1
    for j in range(mid + 1, high + 1):
      sum_ += A[j]
      if sum_ > right_sum:
        right_sum = sum_
        max_right = j

    return max_left, max_right, left_sum + right_sum


def _find_maximum_subarray(A: Sequence[Number], low: int, high: int,
                           bounds: NumericBounds,
                           probes: Optional[ProbesDict]) -> Subarray:
  n = len(A)

  if low == high:
    best = (low, high, A[low])
    mid = low
    cross = (low, high, 0.0)
  else:
    mid = (low + high) // 2
    (left_low, left_high,
     left_sum) = _find_maximum_subarray(A, low, mid, bounds, probes)
    (right_low, right_high,
     right_sum) = _find_maximum_subarray(A, mid + 1, high, bounds, probes)
    cross = find_cross_subarray(A, low, mid, high, bounds)
    cross_sum = cross[2]

    if left_sum >= right_sum and left_sum >= cross_sum:
      best = (left_low, left_high, left_sum)
    elif right_sum >= left_sum and right_sum >= cross_sum:
      best = (right_low, right_high, right_sum)
    else:
      best = cross

  if probes is not None:
    probes.push(
        Stage.HINT,
        next_probe={
            'pred_h': array(np.arange(n)),
            'low': mask_one(low, n),
            'mid': mask_one(mid, n),
            'high': mask_one(high, n),
            'cross_low': mask_one(cross[0], n),
            'cross_high': mask_one(cross[1], n),
            'cross_sum': cross[2],
            'ret_low': mask_one(best[0], n),
            'ret_high': mask_one(best[1], n),
            'ret_sum': best[2]
        })

  return best


def find_maximum_subarray(A: Sequence[Number], low: Optional[int] = None,
                          high: Optional[int] = None,
                          probes: Optional[ProbesDict] = None) -> Subarray:
  """Maximum subarray.

  Finds the contiguous range within A[low..high] (inclusive, defaulting to
  the whole sequence) with the largest sum. The range is split at
  `mid = (low + high) // 2`; of the best left, right and crossing ranges the
  first maximal one in that order wins. O(n log n).

  Raises `IndexError` on an empty sequence or a range outside [0, len(A)).
  """
  if low is None:
    low = 0
  if high is None:
    high = len(A) - 1
  _check_range(A, low, high)

  if probes is not None:
    check_traceable(A)
    probes.push(
        Stage.INPUT,
        next_probe={
            'pos': pos(np.arange(len(A))),
            'key': np.array(A)
        })

  best = _find_maximum_subarray(A, low, high, bounds_of(A), probes)

  if probes is not None:
    probes.push(
        Stage.OUTPUT,
        next_probe={
            'start': mask_one(best[0], len(A)),
            'end': mask_one(best[1], len(A))
        })
    probes.finalize()

  return best


def find_maximum_subarray_kad(A: Sequence[Number], probes: Optional[ProbesDict] = None) -> Subarray:
  """Kadane's variant of Maximum subarray (Bentley, 1984).

  Single pass: the running sum restarts at the current element whenever that
  element alone beats extending the run. Only a strictly larger sum moves the
  recorded range, so the earliest maximal range is kept. O(n) time, O(1)
  space. Raises `IndexError` on an empty sequence.
  """

  best_sum = A[0]
  n = len(A)
  bounds = bounds_of(A)

  A_pos = np.arange(n)
  if probes is not None:
    check_traceable(A)
    probes.push(
        Stage.INPUT,
        next_probe={
            'pos': pos(A_pos),
            'key': np.array(A)
        })
    probes.push(
        Stage.HINT,
        next_probe={
            'pred_h': array(np.copy(A_pos)),
            'best_low': mask_one(0, n),
            'best_high': mask_one(0, n),
            'best_sum': A[0],
            'i': mask_one(0, n),
            'j': mask_one(0, n),
            'sum': A[0]
        })

  best_low = 0
  best_high = 0
  i = 0
  sum_ = A[0]

  with overflow_checked(bounds):
    for j in range(1, n):
      x = A[j]
      extended = sum_ + x
      if x > extended:
        i = j
        sum_ = x
      else:
        sum_ = extended
      if sum_ > best_sum:
        best_low = i
        best_high = j
        best_sum = sum_

      if probes is not None:
        probes.push(
            Stage.HINT,
            next_probe={
                'pred_h': array(np.copy(A_pos)),
                'best_low': mask_one(best_low, n),
                'best_high': mask_one(best_high, n),
                'best_sum': best_sum,
                'i': mask_one(i, n),
                'j': mask_one(j, n),
                'sum': sum_
            })

  if probes is not None:
    probes.push(
        Stage.OUTPUT,
        next_probe={
            'start': mask_one(best_low, n),
            'end': mask_one(best_high, n)
        })
    probes.finalize()

  return best_low, best_high, best_sum
