"""Sorting algorithms.

Currently implements the following:
- Insertion sort
- Merge sort (von Neumann, 1945)

Both sort a mutable sequence (a list or a 1-D numpy array) in place into
non-decreasing order and are stable. Passing a `ProbesDict` built from the
matching `RAW_SPECS` entry records the run step by step.

See "Introduction to Algorithms" 3ed (CLRS3) for more information.

"""


from typing import MutableSequence, Optional, Sequence
import numpy as np

from ..specs import Stage
from ..probing import ProbesDict, array, check_traceable, mask_one, pos


def insertion_sort(A: MutableSequence, probes: Optional[ProbesDict] = None) -> MutableSequence:
  """Insertion sort.

  Elements are shifted right only while strictly greater than the key, so
  equal elements keep their relative order. O(n^2) in general, O(n) on
  already sorted input. Sorts in place and returns `A`.
  """

  n = len(A)
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
            'i': mask_one(0, n),
            'j': mask_one(0, n)
        })

  for j in range(1, n):
    key = A[j]
    # Insert A[j] into the sorted sequence A[0 .. j - 1]
    i = j - 1
    while i >= 0 and A[i] > key:
      A[i + 1] = A[i]
      A_pos[i + 1] = A_pos[i]
      i -= 1
    A[i + 1] = key
    stor_pos = A_pos[i + 1]
    A_pos[i + 1] = j

    if probes is not None:
      probes.push(
          Stage.HINT,
          next_probe={
              'pred_h': array(np.copy(A_pos)),
              'i': mask_one(stor_pos, n),
              'j': mask_one(j, n)
          })

  if probes is not None:
    probes.push(
        Stage.OUTPUT,
        next_probe={'pred': array(np.copy(A_pos))})
    probes.finalize()

  return A


def merge(left: Sequence,
          right: Sequence,
          merged: MutableSequence,
          left_pos: Optional[Sequence[int]] = None,
          right_pos: Optional[Sequence[int]] = None,
          merged_pos: Optional[MutableSequence[int]] = None) -> MutableSequence:
  """Merges two sorted sequences into `merged`.

  `merged` must already hold `len(left) + len(right)` slots. On ties the left
  element goes first. When positions are given they are merged in lock-step.
  """
  assert len(merged) == len(left) + len(right), "merged buffer has the wrong length"
  track = merged_pos is not None

  i = j = k = 0
  while i < len(left) and j < len(right):
    if left[i] <= right[j]:
      merged[k] = left[i]
      if track:
        merged_pos[k] = left_pos[i]
      i += 1
    else:
      merged[k] = right[j]
      if track:
        merged_pos[k] = right_pos[j]
      j += 1
    k += 1

  while i < len(left):
    merged[k] = left[i]
    if track:
      merged_pos[k] = left_pos[i]
    i += 1
    k += 1

  while j < len(right):
    merged[k] = right[j]
    if track:
      merged_pos[k] = right_pos[j]
    j += 1
    k += 1

  return merged


def merge_sort(A: MutableSequence, probes: Optional[ProbesDict] = None, A_pos=None,
               low=None, high=None, *, is_initial_call: bool = True) -> MutableSequence:
  """Merge sort (von Neumann, 1945).

  Sorts the half-open range [low, high) of `A` in place: both halves around
  `mid = low + (high - low) // 2` are sorted recursively, merged into a fresh
  buffer and copied back. O(n log n) time, O(n) auxiliary space.
  """

  if is_initial_call:
    A_pos = np.arange(len(A))
    low = 0
    high = len(A)
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
              'low': mask_one(0, A_pos.shape[0]),
              'mid': mask_one(0, A_pos.shape[0]),
              'high': mask_one(A_pos.shape[0] - 1, A_pos.shape[0])
          })

  if high - low > 1:
    mid = low + (high - low) // 2
    merge_sort(A, probes, A_pos, low, mid, is_initial_call=False)
    merge_sort(A, probes, A_pos, mid, high, is_initial_call=False)

    merged = [None] * (high - low)
    merged_pos = [None] * (high - low)
    merge(A[low:mid], A[mid:high], merged,
          A_pos[low:mid], A_pos[mid:high], merged_pos)
    A[low:high] = merged
    A_pos[low:high] = merged_pos

    if probes is not None:
      probes.push(
          Stage.HINT,
          next_probe={
              'pred_h': array(np.copy(A_pos)),
              'low': mask_one(A_pos[low], A_pos.shape[0]),
              'mid': mask_one(A_pos[mid], A_pos.shape[0]),
              'high': mask_one(A_pos[high - 1], A_pos.shape[0])
          })

  if is_initial_call and probes is not None:
    probes.push(
        Stage.OUTPUT,
        next_probe={'pred': array(np.copy(A_pos))},
    )
    probes.finalize()

  return A
