"""Sorting and maximum subarray algorithm implementations."""

from .divide_and_conquer import find_cross_subarray
from .divide_and_conquer import find_maximum_subarray
from .divide_and_conquer import find_maximum_subarray_kad

from .sorting import insertion_sort
from .sorting import merge
from .sorting import merge_sort
