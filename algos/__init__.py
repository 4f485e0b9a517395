"""Classic array algorithms: insertion sort, merge sort and maximum subarray search."""

from .algorithms import find_cross_subarray
from .algorithms import find_maximum_subarray
from .algorithms import find_maximum_subarray_kad
from .algorithms import insertion_sort
from .algorithms import merge
from .algorithms import merge_sort

from .algorithm import Algorithm, AlgorithmConfig
from .probing import ProbesDict, ProbeError
from .number import NumericOverflowError
