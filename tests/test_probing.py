import numpy as np
import pytest

from algos.algorithms import find_maximum_subarray, find_maximum_subarray_kad, insertion_sort, merge_sort
from algos.probing import DataPoint, ProbeError, ProbesDict, array, mask_one
from algos.specs import RAW_SPECS, Algorithm, Location, Stage, Type
from algos.utils import np_one_hot, predecessor_to_order


TOY_SPEC = {
    'key': (Stage.INPUT, Location.NODE, Type.SCALAR),
    'best': (Stage.OUTPUT, Location.NODE, Type.MASK_ONE),
    'i': (Stage.HINT, Location.NODE, Type.MASK_ONE),
}


def _filled_toy_probes(hint=None):
    probes = ProbesDict(TOY_SPEC)
    probes.push(Stage.INPUT, {'key': np.array([0.1, 0.2, 0.3])})
    probes.push(Stage.HINT, {'i': mask_one(0, 3) if hint is None else hint})
    probes.push(Stage.OUTPUT, {'best': mask_one(2, 3)})
    return probes


class TestProbesDict:

    def test_push_requires_every_probe_of_the_stage(self):
        probes = ProbesDict(TOY_SPEC)
        with pytest.raises(ProbeError, match='Missing probe'):
            probes.push(Stage.INPUT, {})

    def test_finalize_stacks_hints_and_squeezes_inputs(self):
        probes = _filled_toy_probes()
        probes.push(Stage.HINT, {'i': mask_one(1, 3)})
        probes.finalize()

        assert probes.finalized
        assert probes.num_steps == 2
        assert probes.get('i').shape == (2, 3)
        assert probes.get('key').shape == (3,)
        assert probes[Stage.OUTPUT][Location.NODE]['best']['type_'] == Type.MASK_ONE

    def test_cannot_push_after_finalize(self):
        probes = _filled_toy_probes()
        probes.finalize()
        with pytest.raises(ProbeError):
            probes.push(Stage.HINT, {'i': mask_one(1, 3)})

    def test_cannot_finalize_twice(self):
        probes = _filled_toy_probes()
        probes.finalize()
        with pytest.raises(ProbeError):
            probes.finalize()

    def test_cannot_finalize_without_data(self):
        probes = ProbesDict(TOY_SPEC)
        probes.push(Stage.INPUT, {'key': np.array([1.0])})
        with pytest.raises(ProbeError, match='No data'):
            probes.finalize()

    def test_split_stages_requires_finalize(self):
        with pytest.raises(ProbeError):
            _filled_toy_probes().split_stages()

    def test_split_stages_checks_one_hot(self):
        probes = _filled_toy_probes(hint=np.array([1.0, 1.0, 0.0]))
        probes.finalize()
        with pytest.raises(ProbeError, match='one-hot'):
            probes.split_stages()

    def test_split_stages_checks_mask_values(self):
        probes = _filled_toy_probes(hint=np.array([2.0, 0.0, 0.0]))
        probes.finalize()
        with pytest.raises(ProbeError, match='0|1|-1'):
            probes.split_stages()

    def test_split_stages_returns_sorted_data_points(self):
        probes = _filled_toy_probes()
        probes.finalize()
        inputs, outputs, hints = probes.split_stages()
        assert [dp.name for dp in inputs] == ['key']
        assert [dp.name for dp in outputs] == ['best']
        assert [dp.name for dp in hints] == ['i']
        assert hints[0] == DataPoint('i', Location.NODE, Type.MASK_ONE, np.array([[1.0, 0.0, 0.0]]))
        assert hints[0] != DataPoint('i', Location.NODE, Type.MASK_ONE, np.array([[0.0, 1.0, 0.0]]))


def test_array_probe_points_to_predecessor():
    assert array(np.array([1, 2, 0])).tolist() == [2, 1, 1]
    assert predecessor_to_order(np.array([2, 1, 1])) == [1, 2, 0]
    assert predecessor_to_order(np_one_hot(np.array([2, 1, 1]), 3)) == [1, 2, 0]


def test_mask_one():
    assert mask_one(1, 3).tolist() == [0.0, 1.0, 0.0]
    with pytest.raises(AssertionError):
        mask_one(3, 3)


@pytest.mark.parametrize("name, sort, expected_steps", [
    (Algorithm.insertion_sort, insertion_sort, lambda n: n),
    (Algorithm.merge_sort, merge_sort, lambda n: n),
])
def test_sort_traces(name, sort, expected_steps):
    arr = np.array([0.3, 0.1, 0.2, 0.1, 0.9])
    original = arr.copy()
    probes = ProbesDict(RAW_SPECS[name])
    sort(arr, probes=probes)

    assert probes.finalized
    assert probes.num_steps == expected_steps(len(arr))
    np.testing.assert_array_equal(probes.get('key'), original)
    assert predecessor_to_order(probes.get('pred')) == np.argsort(original, kind='stable').tolist()
    np.testing.assert_array_equal(probes.get('pred_h')[-1], probes.get('pred'))

    trace = probes.to_trace()
    assert trace[Stage.OUTPUT]['pred'].shape == (5, 5)
    assert trace[Stage.HINT]['pred_h'].shape == (expected_steps(len(arr)), 5, 5)


@pytest.mark.parametrize("name, sort", [
    (Algorithm.insertion_sort, insertion_sort),
    (Algorithm.merge_sort, merge_sort),
])
def test_single_element_sort_trace(name, sort):
    probes = ProbesDict(RAW_SPECS[name])
    sort([4.0], probes=probes)
    assert probes.num_steps == 1
    assert probes.get('pred').tolist() == [0]


@pytest.mark.parametrize("name, sort", [
    (Algorithm.insertion_sort, insertion_sort),
    (Algorithm.merge_sort, merge_sort),
])
def test_tracing_empty_sort_raises(name, sort):
    with pytest.raises(ProbeError):
        sort([], probes=ProbesDict(RAW_SPECS[name]))


def test_find_maximum_subarray_trace():
    numbers = [-2, 1, -3, 4, -1, 2, 1, -5, 4]
    probes = ProbesDict(RAW_SPECS[Algorithm.find_maximum_subarray])
    result = find_maximum_subarray(numbers, probes=probes)

    assert result == (3, 6, 6)
    # One hint per solved subrange of the recursion tree
    assert probes.num_steps == 2 * len(numbers) - 1
    assert np.argmax(probes.get('start')) == 3
    assert np.argmax(probes.get('end')) == 6
    assert np.argmax(probes.get('ret_low')[-1]) == 3
    assert np.argmax(probes.get('ret_high')[-1]) == 6
    assert probes.get('ret_sum')[-1] == 6
    probes.split_stages()


def test_kadane_trace():
    numbers = [4, -2, 3, -1, 2, 1, -5, 4]
    probes = ProbesDict(RAW_SPECS[Algorithm.find_maximum_subarray_kad])
    result = find_maximum_subarray_kad(numbers, probes=probes)

    assert result == (0, 5, 7)
    assert probes.num_steps == len(numbers)
    assert probes.get('best_sum').tolist() == [4, 4, 5, 5, 6, 7, 7, 7]
    assert np.argmax(probes.get('start')) == 0
    assert np.argmax(probes.get('end')) == 5
    probes.split_stages()


@pytest.mark.parametrize("search", [find_maximum_subarray, find_maximum_subarray_kad])
def test_tracing_empty_search_raises_index_error(search):
    with pytest.raises(IndexError):
        search([], probes=ProbesDict(RAW_SPECS[search.__name__]))


@pytest.mark.parametrize("name", list(Algorithm))
def test_schemas_use_only_node_and_graph_locations(name):
    assert {loc for _, loc, _ in RAW_SPECS[name].values()} <= set(Location)
    assert set(Location) == {Location.NODE, Location.GRAPH}
