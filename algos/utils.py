from typing import List, Optional
import numpy as np


def np_one_hot(labels: np.ndarray, num_classes: Optional[int] = None) -> np.ndarray:
    """One-hot encode a set of labels.

    Args:
        labels: A numpy array of shape (d1, d2, ..., dn) where each element is an integer label.
        num_classes: The number of classes in the dataset. If not provided, the maximum label value will be used.
    """
    if num_classes is None:
        num_classes = np.max(labels) + 1
    one_hot_encoded = np.eye(num_classes)[labels]

    return one_hot_encoded


def predecessor_to_order(pointers: np.ndarray) -> List[int]:
    """Recovers the node order encoded by predecessor pointers.

    The first node points to itself and every other node points to the node
    right before it, as built by `probing.array`.

    Example:
    ```
    predecessor_to_order(np.array([2, 1, 1]))  # [1, 2, 0]
    ```
    """
    if pointers.ndim == 2:
        pointers = np.argmax(pointers, axis=-1)
    nb_nodes = pointers.shape[0]

    successor = {}
    first = None
    for node, pred in enumerate(pointers):
        if pred == node:
            first = node
        else:
            successor[int(pred)] = node
    assert first is not None, "no node points to itself"

    order = [first]
    while order[-1] in successor:
        order.append(successor[order[-1]])
    assert len(order) == nb_nodes, "pointers do not form a single chain"
    return order
