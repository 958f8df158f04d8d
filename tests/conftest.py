import pytest

from GenericAVL.kernels import NIL


def height(tree, index):
    if index == NIL:
        return -1
    return 1 + max(height(tree, tree.get_left(index)), height(tree, tree.get_right(index)))

def check_node(tree, index, low=None, high=None):
    """Walk the subtree at `index` and return how many nodes it holds."""

    if index == NIL:
        return 0

    key, left, right, cached = tree.get_node(index)
    assert low is None or low < key
    assert high is None or key < high
    assert cached == height(tree, index)
    assert abs(height(tree, left) - height(tree, right)) <= 1

    return 1 + check_node(tree, left, low, key) + check_node(tree, right, key, high)

def _check_tree(tree):
    assert check_node(tree, tree.root) == len(tree)
    assert tree.is_valid()


@pytest.fixture
def check_tree():
    return _check_tree
