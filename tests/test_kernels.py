import numpy as np
import pytest

from GenericAVL.kernels import (
    NIL,
    balance,
    balance_factor,
    inorder_indices,
    is_balanced,
    left_right_rotation,
    left_rotation,
    leftmost,
    postorder_indices,
    preorder_indices,
    right_left_rotation,
    right_rotation,
    rightmost,
)


def arena(size, links, heights):
    """links: {slot: (left, right)}, heights: {slot: height}"""

    left   = np.zeros(size, dtype=np.int64)
    right  = np.zeros(size, dtype=np.int64)
    height = np.zeros(size, dtype=np.int64)
    height[NIL] = -1

    for slot, (l, r) in links.items():
        left[slot]  = l
        right[slot] = r
    for slot, h in heights.items():
        height[slot] = h

    return left, right, height


def test_right_rotation_promotes_left_child():
    # 1 -> 2 -> 3 down the left side
    left, right, height = arena(4, {1: (2, NIL), 2: (3, NIL)}, {1: 2, 2: 1, 3: 0})

    root = right_rotation(left, right, height, 1)

    assert root == 2
    assert (left[2], right[2]) == (3, 1)
    assert (left[1], right[1]) == (NIL, NIL)
    assert (height[1], height[2], height[3]) == (0, 1, 0)


def test_right_rotation_moves_inner_subtree():
    # 2's right child 4 becomes 1's left child
    left, right, height = arena(
        6,
        {1: (2, 5), 2: (3, 4)},
        {1: 2, 2: 1, 3: 0, 4: 0, 5: 0},
    )

    root = right_rotation(left, right, height, 1)

    assert root == 2
    assert left[1] == 4
    assert right[2] == 1
    assert height[1] == 1
    assert height[2] == 2


def test_left_rotation_promotes_right_child():
    left, right, height = arena(4, {1: (NIL, 2), 2: (NIL, 3)}, {1: 2, 2: 1, 3: 0})

    root = left_rotation(left, right, height, 1)

    assert root == 2
    assert (left[2], right[2]) == (1, 3)
    assert (height[1], height[2]) == (0, 1)


def test_left_right_rotation():
    left, right, height = arena(4, {1: (2, NIL), 2: (NIL, 3)}, {1: 2, 2: 1, 3: 0})

    root = left_right_rotation(left, right, height, 1)

    assert root == 3
    assert (left[3], right[3]) == (2, 1)
    assert (height[1], height[2], height[3]) == (0, 0, 1)


def test_right_left_rotation():
    left, right, height = arena(4, {1: (NIL, 2), 2: (3, NIL)}, {1: 2, 2: 1, 3: 0})

    root = right_left_rotation(left, right, height, 1)

    assert root == 3
    assert (left[3], right[3]) == (1, 2)
    assert height[3] == 1


def test_balance_picks_double_rotation_for_zig_zag():
    left, right, height = arena(4, {1: (2, NIL), 2: (NIL, 3)}, {1: 2, 2: 1, 3: 0})

    assert balance(left, right, height, 1) == 3


def test_balance_tie_favors_single_rotation():
    # Left child has two equally tall children
    left, right, height = arena(5, {1: (2, NIL), 2: (3, 4)}, {1: 2, 2: 1, 3: 0, 4: 0})

    root = balance(left, right, height, 1)

    assert root == 2
    assert right[2] == 1
    assert left[1] == 4
    assert (height[1], height[2]) == (1, 2)


def test_balance_tie_on_the_right():
    left, right, height = arena(5, {1: (NIL, 2), 2: (3, 4)}, {1: 2, 2: 1, 3: 0, 4: 0})

    root = balance(left, right, height, 1)

    assert root == 2
    assert left[2] == 1
    assert right[1] == 3


def test_balance_refreshes_height_only_when_balanced():
    left, right, height = arena(4, {1: (2, 3)}, {1: 7, 2: 0, 3: 0})

    assert balance(left, right, height, 1) == 1
    assert height[1] == 1
    assert balance_factor(left, right, height, 1) == 0


def test_balance_nil_is_noop():
    left, right, height = arena(2, {}, {})

    assert balance(left, right, height, NIL) == NIL
    assert height[NIL] == -1


@pytest.fixture
def small_arena():
    #       1
    #     2   3
    #   4
    return arena(5, {1: (2, 3), 2: (4, NIL)}, {1: 2, 2: 1, 3: 0, 4: 0})


def test_traversals(small_arena):
    left, right, _ = small_arena

    assert list(preorder_indices(left, right, 1, 4)) == [1, 2, 4, 3]
    assert list(inorder_indices(left, right, 1, 4)) == [4, 2, 1, 3]
    assert list(postorder_indices(left, right, 1, 4)) == [4, 2, 3, 1]


def test_traversals_of_empty_tree(small_arena):
    left, right, _ = small_arena

    assert preorder_indices(left, right, NIL, 0).size == 0
    assert inorder_indices(left, right, NIL, 0).size == 0
    assert postorder_indices(left, right, NIL, 0).size == 0


def test_leftmost_rightmost(small_arena):
    left, right, _ = small_arena

    assert leftmost(left, 1) == 4
    assert rightmost(right, 1) == 3
    assert leftmost(left, NIL) == NIL
    assert rightmost(right, NIL) == NIL


def test_is_balanced(small_arena):
    left, right, height = small_arena

    assert is_balanced(left, right, height, 1, 4)
    assert not is_balanced(left, right, height, 1, 3)

    height[2] = 5
    assert not is_balanced(left, right, height, 1, 4)


def test_is_balanced_rejects_chain():
    left, right, height = arena(4, {1: (2, NIL), 2: (3, NIL)}, {1: 2, 2: 1, 3: 0})

    assert not is_balanced(left, right, height, 1, 3)
