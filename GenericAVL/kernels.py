import numpy as np
from numba import njit



# Arena layout (one row per node, parallel int64 columns):
#     left[i], right[i]  -> child slot indices, NIL when absent
#     height[i]          -> cached subtree height, leaf == 0
#     Slot NIL is never allocated and keeps height -1.
NIL        = 0
STACK_SIZE = 256  # far above any reachable AVL height for int64 indices



# ---------- JIT-Compiled Height Helpers ----------
@njit(inline="always")
def update_height(
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    index:  np.int64

) -> None:

    """
    Recompute the cached height of `index` from its two children.
    """

    height[index] = max(height[left[index]], height[right[index]]) + 1

@njit(inline="always")
def balance_factor(
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    index:  np.int64

) -> np.int64:

    return height[left[index]] - height[right[index]]



# ---------- JIT-Compiled Rotations ----------
@njit(inline="always")
def right_rotation( # SRR: Single Right Rotation
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    index:  np.int64

) -> np.int64:

    """
    Perform a single right rotation (SRR) around the node at `index`.

    The left child is promoted to subtree root. Its right subtree is
    reattached as the left subtree of the old root, and the old root
    becomes the right child of the promoted node.

    Heights are fixed bottom-up: first the old root from its (new)
    children, then the promoted node from its left child and the old root.

    :param left: Left-child column of the arena
    :type left: np.ndarray
    :param right: Right-child column of the arena
    :type right: np.ndarray
    :param height: Height column of the arena
    :type height: np.ndarray
    :param index: Slot of the subtree root to rotate
    :type index: np.int64
    :return: Slot of the new subtree root
    :rtype: np.int64
    """

    pivot = left[index]

    # Rotate
    left[index]  = right[pivot]
    right[pivot] = index

    # Update heights, old root first
    height[index] = max(height[left[index]], height[right[index]]) + 1
    height[pivot] = max(height[left[pivot]], height[index]) + 1

    return pivot # new root

@njit(inline="always")
def left_rotation( # SLR: Single Left Rotation
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    index:  np.int64

) -> np.int64:

    """
    Perform a single left rotation (SLR) around the node at `index`.

    Mirror image of `right_rotation`: the right child is promoted and the
    old root becomes its left child.

    :param left: Left-child column of the arena
    :type left: np.ndarray
    :param right: Right-child column of the arena
    :type right: np.ndarray
    :param height: Height column of the arena
    :type height: np.ndarray
    :param index: Slot of the subtree root to rotate
    :type index: np.int64
    :return: Slot of the new subtree root
    :rtype: np.int64
    """

    pivot = right[index]

    # Rotate
    right[index] = left[pivot]
    left[pivot]  = index

    # Update heights, old root first
    height[index] = max(height[left[index]], height[right[index]]) + 1
    height[pivot] = max(height[right[pivot]], height[index]) + 1

    return pivot # new root

@njit(inline="always")
def left_right_rotation( # LR: Double Rotation on the left side
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    index:  np.int64

) -> np.int64:

    """
    Rotate the left child left, then rotate `index` right.

    Used when the left subtree is too tall and is itself right-heavy.
    """

    left[index] = left_rotation(left, right, height, left[index])
    return right_rotation(left, right, height, index)

@njit(inline="always")
def right_left_rotation( # RL: Double Rotation on the right side
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    index:  np.int64

) -> np.int64:

    """
    Rotate the right child right, then rotate `index` left.
    """

    right[index] = right_rotation(left, right, height, right[index])
    return left_rotation(left, right, height, index)



# ---------- JIT-Compiled Rebalance Step ----------
@njit
def balance(
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    index:  np.int64

) -> np.int64:

    """
    Restore the AVL property at `index`, assuming both children already hold it.

    Must be applied to every node on the path from a mutation point back to
    the root, innermost first. The step is total and idempotent: a balanced
    node only gets its height refreshed, and NIL is returned untouched.

    Rotation choice (ties favor the single rotation):
        left too tall,  h(LL) >= h(LR) -> SRR   else LR
        right too tall, h(RR) >= h(RL) -> SLR   else RL

    :param left: Left-child column of the arena
    :type left: np.ndarray
    :param right: Right-child column of the arena
    :type right: np.ndarray
    :param height: Height column of the arena
    :type height: np.ndarray
    :param index: Slot of the subtree root to repair
    :type index: np.int64
    :return: Slot of the (possibly new) subtree root
    :rtype: np.int64
    """

    if index == NIL:
        return np.int64(NIL)

    h_l = height[left[index]]
    h_r = height[right[index]]

    if h_l - h_r > 1: # L
        child = left[index]
        if height[left[child]] >= height[right[child]]: # LL
            index = right_rotation(left, right, height, index)
        else: # LR
            index = left_right_rotation(left, right, height, index)

    elif h_r - h_l > 1: # R
        child = right[index]
        if height[right[child]] >= height[left[child]]: # RR
            index = left_rotation(left, right, height, index)
        else: # RL
            index = right_left_rotation(left, right, height, index)

    update_height(left, right, height, index)

    return np.int64(index)



# ---------- JIT-Compiled Queries ----------
@njit
def leftmost(
    left:  np.ndarray,
    index: np.int64

) -> np.int64:

    """
    Follow left links from `index` down to the smallest node of its subtree.
    Returns NIL for an empty subtree.
    """

    if index == NIL:
        return np.int64(NIL)

    while left[index] != NIL:
        index = left[index]

    return np.int64(index)

@njit
def rightmost(
    right: np.ndarray,
    index: np.int64

) -> np.int64:

    if index == NIL:
        return np.int64(NIL)

    while right[index] != NIL:
        index = right[index]

    return np.int64(index)



# ---------- JIT-Compiled Traversals ----------
@njit
def preorder_indices( # VLR
    left:  np.ndarray,
    right: np.ndarray,
    root:  np.int64,
    count: np.int64

) -> np.ndarray:

    """
    Collect node slots in pre-order using an explicit stack.
    The arena is never modified.
    """

    traverse = np.zeros(count, dtype=np.int64)
    if root == NIL:
        return traverse

    stack        = np.zeros(STACK_SIZE, dtype=np.int64)
    stack[0]     = root
    stack_idx    = 1
    traverse_idx = 0

    while stack_idx > 0 and traverse_idx < count:
        stack_idx -= 1
        current_index = stack[stack_idx]

        traverse[traverse_idx] = current_index
        traverse_idx += 1

        # Right first so the left subtree is popped first
        if right[current_index] != NIL:
            stack[stack_idx] = right[current_index]
            stack_idx += 1
        if left[current_index] != NIL:
            stack[stack_idx] = left[current_index]
            stack_idx += 1

    return traverse

@njit
def inorder_indices( # LVR
    left:  np.ndarray,
    right: np.ndarray,
    root:  np.int64,
    count: np.int64

) -> np.ndarray:

    """
    Collect node slots in ascending key order.
    """

    traverse = np.zeros(count, dtype=np.int64)
    stack    = np.zeros(STACK_SIZE, dtype=np.int64)

    current_index = root
    stack_idx     = 0
    traverse_idx  = 0

    while traverse_idx < count:

        while current_index != NIL:
            stack[stack_idx] = current_index
            stack_idx += 1
            current_index = left[current_index]

        if stack_idx > 0:
            stack_idx -= 1
            current_index = stack[stack_idx]

            traverse[traverse_idx] = current_index
            traverse_idx += 1

            current_index = right[current_index]

        else:
            break

    return traverse

@njit
def postorder_indices( # LRV
    left:  np.ndarray,
    right: np.ndarray,
    root:  np.int64,
    count: np.int64

) -> np.ndarray:

    """
    Collect node slots in post-order.

    Walks node-right-left with an explicit stack and fills the output from
    the back, which yields left-right-node.
    """

    traverse = np.zeros(count, dtype=np.int64)
    if root == NIL:
        return traverse

    stack        = np.zeros(STACK_SIZE, dtype=np.int64)
    stack[0]     = root
    stack_idx    = 1
    traverse_idx = count

    while stack_idx > 0 and traverse_idx > 0:
        stack_idx -= 1
        current_index = stack[stack_idx]

        traverse_idx -= 1
        traverse[traverse_idx] = current_index

        if left[current_index] != NIL:
            stack[stack_idx] = left[current_index]
            stack_idx += 1
        if right[current_index] != NIL:
            stack[stack_idx] = right[current_index]
            stack_idx += 1

    return traverse



# --------- Integrity ---------
@njit
def is_balanced(
    left:   np.ndarray,
    right:  np.ndarray,
    height: np.ndarray,
    root:   np.int64,
    count:  np.int64

) -> bool:

    """
    Check height correctness and the AVL balance bound on every reachable node.

    Also checks that exactly `count` nodes are reachable from `root`.
    Key order is not checked here since keys live outside the arena.
    """

    if height[NIL] != -1:
        return False

    if root == NIL:
        return count == 0

    reached = 0
    stack     = np.zeros(STACK_SIZE, dtype=np.int64)
    stack[0]  = root
    stack_idx = 1

    while stack_idx > 0:
        stack_idx -= 1
        current_index = stack[stack_idx]
        reached += 1
        if reached > count:
            return False

        h_l = height[left[current_index]]
        h_r = height[right[current_index]]

        if height[current_index] != max(h_l, h_r) + 1:
            return False
        if abs(h_l - h_r) > 1:
            return False

        if left[current_index] != NIL:
            stack[stack_idx] = left[current_index]
            stack_idx += 1
        if right[current_index] != NIL:
            stack[stack_idx] = right[current_index]
            stack_idx += 1

    return reached == count
