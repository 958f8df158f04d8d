import logging
import numpy as np
from typing import Any, Iterator, List, Tuple

from .errors import AlreadyPresentError, EmptyTreeError, KeyNotFoundError
from .kernels import (
    NIL,
    balance,
    inorder_indices,
    is_balanced,
    leftmost,
    postorder_indices,
    preorder_indices,
    rightmost,
)



DEFAULT_SIZE  = 16
GROWTH_FACTOR = 2
EMPTY_HEIGHT  = -1

logger = logging.getLogger(__name__)



# --------- AVLTree API ---------
class AVLTree:
    """
    Generic AVL Tree over an index-addressed node arena.

    Node structure (children and cached heights) lives in three int64 NumPy
    columns that the JIT-compiled kernels rotate and rebalance in place.
    Keys are arbitrary totally-ordered Python objects kept in a parallel
    list, so every comparison happens here in Python while every structural
    rewrite happens in the kernels.

    Slot 0 is the NIL sentinel (height -1). Freed slots go to a free-list
    stack and are recycled before the arena grows.

    Attributes:
        size (int): Current arena capacity, NIL slot included.
        count (int): Number of keys stored.
        root (int): Slot of the root node (NIL if empty).
    """

    def __init__(
        self,
        size: int = DEFAULT_SIZE

    ) -> None:

        if size < 0:
            raise ValueError(
                f"The size value must be non-negative, not {size}"
            )

        self.size           = size + 1
        self.count          = 0
        self.root           = NIL
        self._left          = np.zeros(self.size, dtype=np.int64)
        self._right         = np.zeros(self.size, dtype=np.int64)
        self._height        = np.zeros(self.size, dtype=np.int64)
        self._keys: List[Any] = [None] * self.size
        self._free          = 1
        self._free_list     = np.zeros(self.size, dtype=np.int64)
        self._free_list_top = 0

        self._height[NIL] = EMPTY_HEIGHT

    # --------- Arena management ---------
    def _grow(self) -> None:
        new_size = max(self.size * GROWTH_FACTOR, self.size + 1)
        extra    = new_size - self.size

        logger.debug("Growing AVL arena from %d to %d slots", self.size, new_size)

        self._left      = np.concatenate((self._left, np.zeros(extra, dtype=np.int64)))
        self._right     = np.concatenate((self._right, np.zeros(extra, dtype=np.int64)))
        self._height    = np.concatenate((self._height, np.zeros(extra, dtype=np.int64)))
        self._free_list = np.concatenate((self._free_list, np.zeros(extra, dtype=np.int64)))
        self._keys.extend([None] * extra)
        self.size = new_size

    def _reserve(self) -> None:
        """Make sure one slot can be allocated without touching the structure."""

        if self._free_list_top == 0 and self._free >= self.size:
            self._grow()

    def _allocate(self, key) -> int:
        if self._free_list_top > 0:
            self._free_list_top -= 1
            index = int(self._free_list[self._free_list_top])
        else:
            index = self._free
            self._free += 1

        self._left[index]   = NIL
        self._right[index]  = NIL
        self._height[index] = 0
        self._keys[index]   = key
        self.count += 1

        return index

    def _release(self, index: int) -> None:
        self._left[index]   = NIL
        self._right[index]  = NIL
        self._height[index] = 0
        self._keys[index]   = None

        self._free_list[self._free_list_top] = index
        self._free_list_top += 1
        self.count -= 1

    # --------- Recursive mutations ---------
    def _insert(self, node: int, key) -> int:
        if node == NIL:
            return self._allocate(key)

        current = self._keys[node]
        if key < current: # Left
            self._left[node] = self._insert(self._left[node], key)
        elif key > current: # Right
            self._right[node] = self._insert(self._right[node], key)
        else:
            raise AlreadyPresentError(key)

        return balance(self._left, self._right, self._height, node)

    def _remove(self, node: int, key) -> int:
        if node == NIL:
            raise KeyNotFoundError(key)

        current = self._keys[node]
        if key < current: # Left
            self._left[node] = self._remove(self._left[node], key)

        elif key > current: # Right
            self._right[node] = self._remove(self._right[node], key)

        elif self._left[node] != NIL and self._right[node] != NIL:
            # Two children: take the in-order successor's key, then delete
            # the successor itself from the right subtree.
            successor = leftmost(self._left, self._right[node])
            self._keys[node]  = self._keys[successor]
            self._right[node] = self._remove(self._right[node], self._keys[node])

        else:
            child = self._left[node] if self._left[node] != NIL else self._right[node]
            self._release(node)
            return int(child)

        return balance(self._left, self._right, self._height, node)

    # --------- Mutations ---------
    def insert(self, key) -> None:
        """Insert a unique key with auto-rebalancing. Raises AlreadyPresentError on duplicates."""

        self._reserve()
        self.root = int(self._insert(self.root, key))

    def remove(self, key) -> None:
        """
        Delete a key and stabilize the tree.

        Raises EmptyTreeError if the tree has no root and KeyNotFoundError if
        the key is absent. In both cases the tree is left untouched.
        """

        if self.root == NIL:
            raise EmptyTreeError("remove")

        self.root = int(self._remove(self.root, key))

    def update_value(self, old_value, new_value) -> None:
        """Replaces a key by removal and re-insertion to maintain AVL properties."""

        if old_value == new_value:
            if old_value not in self:
                raise KeyNotFoundError(old_value)
            return

        if new_value in self:
            raise AlreadyPresentError(new_value)

        self.remove(old_value)
        self.insert(new_value)

    def clear(self) -> None:
        """Release every node with a post-order sweep."""

        logger.debug("Clearing AVL tree with %d nodes", self.count)

        for index in postorder_indices(self._left, self._right, self.root, self.count):
            self._release(int(index))

        self.root = NIL

    # --------- Queries ---------
    def search(self, key) -> int:
        """Locates a key by BST descent. Returns the node slot or NIL if not found."""

        current_index = self.root
        while current_index != NIL:
            current = self._keys[current_index]

            if key < current:
                current_index = int(self._left[current_index])
            elif key > current:
                current_index = int(self._right[current_index])
            else:
                return current_index

        return NIL

    def contains(self, key) -> bool:
        return self.search(key) != NIL

    def min(self):
        """Smallest key. Raises EmptyTreeError on an empty tree."""

        if self.root == NIL:
            raise EmptyTreeError("take min")

        return self._keys[self._min]

    def max(self):
        """Largest key. Raises EmptyTreeError on an empty tree."""

        if self.root == NIL:
            raise EmptyTreeError("take max")

        return self._keys[self._max]

    @property
    def _min(self) -> int:
        """
        Find the slot of the node with the minimum key in the tree.

        Returns:
            int: The slot of the leftmost node, or NIL if the tree is empty.
        """

        return int(leftmost(self._left, self.root))

    @property
    def _max(self) -> int:
        """
        Find the slot of the node with the maximum key in the tree.

        Returns:
            int: The slot of the rightmost node, or NIL if the tree is empty.
        """

        return int(rightmost(self._right, self.root))

    @property
    def height(self) -> int:
        """Height of the root, EMPTY_HEIGHT when the tree is empty."""

        return int(self._height[self.root])

    # --------- Traversals ---------
    def _keys_at(self, indices: np.ndarray) -> List[Any]:
        keys = self._keys
        return [keys[index] for index in indices]

    def preorder(self) -> List[Any]:
        return self._keys_at(preorder_indices(self._left, self._right, self.root, self.count))

    def inorder(self) -> List[Any]:
        """Keys in ascending order."""

        return self._keys_at(inorder_indices(self._left, self._right, self.root, self.count))

    def postorder(self) -> List[Any]:
        return self._keys_at(postorder_indices(self._left, self._right, self.root, self.count))

    # --------- Node-level read access ---------
    @property
    def root_info(self) -> Tuple[Any, int, int, int]:
        return self.get_node(self.root)

    def get_node(
        self,
        index: int

    ) -> Tuple[Any, int, int, int]:

        """
        Unpack all metadata for a specific node slot.

        Args:
            index (int): The slot of the node in the arena.

        Returns:
            Tuple[Any, int, int, int]: (key, left_index, right_index, height).
            NIL yields (None, NIL, NIL, EMPTY_HEIGHT).
        """

        if index == NIL:
            return None, NIL, NIL, EMPTY_HEIGHT

        return (
            self._keys[index],
            int(self._left[index]),
            int(self._right[index]),
            int(self._height[index]),
        )

    def get_value(self, index: int):
        """Key stored at a node slot, None for NIL."""

        key, _, _, _ = self.get_node(index)
        return key

    def get_left(self, index: int) -> int:
        """
        Get the slot of the left child for the given node.

        Args:
            index (int): The slot of the parent node.

        Returns:
            int: The slot of the left child, or NIL if no child exists.
        """

        _, left, _, _ = self.get_node(index)
        return left

    def get_right(self, index: int) -> int:
        _, _, right, _ = self.get_node(index)
        return right

    def get_height(self, index: int) -> int:
        _, _, _, height = self.get_node(index)
        return height

    def successor(self, index: int) -> int:
        """
        Find the in-order successor of a node within its own subtree.

        Returns:
            int: The slot of the smallest node in the right subtree,
                 or NIL if no right child exists.
        """

        if index == NIL:
            return NIL

        return int(leftmost(self._left, self._right[index]))

    def predecessor(self, index: int) -> int:
        """
        Find the in-order predecessor of a node within its own subtree.

        Returns:
            int: The slot of the largest node in the left subtree,
                 or NIL if no left child exists.
        """

        if index == NIL:
            return NIL

        return int(rightmost(self._right, self._left[index]))

    def is_valid(self) -> bool:
        """
        Full integrity check: strict key order, height caches, balance bound
        and node count. Walks the whole tree, meant for tests and debugging.
        """

        if not is_balanced(self._left, self._right, self._height, self.root, self.count):
            return False

        keys = self.inorder()
        return all(a < b for a, b in zip(keys, keys[1:]))

    # --------- Python protocol ---------
    def __contains__(self, key) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.inorder())

    def __len__(self) -> int:
        return self.count

    def __str__(self) -> str:
        return "AVLTree(size=" + str(self.count) + ", root=" + str(self.root) + ", height=" + str(self.height) + ")"
