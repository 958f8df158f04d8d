from typing import Any, Iterable

from .AVLTreeGeneric import AVLTree
from .errors import KeyNotFoundError
from .kernels import NIL



def warmup() -> bool:
    """
    Minimally triggers JIT compilation for every AVL kernel.
    """

    avl = AVLTree(8)

    # 30, 20, 10 -> SRR; 40, 50 -> SLR; 25 -> RL at the root
    for x in (30, 20, 10, 40, 50, 25):
        avl.insert(x)

    _ = avl.contains(20)
    _ = avl.min(), avl.max()
    _ = avl.preorder(), avl.inorder(), avl.postorder()
    _ = avl.is_valid()

    avl.remove(10)
    avl.clear()

    return True

def build_avl(
    data: Iterable[Any]

) -> AVLTree:

    """
    Builds and populates an AVLTree from any iterable of keys.

    Args:
        data (Iterable[Any]): Keys to insert, all distinct.

    Returns:
        AVLTree: A balanced tree containing every key from data.
    """

    data = list(data)
    avl  = AVLTree(len(data))
    fill_avl(avl, data)

    return avl

def fill_avl(
    avl:  AVLTree,
    data: Iterable[Any]

) -> None:

    """
    Populates an existing AVLTree with multiple keys.

    Stops at the first duplicate with AlreadyPresentError; keys inserted
    before it stay in the tree.
    """

    for key in data:
        avl.insert(key)

def remove_avl(
    tree:   AVLTree,
    values: Iterable[Any]

) -> int:

    """
    Perform batch removal of multiple keys from the AVL tree.

    Args:
        tree (AVLTree): The tree to remove keys from.
        values (Iterable[Any]): Keys to be removed.

    Returns:
        int: Number of keys actually removed.

    Note:
        Keys that do not exist in the tree are skipped.
    """

    removed = 0
    for key in values:
        if tree.root == NIL:
            break
        try:
            tree.remove(key)
        except KeyNotFoundError:
            continue
        removed += 1

    return removed
