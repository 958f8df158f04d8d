from .AVLTreeGeneric import AVLTree, DEFAULT_SIZE, EMPTY_HEIGHT, GROWTH_FACTOR
from .errors import AVLTreeError, AlreadyPresentError, EmptyTreeError, KeyNotFoundError
from .graphviz import to_graphviz
from .utils import build_avl, fill_avl, remove_avl, warmup

__all__ = [
    "AVLTree",
    "AVLTreeError",
    "AlreadyPresentError",
    "DEFAULT_SIZE",
    "EMPTY_HEIGHT",
    "EmptyTreeError",
    "GROWTH_FACTOR",
    "KeyNotFoundError",
    "build_avl",
    "fill_avl",
    "remove_avl",
    "to_graphviz",
    "warmup",
]
