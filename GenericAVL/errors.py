class AVLTreeError(Exception):
    """Base class for every error raised by an AVLTree."""


class AlreadyPresentError(AVLTreeError, ValueError):
    """Raised by insert when the key is already stored. The tree is unchanged."""

    def __init__(self, key) -> None:
        super().__init__(f"Key {key!r} is already present in the tree")
        self.key = key


class KeyNotFoundError(AVLTreeError, KeyError):
    """Raised by remove when the key is not stored. The tree is unchanged."""

    def __init__(self, key) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key {self.key!r} was not found in the tree"


class EmptyTreeError(AVLTreeError, LookupError):
    """Raised by min, max and remove on a tree without a root."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation} on an empty tree")
        self.operation = operation
