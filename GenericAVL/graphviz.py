from typing import List

from .AVLTreeGeneric import AVLTree
from .kernels import NIL



def to_graphviz(tree: AVLTree) -> str:
    """
    Render the tree as a Graphviz `digraph` for visual debugging.

    Every node gets an id in pre-order, including the invisible placeholders
    drawn for absent children so that left and right children stay on their
    side. Left edges are blue and right edges red. An empty tree renders as
    an empty string.
    """

    if tree.root == NIL:
        return ""

    nodes       = []
    connections = ['\t"Root" -> 0;\n']
    _walk(tree, tree.root, nodes, connections, [0])

    return "digraph {\n" + "".join(nodes) + "".join(connections) + "}"


def _walk(
    tree:        AVLTree,
    index:       int,
    nodes:       List[str],
    connections: List[str],
    unique_id:   List[int]

) -> None:

    my_id = unique_id[0]
    nodes.append(f'\t{my_id} [label="{tree.get_value(index)}"];\n')

    for child, color in ((tree.get_left(index), "blue"), (tree.get_right(index), "red")):
        unique_id[0] += 1
        if child != NIL:
            connections.append(f"\t{my_id} -> {unique_id[0]} [color={color}];\n")
            _walk(tree, child, nodes, connections, unique_id)
        else:
            nodes.append(f"\t{unique_id[0]} [label=nill, style = invis];\n")
            connections.append(f"\t{my_id} -> {unique_id[0]} [ style = invis];\n")
