"""Tree builders for QuadTreeLib consumers' test suites.

Each builder returns a fresh tree, so tests can mutate what they get
without affecting one another.
"""

from itertools import count
from typing import Optional

from .._common.config import MAX_CHILDREN
from ..core.node import QTreeNode


def build_sample_tree() -> QTreeNode:
    """Build the nine-node reference tree.

    Structure::

        1
        ├── 2
        │   └── 48
        └── 3
            ├── 5
            ├── 6
            ├── 7
            └── 8
                └── 24
    """
    root = QTreeNode(content=1)
    root.insert(QTreeNode(content=2))
    root.insert(QTreeNode(content=3))
    root.child(1).insert(QTreeNode(content=5))
    root.child(1).insert(QTreeNode(content=6))
    root.child(1).insert(QTreeNode(content=7))
    root.child(1).insert(QTreeNode(content=8))
    root.child(1).child(3).insert(QTreeNode(content=24))
    root.child(0).insert(QTreeNode(content=48))
    return root


def build_count_tree() -> QTreeNode:
    """Build the seven-node tree ``1 -> [2 -> [3], 4, 5 -> [6 -> [7]]]``."""
    root = QTreeNode(content=1)
    root.insert(QTreeNode(content=2))
    root.child(0).insert(QTreeNode(content=3))
    root.insert(QTreeNode(content=4))
    root.insert(QTreeNode(content=5))
    root.child(2).insert(QTreeNode(content=6))
    root.child(2).child(0).insert(QTreeNode(content=7))
    return root


def build_full_tree(depth: int, fanout: int = MAX_CHILDREN, start: int = 0) -> QTreeNode:
    """Build a complete tree numbered in breadth-first order.

    Args:
        depth: Number of levels below the root
        fanout: Children per internal node (at most four)
        start: Content of the root; later nodes count up from it
    """
    numbers = count(start)
    root = QTreeNode(content=next(numbers))
    level = [root]
    for _ in range(depth):
        next_level = []
        for node in level:
            for _ in range(fanout):
                child = QTreeNode(content=next(numbers))
                node.insert(child)
                next_level.append(child)
        level = next_level
    return root


def find_by_content(root: QTreeNode, content) -> Optional[QTreeNode]:
    """Return the first node in pre-order holding exactly ``content``."""
    return root.find_first(lambda value: value == content)


def build_chain(length: int) -> QTreeNode:
    """Build a single path of ``length`` nodes holding ``0`` to ``length - 1``.

    The chain is assembled from the leaf upward, so each insert sees a
    parentless node and its ancestor check stays constant-time.
    """
    node = QTreeNode(content=length - 1)
    for content in range(length - 2, -1, -1):
        parent = QTreeNode(content=content)
        parent.insert(node)
        node = parent
    return node
