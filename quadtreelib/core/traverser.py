"""Tree traversal strategies for QuadTreeLib.

Traversers implement different algorithms for walking through a tree of
QTreeNode objects. They only rely on a node's ``children`` sequence, so the
node class and the algorithms stay independent of each other.

Every traverser keeps its pending work in an explicit deque rather than on
the call stack, so arbitrarily deep trees can be walked.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple, Union, TYPE_CHECKING

from .._common.config import DepthConfig, TraversalStrategy, parse_strategy

if TYPE_CHECKING:
    from .node import QTreeNode


class TreeTraverser(ABC):
    """Abstract base class for tree traversal strategies.

    Traversers implement the algorithms for walking through trees in
    different orders (breadth-first, depth-first, etc.). Every call to
    ``traverse`` returns a fresh generator, so traversals are restartable
    and independent of one another.
    """

    @abstractmethod
    def traverse(self,
                 root: 'QTreeNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['QTreeNode', int]]:
        """Traverse the tree starting from root.

        Args:
            root: Starting node for traversal
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding nodes

        Yields:
            Tuples of (node, depth) where depth is relative to root
        """
        pass


class BreadthFirstTraverser(TreeTraverser):
    """Breadth-first (level-order) traversal strategy.

    Visits all nodes at depth N before visiting nodes at depth N+1.
    A node's children are enqueued as soon as the node is dequeued.
    """

    def traverse(self,
                 root: 'QTreeNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['QTreeNode', int]]:
        window = DepthConfig(min_depth=min_depth, max_depth=max_depth)
        # Queue stores (node, depth) tuples
        queue: Deque[Tuple['QTreeNode', int]] = deque([(root, 0)])

        while queue:
            node, depth = queue.popleft()

            if window.should_explore(depth):
                for child in node.children:
                    queue.append((child, depth + 1))

            if window.should_yield(depth):
                yield (node, depth)


class DepthFirstPreOrderTraverser(TreeTraverser):
    """Depth-first pre-order traversal strategy.

    Visits parent before children, children in insertion order.
    """

    def traverse(self,
                 root: 'QTreeNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['QTreeNode', int]]:
        window = DepthConfig(min_depth=min_depth, max_depth=max_depth)
        stack: Deque[Tuple['QTreeNode', int]] = deque([(root, 0)])

        while stack:
            node, depth = stack.pop()

            # Yield parent first (pre-order)
            if window.should_yield(depth):
                yield (node, depth)

            # Pushed in reverse so the first child is popped first
            if window.should_explore(depth):
                for child in reversed(node.children):
                    stack.append((child, depth + 1))


class DepthFirstPostOrderTraverser(TreeTraverser):
    """Depth-first post-order traversal strategy.

    Visits children before parent. Useful for aggregating subtree values
    bottom-up.
    """

    def traverse(self,
                 root: 'QTreeNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['QTreeNode', int]]:
        window = DepthConfig(min_depth=min_depth, max_depth=max_depth)
        # Entries are (node, depth, children_already_pushed)
        stack: Deque[Tuple['QTreeNode', int, bool]] = deque([(root, 0, False)])

        while stack:
            node, depth, expanded = stack.pop()

            if expanded:
                # Then yield parent (post-order)
                if window.should_yield(depth):
                    yield (node, depth)
                continue

            stack.append((node, depth, True))
            if window.should_explore(depth):
                for child in reversed(node.children):
                    stack.append((child, depth + 1, False))


class LevelOrderTraverser(TreeTraverser):
    """Level-order traversal with level grouping.

    ``traverse`` yields individual nodes like the breadth-first traverser,
    but completes each level before starting the next. ``levels`` returns
    the grouping itself.
    """

    def traverse(self,
                 root: 'QTreeNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['QTreeNode', int]]:
        window = DepthConfig(min_depth=min_depth, max_depth=max_depth)
        for depth, level in enumerate(self._iter_levels(root, window)):
            if window.should_yield(depth):
                for node in level:
                    yield (node, depth)

    def levels(self, root: 'QTreeNode', max_depth: Optional[int] = None) -> List[List['QTreeNode']]:
        """Group nodes by depth.

        Level 0 is always ``[root]``, even for an empty root.

        Returns:
            One list of nodes per depth, shallowest first
        """
        return list(self._iter_levels(root, DepthConfig(max_depth=max_depth)))

    def _iter_levels(self, root: 'QTreeNode', window: DepthConfig) -> Iterator[List['QTreeNode']]:
        queue: Deque['QTreeNode'] = deque([root])
        depth = 0

        while queue:
            level: List['QTreeNode'] = []
            # Drain exactly the nodes that were queued for this depth
            for _ in range(len(queue)):
                node = queue.popleft()
                if window.should_explore(depth):
                    queue.extend(node.children)
                level.append(node)
            yield level
            depth += 1


_TRAVERSERS = {
    TraversalStrategy.BREADTH_FIRST: BreadthFirstTraverser,
    TraversalStrategy.DEPTH_FIRST_PRE: DepthFirstPreOrderTraverser,
    TraversalStrategy.DEPTH_FIRST_POST: DepthFirstPostOrderTraverser,
    TraversalStrategy.LEVEL_ORDER: LevelOrderTraverser,
}


def create_traverser(strategy: Union[TraversalStrategy, str]) -> TreeTraverser:
    """Create a traverser instance by strategy name.

    Args:
        strategy: TraversalStrategy or one of the names in STRATEGY_ALIASES

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    return _TRAVERSERS[parse_strategy(strategy)]()
