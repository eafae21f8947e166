"""QTreeNode - the bounded-branching tree node of QuadTreeLib.

A node holds an optional content value, up to four ordered children and a
back-reference to its parent. Ownership runs strictly top-down: a node owns
its children through its child list, while the parent link is a weak
reference used for upward navigation only.
"""

import weakref
from collections import deque
from logging import getLogger
from typing import Callable, Deque, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from .._common.config import MAX_CHILDREN, TraversalStrategy
from ..errors import CapacityError, ChildIndexError, QTreeError, TreeCycleError
from .traverser import (
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
)

logger = getLogger(__name__)

T = TypeVar('T')


class QTreeNode(Generic[T]):
    """A node of a tree whose nodes have at most four children.

    Both constructor arguments are optional and independent. Passing a
    parent only records the back-reference; it does not add the node to the
    parent's child list (use ``parent.insert(node)`` for that).

    Example:
        >>> root = QTreeNode(content=1)
        >>> root.insert(QTreeNode(content=2))
        >>> root.count()
        2
        >>> root.child(0).parent is root
        True
    """

    def __init__(self, parent: Optional['QTreeNode[T]'] = None, content: Optional[T] = None):
        self._children: List['QTreeNode[T]'] = []
        self._parent_ref: Optional['weakref.ReferenceType[QTreeNode[T]]'] = None
        self.content = content
        self.parent = parent

    # Structure

    @property
    def parent(self) -> Optional['QTreeNode[T]']:
        """The node holding this one, or None for a root."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, node: Optional['QTreeNode[T]']) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None

    @property
    def children(self) -> Tuple['QTreeNode[T]', ...]:
        """Snapshot of the child sequence, in insertion order."""
        return tuple(self._children)

    def child(self, index: int) -> 'QTreeNode[T]':
        """Return the child at ``index``.

        Raises:
            ChildIndexError: If index is outside ``[0, len(children))``
        """
        self._check_index(index)
        return self._children[index]

    def has_children(self) -> bool:
        return len(self._children) > 0

    def count(self) -> int:
        """Return the number of nodes in this subtree, this node included."""
        return sum(1 for _ in BreadthFirstTraverser().traverse(self))

    def is_empty(self) -> bool:
        """True when the node has neither content nor children."""
        return not self._children and self.content is None

    def is_root(self) -> bool:
        return self.parent is None

    def is_leaf(self) -> bool:
        return not self._children

    # Mutation

    def insert(self, child: 'QTreeNode[T]') -> None:
        """Append ``child`` and make this node its parent.

        The insert is all-or-nothing: on failure neither the child list nor
        the child's parent reference is touched.

        Raises:
            CapacityError: If this node already has four children
            TreeCycleError: If child is this node or one of its ancestors
        """
        if len(self._children) >= MAX_CHILDREN:
            logger.warning(f"rejected insert into full node {self!r}")
            raise CapacityError(f"There are already {MAX_CHILDREN} children in this node.")

        if child is self or any(ancestor is child for ancestor in self.ancestors()):
            logger.warning(f"rejected insert of {child!r}: node would become its own descendant")
            raise TreeCycleError("Cannot insert a node into itself or into one of its descendants.")

        self._children.append(child)
        child.parent = self
        logger.debug(f"inserted {child!r} at index {len(self._children) - 1} of {self!r}")

    def remove_at(self, index: int) -> 'QTreeNode[T]':
        """Remove and return the child at ``index``.

        Later children shift down by one position. The removed node becomes
        the root of a detached subtree: its parent reference is cleared.

        Raises:
            ChildIndexError: If index is outside ``[0, len(children))``
        """
        self._check_index(index)
        item = self._children.pop(index)
        item.parent = None
        logger.debug(f"removed {item!r} from index {index} of {self!r}")
        return item

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._children):
            raise ChildIndexError(
                f"child index {index} is out of range for a node with "
                f"{len(self._children)} children"
            )

    # Upward navigation

    def ancestors(self) -> Iterator['QTreeNode[T]']:
        """Yield the parent, grandparent and so on up to the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def root(self) -> 'QTreeNode[T]':
        current = self
        for current in self.ancestors():
            pass
        return current

    def depth(self) -> int:
        """Number of parent hops between this node and its root."""
        return sum(1 for _ in self.ancestors())

    def path(self) -> Tuple[int, ...]:
        """Child indices leading from the root down to this node.

        Raises:
            QTreeError: If some node on the way up names a parent that does
                not hold it, e.g. a placeholder built with ``QTreeNode(parent)``
        """
        indices = []
        node = self
        for parent in self.ancestors():
            index = next((i for i, c in enumerate(parent._children) if c is node), None)
            if index is None:
                raise QTreeError(f"{node!r} is not among the children of its parent {parent!r}")
            indices.append(index)
            node = parent
        return tuple(reversed(indices))

    # Queries

    def select_first_or_default(self, predicate: Callable[[T], bool], default: Optional[T] = None) -> Optional[T]:
        """Return the first content in pre-order that satisfies ``predicate``.

        When nothing matches, ``default`` is returned. A child's result is
        accepted when the predicate holds for it, so a predicate that is
        satisfied by ``default`` itself stops the search at the first subtree
        without a real match and returns ``default``. Use ``find_first`` to
        tell a genuine match from a miss.

        Content-less nodes, and a ``None`` default, are never passed to the
        predicate.
        """
        if self.content is not None and predicate(self.content):
            return self.content

        def accepts(candidate) -> bool:
            return candidate is not None and predicate(candidate)

        # One entry per node whose own content did not match: an iterator
        # over the children it has yet to search
        pending: Deque[Iterator['QTreeNode[T]']] = deque([iter(self._children)])
        while pending:
            item = next(pending[-1], None)
            if item is None:
                # Children exhausted: this subtree answers with the default
                pending.pop()
                candidate = default
            elif accepts(item.content):
                candidate = item.content
            else:
                pending.append(iter(item._children))
                continue

            # Each enclosing node returns the candidate if it accepts it,
            # otherwise it moves on to its next child
            while pending and accepts(candidate):
                pending.pop()
            if not pending:
                return candidate
        return default

    def find_first(self, predicate: Callable[[T], bool]) -> Optional['QTreeNode[T]']:
        """Return the first node in pre-order whose content matches, or None."""
        for node, _ in DepthFirstPreOrderTraverser().traverse(self):
            if node.content is not None and predicate(node.content):
                return node
        return None

    def where(self, predicate: Callable[[T], bool]) -> Iterator[T]:
        """Lazily yield every content in pre-order that satisfies ``predicate``."""
        for node, _ in DepthFirstPreOrderTraverser().traverse(self):
            if node.content is not None and predicate(node.content):
                yield node.content

    def breadth_first_enumerable(self) -> Iterator[Optional[T]]:
        """Lazily yield the content of every node in level order.

        An empty node produces nothing at all. Otherwise every node's
        content is produced, ``None`` for placeholder nodes included.
        """
        if self.is_empty():
            return
        for node, _ in BreadthFirstTraverser().traverse(self):
            yield node.content

    def get_node_levels(self) -> List[List['QTreeNode[T]']]:
        """Group the subtree's nodes by depth; level 0 is ``[self]``."""
        return LevelOrderTraverser().levels(self)

    def iter_nodes(self, strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE) -> Iterator['QTreeNode[T]']:
        for node, _ in create_traverser(strategy).traverse(self):
            yield node

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(content={self.content!r}, children={len(self._children)})"
