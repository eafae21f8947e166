"""High-level API for QuadTreeLib.

This module provides simple, functional interfaces for common traversal
operations. These functions wrap the traverser classes and configuration
objects for ease of use in simple cases.
"""

from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union

from ._common.config import DepthConfig, TraversalConfig, TraversalStrategy, parse_strategy
from .core.node import QTreeNode
from .core.traverser import create_traverser
from .errors import ConfigurationError


def traverse_tree(
    root: QTreeNode,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.BREADTH_FIRST,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    include_filter: Optional[Callable[[QTreeNode], bool]] = None,
) -> Iterator[QTreeNode]:
    """Simple interface for tree traversal.

    Args:
        root: Starting node for traversal
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, level)
        max_depth: Maximum depth to traverse
        min_depth: Minimum depth before yielding nodes
        include_filter: Function of a node deciding whether it is yielded.
            Filtered-out nodes are still descended into.

    Yields:
        QTreeNode instances that match the criteria

    Raises:
        ConfigurationError: If the depth window is invalid

    Example:
        >>> for node in traverse_tree(root, "dfs_pre", max_depth=1):
        ...     print(node.content)
    """
    config = TraversalConfig(
        strategy=parse_strategy(strategy),
        depth=DepthConfig(min_depth=min_depth, max_depth=max_depth),
        include_filter=include_filter,
    )
    for node, _ in traverse_with_config(root, config):
        yield node


def traverse_with_config(root: QTreeNode, config: TraversalConfig) -> Iterator[Tuple[QTreeNode, int]]:
    """Traverse according to a TraversalConfig, yielding (node, depth) pairs.

    The configuration is validated before the first node is produced.
    """
    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
    return _run(root, config)


def _run(root: QTreeNode, config: TraversalConfig) -> Iterator[Tuple[QTreeNode, int]]:
    traverser = create_traverser(config.strategy)
    for node, depth in traverser.traverse(root,
                                          max_depth=config.depth.max_depth,
                                          min_depth=config.depth.min_depth):
        if config.should_include(node):
            yield (node, depth)


def count_nodes(root: QTreeNode, **kwargs) -> int:
    """Count nodes in a tree that match criteria.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Number of nodes that match criteria
    """
    count = 0
    for _ in traverse_tree(root, **kwargs):
        count += 1
    return count


def find_nodes(
    root: QTreeNode,
    predicate: Callable[[Any], bool],
    **kwargs
) -> Iterator[QTreeNode]:
    """Find nodes whose content matches a predicate.

    Content-less nodes never match.

    Args:
        root: Starting node for traversal
        predicate: Function of the content that returns True for matches
        **kwargs: Traversal options (see traverse_tree)

    Yields:
        Nodes that match the predicate
    """
    kwargs['include_filter'] = lambda node: node.content is not None and predicate(node.content)
    yield from traverse_tree(root, **kwargs)


def get_leaf_nodes(root: QTreeNode, **kwargs) -> Iterator[QTreeNode]:
    """Get all leaf nodes in a tree.

    Yields:
        Leaf nodes (nodes with no children)
    """
    for node in traverse_tree(root, **kwargs):
        if node.is_leaf():
            yield node


def get_tree_stats(root: QTreeNode, **kwargs) -> Dict[str, Any]:
    """Get statistics about a tree.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Dictionary with total, leaf, internal and empty node counts,
        maximum depth, node count per depth and average branching factor
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'empty_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    config = TraversalConfig(
        strategy=parse_strategy(kwargs.pop('strategy', TraversalStrategy.BREADTH_FIRST)),
        depth=DepthConfig(min_depth=kwargs.pop('min_depth', 0),
                          max_depth=kwargs.pop('max_depth', None)),
        include_filter=kwargs.pop('include_filter', None),
    )

    for node, depth in traverse_with_config(root, config):
        stats['total_nodes'] += 1

        if node.is_leaf():
            stats['leaf_nodes'] += 1
        if node.is_empty():
            stats['empty_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    # Every node but the root hangs off exactly one internal node
    stats['average_branching'] = (
        (stats['total_nodes'] - 1) / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )

    return stats
