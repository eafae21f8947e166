"""Configuration system for QuadTreeLib.

This module defines how users specify traversal requirements (strategy,
depth window, node filter) and how trees are written to disk.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Union


# Maximum number of children a node may hold
MAX_CHILDREN = 4

# Field names of the persisted node object
VALUE_FIELD = "Value"
CHILDREN_FIELD = "Children"


class TraversalStrategy(Enum):
    """How to traverse the tree."""
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    LEVEL_ORDER = "level"           # Grouped by level


# Accepted strategy names, shared by every entry point that takes a string
STRATEGY_ALIASES = {
    'bfs': TraversalStrategy.BREADTH_FIRST,
    'breadth_first': TraversalStrategy.BREADTH_FIRST,
    'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
    'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
    'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
    'level': TraversalStrategy.LEVEL_ORDER,
    'level_order': TraversalStrategy.LEVEL_ORDER,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum.

    Raises:
        ValueError: If strategy name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in STRATEGY_ALIASES:
        return STRATEGY_ALIASES[strategy_lower]

    raise ValueError(
        f"Unknown traversal strategy: {strategy}. "
        f"Choose from: {', '.join(STRATEGY_ALIASES.keys())}"
    )


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering."""

    min_depth: int = 0                  # Minimum depth to yield
    max_depth: Optional[int] = None     # Maximum depth to traverse

    def should_yield(self, depth: int) -> bool:
        """Check if nodes at this depth should be yielded.

        Args:
            depth: Current depth

        Returns:
            True if depth is within configured range
        """
        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False
        return True

    def should_explore(self, depth: int) -> bool:
        """Check if children of a node at this depth should be explored."""
        if self.max_depth is not None:
            return depth < self.max_depth
        return True

    def validate(self) -> List[str]:
        errors = []
        if self.min_depth < 0:
            errors.append("min_depth cannot be negative")
        if self.max_depth is not None:
            if self.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.max_depth < self.min_depth:
                errors.append("max_depth cannot be less than min_depth")
        return errors


@dataclass
class TraversalConfig:
    """Complete configuration for a tree traversal.

    The include filter receives whole nodes, not content, so it can look at
    structure (``node.is_leaf()``) as well as payload.
    """

    strategy: TraversalStrategy = TraversalStrategy.BREADTH_FIRST
    depth: DepthConfig = field(default_factory=DepthConfig)
    include_filter: Optional[Callable[[Any], bool]] = None

    def should_include(self, node) -> bool:
        if self.include_filter is None:
            return True
        return bool(self.include_filter(node))

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = list(self.depth.validate())
        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"strategy must be a TraversalStrategy, got {self.strategy!r}")
        if self.include_filter is not None and not callable(self.include_filter):
            errors.append("include_filter must be callable")
        return errors


@dataclass
class PersistenceConfig:
    """Options for writing and reading persisted trees."""

    indent: Optional[int] = None    # None writes compact single-line JSON
    encoding: str = "utf-8"
    ensure_ascii: bool = False
    sort_keys: bool = False
    strict: bool = False            # Reject unknown fields on load

    @classmethod
    def pretty(cls, indent: int = 2) -> 'PersistenceConfig':
        """Create a config that writes human-readable, indented JSON."""
        return cls(indent=indent)

    def validate(self) -> List[str]:
        errors = []
        if self.indent is not None and self.indent < 0:
            errors.append("indent cannot be negative")
        if not self.encoding:
            errors.append("encoding cannot be empty")
        return errors
