"""QuadTreeLib - a bounded-branching tree container.

QuadTreeLib provides a generic tree whose nodes hold an arbitrary content
value and at most four ordered children. Despite the name it does no spatial
partitioning.

    from quadtreelib import QTreeNode, save, load

    root = QTreeNode(content=1)
    root.insert(QTreeNode(content=2))
    save(root, "tree.json")
    assert load("tree.json").child(0).parent.content == 1
"""

from logging import NullHandler, getLogger

__version__ = "0.1.0"

from ._common.config import (
    MAX_CHILDREN,
    TraversalStrategy,
    STRATEGY_ALIASES,
    DepthConfig,
    TraversalConfig,
    PersistenceConfig,
)
from .errors import (
    QTreeError,
    CapacityError,
    ChildIndexError,
    TreeCycleError,
    TreeFormatError,
    MissingFieldError,
    ConfigurationError,
)
from .core import (
    QTreeNode,
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
)
from .persistence import save, load, dumps, loads, to_dict, from_dict
from .api import (
    traverse_tree,
    traverse_with_config,
    count_nodes,
    find_nodes,
    get_leaf_nodes,
    get_tree_stats,
)

getLogger(__name__).addHandler(NullHandler())

__all__ = [
    "__version__",
    # Core
    "QTreeNode",
    "TreeTraverser",
    "BreadthFirstTraverser",
    "DepthFirstPreOrderTraverser",
    "DepthFirstPostOrderTraverser",
    "LevelOrderTraverser",
    "create_traverser",
    # Persistence
    "save",
    "load",
    "dumps",
    "loads",
    "to_dict",
    "from_dict",
    # API
    "traverse_tree",
    "traverse_with_config",
    "count_nodes",
    "find_nodes",
    "get_leaf_nodes",
    "get_tree_stats",
    # Config
    "MAX_CHILDREN",
    "TraversalStrategy",
    "STRATEGY_ALIASES",
    "DepthConfig",
    "TraversalConfig",
    "PersistenceConfig",
    # Errors
    "QTreeError",
    "CapacityError",
    "ChildIndexError",
    "TreeCycleError",
    "TreeFormatError",
    "MissingFieldError",
    "ConfigurationError",
]
