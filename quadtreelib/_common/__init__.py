"""Common components shared across QuadTreeLib.

This internal package holds configuration classes and constants. It should
NOT be imported directly by users.

Important: This package must NEVER import from core or persistence to avoid
circular dependencies.
"""

from .config import (
    MAX_CHILDREN,
    VALUE_FIELD,
    CHILDREN_FIELD,
    TraversalStrategy,
    STRATEGY_ALIASES,
    parse_strategy,
    DepthConfig,
    TraversalConfig,
    PersistenceConfig,
)

__all__ = [
    'MAX_CHILDREN',
    'VALUE_FIELD',
    'CHILDREN_FIELD',
    'TraversalStrategy',
    'STRATEGY_ALIASES',
    'parse_strategy',
    'DepthConfig',
    'TraversalConfig',
    'PersistenceConfig',
]
