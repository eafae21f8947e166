"""JSON persistence for QuadTreeLib trees.

Each node is stored as ``{"Value": <content>, "Children": [<node>, ...]}``.
The parent link is deliberately left out of the document since it would make
the structure cyclic. Loading therefore happens in two steps: the whole tree
is built from the document first, then a top-down pass points every child
back at the node that holds it.

Example:
    >>> root = QTreeNode(content=1)
    >>> root.insert(QTreeNode(content=2))
    >>> save(root, "tree.json")
    >>> loaded = load("tree.json")
    >>> loaded.child(0).parent is loaded
    True
"""

import json
import os
from collections import deque
from logging import getLogger
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional, TextIO, Tuple, Union

from ._common.config import CHILDREN_FIELD, MAX_CHILDREN, VALUE_FIELD, PersistenceConfig
from .core.node import QTreeNode
from .errors import ConfigurationError, MissingFieldError, TreeFormatError

logger = getLogger(__name__)

# Maps content to a JSON-compatible value and back
ContentEncoder = Callable[[Any], Any]
ContentDecoder = Callable[[Any], Any]

Destination = Union[str, os.PathLike, TextIO]
Source = Union[str, os.PathLike, TextIO]


def _resolve_config(config: Optional[PersistenceConfig]) -> PersistenceConfig:
    if config is None:
        return PersistenceConfig()
    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Invalid persistence configuration: {'; '.join(errors)}")
    return config


def _encode_node(node: QTreeNode, encoder: Optional[ContentEncoder]) -> Dict[str, Any]:
    content = node.content
    if content is not None and encoder is not None:
        content = encoder(content)
    return {VALUE_FIELD: content, CHILDREN_FIELD: []}


def to_dict(node: QTreeNode, encoder: Optional[ContentEncoder] = None) -> Dict[str, Any]:
    """Convert a subtree to nested ``{"Value", "Children"}`` dictionaries.

    Args:
        node: Root of the subtree to convert
        encoder: Optional hook turning content into a JSON-compatible value.
            Never called for ``None`` content.

    Returns:
        Dictionary representation without parent links
    """
    result = _encode_node(node, encoder)
    # Pairs of (node, the dictionary whose Children list it fills)
    stack = [(node, result)]
    while stack:
        current, data = stack.pop()
        for child in current.children:
            child_data = _encode_node(child, encoder)
            data[CHILDREN_FIELD].append(child_data)
            stack.append((child, child_data))
    return result


def _make_node(data: Any,
               decoder: Optional[ContentDecoder],
               config: PersistenceConfig,
               location: str) -> Tuple[QTreeNode, List[Any]]:
    """Check the shape of one node object and build the node, childless.

    Returns:
        The node and the still unconverted list of its children
    """
    if not isinstance(data, dict):
        raise TreeFormatError(
            f"Expected a node object at {location}, got {type(data).__name__}"
        )

    if CHILDREN_FIELD not in data:
        raise MissingFieldError(CHILDREN_FIELD, location)

    children = data[CHILDREN_FIELD]
    if not isinstance(children, list):
        raise TreeFormatError(
            f"{CHILDREN_FIELD!r} at {location} must be a list, got {type(children).__name__}"
        )
    if len(children) > MAX_CHILDREN:
        raise TreeFormatError(
            f"Node at {location} has {len(children)} children; at most {MAX_CHILDREN} are allowed"
        )

    if config.strict:
        unknown = sorted(set(data) - {VALUE_FIELD, CHILDREN_FIELD})
        if unknown:
            raise TreeFormatError(f"Unknown fields at {location}: {', '.join(unknown)}")

    content = data.get(VALUE_FIELD)
    if content is not None and decoder is not None:
        try:
            content = decoder(content)
        except (TypeError, ValueError, KeyError) as e:
            raise TreeFormatError(f"Cannot decode {VALUE_FIELD!r} at {location}: {e}") from e

    return QTreeNode(content=content), children


def _build_tree(data: Any,
                decoder: Optional[ContentDecoder],
                config: PersistenceConfig) -> QTreeNode:
    root, children = _make_node(data, decoder, config, "$")
    queue: Deque[Tuple[QTreeNode, List[Any], str]] = deque([(root, children, "$")])
    while queue:
        node, children, location = queue.popleft()
        for index, child_data in enumerate(children):
            child_location = f"{location}.{CHILDREN_FIELD}[{index}]"
            child, grandchildren = _make_node(child_data, decoder, config, child_location)
            # Attached without a parent; _fix_parent_links wires it afterwards
            node._children.append(child)
            queue.append((child, grandchildren, child_location))
    return root


def _fix_parent_links(root: QTreeNode) -> int:
    """Point every child in the tree back at the node holding it.

    Returns:
        Number of parent links that were set
    """
    fixed = 0
    queue: Deque[QTreeNode] = deque([root])
    while queue:
        node = queue.popleft()
        for child in node.children:
            child.parent = node
            fixed += 1
            queue.append(child)
    return fixed


def from_dict(data: Any,
              decoder: Optional[ContentDecoder] = None,
              config: Optional[PersistenceConfig] = None) -> QTreeNode:
    """Build a live tree from its dictionary representation.

    The returned root has no parent; every other node's parent is the node
    holding it.

    Raises:
        TreeFormatError: If any node does not have the expected shape
        MissingFieldError: If a node lacks its ``Children`` field
    """
    config = _resolve_config(config)
    root = _build_tree(data, decoder, config)
    fixed = _fix_parent_links(root)
    logger.debug(f"rebuilt tree of {fixed + 1} nodes, repaired {fixed} parent links")
    return root


def dumps(node: QTreeNode,
          config: Optional[PersistenceConfig] = None,
          encoder: Optional[ContentEncoder] = None) -> str:
    """Serialize a subtree to a JSON string.

    Raises:
        TypeError: If some content is not JSON serializable
        TreeFormatError: If the tree is nested deeper than the json module
            can encode
    """
    config = _resolve_config(config)
    data = to_dict(node, encoder)
    try:
        return json.dumps(
            data,
            indent=config.indent,
            ensure_ascii=config.ensure_ascii,
            sort_keys=config.sort_keys,
        )
    except RecursionError as e:
        raise TreeFormatError("Tree is nested too deeply to encode as JSON") from e


def loads(text: str,
          config: Optional[PersistenceConfig] = None,
          decoder: Optional[ContentDecoder] = None) -> QTreeNode:
    """Parse a JSON string into a live tree with parent links repaired.

    Raises:
        TreeFormatError: If the text is not JSON, is nested deeper than the
            json module can decode, or does not describe a tree
        MissingFieldError: If a node lacks its ``Children`` field
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TreeFormatError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise TreeFormatError("Document is nested too deeply to decode") from e
    return from_dict(data, decoder, config)


def save(node: QTreeNode,
         destination: Destination,
         config: Optional[PersistenceConfig] = None,
         encoder: Optional[ContentEncoder] = None) -> None:
    """Write ``node`` and its whole subtree as JSON.

    The document is fully encoded before anything is written, so an
    encoding failure never leaves a truncated file behind.

    Args:
        node: Root of the subtree to save
        destination: File path, or a writable text stream
        config: Output formatting options
        encoder: Optional content hook (see ``to_dict``)

    Raises:
        OSError: If the file cannot be written
        TypeError: If some content is not JSON serializable
        TreeFormatError: If the tree is nested too deeply to encode
    """
    config = _resolve_config(config)
    text = dumps(node, config, encoder)

    if hasattr(destination, 'write'):
        destination.write(text)
        logger.debug("saved tree to stream")
        return

    path = Path(destination)
    try:
        with path.open('w', encoding=config.encoding) as file:
            file.write(text)
    except OSError as e:
        logger.warning(f"failed to save tree to {path}: {e}")
        raise
    logger.debug(f"saved tree to {path}")


def load(source: Source,
         config: Optional[PersistenceConfig] = None,
         decoder: Optional[ContentDecoder] = None) -> QTreeNode:
    """Read a tree written by ``save``.

    Args:
        source: File path, or a readable text stream
        config: Reading options (encoding, strict field checking)
        decoder: Optional hook turning stored values back into content

    Returns:
        The root of the loaded tree, with every parent link in place

    Raises:
        OSError: If the file cannot be read
        TreeFormatError: If the document is not a valid tree
        MissingFieldError: If a node lacks its ``Children`` field
    """
    config = _resolve_config(config)

    if hasattr(source, 'read'):
        origin = "stream"
        try:
            text = source.read()
        except UnicodeDecodeError as e:
            raise TreeFormatError(f"Stream is not valid text: {e}") from e
    else:
        path = Path(source)
        origin = str(path)
        try:
            with path.open('r', encoding=config.encoding) as file:
                text = file.read()
        except UnicodeDecodeError as e:
            raise TreeFormatError(f"{path} is not valid {config.encoding} text: {e}") from e
        except OSError as e:
            logger.warning(f"failed to load tree from {path}: {e}")
            raise

    try:
        root = loads(text, config, decoder)
    except TreeFormatError as e:
        logger.warning(f"malformed tree in {origin}: {e}")
        raise
    logger.debug(f"loaded tree from {origin}")
    return root
