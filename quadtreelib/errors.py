"""Exception hierarchy for QuadTreeLib.

Every error raised by the library derives from QTreeError. Where a built-in
exception describes the same failure, it is mixed in as a second base so
callers can keep catching ``IndexError`` or ``ValueError``.

File-system failures are not wrapped: ``save`` and ``load`` let the built-in
``OSError`` subclasses propagate.
"""


class QTreeError(Exception):
    """Base class for all QuadTreeLib errors."""
    pass


class CapacityError(QTreeError):
    """Raised when inserting into a node that already holds four children."""
    pass


class ChildIndexError(QTreeError, IndexError):
    """Raised when a child index is outside ``[0, len(children))``."""
    pass


class TreeCycleError(QTreeError, ValueError):
    """Raised when an insert would make a node its own descendant."""
    pass


class TreeFormatError(QTreeError, ValueError):
    """Raised when a persisted tree does not have the expected node shape."""
    pass


class MissingFieldError(TreeFormatError):
    """Raised when a required field is absent from a persisted node."""

    def __init__(self, field_name: str, location: str = "$"):
        self.field_name = field_name
        self.location = location
        super().__init__(f"Missing required field {field_name!r} at {location}")


class ConfigurationError(QTreeError, ValueError):
    """Raised when a configuration object fails validation."""
    pass
