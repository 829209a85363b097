from __future__ import annotations

"""Shared data structures and constants used across the flattening core.

This module is intentionally free of parser / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, other parsers).
"""

from typing import Iterable, Iterator, Optional, Protocol, Tuple, runtime_checkable

__all__ = [
    "VAL_DNE",
    "PATH_DELIM",
    "ATTR_DELIM",
    "DocumentNode",
]

# Stored for nodes and attributes without textual content.  It is a real
# value: ``exists()`` is true for a path holding it.
VAL_DNE = "<DNE/>"

# Separates node levels in a path ("Level0.Level1").
PATH_DELIM = "."

# Separates an attribute name from its owning node path ("Level0:attr1").
ATTR_DELIM = ":"


@runtime_checkable
class DocumentNode(Protocol):
    """Minimal node-traversal capability consumed by the flattener.

    Any parser can feed the flattener by wrapping its nodes in an object
    exposing these members.

    Attributes
    ----------
    name
        Element name, without namespace.
    content
        Text content of the node, or ``None`` when it has none.
    """

    name: str
    content: Optional[str]

    def attributes(self) -> Iterable[Tuple[str, Optional[str]]]:
        """Yield ``(name, value)`` pairs in the parser's enumeration order."""
        ...

    def children(self) -> Iterator["DocumentNode"]:
        """Yield child element nodes in document order."""
        ...
