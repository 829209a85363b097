from __future__ import annotations

"""Flatten a document tree into a ``path -> text`` mapping.

The walk is depth-first preorder.  The root element sits at depth 1 with an
empty path, so its own name never shows up in a key; top-level children get
the shortest non-empty paths.  Repeated sibling names are disambiguated with
``[i]`` suffixes, e.g. three ``<Item>`` siblings under ``<Parent>`` map to::

    Parent.Item     -> a
    Parent.Item[1]  -> b
    Parent.Item[2]  -> c

Attributes are stored as ``<node path>:<attr name>``.
"""

import logging
from typing import Dict, MutableMapping

from xmlconfig_toolkit.core.models import ATTR_DELIM, VAL_DNE, DocumentNode
from xmlconfig_toolkit.core.paths import indexed, join

logger = logging.getLogger(__name__)

__all__ = ["flatten", "flatten_into", "next_free_index"]


def next_free_index(mapping: MutableMapping[str, str], path: str) -> int:
    """Return the lowest ``i >= 1`` for which ``path[i]`` is not yet a key.

    Index 0 is the bare path itself, which the caller has already found taken.
    """
    index = 1
    while indexed(path, index) in mapping:
        index += 1
    return index


def flatten_into(mapping: MutableMapping[str, str], node: DocumentNode,
                 level: int = 1, parent_path: str = "") -> None:
    """Record *node* and its subtree into *mapping*.

    Parameters
    ----------
    mapping
        Destination mapping; existing keys are never overwritten by nodes.
    node
        Node to record.
    level
        Depth of *node*; the root is level 1 and contributes no name.
    parent_path
        Path of the parent node (possibly carrying an index suffix).
    """
    path = join(parent_path, node.name) if level > 1 else parent_path

    if path in mapping:
        path = indexed(path, next_free_index(mapping, path))

    content = node.content
    mapping[path] = content if content is not None else VAL_DNE

    for attr_name, attr_value in node.attributes():
        mapping[f"{path}{ATTR_DELIM}{attr_name}"] = attr_value if attr_value is not None else VAL_DNE

    for child in node.children():
        flatten_into(mapping, child, level + 1, path)


def flatten(tree: DocumentNode) -> Dict[str, str]:
    """Return a new mapping holding the flattened form of *tree* (its root node)."""
    mapping: Dict[str, str] = {}
    flatten_into(mapping, tree)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Flattened <%s> into %d entries", tree.name, len(mapping))
    return mapping
