from __future__ import annotations

"""Path helpers for the flattened document mapping.

These helpers are side-effect-free; they are shared by the flattener and the
store so that both agree on the path syntax:

- ``.`` joins node levels,
- ``:`` introduces a trailing attribute name,
- ``[i]`` (i >= 1) marks the i-th repeat of a sibling name,
- whitespace anywhere is ignored and ``[0]`` means the bare segment.
"""

from typing import List

from xmlconfig_toolkit.core.models import ATTR_DELIM, PATH_DELIM

__all__ = [
    "canonicalize",
    "is_attribute",
    "indexed",
    "join",
    "strip_whitespace",
    "split_vector",
]

_ZERO_INDEX = "[0]"


def strip_whitespace(text: str) -> str:
    """Return *text* with every whitespace character removed."""
    return "".join(text.split())


def canonicalize(path: str) -> str:
    """Return *path* in its canonical form.

    Whitespace is dropped and the first ``[0]`` is removed, so that the first
    sibling of a repeated node can be addressed either bare or with index 0.
    Other indices are left untouched.  Applying it twice is a no-op.

    Examples:
        >>> canonicalize(" Level0 . Item[0] : name ")
        'Level0.Item:name'
        >>> canonicalize("Level0.Item[2]")
        'Level0.Item[2]'
    """
    return strip_whitespace(path).replace(_ZERO_INDEX, "", 1)


def is_attribute(path: str) -> bool:
    return ATTR_DELIM in path


def indexed(path: str, index: int) -> str:
    """Append the sibling disambiguation suffix to *path*."""
    return f"{path}[{index}]"


def join(parent: str, name: str) -> str:
    """Join a node *name* below *parent*; an empty parent yields *name*."""
    if not parent:
        return name
    return f"{parent}{PATH_DELIM}{name}"


def split_vector(text: str) -> List[str]:
    """Split a stored list value into its comma separated fields.

    Whitespace is removed first.  Fields are read like lines from a stream:
    an empty value has no fields and a single trailing empty field is
    dropped, while empty fields between commas are kept.
    """
    compact = strip_whitespace(text)
    fields = compact.split(",")
    if fields[-1] == "":
        fields.pop()
    return fields
