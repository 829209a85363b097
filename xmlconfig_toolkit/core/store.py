from __future__ import annotations

"""Path-addressed, typed access to a flattened XML configuration.

Typical use::

    cfg = XmlConfig("example.xml")
    cfg.get("Level0.Level1.Level2:name", "NA")
    cfg.get("Level0:attr1", 0)               # -> int
    cfg.get_vector("Level0:bins", [1.0])     # -> list[float]
    for path in cfg.children_of("Histograms"):
        ...

Missing paths are not errors: every accessor returns the caller's default.
A document that fails to parse leaves the store empty and sets
:attr:`XmlConfig.error_parsing`; nothing is raised.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from xmlconfig_toolkit.config import ConfigManager
from xmlconfig_toolkit.core.converters import DEFAULT_REGISTRY, ConversionResult, ConverterRegistry
from xmlconfig_toolkit.core.exceptions import ConversionError, DocumentParseError, UnknownConverterError
from xmlconfig_toolkit.core.flattener import flatten_into
from xmlconfig_toolkit.core.models import PATH_DELIM
from xmlconfig_toolkit.core.parser import parse_document
from xmlconfig_toolkit.core.paths import canonicalize, is_attribute, split_vector

logger = logging.getLogger(__name__)

__all__ = ["XmlConfig"]

_MISSING = object()


def _escape_line_breaks(value: str) -> str:
    return value.replace("\r", "\\r").replace("\n", "\\n")


class XmlConfig:
    """Flattened view of an XML document with typed, default-valued accessors.

    Parameters
    ----------
    source
        Optional file path (or document text, see *as_string*) loaded at once.
    as_string
        Treat *source* as the literal document.
    strict
        Raise :class:`ConversionError` on malformed values instead of
        yielding zero.  ``None`` uses the ``store.strict_conversion`` setting.
    segment_aware_children
        Make :meth:`children_of` match on whole path segments.  ``None`` uses
        the ``store.segment_aware_children`` setting (off by default, which
        keeps plain prefix matching).
    registry
        Converter registry; defaults to the process-wide one.
    """

    def __init__(self, source: Union[str, bytes, Path, None] = None, as_string: bool = False, *,
                 strict: Optional[bool] = None,
                 segment_aware_children: Optional[bool] = None,
                 registry: Optional[ConverterRegistry] = None) -> None:
        settings = ConfigManager().get_store_config()
        self.strict = bool(settings.get("strict_conversion", False)) if strict is None else strict
        self.segment_aware_children = (
            bool(settings.get("segment_aware_children", False))
            if segment_aware_children is None else segment_aware_children
        )
        self._resolve_entities = bool(settings.get("resolve_entities", False))
        self._huge_tree = bool(settings.get("huge_tree", False))
        self.registry = registry if registry is not None else DEFAULT_REGISTRY

        self._nodes: Dict[str, str] = {}
        self._error_parsing = False
        self.last_error: Optional[DocumentParseError] = None

        if source is not None:
            self.load(source, as_string)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self, source: Union[str, bytes, Path], as_string: bool = False) -> bool:
        """Replace the mapping with the flattened content of *source*.

        Returns ``True`` on success.  On failure the mapping stays empty, the
        sticky :attr:`error_parsing` flag is set and :attr:`last_error` holds
        the cause.
        """
        self._nodes.clear()
        try:
            root = parse_document(
                source,
                as_string,
                resolve_entities=self._resolve_entities,
                huge_tree=self._huge_tree,
            )
        except DocumentParseError as exc:
            self._error_parsing = True
            self.last_error = exc
            logger.warning("Could not load configuration: %s", exc)
            return False

        self.last_error = None
        flatten_into(self._nodes, root)
        logger.info("Loaded configuration from %s (%d entries)",
                    "string" if as_string else source, len(self._nodes))
        return True

    @property
    def error_parsing(self) -> bool:
        """True once any load has failed; a later successful load does not reset it."""
        return self._error_parsing

    # ------------------------------------------------------------------
    # Path queries
    # ------------------------------------------------------------------
    canonicalize = staticmethod(canonicalize)

    def exists(self, path: str) -> bool:
        return canonicalize(path) in self._nodes

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.exists(path)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def keys(self) -> List[str]:
        return sorted(self._nodes)

    def items(self) -> List[Tuple[str, str]]:
        return sorted(self._nodes.items())

    def children_of(self, path: str) -> List[str]:
        """List the full paths of the nodes below *path*, in key order.

        A key qualifies when it starts with the canonical query path, is
        longer than it and is not an attribute.  By default the comparison is
        a plain string prefix, so ``Foo`` also matches ``Foo2`` and
        ``Foo[1]``; with :attr:`segment_aware_children` the character after
        the prefix must be the node delimiter.
        """
        query = canonicalize(path)
        size = len(query)
        result = []
        for key in sorted(self._nodes):
            if len(key) <= size or not key.startswith(query) or is_attribute(key):
                continue
            if self.segment_aware_children and query and key[size] != PATH_DELIM:
                continue
            result.append(key)
        return result

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------
    def _target_type(self, default: Any, type_: Optional[type]) -> Optional[type]:
        if type_ is not None:
            return type_
        if default is None:
            return None
        return type(default)

    def _convert(self, text: str, target: type, path: str, strict: bool) -> Any:
        try:
            return self.registry.convert(text, target, strict=strict)
        except ConversionError as exc:
            exc.path = path
            raise

    def get(self, path: str, default: Any = None, type_: Optional[type] = None) -> Any:
        """Return the value at *path* converted to the type of *default*.

        *type_* overrides the target type (needed when *default* is ``None``
        or of a different type).  Without either the stored text is returned.
        Missing paths return *default* unchanged.
        """
        key = canonicalize(path)
        text = self._nodes.get(key, _MISSING)
        if text is _MISSING:
            return default

        target = self._target_type(default, type_)
        if target is None:
            return text
        if self.registry.is_composite(target):
            return self.registry.builder_for(target)(self, key)
        return self._convert(text, target, key, self.strict)

    def try_get(self, path: str, type_: type = str) -> ConversionResult:
        """Strictly convert the value at *path* without raising.

        Composite builders run against a strict view of this store, so a
        malformed related path fails the whole lookup.  A type without a
        converter is reported through ``error`` as well.
        """
        key = canonicalize(path)
        text = self._nodes.get(key, _MISSING)
        if text is _MISSING:
            return ConversionResult(False)
        try:
            if self.registry.is_composite(type_):
                return ConversionResult(True, self.registry.builder_for(type_)(self._strict_view(), key))
            return ConversionResult(True, self._convert(text, type_, key, True))
        except (ConversionError, UnknownConverterError) as exc:
            logger.debug("try_get(%s) failed: %s", key, exc)
            return ConversionResult(False, error=exc)

    def _strict_view(self) -> "XmlConfig":
        # shares the mapping; only the conversion mode differs
        view = copy.copy(self)
        view.strict = True
        return view

    def get_vector(self, path: str, default: Sequence[Any] = (), type_: Optional[type] = None) -> List[Any]:
        """Return the comma separated list at *path*.

        The element type is *type_*, else the type of the first default
        element, else ``str``.  Missing paths return *default* unchanged.
        """
        key = canonicalize(path)
        text = self._nodes.get(key, _MISSING)
        if text is _MISSING:
            return default  # type: ignore[return-value]

        target = type_
        if target is None:
            target = type(default[0]) if len(default) else str
        return [self._convert(field, target, key, self.strict) for field in split_vector(text)]

    def set(self, path: str, value: Any) -> None:
        """Store *value* at *path* (created if absent) in its text form."""
        self._nodes[canonicalize(path)] = self.registry.convert_to(value)

    def set_vector(self, path: str, values: Sequence[Any]) -> None:
        self._nodes[canonicalize(path)] = ",".join(self.registry.convert_to(v) for v in values)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    def dump(self) -> str:
        """Render every entry as ``[path] = value``, one per line, in key order.

        Line breaks inside values are written as ``\\n`` / ``\\r`` so that each
        entry stays on a single line.
        """
        return "".join(
            f"[{key}] = {_escape_line_breaks(value)}\n" for key, value in sorted(self._nodes.items())
        )

    def __repr__(self) -> str:
        state = "error" if self._error_parsing else "ok"
        return f"XmlConfig(entries={len(self._nodes)}, state={state})"
