from __future__ import annotations

"""Text <-> value conversion dispatch.

Every stored value is text.  Typed access goes through a
:class:`ConverterRegistry` that maps a Python type to a parser (text -> value)
and a formatter (value -> text).  Supporting a new type means registering a
pair of functions; nothing is shared between calls, so conversions are safe
to run from several threads.

Numeric parsing is lenient unless *strict* is requested: the longest numeric
prefix of the text is used and text without one yields zero.  Strict parsing
accepts the same literals but only when they span the whole (stripped) text.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, TYPE_CHECKING

from xmlconfig_toolkit.core.exceptions import ConversionError, UnknownConverterError, XmlConfigError

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from xmlconfig_toolkit.core.store import XmlConfig  # noqa: F401

logger = logging.getLogger(__name__)

__all__ = [
    "ConversionResult",
    "ConverterRegistry",
    "DEFAULT_REGISTRY",
    "register_converter",
    "register_composite",
    "convert",
    "convert_to",
]

Parser = Callable[..., Any]
Formatter = Callable[[Any], str]
Builder = Callable[["XmlConfig", str], Any]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?(?![a-z])|nan(?![a-z])))",
    re.IGNORECASE | re.ASCII,
)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of :meth:`XmlConfig.try_get`.

    ``ok`` is false for missing paths (``error`` is ``None``), for malformed
    values (``error`` holds the :class:`ConversionError`) and for types
    without a converter (:class:`UnknownConverterError`).
    """

    ok: bool
    value: Any = None
    error: Optional[XmlConfigError] = None

    def __bool__(self) -> bool:
        return self.ok


# ---------------------------------------------------------------------------
# Built-in parsers
# ---------------------------------------------------------------------------

def _parse_str(text: str, *, strict: bool = False) -> str:
    return text


def _parse_int(text: str, *, strict: bool = False) -> int:
    if strict:
        # the same literal as the lenient path, but it must cover the whole text
        match = _INT_PREFIX.fullmatch(text.strip())
        if match is None:
            raise ConversionError(text, int)
        return int(match.group(1))

    match = _INT_PREFIX.match(text)
    if match is None:
        logger.debug("No integer prefix in %r, using 0", text)
        return 0
    return int(match.group(1))


def _parse_float(text: str, *, strict: bool = False) -> float:
    if strict:
        match = _FLOAT_PREFIX.fullmatch(text.strip())
        if match is None:
            raise ConversionError(text, float)
        return float(match.group(1))

    match = _FLOAT_PREFIX.match(text)
    if match is None:
        logger.debug("No floating-point prefix in %r, using 0.0", text)
        return 0.0
    return float(match.group(1))


def _parse_bool(text: str, *, strict: bool = False) -> bool:
    """Exact lower-case ``true``/``false``, else the truthiness of an int."""
    if text == "false":
        return False
    if text == "true":
        return True
    try:
        return bool(_parse_int(text, strict=strict))
    except ConversionError as exc:
        raise ConversionError(text, bool, cause=exc) from exc


# ---------------------------------------------------------------------------
# Built-in formatters
# ---------------------------------------------------------------------------

def _format_bool(value: Any) -> str:
    return "true" if value else "false"


def _format_float(value: Any) -> str:
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        # "50" rather than "50.0", matching how numbers are written by hand
        return str(int(value))
    return repr(value)


class ConverterRegistry:
    """Conversion dispatch table keyed by target type."""

    def __init__(self) -> None:
        self._converters: Dict[type, Tuple[Parser, Formatter]] = {}
        self._composites: Dict[type, Tuple[Builder, Optional[Formatter]]] = {}

    def copy(self) -> "ConverterRegistry":
        clone = ConverterRegistry()
        clone._converters = dict(self._converters)
        clone._composites = dict(self._composites)
        return clone

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(self, target: type, parser: Parser, formatter: Formatter = str) -> None:
        """Register *parser* / *formatter* for *target*.

        *parser* is called as ``parser(text, strict=bool)``.  Registering an
        existing type replaces its converter.
        """
        self._converters[target] = (parser, formatter)
        self._composites.pop(target, None)

    def register_composite(self, target: type, builder: Builder,
                           formatter: Optional[Formatter] = None) -> None:
        """Register a type assembled from several related paths.

        *builder* is called as ``builder(store, path)`` and reads whatever
        sibling paths it needs through the store's ``get`` / ``get_vector``.
        """
        self._composites[target] = (builder, formatter)
        self._converters.pop(target, None)

    def unregister(self, target: type) -> None:
        self._converters.pop(target, None)
        self._composites.pop(target, None)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def _resolve(self, table: Dict[type, Any], target: type) -> Optional[Any]:
        for klass in getattr(target, "__mro__", (target,)):
            if klass in table:
                return table[klass]
        return None

    def is_composite(self, target: type) -> bool:
        return self._resolve(self._composites, target) is not None

    def builder_for(self, target: type) -> Builder:
        entry = self._resolve(self._composites, target)
        if entry is None:
            raise UnknownConverterError(target)
        return entry[0]

    def supports(self, target: type) -> bool:
        return (
            self._resolve(self._converters, target) is not None
            or self._resolve(self._composites, target) is not None
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------
    def convert(self, text: str, target: type, *, strict: bool = False) -> Any:
        entry = self._resolve(self._converters, target)
        if entry is None:
            raise UnknownConverterError(target)
        parser, _ = entry
        return parser(text, strict=strict)

    def convert_to(self, value: Any) -> str:
        target = type(value)
        entry = self._resolve(self._converters, target)
        if entry is not None:
            return entry[1](value)
        composite = self._resolve(self._composites, target)
        if composite is not None and composite[1] is not None:
            return composite[1](value)
        return str(value)


def _build_default_registry() -> ConverterRegistry:
    registry = ConverterRegistry()
    registry.register(str, _parse_str, str)
    registry.register(bool, _parse_bool, _format_bool)
    registry.register(int, _parse_int, str)
    registry.register(float, _parse_float, _format_float)
    return registry


DEFAULT_REGISTRY = _build_default_registry()


def register_converter(target: type, parser: Parser, formatter: Formatter = str) -> None:
    """Register a converter on the process-wide default registry."""
    DEFAULT_REGISTRY.register(target, parser, formatter)


def register_composite(target: type, builder: Builder,
                       formatter: Optional[Formatter] = None) -> None:
    """Register a composite builder on the process-wide default registry."""
    DEFAULT_REGISTRY.register_composite(target, builder, formatter)


def convert(text: str, target: type, *, strict: bool = False) -> Any:
    """Convert stored *text* to *target* with the default registry."""
    return DEFAULT_REGISTRY.convert(text, target, strict=strict)


def convert_to(value: Any) -> str:
    """Render *value* as stored text with the default registry."""
    return DEFAULT_REGISTRY.convert_to(value)
