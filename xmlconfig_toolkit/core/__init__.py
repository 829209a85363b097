from __future__ import annotations

"""Flattening core: parser adapter, flattener, converters and the store.

Key components:
- XmlConfig: path-addressed store with typed, default-valued accessors
- flatten: document tree -> ``path -> text`` mapping
- ConverterRegistry: text <-> value conversion dispatch
"""

from .composites import HistogramSpec, register_histogram_converter
from .converters import (
    DEFAULT_REGISTRY,
    ConversionResult,
    ConverterRegistry,
    convert,
    convert_to,
    register_composite,
    register_converter,
)
from .exceptions import ConversionError, DocumentParseError, UnknownConverterError, XmlConfigError
from .flattener import flatten
from .models import ATTR_DELIM, PATH_DELIM, VAL_DNE, DocumentNode
from .parser import LxmlNode, parse_document
from .paths import canonicalize
from .store import XmlConfig

__all__: list[str] = [
    "ATTR_DELIM",
    "PATH_DELIM",
    "VAL_DNE",
    "DEFAULT_REGISTRY",
    "ConversionError",
    "ConversionResult",
    "ConverterRegistry",
    "DocumentNode",
    "DocumentParseError",
    "HistogramSpec",
    "LxmlNode",
    "UnknownConverterError",
    "XmlConfig",
    "XmlConfigError",
    "canonicalize",
    "convert",
    "convert_to",
    "flatten",
    "parse_document",
    "register_composite",
    "register_converter",
    "register_histogram_converter",
]
