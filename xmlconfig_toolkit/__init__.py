"""Top-level package for the XML configuration toolkit.

Front-ends (CLI, analysis scripts) should only depend on the public API
exposed here rather than importing internal modules directly.
"""

from .core import (  # re-export for convenience
    ConversionError,
    ConversionResult,
    DocumentParseError,
    HistogramSpec,
    XmlConfig,
    XmlConfigError,
    canonicalize,
    flatten,
    register_converter,
)

__all__: list[str] = [
    "ConversionError",
    "ConversionResult",
    "DocumentParseError",
    "HistogramSpec",
    "XmlConfig",
    "XmlConfigError",
    "canonicalize",
    "flatten",
    "register_converter",
]
