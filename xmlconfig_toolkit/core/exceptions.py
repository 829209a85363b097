from __future__ import annotations

"""Exception classes for document loading and value conversion.

Missing paths are never an error; they resolve to caller supplied defaults.
The classes below cover the remaining failure modes: a document that cannot
be parsed (captured by the store, not raised), strict-mode conversion
failures and requests for a type nobody registered a converter for.
"""

from typing import Optional


class XmlConfigError(Exception):
    """Base exception for all configuration-store errors."""

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.path:
            return f"[{self.path}] {super().__str__()}"
        return super().__str__()


class DocumentParseError(XmlConfigError):
    """Raised by the parser adapter when a source cannot be read or parsed.

    ``path`` holds the file name, or ``"<string>"`` for literal documents.
    The store records this error instead of propagating it.
    """
    pass


class ConversionError(XmlConfigError):
    """Raised in strict mode when stored text does not parse as the target type."""

    def __init__(self, text: str, target: type, path: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        self.text = text
        self.target = target
        message = f"Cannot convert {text!r} to {target.__name__}"
        super().__init__(message, path, cause)


class UnknownConverterError(XmlConfigError):
    """Raised when no converter is registered for a requested type."""

    def __init__(self, target: type) -> None:
        self.target = target
        super().__init__(f"No converter registered for type {target.__name__!r}")


__all__ = [
    "XmlConfigError",
    "DocumentParseError",
    "ConversionError",
    "UnknownConverterError",
]
