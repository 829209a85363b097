from __future__ import annotations

"""Composite values assembled from several related paths.

:class:`HistogramSpec` shows how a type adapter is built on top of the
generic accessors: it is registered as a composite, so
``cfg.get("Histograms.Histogram[1]", HistogramSpec())`` reads the node's
``name``, ``title`` and ``bins-x`` attributes and returns one object.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from xmlconfig_toolkit.core.converters import DEFAULT_REGISTRY, ConverterRegistry
from xmlconfig_toolkit.core.models import ATTR_DELIM

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from xmlconfig_toolkit.core.store import XmlConfig

__all__ = ["HistogramSpec", "read_histogram", "register_histogram_converter"]

_DEFAULT_BINS = [1.0, 0.0, 1.0]


@dataclass(frozen=True)
class HistogramSpec:
    """Binning description of a one-dimensional histogram."""

    name: str = "hist_name"
    title: str = "title"
    nbins: int = 1
    low: float = 0.0
    high: float = 1.0


def read_histogram(store: "XmlConfig", path: str) -> HistogramSpec:
    """Build a :class:`HistogramSpec` from the attributes of the node at *path*.

    ``bins-x`` holds ``nbins, low, high``; missing trailing fields fall back
    to the defaults ``1, 0, 1``.
    """
    name = store.get(f"{path}{ATTR_DELIM}name", "hist_name")
    title = store.get(f"{path}{ATTR_DELIM}title", "title")
    bins = store.get_vector(f"{path}{ATTR_DELIM}bins-x", _DEFAULT_BINS, float)
    bins = list(bins) + _DEFAULT_BINS[len(bins):]
    return HistogramSpec(name=name, title=title, nbins=int(bins[0]), low=bins[1], high=bins[2])


def _format_histogram(spec: HistogramSpec) -> str:
    return f"{spec.nbins},{spec.low!r},{spec.high!r}"


def register_histogram_converter(registry: Optional[ConverterRegistry] = None) -> None:
    """Make :class:`HistogramSpec` available to ``XmlConfig.get``."""
    target = registry if registry is not None else DEFAULT_REGISTRY
    target.register_composite(HistogramSpec, read_histogram, _format_histogram)
