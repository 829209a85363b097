from __future__ import annotations

"""lxml adapter producing :class:`DocumentNode` trees.

Parsing is the only place that touches the file system or the XML library;
the flattener only ever sees :class:`LxmlNode` wrappers.
"""

import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from lxml import etree as ET

from xmlconfig_toolkit.core.exceptions import DocumentParseError

logger = logging.getLogger(__name__)

__all__ = ["LxmlNode", "parse_document", "STRING_SOURCE"]

STRING_SOURCE = "<string>"

_XML_DECLARATION = re.compile(r"^\ufeff?\s*<\?xml\b[^>]*\?>")


def _local_name(name: str) -> str:
    return ET.QName(name).localname if name.startswith("{") else name


class LxmlNode:
    """Read-only :class:`DocumentNode` view of an lxml element.

    Content is the element's leading text with surrounding whitespace
    removed; whitespace-only text counts as no content.  Only element
    children are exposed, so comments and processing instructions never
    reach the flattener.
    """

    __slots__ = ("_element",)

    def __init__(self, element: ET._Element) -> None:
        self._element = element

    @property
    def element(self) -> ET._Element:
        return self._element

    @property
    def name(self) -> str:
        return _local_name(self._element.tag)

    @property
    def content(self) -> Optional[str]:
        text = self._element.text
        if text is None:
            return None
        text = text.strip()
        return text or None

    def attributes(self) -> List[Tuple[str, Optional[str]]]:
        return [(_local_name(key), value) for key, value in self._element.attrib.items()]

    def children(self) -> Iterator["LxmlNode"]:
        for child in self._element.iterchildren(tag=ET.Element):
            yield LxmlNode(child)

    def __repr__(self) -> str:
        return f"LxmlNode({self.name!r})"


def _document_text(source: Union[str, bytes, Path]) -> Union[str, bytes]:
    """Return *source* in a form lxml accepts as literal document text.

    Bytes are passed through so that their declared encoding applies.  Text is
    already decoded, so its declaration (whatever encoding it names) is dropped.
    """
    if isinstance(source, bytes):
        return source
    return _XML_DECLARATION.sub("", str(source), count=1)


def _make_parser(*, resolve_entities: bool = False, huge_tree: bool = False) -> ET.XMLParser:
    # no_network keeps external DTDs from being fetched
    return ET.XMLParser(resolve_entities=resolve_entities, huge_tree=huge_tree, no_network=True)


def parse_document(source: Union[str, bytes, Path], as_string: bool = False, *,
                   resolve_entities: bool = False, huge_tree: bool = False) -> LxmlNode:
    """Parse *source* and return its root element as a :class:`LxmlNode`.

    Parameters
    ----------
    source
        Path of the XML file, or the literal document (text or encoded bytes)
        when *as_string* is true.
    as_string
        Treat *source* as document text instead of a file name.

    Raises
    ------
    DocumentParseError
        If the file cannot be read or the document is not well formed.
    """
    parser = _make_parser(resolve_entities=resolve_entities, huge_tree=huge_tree)
    label = STRING_SOURCE if as_string else str(source)
    try:
        if as_string:
            root = ET.fromstring(_document_text(source), parser)
        else:
            root = ET.parse(str(source), parser).getroot()
    except ET.XMLSyntaxError as exc:
        raise DocumentParseError(f"XML syntax error: {exc}", label, exc) from exc
    except OSError as exc:
        raise DocumentParseError(f"Failed to read document: {exc}", label, exc) from exc

    if root is None:
        raise DocumentParseError("Document has no root element", label)

    logger.debug("Parsed %s: root=<%s>", label, root.tag)
    return LxmlNode(root)
