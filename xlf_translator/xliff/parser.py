"""
XLF parsing.

Extracts trans-units from an XLIFF 1.2 document. Matching is done on local
element names, so namespaced and plain documents both work, as does the
nested envelope some exports produce (file/body/xliff/file/body/trans-unit).
Documents with several file elements yield the units of all of them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from lxml import etree

from xlf_translator.core.models import Segment, parse_max_width
from xlf_translator.exceptions import MalformedDocument, UnsupportedSourceLanguage
from xlf_translator.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SOURCE_LANGUAGE = "en_US"


@dataclass
class ExtractedDocument:
    """Parsed XLF file metadata and its segments."""
    source_language: str
    target_language: Optional[str] = None
    original: Optional[str] = None
    segments: List[Segment] = field(default_factory=list)


def _local_name(element) -> str:
    return etree.QName(element).localname


def _children(element, name: str) -> list:
    """Direct child elements with the given local name, in document order."""
    return [
        child for child in element.iterchildren(tag=etree.Element)
        if _local_name(child) == name
    ]


def _child(element, name: str):
    """First direct child element with the given local name."""
    children = _children(element, name)
    return children[0] if children else None


def _text(element) -> str:
    if element is None:
        return ""
    return "".join(element.itertext())


def _build_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _to_segment(unit) -> Segment:
    return Segment(
        id=unit.get("id"),
        source=_text(_child(unit, "source")),
        max_width=parse_max_width(unit.get("maxwidth")),
        size_unit=unit.get("size-unit") or "",
        note=_text(_child(unit, "note")),
    )


def extract(content: Union[bytes, str], source_language: str = DEFAULT_SOURCE_LANGUAGE) -> ExtractedDocument:
    """
    Parse an XLF document and extract its translation units.

    Args:
        content: XLF document, raw bytes or text
        source_language: The only source language accepted

    Returns:
        ExtractedDocument with the segments in document order

    Raises:
        MalformedDocument: If the XML is invalid, the xliff/file elements are
            missing, or no trans-unit is found
        UnsupportedSourceLanguage: If any file's source-language differs
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    try:
        root = etree.fromstring(content, _build_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedDocument(f"Failed to parse XLF: {e}") from e

    file_elements = _children(root, "file") if _local_name(root) == "xliff" else []
    if not file_elements:
        raise MalformedDocument("Invalid XLF format: missing xliff or file element")

    # Every file must pass the language check, units are collected across all of them
    units = []
    for file_element in file_elements:
        actual_language = file_element.get("source-language")
        if actual_language != source_language:
            raise UnsupportedSourceLanguage(
                f"Invalid source language: {actual_language}. Only {source_language} is supported.",
                details={"expected": source_language, "actual": actual_language},
            )

        body = _child(file_element, "body")
        if body is not None:
            units.extend(
                element for element in body.iter(tag=etree.Element)
                if _local_name(element) == "trans-unit"
            )

    if not units:
        raise MalformedDocument("No trans-unit elements found in document")

    first_file = file_elements[0]
    document = ExtractedDocument(
        source_language=first_file.get("source-language"),
        target_language=first_file.get("target-language"),
        original=first_file.get("original"),
        segments=[_to_segment(unit) for unit in units],
    )
    logger.info(f"Extracted {len(document.segments)} segments from {len(file_elements)} file element(s)")
    return document


def validate(content: Union[bytes, str], source_language: str = DEFAULT_SOURCE_LANGUAGE) -> bool:
    """Check that a document parses and uses the supported source language."""
    try:
        extract(content, source_language)
    except (MalformedDocument, UnsupportedSourceLanguage):
        return False
    return True
