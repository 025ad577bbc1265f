"""XLF generation for exported translations."""

from typing import Iterable

from lxml import etree

XLIFF_VERSION = "1.2"
INDENT = "    "


def serialize(language_code: str, segments: Iterable, source_language: str = "en_US",
              original: str = "Salesforce") -> bytes:
    """
    Build an XLIFF 1.2 document for one target language.

    Args:
        language_code: XLF code of the target language (e.g. 'fr')
        segments: Export segments (id, max_width, size_unit, source, target)
        source_language: Source language tag of the file element
        original: Value of the file element's original attribute

    Returns:
        UTF-8 encoded XML with declaration
    """
    root = etree.Element("xliff", version=XLIFF_VERSION)
    file_element = etree.SubElement(root, "file", attrib={
        "original": original,
        "source-language": source_language,
        "target-language": language_code,
        "translation-type": "metadata",
        "datatype": "xml",
    })
    body = etree.SubElement(file_element, "body")

    for segment in segments:
        unit = etree.SubElement(body, "trans-unit", attrib={
            "id": segment.id or "",
            "maxwidth": segment.max_width or "",
            "size-unit": segment.size_unit or "",
        })
        etree.SubElement(unit, "source").text = segment.source or ""
        etree.SubElement(unit, "target").text = segment.target

    etree.indent(root, space=INDENT)
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8")
