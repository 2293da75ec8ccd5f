import re

from lxml import etree
from typing import List, Optional

from .xliff_obj import Body, Document, File, Header, Tool, TransUnit
from .settings_manager import get_settings
from .logger import get_logger

logger = get_logger(__name__)

XLIFF_NS = "urn:oasis:names:tc:xliff:document:1.2"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
SCHEMA_LOCATION = f"{XLIFF_NS} http://docs.oasis-open.org/xliff/v1.2/os/xliff-core-1.2-strict.xsd"

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

XMLSyntaxError = etree.XMLSyntaxError


def read_all(path: str) -> bytes:
    """Reads raw bytes from disk. A missing path raises FileNotFoundError."""
    with open(path, 'rb') as f:
        return f.read()


def write_all(path: str, data: bytes):
    with open(path, 'wb') as f:
        f.write(data)


# --- Decoding ---

def _local_name(node) -> Optional[str]:
    # Comments and processing instructions have no string tag
    if not isinstance(node.tag, str):
        return None
    return etree.QName(node).localname


def _children(node, name: str) -> List:
    """Direct child elements with the given local name, in any namespace."""
    return [child for child in node if _local_name(child) == name]


def _child(node, name: str):
    found = _children(node, name)
    return found[0] if found else None


def _text(node, name: str) -> str:
    child = _child(node, name)
    if child is None:
        return ""
    return "".join(child.itertext())


def _attr(node, name: str) -> str:
    return node.get(name, "")


def _decode_tool(header_node) -> Tool:
    tool_node = _child(header_node, "tool") if header_node is not None else None
    if tool_node is None:
        return Tool()
    return Tool(
        tool_id=_attr(tool_node, "tool-id"),
        tool_name=_attr(tool_node, "tool-name"),
        tool_version=_attr(tool_node, "tool-version"),
        build_num=_attr(tool_node, "build-num"),
    )


def _decode_trans_unit(tu_node) -> TransUnit:
    return TransUnit(
        id=_attr(tu_node, "id"),
        source=_text(tu_node, "source"),
        target=_text(tu_node, "target"),
        note=_text(tu_node, "note"),
    )


def _decode_file(file_node) -> File:
    body_node = _child(file_node, "body")
    units = []
    if body_node is not None:
        units = [_decode_trans_unit(tu) for tu in _children(body_node, "trans-unit")]

    return File(
        original=_attr(file_node, "original"),
        source_language=_attr(file_node, "source-language"),
        target_language=_attr(file_node, "target-language"),
        datatype=_attr(file_node, "datatype"),
        header=Header(tool=_decode_tool(_child(file_node, "header"))),
        body=Body(trans_units=units),
    )


def decode(data: bytes) -> Document:
    """
    Parses XLIFF 1.2 bytes into a Document.

    Only well-formedness is checked here; run the validator for structure.
    Elements are matched by local name, so files with or without the XLIFF
    namespace decode the same way. Unknown attributes and elements are ignored.

    Raises:
        lxml.etree.XMLSyntaxError: the bytes are not well-formed XML.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    root = etree.fromstring(data, parser)

    if _local_name(root) != "xliff":
        logger.warning(f"Unexpected root element <{_local_name(root)}>, decoding anyway")

    document = Document(
        version=_attr(root, "version"),
        files=[_decode_file(f) for f in _children(root, "file")],
    )
    logger.debug(
        f"Decoded {len(data)} bytes: {len(document.files)} file(s), "
        f"{sum(len(f.body.trans_units) for f in document.files)} trans-unit(s)"
    )
    return document


def from_file(path: str) -> Document:
    """Reads an XLIFF document from disk."""
    logger.debug(f"Loading {path}")
    return decode(read_all(path))


# --- Encoding ---

def _q(name: str) -> str:
    return f"{{{XLIFF_NS}}}{name}"


def _xml_safe(value: str) -> str:
    """Replaces characters XML cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub("\ufffd", value)


def _set(node, name: str, value: str):
    node.set(name, _xml_safe(value))


def _text_element(parent, name: str, text: str):
    node = etree.SubElement(parent, _q(name))
    node.text = _xml_safe(text)
    return node


def _encode_file(root, xliff_file: File):
    file_node = etree.SubElement(root, _q("file"))
    _set(file_node, "original", xliff_file.original)
    _set(file_node, "source-language", xliff_file.source_language)
    _set(file_node, "datatype", xliff_file.datatype)
    _set(file_node, "target-language", xliff_file.target_language)

    header_node = etree.SubElement(file_node, _q("header"))
    tool = xliff_file.header.tool
    if not tool.is_empty():
        tool_node = etree.SubElement(header_node, _q("tool"))
        _set(tool_node, "tool-id", tool.tool_id)
        _set(tool_node, "tool-name", tool.tool_name)
        if tool.tool_version:
            _set(tool_node, "tool-version", tool.tool_version)
        if tool.build_num:
            _set(tool_node, "build-num", tool.build_num)

    body_node = etree.SubElement(file_node, _q("body"))
    for unit in xliff_file.body.trans_units:
        tu_node = etree.SubElement(body_node, _q("trans-unit"))
        _set(tu_node, "id", unit.id)
        _text_element(tu_node, "source", unit.source)
        _text_element(tu_node, "target", unit.target)
        if unit.note:
            _text_element(tu_node, "note", unit.note)


def encode(document: Document, pretty_print: Optional[bool] = None) -> bytes:
    """
    Serializes a Document to XLIFF 1.2 bytes (UTF-8).

    The namespace declarations and xsi:schemaLocation are always written,
    whatever the document was decoded from. Characters that XML 1.0 cannot
    represent, such as most C0 control characters, are written as U+FFFD.
    """
    if pretty_print is None:
        pretty_print = get_settings().pretty_print

    root = etree.Element(_q("xliff"), nsmap={None: XLIFF_NS, "xsi": XSI_NS})
    _set(root, "version", document.version)
    root.set(f"{{{XSI_NS}}}schemaLocation", SCHEMA_LOCATION)

    for xliff_file in document.files:
        _encode_file(root, xliff_file)

    body = etree.tostring(root, encoding="unicode", pretty_print=pretty_print)
    data = (XML_HEADER + body).encode("utf-8")
    logger.debug(f"Encoded {len(document.files)} file(s) into {len(data)} bytes")
    return data


def to_file(document: Document, path: str):
    """Writes a Document to disk, replacing any existing file."""
    write_all(path, encode(document))
    logger.debug(f"Saved {path}")
