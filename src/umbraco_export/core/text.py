"""Text normalization for raw XML property values."""

import copy
import html
import xml.etree.ElementTree as ET

CDATA_START = "<![CDATA["
CDATA_END = "]]>"


def normalize_text(raw: str) -> str:
    """Strip an enclosing CDATA wrapper, or unescape entities.

    CDATA content is returned verbatim; only text outside CDATA has its
    entities decoded. ElementTree drops CDATA markers, so values built by
    :func:`inner_xml` never carry the wrapper: their CDATA text arrives
    escaped and unescaping restores it unchanged. The wrapper branch serves
    raw text taken straight from a file.
    """
    if raw.startswith(CDATA_START):
        inner = raw[len(CDATA_START) :]
        return inner.removesuffix(CDATA_END)
    return html.unescape(raw)


def inner_xml(element: ET.Element) -> str:
    """Serialize the content of ``element`` without its own tags."""
    parts = [html.escape(element.text, quote=False)] if element.text else []
    for child in element:
        parts.append(ET.tostring(child, encoding="unicode"))
    return "".join(parts)


def first_child_xml(root: ET.Element) -> str | None:
    """Serialize the first child node of ``root``, or None if it has no elements.

    Only the first node is returned even when ``root`` holds several; leading
    text counts as that first node.
    """
    if len(root) == 0:
        return None
    if root.text and root.text.strip():
        return html.escape(root.text, quote=False)
    first = copy.deepcopy(root[0])
    first.tail = None
    ET.indent(first, space="  ")
    return ET.tostring(first, encoding="unicode")
