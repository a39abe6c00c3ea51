"""Candidate nodes from an Umbraco 4-7 umbraco.config XML cache."""

import uuid
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from umbraco_export.config import MARKUP_DATE_FORMAT, URL_ALIAS_PROPERTY, URL_NAME_PROPERTY
from umbraco_export.core.sources.base import (
    FormatMismatch,
    SourceNode,
    compact_uid,
    first_alias,
    strip_root,
)
from umbraco_export.core.text import first_child_xml, inner_xml, normalize_text
from umbraco_export.errors import MarkupDecodeError


def is_content_node(element: ET.Element) -> bool:
    """Content nodes are the elements carrying both ``id`` and ``urlName``."""
    return "id" in element.attrib and "urlName" in element.attrib


class ElementProperties:
    """Properties of a content node: its child elements, by tag name.

    Child elements that are themselves content nodes are not properties.
    """

    def __init__(self, element: ET.Element) -> None:
        self._element = element

    def _property_elements(self) -> list[ET.Element]:
        return [child for child in self._element if not is_content_node(child)]

    def _find(self, alias: str) -> ET.Element | None:
        for child in self._property_elements():
            if child.tag == alias:
                return child
        return None

    def get_string(self, alias: str) -> str | None:
        child = self._find(alias)
        if child is None:
            return None
        return "".join(child.itertext())

    def get_date(self, alias: str) -> datetime | None:
        value = self.get_string(alias)
        if value is None or not value.strip():
            return None
        return datetime.strptime(value, MARKUP_DATE_FORMAT)

    def get_xml_string(self, alias: str) -> str | None:
        child = self._find(alias)
        if child is None:
            return None
        return first_child_xml(child)

    def items(self) -> dict[str, str]:
        return {child.tag: normalize_text(inner_xml(child)) for child in self._property_elements()}

    def typed_items(self) -> dict[str, Any]:
        return dict(self.items())


def _parse_date(element: ET.Element, attribute: str, node_id: int) -> datetime:
    raw = element.get(attribute)
    try:
        if raw is None:
            raise ValueError(attribute)
        return datetime.strptime(raw, MARKUP_DATE_FORMAT)
    except ValueError as exc:
        msg = f"Unparsable {attribute} attribute '{raw}' on node ID {node_id}"
        raise MarkupDecodeError(msg) from exc


def _parse_uid(element: ET.Element) -> str | None:
    key = element.get("key")
    if not key:
        return None
    try:
        return compact_uid(uuid.UUID(key))
    except ValueError:
        logger.debug("Ignoring malformed key {!r} on node {}", key, element.get("id"))
        return None


class MarkupSource:
    """Reads candidate nodes from a parsed XML cache, in document order."""

    def __init__(self, root: ET.Element) -> None:
        self._root = root
        self._parents: dict[ET.Element, ET.Element] = {}
        self._positions: dict[ET.Element, int] = {}
        for parent in root.iter():
            position = 0
            for child in parent:
                self._parents[child] = parent
                if is_content_node(child):
                    self._positions[child] = position
                    position += 1

    @classmethod
    def open(cls, path: Path) -> "MarkupSource | FormatMismatch":
        """Parse ``path`` as XML, or report that it is not an XML cache."""
        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as exc:
            return FormatMismatch(f"not well-formed XML ({exc})")
        except (LookupError, ValueError) as exc:
            return FormatMismatch(f"unreadable XML declaration ({exc})")
        return cls(root)

    def _path_ids(self, element: ET.Element) -> tuple[int, ...]:
        ids = [int(element.attrib["id"])]
        current = self._parents.get(element)
        while current is not None:
            if "id" in current.attrib:
                ids.append(int(current.attrib["id"]))
            current = self._parents.get(current)
        ids.reverse()
        return strip_root(ids)

    def _sort_order(self, element: ET.Element) -> int:
        if "sortOrder" in element.attrib:
            return int(element.attrib["sortOrder"])
        return self._positions.get(element, 0)

    def _build(self, element: ET.Element) -> SourceNode:
        node_id = int(element.attrib["id"])
        properties = ElementProperties(element)
        url_name_override = properties.get_string(URL_NAME_PROPERTY)
        if url_name_override is not None and not url_name_override.strip():
            url_name_override = None

        return SourceNode(
            id=node_id,
            path_ids=self._path_ids(element),
            name=element.get("nodeName"),
            url_name=element.get("urlName"),
            url_name_override=url_name_override,
            url_alias=first_alias(properties.get_string(URL_ALIAS_PROPERTY)),
            doctype=element.tag,
            create_date=_parse_date(element, "createDate", node_id),
            update_date=_parse_date(element, "updateDate", node_id),
            creator_name=element.get("creatorName"),
            writer_name=element.get("writerName"),
            template_id=int(element.get("template") or 0),
            sort_order=self._sort_order(element),
            properties=properties,
            uid=_parse_uid(element),
        )

    def read_candidates(self) -> "list[SourceNode] | FormatMismatch":
        """Build every candidate, or report a structure that is not a cache.

        Malformed IDs mean the file is some other XML document. Unparsable
        dates on a real node raise :class:`MarkupDecodeError`.
        """
        candidates = []
        for element in self._root.iter():
            if element is self._root or not is_content_node(element):
                continue
            try:
                candidates.append(self._build(element))
            except ValueError as exc:
                return FormatMismatch(f"element <{element.tag}> is not a content node ({exc})")
        logger.debug("Found {} content nodes in XML cache", len(candidates))
        return candidates

    def candidates(self) -> list[SourceNode]:
        result = self.read_candidates()
        if isinstance(result, FormatMismatch):
            msg = f"Not an XML cache: {result.reason}"
            raise MarkupDecodeError(msg)
        return result
