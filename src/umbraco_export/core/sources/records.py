"""Candidate nodes from an Umbraco 8 NuCache record store."""

import io
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any

from loguru import logger

from umbraco_export.config import MARKUP_DATE_FORMAT, URL_ALIAS_PROPERTY, URL_NAME_PROPERTY, ParsingOptions
from umbraco_export.core.decoding.primitives import TypedValue
from umbraco_export.core.decoding.records import ContentNodeKitSerializer
from umbraco_export.core.sources.base import SourceNode, compact_uid, first_alias, strip_root
from umbraco_export.core.text import first_child_xml
from umbraco_export.errors import RecordDecodeError
from umbraco_export.models.records import ContentData, ContentNodeKit
from umbraco_export.protocols import RecordStoreProtocol


def _as_text(value: TypedValue) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.strftime(MARKUP_DATE_FORMAT)
    return str(value)


class RecordProperties:
    """Properties of one content data version; the first value of each wins."""

    def __init__(self, data: ContentData) -> None:
        self._data = data

    def get_string(self, alias: str) -> str | None:
        return _as_text(self._data.first_value(alias))

    def get_date(self, alias: str) -> datetime | None:
        value = self._data.first_value(alias)
        return value if isinstance(value, datetime) else None

    def get_xml_string(self, alias: str) -> str | None:
        value = self._data.first_value(alias)
        if not isinstance(value, str):
            return None
        return first_child_xml(ET.fromstring(value))

    def items(self) -> dict[str, str]:
        result = {}
        for alias in self._data.properties:
            text = self.get_string(alias)
            if text is not None:
                result[alias] = text
        return result

    def typed_items(self) -> dict[str, Any]:
        return {alias: values[0].value for alias, values in self._data.properties.items() if values}


def parse_path(node_id: int, path: str) -> tuple[int, ...]:
    """Split a comma separated ancestor path into IDs, root sentinel excluded."""
    try:
        ids = [int(part) for part in path.split(",")] if path else []
    except ValueError as exc:
        msg = f"Node {node_id} has a malformed path {path!r}"
        raise RecordDecodeError(msg) from exc
    path_ids = strip_root(ids)
    if not path_ids or path_ids[-1] != node_id:
        msg = f"Node {node_id} has a path {path!r} that does not end with its own ID"
        raise RecordDecodeError(msg)
    return path_ids


class RecordSource:
    """Decodes every record of a store into candidates, in key order."""

    serializer = ContentNodeKitSerializer()

    def __init__(self, store: RecordStoreProtocol, options: ParsingOptions) -> None:
        self._store = store
        self._options = options

    def _decode(self, key: int) -> ContentNodeKit:
        return self.serializer.read_from(io.BytesIO(self._store.get(key)))

    def _user(self, user_id: int) -> str:
        return self._options.user_mapping.get(user_id, str(user_id))

    def _doctype(self, node_id: int, content_type_id: int) -> str:
        mapping = self._options.doctype_mapping
        if node_id in mapping:
            return mapping[node_id]
        return mapping.get(content_type_id, str(content_type_id))

    def _build(self, node_id: int, kit: ContentNodeKit) -> SourceNode:
        data = kit.data
        properties = RecordProperties(data)
        url_name_override = properties.get_string(URL_NAME_PROPERTY)
        if url_name_override is not None and not url_name_override.strip():
            url_name_override = None

        return SourceNode(
            id=node_id,
            path_ids=parse_path(node_id, kit.node.path),
            name=data.name,
            url_name=data.url_segment,
            url_name_override=url_name_override,
            url_alias=first_alias(properties.get_string(URL_ALIAS_PROPERTY)),
            doctype=self._doctype(node_id, kit.content_type_id),
            create_date=kit.node.create_date,
            update_date=data.version_date,
            creator_name=self._user(kit.node.creator_id),
            writer_name=self._user(data.writer_id),
            template_id=data.template_id,
            sort_order=kit.node.sort_order,
            properties=properties,
            uid=compact_uid(kit.node.uid),
            cultures=dict(data.culture_infos),
        )

    def candidates(self) -> list[SourceNode]:
        result = []
        for key in self._store.keys():
            kit = self._decode(key)
            if kit.published_data is None:
                logger.debug("Node {} has no published version, using its draft", key)
            result.append(self._build(key, kit))
        logger.debug("Decoded {} node kits", len(result))
        return result
