"""Serializers that rebuild node kits from the NuCache byte stream.

Fields are read in a fixed order with no framing or version marker, so the
order below is the format. Reading one field out of place corrupts every
field after it.
"""

from typing import Any, BinaryIO

from umbraco_export.core.decoding import primitives as p
from umbraco_export.errors import RecordDecodeError
from umbraco_export.models.records import (
    ContentData,
    ContentNode,
    ContentNodeKit,
    CultureVariation,
    PropertyValue,
)


class ReadOnlySerializer:
    """Base for serializers of a format this package only ever reads."""

    def read_from(self, stream: BinaryIO) -> Any:
        raise NotImplementedError

    def write_to(self, value: Any, stream: BinaryIO) -> None:
        msg = f"{type(self).__name__} cannot write records; the store is read-only"
        raise NotImplementedError(msg)


def _read_count(stream: BinaryIO, what: str) -> int:
    count = p.read_int(stream)
    if count < 0:
        msg = f"Negative {what} count {count}"
        raise RecordDecodeError(msg)
    return count


def _required_string(stream: BinaryIO, what: str) -> str:
    value = p.read_string(stream)
    if value is None:
        msg = f"Null {what} where a string is required"
        raise RecordDecodeError(msg)
    return value


class PropertyDataSerializer(ReadOnlySerializer):
    """Property alias to the list of its (culture, segment, value) entries."""

    def read_from(self, stream: BinaryIO) -> dict[str, tuple[PropertyValue, ...]]:
        properties: dict[str, tuple[PropertyValue, ...]] = {}
        for _ in range(_read_count(stream, "property")):
            alias = _required_string(stream, "property alias")
            values = []
            for _ in range(_read_count(stream, "property value")):
                culture = p.read_string_object(stream) or ""
                segment = p.read_string_object(stream) or ""
                values.append(PropertyValue(value=p.read_object(stream), culture=culture, segment=segment))
            properties[alias] = tuple(values)
        return properties


class CultureVariationSerializer(ReadOnlySerializer):
    """Culture key to that culture's name, URL segment and date."""

    def read_from(self, stream: BinaryIO) -> dict[str, CultureVariation]:
        cultures: dict[str, CultureVariation] = {}
        for _ in range(_read_count(stream, "culture")):
            culture = _required_string(stream, "culture key")
            cultures[culture] = CultureVariation(
                name=p.read_string_object(stream),
                url_segment=p.read_string_object(stream),
                date=p.read_datetime(stream),
            )
        return cultures


class ContentDataSerializer(ReadOnlySerializer):
    properties = PropertyDataSerializer()
    cultures = CultureVariationSerializer()

    def read_from(self, stream: BinaryIO) -> ContentData:
        return ContentData(
            published=p.read_bool(stream),
            name=p.read_string(stream),
            url_segment=p.read_string(stream),
            version_id=p.read_int(stream),
            version_date=p.read_datetime(stream),
            writer_id=p.read_int(stream),
            template_id=p.read_int(stream),
            properties=self.properties.read_from(stream),
            culture_infos=self.cultures.read_from(stream),
        )


class ContentNodeSerializer(ReadOnlySerializer):
    def read_from(self, stream: BinaryIO) -> ContentNode:
        return ContentNode(
            id=p.read_int(stream),
            uid=p.read_guid(stream),
            level=p.read_int(stream),
            path=_required_string(stream, "path"),
            sort_order=p.read_int(stream),
            parent_content_id=p.read_int(stream),
            create_date=p.read_datetime(stream),
            creator_id=p.read_int(stream),
        )


class ContentNodeKitSerializer(ReadOnlySerializer):
    """Node, content type, then optional draft and published data."""

    nodes = ContentNodeSerializer()
    data = ContentDataSerializer()

    def read_from(self, stream: BinaryIO) -> ContentNodeKit:
        node = self.nodes.read_from(stream)
        content_type_id = p.read_int(stream)
        draft = self.data.read_from(stream) if p.read_bool(stream) else None
        published = self.data.read_from(stream) if p.read_bool(stream) else None
        if draft is None and published is None:
            msg = f"Node {node.id} has neither draft nor published data"
            raise RecordDecodeError(msg)
        return ContentNodeKit(
            node=node,
            content_type_id=content_type_id,
            draft_data=draft,
            published_data=published,
        )
