"""Tests for domain models."""

import dataclasses
import uuid
from datetime import datetime

import pytest

from umbraco_export.errors import RecordDecodeError
from umbraco_export.models.node import Node
from umbraco_export.models.records import ContentData, ContentNode, ContentNodeKit, PropertyValue


def _node(**overrides) -> Node:
    fields = {
        "id": 1,
        "parent_id": None,
        "name": "Home",
        "url": "home",
        "doctype": "page",
        "level": 1,
        "create_date": datetime(2020, 1, 1),
        "update_date": datetime(2020, 1, 2),
        "creator_name": None,
        "writer_name": None,
        "template_id": 0,
        "path_ids": (1,),
        "path_names": ("Home",),
    }
    fields.update(overrides)
    return Node(**fields)


def test_node_is_frozen() -> None:
    node = _node()
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "changed"  # type: ignore[misc]


def test_detached_node_has_no_relatives_or_properties() -> None:
    node = _node()
    assert node.parent is None
    assert node.children == []
    assert node.get_property_as_string("title") is None
    assert node.get_property_as_bool("title") is False
    assert node.get_property_as_int("title") is None
    assert node.get_property_as_date("title") is None
    assert node.get_property_as_xml_string("title") is None
    assert node.get_properties() == {}
    assert node.get_typed_properties() == {}


def test_graph_and_properties_do_not_affect_equality() -> None:
    assert _node() == _node(cultures={"en-US": None})
    assert _node() != _node(url="other")


def test_first_value_of_property() -> None:
    data = ContentData(
        published=True,
        name="Home",
        url_segment="home",
        version_id=1,
        version_date=datetime(2020, 1, 1),
        writer_id=-1,
        template_id=0,
        properties={"links": (PropertyValue("a"), PropertyValue("b")), "empty": ()},
    )
    assert data.first_value("links") == "a"
    assert data.first_value("empty") is None
    assert data.first_value("missing") is None


def test_kit_without_any_data_has_no_authoritative_version() -> None:
    node = ContentNode(
        id=5,
        uid=uuid.UUID(int=5),
        level=1,
        path="-1,5",
        sort_order=0,
        parent_content_id=-1,
        create_date=datetime(2020, 1, 1),
        creator_id=-1,
    )
    kit = ContentNodeKit(node=node, content_type_id=1)
    with pytest.raises(RecordDecodeError, match="Node 5 has neither draft nor published data"):
        kit.data
