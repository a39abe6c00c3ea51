"""Domain models for an Umbraco content tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from umbraco_export.models.records import CultureVariation
from umbraco_export.protocols import PropertySource

if TYPE_CHECKING:
    from umbraco_export.core.graph import NodeGraph


@dataclass(frozen=True)
class Node:
    """A single published content node.

    ``parent`` and ``children`` are looked up in the graph that owns the
    node; nothing is stored on the node itself.
    """

    id: int
    parent_id: int | None
    name: str | None
    url: str | None
    doctype: str
    level: int
    create_date: datetime
    update_date: datetime
    creator_name: str | None
    writer_name: str | None
    template_id: int
    path_ids: tuple[int, ...]
    path_names: tuple[str | None, ...] | None
    sort_order: int = 0
    uid: str | None = None
    cultures: dict[str, CultureVariation] = field(default_factory=dict, compare=False)
    properties: PropertySource | None = field(default=None, repr=False, compare=False)
    graph: NodeGraph | None = field(default=None, repr=False, compare=False)

    @property
    def parent(self) -> Node | None:
        if self.graph is None:
            return None
        return self.graph.parent_of(self)

    @property
    def children(self) -> list[Node]:
        """Direct children, in source order."""
        if self.graph is None:
            return []
        return self.graph.children_of(self)

    def get_property_as_string(self, alias: str) -> str | None:
        """Return the raw property value, or None if the node has no such property."""
        if self.properties is None:
            return None
        return self.properties.get_string(alias)

    def get_property_as_bool(self, alias: str) -> bool:
        """Only the value ``"1"`` is true; anything else, or absence, is false."""
        return self.get_property_as_string(alias) == "1"

    def get_property_as_int(self, alias: str) -> int | None:
        """Return None for a missing or blank value; other values must parse."""
        value = self.get_property_as_string(alias)
        if value is None or not value.strip():
            return None
        return int(value)

    def get_property_as_date(self, alias: str) -> datetime | None:
        if self.properties is None:
            return None
        return self.properties.get_date(alias)

    def get_property_as_xml_string(self, alias: str) -> str | None:
        """Return the first child node of an XML valued property, serialized.

        Only the first child is returned, not the whole value.
        """
        if self.properties is None:
            return None
        return self.properties.get_xml_string(alias)

    def get_properties(self) -> dict[str, str]:
        if self.properties is None:
            return {}
        return self.properties.items()

    def get_typed_properties(self) -> dict[str, Any]:
        if self.properties is None:
            return {}
        return self.properties.typed_items()
