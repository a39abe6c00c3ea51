"""Protocols for the pluggable seams of the parser."""

from collections.abc import Iterator
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from umbraco_export.core.sources.base import SourceNode


@runtime_checkable
class RecordStoreProtocol(Protocol):
    """Ordered key-value store holding one serialized node kit per node ID."""

    def keys(self) -> Iterator[int]:
        """Yield node IDs in ascending order."""
        ...

    def get(self, key: int) -> bytes:
        """Return the serialized record stored under ``key``."""
        ...

    def close(self) -> None:
        """Release the underlying handle."""
        ...


@runtime_checkable
class PropertySource(Protocol):
    """Named property lookup over a node's original element or record."""

    def get_string(self, alias: str) -> str | None:
        """Return the raw property text, or None if the node has no such property."""
        ...

    def get_date(self, alias: str) -> datetime | None:
        """Return the property as a timestamp."""
        ...

    def get_xml_string(self, alias: str) -> str | None:
        """Return the serialized first child of the property's XML value."""
        ...

    def items(self) -> dict[str, str]:
        """Return every property as normalized text."""
        ...

    def typed_items(self) -> dict[str, Any]:
        """Return every property with its stored type."""
        ...


@runtime_checkable
class NodeSource(Protocol):
    """Anything that can enumerate candidate nodes from an export."""

    def candidates(self) -> list["SourceNode"]:
        """Return every candidate node, ancestors before descendants."""
        ...
