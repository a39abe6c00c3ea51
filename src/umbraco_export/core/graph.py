"""The assembled node set, indexed by ID and by UID."""

from collections.abc import Iterator

from umbraco_export.errors import ContentParsingError
from umbraco_export.models.node import Node


class NodeGraph:
    """Owns every node of one parse, in source order."""

    def __init__(self) -> None:
        self._nodes: dict[int, Node] = {}
        self._ordered: list[Node] = []
        self._ids_by_uid: dict[str, int] = {}

    def add(self, node: Node) -> None:
        if node.id in self._nodes:
            msg = f"Duplicate node ID {node.id}"
            raise ContentParsingError(msg)
        self._nodes[node.id] = node
        self._ordered.append(node)
        if node.uid is not None:
            self._ids_by_uid[node.uid] = node.id

    def get(self, node_id: int) -> Node | None:
        return self._nodes.get(node_id)

    def get_by_uid(self, uid: str | None) -> Node | None:
        """Find a node by UID, hyphenated or compact, in any case."""
        if uid is None:
            return None
        node_id = self._ids_by_uid.get(uid.replace("-", "").lower())
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def parent_of(self, node: Node) -> Node | None:
        if node.parent_id is None:
            return None
        return self._nodes.get(node.parent_id)

    def children_of(self, node: Node) -> list[Node]:
        return [child for child in self._ordered if child.parent_id == node.id]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
