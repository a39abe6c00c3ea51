"""Tests for the node graph."""

from datetime import datetime

import pytest

from umbraco_export.core.graph import NodeGraph
from umbraco_export.errors import ContentParsingError
from umbraco_export.models.node import Node

_DATE = datetime(2020, 1, 1)


def _node(node_id: int, path_ids: tuple[int, ...], graph: NodeGraph, uid: str | None = None) -> Node:
    return Node(
        id=node_id,
        parent_id=path_ids[-2] if len(path_ids) > 1 else None,
        name=f"Node {node_id}",
        url=None,
        doctype="page",
        level=len(path_ids),
        create_date=_DATE,
        update_date=_DATE,
        creator_name=None,
        writer_name=None,
        template_id=0,
        path_ids=path_ids,
        path_names=None,
        uid=uid,
        graph=graph,
    )


@pytest.fixture
def graph() -> NodeGraph:
    graph = NodeGraph()
    # Children before their parent, as a store in key order may yield them.
    graph.add(_node(3, (1, 3), graph))
    graph.add(_node(1, (1,), graph, uid="ec4aafcc0c254f25a8fe705bfae1d324"))
    graph.add(_node(2, (1, 2), graph))
    graph.add(_node(4, (1, 2, 4), graph))
    return graph


def test_lookup_by_id(graph: NodeGraph) -> None:
    assert graph.get(2).name == "Node 2"
    assert graph.get(99) is None
    assert 4 in graph
    assert 99 not in graph
    assert len(graph) == 4


def test_iteration_keeps_insertion_order(graph: NodeGraph) -> None:
    assert [n.id for n in graph] == [3, 1, 2, 4]


def test_parent_and_children_resolve_regardless_of_order(graph: NodeGraph) -> None:
    root = graph.get(1)
    assert [c.id for c in root.children] == [3, 2]
    assert graph.get(3).parent is root
    assert root.parent is None
    assert graph.get(4).children == []


@pytest.mark.parametrize(
    "uid",
    ["ec4aafcc0c254f25a8fe705bfae1d324", "ec4aafcc-0c25-4f25-a8fe-705bfae1d324", "EC4AAFCC-0C25-4F25-A8FE-705BFAE1D324"],
)
def test_lookup_by_uid(graph: NodeGraph, uid: str) -> None:
    assert graph.get_by_uid(uid).id == 1


def test_lookup_by_unknown_uid(graph: NodeGraph) -> None:
    assert graph.get_by_uid("00000000000000000000000000000000") is None
    assert graph.get_by_uid(None) is None


def test_duplicate_id_is_rejected(graph: NodeGraph) -> None:
    with pytest.raises(ContentParsingError, match="Duplicate node ID 2"):
        graph.add(_node(2, (1, 2), graph))
