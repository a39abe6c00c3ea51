"""Entry point: turn an Umbraco export file into a queryable node tree."""

from collections.abc import Callable, Iterator
from contextlib import closing
from pathlib import Path

from loguru import logger

from umbraco_export.config import SNIFF_LENGTH, ParsingOptions
from umbraco_export.core.graph import NodeGraph
from umbraco_export.core.resolver import UrlResolver
from umbraco_export.core.sources.base import FormatMismatch, SourceNode, truncate_to_seconds
from umbraco_export.core.sources.markup import MarkupSource
from umbraco_export.core.sources.records import RecordSource
from umbraco_export.core.store.sqlite_store import SqliteRecordStore
from umbraco_export.errors import ConfigurationError, MarkupDecodeError, RecordStoreError
from umbraco_export.models.node import Node
from umbraco_export.protocols import NodeSource, RecordStoreProtocol

_UTF8_BOM = b"\xef\xbb\xbf"


def looks_like_markup(head: bytes) -> bool:
    """XML caches start with ``<``, possibly after a UTF-8 byte order mark."""
    return head.removeprefix(_UTF8_BOM).startswith(b"<")


class ContentParser:
    """Parse an umbraco.config XML cache or a NuCache record store.

    The whole tree is built in the constructor; a decode error aborts it and
    no partial tree is exposed. Lookups afterwards never raise for missing
    nodes, they return None.

    Args:
        path: The umbraco.config file or NuCache store file.
        options: URL prefix, doctype and user lookup tables.
        store_factory: Opens the record store for non-XML input.
    """

    def __init__(
        self,
        path: Path | str,
        options: ParsingOptions | None = None,
        *,
        store_factory: Callable[[Path], RecordStoreProtocol] = SqliteRecordStore,
    ) -> None:
        if not path:
            msg = "A path to an umbraco.config or NuCache file is required"
            raise ConfigurationError(msg)
        self.path = Path(path)
        self.options = options or ParsingOptions()
        self._store_factory = store_factory
        self._graph = NodeGraph()

        candidates = self._read_candidates()
        self._resolver = UrlResolver(candidates, self.options.url_prefix_mapping)
        for candidate in candidates:
            self._graph.add(self._build_node(candidate))

        logger.info("Parsed {} nodes from {}", len(self._graph), self.path)

    def _sniff(self) -> bytes:
        try:
            with self.path.open("rb") as f:
                return f.read(SNIFF_LENGTH)
        except OSError as exc:
            msg = f"Cannot read {self.path}: {exc}"
            raise ConfigurationError(msg) from exc

    def _read_markup(self) -> list[SourceNode] | FormatMismatch:
        source = MarkupSource.open(self.path)
        if isinstance(source, FormatMismatch):
            return source
        try:
            return source.read_candidates()
        except MarkupDecodeError as exc:
            msg = f"Could not parse {self.path} as XML - {exc}"
            raise MarkupDecodeError(msg) from exc

    def _read_records(self) -> list[SourceNode]:
        try:
            store = self._store_factory(self.path)
        except RecordStoreError as exc:
            msg = f"Could not parse {self.path} as a NuCache DB - {exc}"
            raise RecordStoreError(msg) from exc
        with closing(store):
            source: NodeSource = RecordSource(store, self.options)
            return source.candidates()

    def _read_candidates(self) -> list[SourceNode]:
        if looks_like_markup(self._sniff()):
            result = self._read_markup()
            if not isinstance(result, FormatMismatch):
                logger.debug("Read {} as an XML cache", self.path)
                return result
            logger.debug("{} is not an XML cache ({}), trying record store", self.path, result.reason)
        candidates = self._read_records()
        logger.debug("Read {} as a NuCache record store", self.path)
        return candidates

    def _build_node(self, candidate: SourceNode) -> Node:
        path_ids = candidate.path_ids
        path_names = self._resolver.resolve_path_names(path_ids)
        return Node(
            id=candidate.id,
            parent_id=path_ids[-2] if len(path_ids) > 1 else None,
            name=candidate.name,
            url=self._resolver.resolve_url(path_ids, candidate.url_alias),
            doctype=candidate.doctype,
            level=len(path_ids),
            create_date=truncate_to_seconds(candidate.create_date),
            update_date=truncate_to_seconds(candidate.update_date),
            creator_name=candidate.creator_name,
            writer_name=candidate.writer_name,
            template_id=candidate.template_id,
            path_ids=path_ids,
            path_names=tuple(path_names) if path_names is not None else None,
            sort_order=candidate.sort_order,
            uid=candidate.uid,
            cultures=candidate.cultures,
            properties=candidate.properties,
            graph=self._graph,
        )

    def get_node(self, node_id: int) -> Node | None:
        """Get a node by ID, or None if not found."""
        return self._graph.get(node_id)

    def get_node_by_uid(self, uid: str | None) -> Node | None:
        """Get a node by UID, e.g. ``ec4aafcc0c254f25a8fe705bfae1d324`` or its hyphenated form."""
        return self._graph.get_by_uid(uid)

    def get_nodes(self) -> Iterator[Node]:
        """Iterate over all nodes in source order."""
        return iter(self._graph)

    def get_children(self, node: Node | int) -> list[Node]:
        """Direct children of a node (or node ID), in source order."""
        node_id = node if isinstance(node, int) else node.id
        parent = self._graph.get(node_id)
        if parent is None:
            return []
        return self._graph.children_of(parent)

    def __len__(self) -> int:
        return len(self._graph)
