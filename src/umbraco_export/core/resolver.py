"""URL and display path resolution over a complete candidate set."""

from collections.abc import Iterable, Mapping

from loguru import logger

from umbraco_export.config import ROOT_ID
from umbraco_export.core.sources.base import SourceNode


class UrlResolver:
    """Per-node URL and name fragments, joined along an ancestor chain.

    Both fragment caches are filled once, in the constructor, from every
    candidate of the source. Resolution afterwards only reads them.
    """

    def __init__(self, candidates: Iterable[SourceNode], url_prefix_mapping: Mapping[int, str]) -> None:
        self._prefixes = dict(url_prefix_mapping)
        self._url_fragments: dict[int, str] = {}
        self._name_fragments: dict[int, str | None] = {}

        for candidate in candidates:
            fragment = self._prefixes.get(candidate.id)
            if fragment is None:
                fragment = candidate.url_name_override or candidate.url_name
            if fragment:
                self._url_fragments[candidate.id] = fragment
            self._name_fragments[candidate.id] = candidate.name

        logger.debug(
            "Built fragment caches: {} URL fragments, {} names",
            len(self._url_fragments),
            len(self._name_fragments),
        )

    def url_fragment(self, node_id: int) -> str | None:
        return self._url_fragments.get(node_id)

    def resolve_url(self, path_ids: Iterable[int], url_alias: str | None = None) -> str | None:
        """Join the URL fragments of ``path_ids``, or return None if one is missing.

        A non-blank alias replaces the joined URL. It is prefixed with the
        root's fragment only when the root has a URL prefix configured.
        """
        url = ""
        sep = ""
        for node_id in path_ids:
            if node_id == ROOT_ID:
                continue
            fragment = self._url_fragments.get(node_id)
            if fragment is None:
                return None
            url += sep + fragment
            sep = "/"

            if url_alias is not None and url_alias.strip():
                if node_id in self._prefixes:
                    return url + "/" + url_alias.lstrip("/")
                return url_alias

        return url

    def resolve_path_names(self, path_ids: Iterable[int]) -> list[str | None] | None:
        """Return the display name of each node in ``path_ids``, or None if one is unknown."""
        names = []
        for node_id in path_ids:
            if node_id == ROOT_ID:
                continue
            if node_id not in self._name_fragments:
                return None
            names.append(self._name_fragments[node_id])
        return names
