"""Source-independent view of one candidate node."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from umbraco_export.config import ROOT_ID
from umbraco_export.models.records import CultureVariation
from umbraco_export.protocols import PropertySource


@dataclass(frozen=True)
class FormatMismatch:
    """Returned by an adapter when the input is not in its format."""

    reason: str


@dataclass(frozen=True)
class SourceNode:
    """Everything an adapter knows about one node before URLs are resolved.

    ``path_ids`` runs from the top ancestor to the node itself, root sentinel
    excluded. ``properties`` is the adapter's live view of the original
    element or record.
    """

    id: int
    path_ids: tuple[int, ...]
    name: str | None
    url_name: str | None
    url_name_override: str | None
    url_alias: str | None
    doctype: str
    create_date: datetime
    update_date: datetime
    creator_name: str | None
    writer_name: str | None
    template_id: int
    sort_order: int
    properties: PropertySource
    uid: str | None = None
    cultures: dict[str, CultureVariation] = field(default_factory=dict)


def strip_root(path_ids: list[int]) -> tuple[int, ...]:
    return tuple(node_id for node_id in path_ids if node_id != ROOT_ID)


def first_alias(value: str | None) -> str | None:
    """Return the first entry of a comma separated alias list, if any."""
    if value is None or not value.strip():
        return None
    return value.split(",")[0]


def compact_uid(value: uuid.UUID | str) -> str:
    """Normalize a GUID to 32 lowercase hex digits without hyphens."""
    return str(value).replace("-", "").lower()


def truncate_to_seconds(value: datetime) -> datetime:
    return value.replace(microsecond=0)
