"""Records decoded from a NuCache content store."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from umbraco_export.core.decoding.primitives import TypedValue
from umbraco_export.errors import RecordDecodeError


@dataclass(frozen=True)
class PropertyValue:
    """One value of a property, for a culture and segment ("" = invariant)."""

    value: TypedValue
    culture: str = ""
    segment: str = ""


@dataclass(frozen=True)
class CultureVariation:
    """Per-language overlay of a node's name, URL segment and date."""

    name: str | None
    url_segment: str | None
    date: datetime


@dataclass(frozen=True)
class ContentData:
    """One version (draft or published) of a node's content."""

    published: bool
    name: str | None
    url_segment: str | None
    version_id: int
    version_date: datetime
    writer_id: int
    template_id: int
    properties: dict[str, tuple[PropertyValue, ...]] = field(default_factory=dict)
    culture_infos: dict[str, CultureVariation] = field(default_factory=dict)

    def first_value(self, alias: str) -> TypedValue:
        """Return the first stored value of a property, or None."""
        values = self.properties.get(alias)
        if not values:
            return None
        return values[0].value


@dataclass(frozen=True)
class ContentNode:
    """Structural fields shared by the draft and published versions."""

    id: int
    uid: uuid.UUID
    level: int
    path: str
    sort_order: int
    parent_content_id: int
    create_date: datetime
    creator_id: int


@dataclass(frozen=True)
class ContentNodeKit:
    """A node with its content type and its draft and published data."""

    node: ContentNode
    content_type_id: int
    draft_data: ContentData | None = None
    published_data: ContentData | None = None

    @property
    def data(self) -> ContentData:
        """Published data when present, otherwise the draft."""
        if self.published_data is not None:
            return self.published_data
        if self.draft_data is None:
            msg = f"Node {self.node.id} has neither draft nor published data"
            raise RecordDecodeError(msg)
        return self.draft_data
