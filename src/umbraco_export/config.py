"""Configuration constants and parsing options for umbraco-export."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from umbraco_export.errors import ConfigurationError

# Path id of the implicit content root. Never stored in a node's path.
ROOT_ID: int = -1

# Property that replaces a node's computed URL (comma separated, first wins).
URL_ALIAS_PROPERTY: str = "umbracoUrlAlias"

# Property that replaces a node's own URL segment when non-blank.
URL_NAME_PROPERTY: str = "umbracoUrlName"

# Date format used by the XML cache, for attributes and date properties.
MARKUP_DATE_FORMAT: str = "%Y-%m-%dT%H:%M:%S"

# Table holding serialized node kits in a record store file.
RECORDS_TABLE: str = "records"

# Bytes read from the input file to decide between XML and record store.
SNIFF_LENGTH: int = 10


def _int_keyed(table: object, *, name: str) -> dict[int, str]:
    if not isinstance(table, dict):
        msg = f"Invalid {name}: expected a JSON object, got {type(table).__name__}"
        raise ConfigurationError(msg)
    try:
        return {int(key): str(value) for key, value in table.items()}
    except (TypeError, ValueError) as exc:
        msg = f"Invalid {name}: keys must be node or content type IDs ({exc})"
        raise ConfigurationError(msg) from exc


@dataclass(frozen=True)
class ParsingOptions:
    """Lookup tables applied while building nodes.

    Attributes:
        url_prefix_mapping: Node ID to URL prefix. The prefix replaces the
            node's own URL segment, typically a site root mapped to a domain.
        doctype_mapping: Node ID (or content type ID) to document type name.
            Record stores only.
        user_mapping: User ID to user name. Record stores only.
    """

    url_prefix_mapping: dict[int, str] = field(default_factory=dict)
    doctype_mapping: dict[int, str] = field(default_factory=dict)
    user_mapping: dict[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy so the caller's table is never modified.
        prefixes = {key: value.removesuffix("/") for key, value in self.url_prefix_mapping.items()}
        object.__setattr__(self, "url_prefix_mapping", prefixes)
        object.__setattr__(self, "doctype_mapping", dict(self.doctype_mapping))
        object.__setattr__(self, "user_mapping", dict(self.user_mapping))

    @classmethod
    def from_file(cls, path: Path) -> "ParsingOptions":
        """Load options from a JSON file.

        The file holds up to three objects, ``url_prefix_mapping``,
        ``doctype_mapping`` and ``user_mapping``, each keyed by ID as a string.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Cannot read options file {path}: {exc}"
            raise ConfigurationError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Options file {path} must contain a JSON object"
            raise ConfigurationError(msg)

        return cls(
            url_prefix_mapping=_int_keyed(data.get("url_prefix_mapping", {}), name="url_prefix_mapping"),
            doctype_mapping=_int_keyed(data.get("doctype_mapping", {}), name="doctype_mapping"),
            user_mapping=_int_keyed(data.get("user_mapping", {}), name="user_mapping"),
        )
