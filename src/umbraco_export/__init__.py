"""Read Umbraco XML caches and NuCache stores as a tree of content nodes."""

from loguru import logger

from umbraco_export.config import ParsingOptions
from umbraco_export.errors import (
    ConfigurationError,
    ContentParsingError,
    MarkupDecodeError,
    RecordDecodeError,
    RecordStoreError,
)
from umbraco_export.models.node import Node
from umbraco_export.parser import ContentParser

logger.disable("umbraco_export")

__all__ = [
    "ConfigurationError",
    "ContentParser",
    "ContentParsingError",
    "MarkupDecodeError",
    "Node",
    "ParsingOptions",
    "RecordDecodeError",
    "RecordStoreError",
]
