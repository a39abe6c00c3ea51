"""Exceptions raised while reading an Umbraco export."""


class ContentParsingError(Exception):
    """Base class for all errors raised while building the node tree."""


class ConfigurationError(ContentParsingError, ValueError):
    """Missing input path or unusable options."""


class MarkupDecodeError(ContentParsingError):
    """A node in an XML cache carries a value that cannot be decoded."""


class RecordDecodeError(ContentParsingError):
    """The record byte stream does not match the expected layout."""


class RecordStoreError(ContentParsingError):
    """The input could not be opened as a record store."""
