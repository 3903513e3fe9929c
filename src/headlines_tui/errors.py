from __future__ import annotations


class HeadlinesError(Exception):
    """Base class for errors raised by the reader."""


class MissingCredentialsError(HeadlinesError):
    """No API key could be found for the configured feed."""


class FeedError(HeadlinesError):
    """The article batch could not be fetched or parsed."""


class ExtractionError(HeadlinesError):
    """No readable text could be extracted from an article page."""


class ConfigError(HeadlinesError):
    """A config setting has a value of the wrong type."""
