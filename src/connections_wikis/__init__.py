"""Async client for the wikis Atom/JSON feed API."""

from .auth import BearerAuth
from .config import WikisSettings
from .errors import (
    FeedValidationError,
    MalformedResponseError,
    SelectorConfigurationError,
    UnexpectedContentTypeError,
    UnexpectedStatusError,
    WikisAPIError,
)
from .executor import FeedRequest, HttpExecutor, HttpxExecutor
from .parsers import ResponseParser
from .service import WikisService

__all__ = [
    "BearerAuth",
    "FeedRequest",
    "FeedValidationError",
    "HttpExecutor",
    "HttpxExecutor",
    "MalformedResponseError",
    "ResponseParser",
    "SelectorConfigurationError",
    "UnexpectedContentTypeError",
    "UnexpectedStatusError",
    "WikisAPIError",
    "WikisService",
    "WikisSettings",
]
