"""Exception classes raised by the wiki feed client."""

from __future__ import annotations

from typing import Any


class WikisAPIError(Exception):
    """Base exception for all wiki feed errors."""

    def __init__(
        self, message: str, status_code: int = 500, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class FeedValidationError(WikisAPIError):
    """A required identifier was missing from the feed query."""

    def __init__(self, feed_name: str, field: str) -> None:
        super().__init__(
            f"`{field}` must be defined in [{feed_name}] request",
            400,
            {"feed": feed_name, "field": field},
        )
        self.feed_name = feed_name
        self.field = field


class UnexpectedStatusError(WikisAPIError):
    """The server answered with something other than 200."""

    def __init__(self, body: str, status_code: int) -> None:
        super().__init__(body or "received response with unexpected status code", status_code)


class UnexpectedContentTypeError(WikisAPIError):
    """The server answered 200 with a body of the wrong media type."""

    def __init__(self, content_type: str | None, expected: str) -> None:
        super().__init__(
            f"received response with unexpected content-type {content_type} (expected {expected})",
            502,
            {"content_type": content_type, "expected": expected},
        )
        self.content_type = content_type
        self.expected = expected


class MalformedResponseError(WikisAPIError):
    """The response body could not be parsed into the expected structure."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, 502, context)


class SelectorConfigurationError(ValueError):
    """An XPath selector references a namespace prefix that is not bound."""
