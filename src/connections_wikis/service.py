"""Service facade exposing one coroutine per wiki feed."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import httpx
from loguru import logger

from .auth import default_auth_type
from .config import WikisSettings
from .executor import HttpExecutor, HttpxExecutor
from .feeds import FEEDS, load_feed
from .parsers import ResponseParser


class WikisService:
    """Bind a base URL and default request options to the feed loaders.

    Args:
        base_url: Root of the wikis application, e.g. ``https://host/wikis/``.
        executor: Issues requests; defaults to an :class:`HttpxExecutor` over
            ``client``.
        client: ``httpx.AsyncClient`` used when no executor is given.
        auth: Auth strategy applied to every request.
        auth_type: URL auth segment; derived from ``auth`` when omitted.
        **defaults: Further default options (``headers``, ``media_auth_type``,
            ``timeout``, ``follow_redirects``).
    """

    def __init__(
        self,
        base_url: str,
        *,
        executor: HttpExecutor | None = None,
        client: httpx.AsyncClient | None = None,
        auth: httpx.Auth | None = None,
        auth_type: str | None = None,
        parser: ResponseParser | None = None,
        **defaults: Any,
    ) -> None:
        self._owned_client: httpx.AsyncClient | None = None
        if executor is None:
            if client is None:
                client = self._owned_client = httpx.AsyncClient()
            executor = HttpxExecutor(client)
        self._executor = executor
        self._parser = parser or ResponseParser()
        self._defaults: dict[str, Any] = {
            "follow_redirects": True,
            **defaults,
            "base_url": base_url if base_url.endswith("/") else f"{base_url}/",
            "auth": auth,
            "auth_type": auth_type if auth_type is not None else default_auth_type(auth),
        }
        logger.debug(
            f"WikisService: base_url={self._defaults['base_url']} "
            f"auth_type={self._defaults['auth_type']!r}"
        )

    @classmethod
    def from_settings(
        cls, settings: WikisSettings, client: httpx.AsyncClient | None = None
    ) -> WikisService:
        defaults: dict[str, Any] = {
            "headers": dict(settings.headers),
            "follow_redirects": settings.follow_redirects,
        }
        if settings.media_auth_type is not None:
            defaults["media_auth_type"] = settings.media_auth_type
        owned: httpx.AsyncClient | None = None
        if client is None:
            client = owned = httpx.AsyncClient(
                timeout=settings.timeout, follow_redirects=settings.follow_redirects
            )
        else:
            defaults["timeout"] = settings.timeout
        service = cls(
            str(settings.base_url),
            client=client,
            auth=settings.build_auth(),
            auth_type=settings.resolved_auth_type(),
            **defaults,
        )
        service._owned_client = owned
        return service

    @property
    def base_url(self) -> str:
        return str(self._defaults["base_url"])

    @property
    def defaults(self) -> Mapping[str, Any]:
        """Default request options merged into every call."""
        return MappingProxyType(self._defaults)

    async def aclose(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owned_client is not None:
            await self._owned_client.aclose()

    async def __aenter__(self) -> WikisService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _load(
        self, feed_name: str, query: Mapping[str, Any] | None, options: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await load_feed(
            FEEDS[feed_name], self._executor, self._parser, query, options, self._defaults
        )

    async def navigation_feed(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        """Return ``{"navigationFeed": json}`` for a wiki's navigation tree."""
        return await self._load("navigationFeed", query, options)

    async def wiki_page(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        """Return ``{"wikiPage": record}`` for one page entry."""
        return await self._load("wikiPage", query, options)

    async def page_artifacts(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        """Return comments, or versions when ``query["category"] == "version"``."""
        return await self._load("pageArtifacts", query, options)

    async def page_comments(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        return await self._load("pageComments", query, options)

    async def page_versions(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        return await self._load("pageVersions", query, options)

    async def page_version_details(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        return await self._load("pageVersionDetails", query, options)

    async def media_content(
        self, query: Mapping[str, Any] | None = None, *, content: str | None = None, **options: Any
    ) -> dict[str, Any]:
        """Return the HTML behind a ``content.src`` link of a page or version."""
        return await self._load("mediaContent", query, {**options, "content": content})

    async def wikis_feed(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        return await self._load("wikisFeed", query, options)

    async def pages_feed(
        self, query: Mapping[str, Any] | None = None, **options: Any
    ) -> dict[str, Any]:
        return await self._load("pagesFeed", query, options)
