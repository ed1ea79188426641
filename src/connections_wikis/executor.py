"""HTTP executor contract and its httpx implementation."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol
from urllib.parse import quote

import httpx
from loguru import logger

from .constants import AUTH_TYPE_VALUES

_PLACEHOLDER = re.compile(r"\{\s*(\w+)\s*\}")

# placeholder name -> value translation table
DEFAULT_VALUE_MAPS: Mapping[str, Mapping[str, str]] = {
    "authType": AUTH_TYPE_VALUES,
    "mediaAuthType": AUTH_TYPE_VALUES,
}


@dataclass(slots=True)
class FeedRequest:
    """Everything an executor needs to issue one feed request."""

    uri: str | None
    base_url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    template_values: dict[str, str] = field(default_factory=dict)
    auth: httpx.Auth | None = None
    follow_redirects: bool = True
    timeout: float | None = None


class HttpExecutor(Protocol):
    """Issue a :class:`FeedRequest` and return the raw response."""

    async def execute(self, request: FeedRequest) -> httpx.Response: ...


def format_url_template(
    template: str | None,
    values: Mapping[str, str],
    value_maps: Mapping[str, Mapping[str, str]] = DEFAULT_VALUE_MAPS,
) -> str:
    """Substitute ``{ name }`` placeholders in a URI template.

    Raises:
        ValueError: the template is missing or a placeholder has no value.
    """
    if not template:
        raise ValueError("Request target is missing: no uri was provided")

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            raise ValueError(f"No value for placeholder `{name}` in {template!r}")
        value = str(values[name])
        value = value_maps.get(name, {}).get(value, value)
        return quote(value, safe="")

    return _PLACEHOLDER.sub(_replace, template)


def join_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class HttpxExecutor:
    """Execute feed requests through a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        value_maps: Mapping[str, Mapping[str, str]] = DEFAULT_VALUE_MAPS,
    ) -> None:
        self._client = client
        self._value_maps = value_maps

    async def execute(self, request: FeedRequest) -> httpx.Response:
        path = format_url_template(request.uri, request.template_values, self._value_maps)
        url = join_url(request.base_url, path)
        logger.debug(f"{request.method} {url} params={request.params}")

        kwargs: dict[str, Any] = {
            "params": request.params,
            "headers": request.headers,
            "follow_redirects": request.follow_redirects,
        }
        if request.auth is not None:
            kwargs["auth"] = request.auth
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        response = await self._client.request(request.method, url, **kwargs)
        logger.debug(f"API response status: {response.status_code}")
        return response
