"""Authentication strategies applied to outgoing feed requests."""

from __future__ import annotations

from collections.abc import Generator

import httpx


class BearerAuth(httpx.Auth):
    """Attach an OAuth access token as a bearer ``Authorization`` header."""

    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def default_auth_type(auth: httpx.Auth | None) -> str:
    """Return the URL auth-type segment the server expects for ``auth``.

    Bearer tokens are served under ``/oauth``, basic credentials under
    ``/basic`` and cookie (SAML) sessions from the unprefixed API root.
    """
    if isinstance(auth, BearerAuth):
        return "oauth"
    if isinstance(auth, httpx.BasicAuth):
        return "basic"
    return ""
