"""Feed definitions and the generic loader that requests and parses them."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger

from .constants import ATOM_CONTENT_TYPE, JSON_CONTENT_TYPE
from .errors import FeedValidationError, UnexpectedContentTypeError, UnexpectedStatusError
from .executor import FeedRequest, HttpExecutor
from .parsers import ResponseParser

# never inherited from caller options
REQUEST_IDENTITY_FIELDS = frozenset({"uri", "url", "method", "qs", "params", "base_url", "baseUrl"})

_CONTENT_PATH = re.compile(r"^https?://[^/]+/wikis/(.+)")
_FIRST_SEGMENT = re.compile(r"(.+?)/")

_LISTING_PARAMS = ("acls", "includeTags", "page", "ps", "role", "sI", "sortBy", "sortOrder")
PATH_LABELS = ("wikiLabel", "pageLabel", "versionLabel")


@dataclass(frozen=True, slots=True)
class FeedDefinition:
    """Static description of one wiki feed endpoint.

    ``result_key`` is either the wrapper key or a function of the query that
    picks it; ``parse`` receives the shared parser, the body and the query.
    """

    name: str
    uri: str | None
    parse: Callable[[ResponseParser, Any, Mapping[str, Any]], Any]
    result_key: str | Callable[[Mapping[str, Any]], str]
    required: tuple[str, ...] = ()
    query_params: tuple[str, ...] = ()
    forced_query: Mapping[str, str] = field(default_factory=dict)
    accept: str = ATOM_CONTENT_TYPE
    expected_content_type: str | None = ATOM_CONTENT_TYPE

    def key_for(self, query: Mapping[str, Any]) -> str:
        return self.result_key if isinstance(self.result_key, str) else self.result_key(query)


def _artifacts_key(query: Mapping[str, Any]) -> str:
    return "pageVersions" if query.get("category") == "version" else "pageComments"


def _parse_artifacts(parser: ResponseParser, body: Any, query: Mapping[str, Any]) -> Any:
    if query.get("category") == "version":
        return parser.page_versions(body)
    return parser.page_comments(body)


FEEDS: Mapping[str, FeedDefinition] = {
    definition.name: definition
    for definition in (
        FeedDefinition(
            name="navigationFeed",
            uri="{ authType }/api/wiki/{ wikiLabel }/nav/feed",
            parse=lambda parser, body, query: parser.navigation_feed(body),
            result_key="navigationFeed",
            required=("wikiLabel",),
            query_params=("breadcrumb", "parent", "timestamp"),
            accept=JSON_CONTENT_TYPE,
            expected_content_type=JSON_CONTENT_TYPE,
        ),
        FeedDefinition(
            name="wikiPage",
            uri="{ authType }/api/wiki/{ wikiLabel }/page/{ pageLabel }/entry",
            parse=lambda parser, body, query: parser.wiki_page(body),
            result_key="wikiPage",
            required=("wikiLabel", "pageLabel"),
            query_params=("acls", "includeTags"),
        ),
        FeedDefinition(
            name="pageArtifacts",
            uri="{ authType }/api/wiki/{ wikiLabel }/page/{ pageLabel }/feed",
            parse=_parse_artifacts,
            result_key=_artifacts_key,
            required=("wikiLabel", "pageLabel"),
            query_params=("sO", "ps", "category"),
        ),
        FeedDefinition(
            name="pageComments",
            uri="{ authType }/api/wiki/{ wikiLabel }/page/{ pageLabel }/feed",
            parse=lambda parser, body, query: parser.page_comments(body),
            result_key="pageComments",
            required=("wikiLabel", "pageLabel"),
            query_params=("sO", "ps"),
        ),
        FeedDefinition(
            name="pageVersions",
            uri="{ authType }/api/wiki/{ wikiLabel }/page/{ pageLabel }/feed",
            parse=lambda parser, body, query: parser.page_versions(body),
            result_key="pageVersions",
            required=("wikiLabel", "pageLabel"),
            query_params=("sO", "ps"),
            forced_query={"category": "version"},
        ),
        FeedDefinition(
            name="pageVersionDetails",
            uri=(
                "{ authType }/api/wiki/{ wikiLabel }/page/{ pageLabel }"
                "/version/{ versionLabel }/entry"
            ),
            parse=lambda parser, body, query: parser.page_version(body),
            result_key="pageVersionDetails",
            required=("wikiLabel", "pageLabel", "versionLabel"),
            query_params=("sO", "ps"),
        ),
        FeedDefinition(
            name="mediaContent",
            uri=None,
            parse=lambda parser, body, query: parser.media_content(body),
            result_key="mediaContent",
            expected_content_type=None,
        ),
        FeedDefinition(
            name="wikisFeed",
            uri="{ authType }/api/mywikis/feed",
            parse=lambda parser, body, query: parser.wikis_feed(body),
            result_key="wikisFeed",
            query_params=_LISTING_PARAMS,
        ),
        FeedDefinition(
            name="pagesFeed",
            uri="{ authType }/api/wiki/{ wikiLabel }/feed",
            parse=lambda parser, body, query: parser.pages_feed(body),
            result_key="pagesFeed",
            required=("wikiLabel",),
            query_params=_LISTING_PARAMS,
        ),
    )
}


def validate_query(definition: FeedDefinition, query: Mapping[str, Any]) -> None:
    """Raise :class:`FeedValidationError` for the first missing identifier."""
    for name in definition.required:
        if query.get(name) in (None, ""):
            raise FeedValidationError(definition.name, name)


def whitelist_query(definition: FeedDefinition, query: Mapping[str, Any]) -> dict[str, Any]:
    params = {key: query[key] for key in definition.query_params if key in query}
    params.update(definition.forced_query)
    return params


def rewrite_content_url(content: str | None, placeholder: str = "mediaAuthType") -> str | None:
    """Replace the auth segment of a media link with a template placeholder.

    ``https://host/wikis/oauth/api/...`` becomes ``{ mediaAuthType }/api/...``.
    ``None`` passes through so the executor reports the missing target.
    """
    if not content:
        return content
    match = _CONTENT_PATH.match(content)
    if match is None:
        raise ValueError(f"Content URL is not a wikis URL: {content!r}")
    return _FIRST_SEGMENT.sub(f"{{ {placeholder} }}/", match.group(1), count=1)


def build_request(
    definition: FeedDefinition,
    query: Mapping[str, Any],
    options: Mapping[str, Any],
    defaults: Mapping[str, Any],
) -> FeedRequest:
    """Merge service defaults, caller options and computed values into a request."""
    merged = {**defaults}
    for key, value in options.items():
        if key in REQUEST_IDENTITY_FIELDS:
            continue
        if key == "headers":
            merged["headers"] = {**merged.get("headers", {}), **value}
        else:
            merged[key] = value

    auth_type = merged.get("auth_type", "")
    template_values = {
        "authType": auth_type,
        "mediaAuthType": merged.get("media_auth_type", auth_type),
    }
    template_values.update(
        {key: str(query[key]) for key in PATH_LABELS if query.get(key) not in (None, "")}
    )

    if definition.uri is None:
        uri = rewrite_content_url(merged.get("content"))
    else:
        uri = definition.uri

    return FeedRequest(
        uri=uri,
        base_url=defaults["base_url"],
        method="GET",
        headers={**merged.get("headers", {}), "accept": definition.accept},
        params=whitelist_query(definition, query),
        template_values=template_values,
        auth=merged.get("auth"),
        follow_redirects=merged.get("follow_redirects", True),
        timeout=merged.get("timeout"),
    )


def check_response(definition: FeedDefinition, response: httpx.Response) -> None:
    """Raise unless ``response`` is a 200 of the expected media type."""
    if response.status_code != httpx.codes.OK:
        raise UnexpectedStatusError(response.text, response.status_code)

    expected = definition.expected_content_type
    content_type = response.headers.get("content-type")
    if expected and not (content_type or "").startswith(expected):
        raise UnexpectedContentTypeError(content_type, expected)


async def load_feed(
    definition: FeedDefinition,
    executor: HttpExecutor,
    parser: ResponseParser,
    query: Mapping[str, Any] | None,
    options: Mapping[str, Any],
    defaults: Mapping[str, Any],
) -> dict[str, Any]:
    """Request one feed and return ``{result_key: parsed}``.

    Validation failures are raised before the executor is called; transport
    errors from the executor propagate unchanged.
    """
    query = query or {}
    validate_query(definition, query)
    request = build_request(definition, query, options, defaults)
    logger.debug(f"{definition.name}: uri={request.uri} params={request.params}")

    response = await executor.execute(request)
    check_response(definition, response)

    # Atom bodies stay bytes; lxml reads the encoding from the XML declaration
    is_atom = definition.expected_content_type == ATOM_CONTENT_TYPE
    body = response.content if is_atom else response.text
    return {definition.key_for(query): definition.parse(parser, body, query)}
