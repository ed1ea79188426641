"""Field tables for every wiki Atom entity.

Each table is evaluated by :func:`connections_wikis.mapper.parse_fields`
against a single ``atom:entry`` node.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from types import MappingProxyType

from .constants import RANK_SCHEMES
from .mapper import FieldGroup, FieldMapping, FieldSpec, links_by_relation, ranks_by_scheme

_URN_ID = re.compile(
    r"([a-zA-Z0-9]{8}-[a-zA-Z0-9]{4}-[a-zA-Z0-9]{4}-[a-zA-Z0-9]{4}-[a-zA-Z0-9]{12})$"
)
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def urn_to_id(urn: str) -> str:
    """Return the trailing UUID of a feed URN.

    >>> urn_to_id("urn:lsid:ibm.com:oa:a8d112ee-024a-45b1-a7bc-6d918d009a3a")
    'a8d112ee-024a-45b1-a7bc-6d918d009a3a'
    """
    match = _URN_ID.search(urn.strip())
    if match is None:
        raise ValueError(f"URN does not end with a UUID: {urn!r}")
    return match.group(1)


def to_integer(value: str) -> int | float:
    """Parse leading decimal digits; non-numeric text yields NaN."""
    match = _LEADING_INTEGER.match(value)
    return int(match.group(1)) if match else math.nan


def _frozen(fields: dict[str, FieldMapping]) -> Mapping[str, FieldMapping]:
    return MappingProxyType(fields)


def _content_src(src: str) -> dict[str, str]:
    return {"src": src}


_ID = FieldSpec("atom:id", transform=urn_to_id)
_VERSION_LABEL = FieldSpec("td:versionLabel", transform=to_integer)


def _person(element: str, extra: tuple[str, ...]) -> FieldGroup:
    fields: dict[str, FieldMapping] = {
        "name": "atom:name",
        "userId": "snx:userid",
        "orgId": "snx:orgId",
        "email": "atom:email",
        "userState": "snx:userState",
    }
    for field in extra:
        fields[field] = "td:guest" if field == "guest" else f"snx:{field}"
    return FieldGroup(element, _frozen(fields))


WIKI_PAGE_FIELDS = _frozen(
    {
        "id": _ID,
        "versionLabel": _VERSION_LABEL,
        "totalMediaSize": FieldSpec("td:totalMediaSize", transform=to_integer),
        "versionUuid": "td:versionUuid",
        "title": 'atom:title[@type="text"]',
        "summary": 'atom:summary[@type="text"]',
        "content": FieldSpec('atom:content[@type="text/html"]/@src', transform=_content_src),
        "published": "atom:published",
        "updated": "atom:updated",
        "label": "td:label",
        "created": "td:created",
        "modified": "td:modified",
        "visibility": "td:visibility",
        "propagation": "td:propagation",
        "author": _person("atom:author", ("orgName",)),
        "links": links_by_relation(
            ("self", "alternate", "edit", "edit-media", "enclosure", "related", "replies")
        ),
        "ranks": ranks_by_scheme(RANK_SCHEMES),
    }
)

PAGE_VERSION_FIELDS = _frozen(
    {
        "id": _ID,
        "versionLabel": _VERSION_LABEL,
        "label": "td:label",
        "documentUuid": "td:documentUuid",
        "libraryId": "td:libraryId",
        "title": 'atom:title[@type="text"]',
        "summary": 'atom:summary[@type="text"]',
        "content": FieldSpec('atom:content[@type="text/html"]/@src', transform=_content_src),
        "published": "atom:published",
        "updated": "atom:updated",
        "created": "td:created",
        "modified": "td:modified",
        "author": _person("atom:author", ("orgName",)),
        "modifier": _person("td:modifier", ("orgName",)),
        "links": links_by_relation(("self", "alternate", "edit", "edit-media", "enclosure")),
    }
)

PAGE_COMMENT_FIELDS = _frozen(
    {
        "id": _ID,
        "versionLabel": _VERSION_LABEL,
        "title": 'atom:title[@type="text"]',
        "content": 'atom:content[@type="text"]',
        "language": "td:language",
        "deleteWithRecord": "td:deleteWithRecord",
        "published": "atom:published",
        "updated": "atom:updated",
        "created": "td:created",
        "modified": "td:modified",
        "author": _person("atom:author", ("guest",)),
        "modifier": _person("td:modifier", ("guest",)),
        "links": links_by_relation(("self", "alternate", "edit", "edit-media")),
    }
)

WIKI_FIELDS = _frozen(
    {
        "id": _ID,
        "uuid": "td:uuid",
        "label": "td:label",
        "title": 'atom:title[@type="text"]',
        "summary": 'atom:summary[@type="text"]',
        "links": links_by_relation(("self", "alternate", "edit")),
    }
)
