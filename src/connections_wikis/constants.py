"""Namespace bindings and fixed lookup tables for wiki Atom feeds."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

XML_NAMESPACES: Mapping[str, str] = MappingProxyType(
    {
        "atom": "http://www.w3.org/2005/Atom",
        "snx": "http://www.ibm.com/xmlns/prod/sn",
        "app": "http://www.w3.org/2007/app",
        "openSearch": "http://a9.com/-/spec/opensearch/1.1/",
        "ibmsc": "http://www.ibm.com/search/content/2010",
        "td": "urn:ibm.com/td",
        "thr": "http://purl.org/syndication/thread/1.0",
        "fh": "http://purl.org/syndication/history/1.0",
    }
)

# rank name -> scheme URI carried by <snx:rank scheme="...">
RANK_SCHEMES: Mapping[str, str] = MappingProxyType(
    {
        "hit": "http://www.ibm.com/xmlns/prod/sn/hit",
        "anonymous_hit": "http://www.ibm.com/xmlns/prod/sn/anonymous_hit",
        "comment": "http://www.ibm.com/xmlns/prod/sn/comment",
        "recommendations": "http://www.ibm.com/xmlns/prod/sn/recommendations",
        "share": "http://www.ibm.com/xmlns/prod/sn/share",
    }
)

ATOM_CONTENT_TYPE = "application/atom+xml"
JSON_CONTENT_TYPE = "application/json"

# auth-type values that map to an empty path segment
AUTH_TYPE_VALUES: Mapping[str, str] = MappingProxyType({"saml": "", "cookie": ""})
