"""Turn wiki feed response bodies into plain records."""

from __future__ import annotations

import html
import json
import re
from collections.abc import Mapping
from typing import Any

from loguru import logger
from lxml import etree

from .constants import XML_NAMESPACES
from .errors import MalformedResponseError
from .mapper import FieldMapping, iter_selectors, parse_fields
from .schemas import PAGE_COMMENT_FIELDS, PAGE_VERSION_FIELDS, WIKI_FIELDS, WIKI_PAGE_FIELDS
from .xml_utils import ensure_xml_doc, serialize_xml
from .xpath import XPathSelector

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")
_STYLE_BLOCK = re.compile(r"<style\b[\s\S]*?</style>", re.IGNORECASE)

ENTRY = "/atom:entry"
FEED_ENTRIES = "/atom:feed/atom:entry"


class ResponseParser:
    """Entity parsers sharing one namespace-bound selector.

    Every schema selector is compiled on construction, so an unbound prefix
    fails here rather than on the first response.
    """

    SCHEMAS: Mapping[str, Mapping[str, FieldMapping]] = {
        "wikiPage": WIKI_PAGE_FIELDS,
        "pageVersion": PAGE_VERSION_FIELDS,
        "pageComment": PAGE_COMMENT_FIELDS,
        "wiki": WIKI_FIELDS,
    }

    def __init__(self, select: XPathSelector | None = None) -> None:
        self.select = select or XPathSelector(XML_NAMESPACES)
        for expression in (ENTRY, FEED_ENTRIES):
            self.select.compile(expression)
        for fields in self.SCHEMAS.values():
            for expression in iter_selectors(fields):
                self.select.compile(expression)

    def parse_entry(self, node: Any, fields: Mapping[str, FieldMapping]) -> dict[str, Any]:
        return parse_fields(node, fields, self.select)

    def _single_entry(self, body: Any, fields: Mapping[str, FieldMapping]) -> dict[str, Any]:
        entry = self.select(ENTRY, ensure_xml_doc(body), single=True)
        if entry is None:
            raise MalformedResponseError("Response document has no atom:entry root")
        return self.parse_entry(entry, fields)

    def _feed_entries(
        self, body: Any, fields: Mapping[str, FieldMapping]
    ) -> list[dict[str, Any]]:
        doc = ensure_xml_doc(body)
        if doc.getroot().tag != f"{{{XML_NAMESPACES['atom']}}}feed":
            raise MalformedResponseError("Response document has no atom:feed root")
        records = [self.parse_entry(entry, fields) for entry in self.select(FEED_ENTRIES, doc)]
        logger.info(f"Parsed {len(records)} feed entries")
        return records

    def wiki_page(self, body: Any) -> dict[str, Any]:
        return self._single_entry(body, WIKI_PAGE_FIELDS)

    def page_version(self, body: Any) -> dict[str, Any]:
        return self._single_entry(body, PAGE_VERSION_FIELDS)

    def page_versions(self, body: Any) -> list[dict[str, Any]]:
        return self._feed_entries(body, PAGE_VERSION_FIELDS)

    def page_comments(self, body: Any) -> list[dict[str, Any]]:
        return self._feed_entries(body, PAGE_COMMENT_FIELDS)

    def pages_feed(self, body: Any) -> list[dict[str, Any]]:
        return self._feed_entries(body, WIKI_PAGE_FIELDS)

    def wikis_feed(self, body: Any) -> list[dict[str, Any]]:
        return self._feed_entries(body, WIKI_FIELDS)

    @staticmethod
    def navigation_feed(body: str | bytes) -> Any:
        """Return the navigation JSON unchanged."""
        try:
            return json.loads(body)
        except ValueError as exc:
            logger.error(f"Navigation feed is not valid JSON: {exc}")
            raise MalformedResponseError(
                f"Navigation feed is not valid JSON: {exc}",
                {"body": body[:200] if isinstance(body, str) else None},
            ) from exc

    @staticmethod
    def media_content(body: str | bytes | etree._ElementTree) -> str:
        """Extract the HTML blob of a page or version media document.

        The XML declaration, the ``<!DOCTYPE html>`` marker and every
        ``<style>`` block are stripped before HTML entities are unescaped.
        Text bodies are processed as-is; the markup is HTML and is never
        re-parsed as XML.
        """
        if isinstance(body, etree._ElementTree):
            result = serialize_xml(body)
        elif isinstance(body, bytes):
            try:
                result = body.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedResponseError(f"Media content is not valid UTF-8: {exc}") from exc
        else:
            result = body
        result = _XML_DECLARATION.sub("", result)
        result = result.replace("<!DOCTYPE html>", "")
        result = _STYLE_BLOCK.sub("", result)
        return html.unescape(result).strip()
