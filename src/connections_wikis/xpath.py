"""Namespace-aware XPath evaluation over lxml trees."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from lxml import etree

from .errors import SelectorConfigurationError

_STRING_LITERAL = re.compile(r"\"[^\"]*\"|'[^']*'")
# prefix:name, excluding axis specifiers such as child::
_QUALIFIED_NAME = re.compile(r"(?<![\w.-])([A-Za-z_][\w.-]*):(?=[A-Za-z_*])")
# bound implicitly by every XML document
_RESERVED_PREFIXES = frozenset({"xml"})


def referenced_prefixes(expression: str) -> set[str]:
    """Return the namespace prefixes used in an XPath expression."""
    unquoted = _STRING_LITERAL.sub("''", expression)
    return set(_QUALIFIED_NAME.findall(unquoted))


class XPathSelector:
    """Compile-once, evaluate-many XPath selector bound to a namespace table.

    The namespace table is fixed at construction. Compiled expressions are
    cached per instance as they are first requested.
    """

    def __init__(self, namespaces: Mapping[str, str]) -> None:
        self._namespaces = MappingProxyType(dict(namespaces))
        self._compiled: dict[str, etree.XPath] = {}

    @property
    def namespaces(self) -> Mapping[str, str]:
        return self._namespaces

    def compile(self, expression: str) -> etree.XPath:
        """Return the compiled form of ``expression``.

        Raises:
            SelectorConfigurationError: a prefix is not bound in the namespace
                table or the expression is not valid XPath.
        """
        compiled = self._compiled.get(expression)
        if compiled is not None:
            return compiled

        unknown = referenced_prefixes(expression) - set(self._namespaces) - _RESERVED_PREFIXES
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise SelectorConfigurationError(
                f"Unbound namespace prefix(es) {joined} in selector {expression!r}"
            )
        try:
            compiled = etree.XPath(expression, namespaces=dict(self._namespaces))
        except etree.XPathSyntaxError as exc:
            raise SelectorConfigurationError(f"Invalid selector {expression!r}: {exc}") from exc

        self._compiled[expression] = compiled
        return compiled

    def __call__(self, expression: str, node: Any, single: bool = False) -> Any:
        """Evaluate ``expression`` relative to ``node``.

        Node-set results come back as a list in document order, or as the
        first match (``None`` when empty) in single mode. ``string()``,
        ``number()`` and ``boolean()`` results are returned as ``str``,
        ``float`` and ``bool``.
        """
        result = self.compile(expression)(node)
        if isinstance(result, list):
            if single:
                return result[0] if result else None
            return result
        if isinstance(result, str):
            return str(result)
        return result
