"""Declarative XML node-to-record mapping.

A mapping is an ordered ``dict`` of output field name to one of:

* a bare selector string, whose matched text becomes the value;
* a :class:`FieldSpec`, adding a transform and/or multi-node mode;
* a :class:`FieldGroup`, scoping a nested mapping to the first node matched by
  its selector (author and modifier blocks).

Fields whose selector matches nothing are left out of the record, so a key is
present only when the source document carries a matching node.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from lxml import etree

from .xml_utils import text_content
from .xpath import XPathSelector


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Selector plus optional transform and multiplicity.

    In single mode ``transform`` receives the matched text; with ``multi`` it
    receives the ordered list of matched nodes and reduces them to one value.
    """

    selector: str
    transform: Callable[[Any], Any] | None = None
    multi: bool = False


@dataclass(frozen=True, slots=True)
class FieldGroup:
    """Nested mapping evaluated against the first node ``selector`` matches."""

    selector: str
    fields: Mapping[str, FieldMapping]


FieldMapping = Union[str, FieldSpec, FieldGroup]


def iter_selectors(mappings: Mapping[str, FieldMapping]) -> Iterator[str]:
    """Yield every selector string in a mapping, nested groups included."""
    for value in mappings.values():
        if isinstance(value, str):
            yield value
        else:
            yield value.selector
            if isinstance(value, FieldGroup):
                yield from iter_selectors(value.fields)


def _is_empty(result: Any) -> bool:
    if result is None:
        return True
    return isinstance(result, list) and not result


def parse_fields(
    node: Any, mappings: Mapping[str, FieldMapping], select: XPathSelector
) -> dict[str, Any]:
    """Evaluate ``mappings`` against ``node`` and assemble a flat record.

    A node selector with no match omits its key. Selectors wrapped in
    ``string()``, ``number()`` or ``boolean()`` always evaluate to a value, so
    their key is always present (``""``, ``nan`` or ``False`` on no match).
    Use a bare node selector when absence must be visible.
    """
    record: dict[str, Any] = {}
    for name, value in mappings.items():
        if isinstance(value, FieldGroup):
            scope = select(value.selector, node, single=True)
            if scope is not None:
                record[name] = parse_fields(scope, value.fields, select)
            continue

        spec = FieldSpec(value) if isinstance(value, str) else value
        result = select(spec.selector, node, single=not spec.multi)
        if _is_empty(result):
            continue

        if spec.multi:
            record[name] = (
                spec.transform(result)
                if spec.transform
                else [text_content(item) for item in result]
            )
            continue

        # number()/boolean() selectors yield scalars that are used as-is
        raw = result if isinstance(result, (bool, float)) else text_content(result)
        record[name] = spec.transform(raw) if spec.transform else raw
    return record


def links_by_relation(
    relations: Sequence[str], attributes: Sequence[str] = ("href", "type")
) -> FieldSpec:
    """Build a multi field collecting ``atom:link`` attributes keyed by ``rel``.

    Only ``relations`` are selected; the reducer still skips any other
    relation it is handed. The first link of each relation wins.
    """
    known = tuple(relations)
    predicate = " or ".join(f'@rel="{rel}"' for rel in known)

    def reduce_links(nodes: Sequence[etree._Element]) -> dict[str, dict[str, str]]:
        links: dict[str, dict[str, str]] = {}
        for link in nodes:
            rel = link.get("rel")
            if rel not in known or rel in links:
                continue
            descriptor = {attr: link.get(attr) for attr in attributes if link.get(attr)}
            if descriptor:
                links[rel] = descriptor
        return links

    return FieldSpec(f"atom:link[{predicate}]", transform=reduce_links, multi=True)


def to_number(value: str) -> int | float:
    """Convert rank text to an ``int`` when integral, else ``float`` (NaN on junk)."""
    try:
        return int(value.strip())
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return math.nan


def ranks_by_scheme(schemes: Mapping[str, str]) -> FieldSpec:
    """Build a multi field reading ``snx:rank`` values by reverse scheme lookup."""
    names = {uri: name for name, uri in schemes.items()}
    predicate = " or ".join(f'@scheme="{uri}"' for uri in schemes.values())

    def reduce_ranks(nodes: Sequence[etree._Element]) -> dict[str, int | float]:
        ranks: dict[str, int | float] = {}
        for rank in nodes:
            name = names.get(rank.get("scheme", ""))
            if name is None or name in ranks:
                continue
            ranks[name] = to_number(text_content(rank))
        return ranks

    return FieldSpec(f"snx:rank[{predicate}]", transform=reduce_ranks, multi=True)
