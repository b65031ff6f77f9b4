# src/mica_ixbrl/adapters/mappers/ixbrl_fact_reader.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Inline XBRL document → fact records.

Purpose:
    Parse an emitted inline XBRL document back into ``FactRecord``s so the
    duplicate detector can be re-run over the document itself, not only over
    the builder output.

Layer:
    adapters/mappers

Notes:
    - Parsing goes through ``defusedxml`` (no entity expansion, no external
      resources).
    - Every ``ix:nonFraction`` and ``ix:nonNumeric`` is read, hidden facts
      included. ``continuedAt`` chains are followed and concatenated;
      ``ix:exclude`` content is dropped from values.
    - ``sign="-"`` on ``ix:nonFraction`` is folded back into the value.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Final
from xml.etree.ElementTree import Element

from defusedxml import ElementTree as SafeET
from defusedxml.common import DefusedXmlException

from mica_ixbrl.domain.entities.ixbrl_document import FactRecord
from mica_ixbrl.domain.exceptions.mica import InvalidIXBRLDocumentError
from mica_ixbrl.domain.services.document_assembler import NAMESPACES

_IX: Final[str] = NAMESPACES["ix"]
_NON_FRACTION: Final[str] = f"{{{_IX}}}nonFraction"
_NON_NUMERIC: Final[str] = f"{{{_IX}}}nonNumeric"
_CONTINUATION: Final[str] = f"{{{_IX}}}continuation"
_EXCLUDE: Final[str] = f"{{{_IX}}}exclude"


def _own_text(element: Element) -> Iterator[str]:
    """Yield the text of ``element`` and its descendants, skipping ``ix:exclude``."""
    if element.text:
        yield element.text
    for child in element:
        if child.tag != _EXCLUDE:
            yield from _own_text(child)
        if child.tail:
            yield child.tail


def _parse_decimals(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class IXBRLFactReader:
    """Read facts out of inline XBRL documents."""

    def read(self, document: str | bytes) -> list[FactRecord]:
        """Return every fact of ``document`` in document order.

        Raises:
            InvalidIXBRLDocumentError: If the document is not well-formed,
                uses forbidden XML constructs or has a broken continuation
                chain.
        """
        payload = document.encode("utf-8") if isinstance(document, str) else document
        try:
            root = SafeET.fromstring(payload)
        except (SafeET.ParseError, DefusedXmlException) as exc:
            raise InvalidIXBRLDocumentError(
                "Document is not well-formed XML.", details={"error": str(exc)}
            ) from exc

        continuations = {
            el.get("id", ""): el for el in root.iter(_CONTINUATION) if el.get("id")
        }

        records: list[FactRecord] = []
        for element in root.iter():
            if element.tag not in (_NON_FRACTION, _NON_NUMERIC):
                continue
            name = element.get("name")
            context_ref = element.get("contextRef")
            if not name or not context_ref:
                raise InvalidIXBRLDocumentError(
                    "Inline fact is missing name or contextRef.",
                    details={"id": element.get("id")},
                )
            value = "".join(_own_text(element)) + self._follow(element, continuations)
            if element.tag == _NON_FRACTION and element.get("sign") == "-":
                value = f"-{value}"
            records.append(
                FactRecord(
                    name=name,
                    context_ref=context_ref,
                    unit_ref=element.get("unitRef"),
                    value=value,
                    decimals=_parse_decimals(element.get("decimals")),
                )
            )
        return records

    @staticmethod
    def _follow(element: Element, continuations: dict[str, Element]) -> str:
        """Concatenate the continuation chain starting at ``element``."""
        parts: list[str] = []
        seen: set[str] = set()
        target = element.get("continuedAt")
        while target:
            if target in seen or target not in continuations:
                raise InvalidIXBRLDocumentError(
                    "Broken or cyclic continuation chain.",
                    details={"fact_id": element.get("id"), "continuedAt": target},
                )
            seen.add(target)
            node = continuations[target]
            parts.append("".join(_own_text(node)))
            target = node.get("continuedAt")
        return "".join(parts)


__all__ = ["IXBRLFactReader"]
