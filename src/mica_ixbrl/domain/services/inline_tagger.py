# src/mica_ixbrl/domain/services/inline_tagger.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Inline XBRL tagging engine.

Purpose:
    Turn one fact value plus its field definition into an inline XBRL
    markup fragment: ``ix:nonFraction`` for numeric content,
    ``ix:nonNumeric`` for text, a hidden-fact link for resolved
    enumerations and an ``ix:continuation`` chain for oversized text blocks.

Layer:
    domain/services

Notes:
    - Numeric-typed fields holding narrative (e.g. "Not applicable") are
      emitted as ``ix:nonNumeric``; a numeric tag is only produced when the
      value parses as a finite number.
    - Text blocks carry ``escape="true" format="ixt4:fixed-true"``; every
      other non-numeric fact carries ``escape="false"``.
    - Enumeration URIs never appear in visible content. They are registered
      on the ``GenerationContext`` and rendered later inside ``ix:hidden``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from mica_ixbrl.domain.entities.ixbrl_document import FactValue, HiddenFactEntry
from mica_ixbrl.domain.entities.taxonomy import FieldDefinition
from mica_ixbrl.domain.enums.mica import XBRLDataType
from mica_ixbrl.domain.services.generation_context import GenerationContext
from mica_ixbrl.domain.services.value_extraction import is_value_numeric, split_numeric_sign

TEXT_BLOCK_CONTINUATION_THRESHOLD: Final[int] = 5000
NUMERIC_FORMAT: Final[str] = "ixt:num-dot-decimal"
TEXT_BLOCK_ATTRS: Final[str] = 'escape="true" format="ixt4:fixed-true"'
PLAIN_TEXT_ATTRS: Final[str] = 'escape="false"'

_BREAK_RATIO: Final[float] = 0.3

_ESCAPES: Final[tuple[tuple[str, str], ...]] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

# Vertical tab and form feed separate text like a line break; the rest of the
# C0 range, lone surrogates and U+FFFE/U+FFFF are not XML 1.0 characters.
_BREAK_LIKE_RE: Final = re.compile(r"[\x0b\x0c]")
_NON_XML_CHAR_RE: Final = re.compile(r"[\x00-\x08\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


# --------------------------------------------------------------------------- #
# Markup primitives                                                           #
# --------------------------------------------------------------------------- #


def escape_html(text: str) -> str:
    """Escape the five XML special characters (ampersand first).

    Characters XML 1.0 does not allow are dropped so the document stays
    well-formed.
    """
    text = _NON_XML_CHAR_RE.sub("", _BREAK_LIKE_RE.sub("\n", text))
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


def wrap_inline_tag(
    *,
    fact_id: str,
    name: str,
    context_ref: str,
    value: str,
    data_type: XBRLDataType,
    is_text_block: bool = False,
    unit_ref: str | None = None,
    decimals: int | None = None,
) -> str:
    """Wrap ``value`` in the inline XBRL element its type calls for.

    Negative numbers are written unsigned with ``sign="-"``.
    """
    if data_type.is_numeric and is_value_numeric(value):
        digits, negative = split_numeric_sign(value)
        sign_attr = ' sign="-"' if negative else ""
        unit_attr = f' unitRef="{unit_ref}"' if unit_ref else ""
        decimals_attr = f' decimals="{decimals}"' if decimals is not None else ""
        return (
            f'<ix:nonFraction id="{fact_id}" name="{name}" contextRef="{context_ref}"'
            f'{unit_attr}{decimals_attr}{sign_attr} format="{NUMERIC_FORMAT}">'
            f"{escape_html(digits)}</ix:nonFraction>"
        )
    if not data_type.is_numeric and (is_text_block or data_type is XBRLDataType.TEXT_BLOCK):
        attrs = TEXT_BLOCK_ATTRS
    else:
        attrs = PLAIN_TEXT_ATTRS
    return (
        f'<ix:nonNumeric id="{fact_id}" name="{name}" contextRef="{context_ref}" {attrs}>'
        f"{escape_html(value)}</ix:nonNumeric>"
    )


def wrap_hidden_fact(fact_id: str, name: str, context_ref: str, taxonomy_uri: str) -> str:
    """Return the ``ix:hidden`` member carrying an enumeration's taxonomy URI."""
    return (
        f'<ix:nonNumeric id="{fact_id}" name="{name}" contextRef="{context_ref}" '
        f"{PLAIN_TEXT_ATTRS}>{escape_html(taxonomy_uri)}</ix:nonNumeric>"
    )


def wrap_hidden_link(hidden_fact_id: str, label: str) -> str:
    """Return the visible label linked to a hidden fact via ``-ix-hidden``."""
    return f'<div style="-ix-hidden:{hidden_fact_id};">{escape_html(label)}</div>'


@dataclass(frozen=True, slots=True)
class ContinuationMarkup:
    """Primary tag plus the continuation tags that follow it, in order."""

    primary: str
    continuations: tuple[str, ...] = ()


def continuation_id(fact_id: str, index: int) -> str:
    """Return the id of the ``index``-th continuation of ``fact_id`` (1-based)."""
    return f"cont_{fact_id}_{index}"


def wrap_continuation_tag(
    *,
    fact_id: str,
    name: str,
    context_ref: str,
    fragments: list[str] | tuple[str, ...],
    is_text_block: bool = True,
) -> ContinuationMarkup:
    """Wrap ordered text fragments as one fact split across a continuation chain.

    The primary tag points at ``cont_<id>_1``; continuation ``n`` points at
    ``n + 1`` and the last one carries no ``continuedAt``. A single fragment
    yields a plain tag with no chain.
    """
    attrs = TEXT_BLOCK_ATTRS if is_text_block else PLAIN_TEXT_ATTRS
    head = f'<ix:nonNumeric id="{fact_id}" name="{name}" contextRef="{context_ref}" {attrs}'
    if len(fragments) <= 1:
        first = escape_html(fragments[0]) if fragments else ""
        return ContinuationMarkup(primary=f"{head}>{first}</ix:nonNumeric>")

    primary = (
        f'{head} continuedAt="{continuation_id(fact_id, 1)}">'
        f"{escape_html(fragments[0])}</ix:nonNumeric>"
    )
    continuations: list[str] = []
    last = len(fragments) - 1
    for index in range(1, len(fragments)):
        link = "" if index == last else f' continuedAt="{continuation_id(fact_id, index + 1)}"'
        continuations.append(
            f'<ix:continuation id="{continuation_id(fact_id, index)}"{link}>'
            f"{escape_html(fragments[index])}</ix:continuation>"
        )
    return ContinuationMarkup(primary=primary, continuations=tuple(continuations))


def wrap_exclude(content: str) -> str:
    """Mark structural content as excluded from fact values."""
    return f"<ix:exclude>{content}</ix:exclude>"


def split_text_into_fragments(
    text: str, threshold: int = TEXT_BLOCK_CONTINUATION_THRESHOLD
) -> list[str]:
    """Split ``text`` into chunks of at most ``threshold`` characters.

    Each cut prefers the last paragraph break, then line break, then space
    inside the chunk, provided it lies beyond 30% of the budget; otherwise
    the chunk is cut hard at the threshold. ``"".join(result) == text``.
    """
    if len(text) <= threshold:
        return [text]

    floor = threshold * _BREAK_RATIO
    fragments: list[str] = []
    remaining = text
    while len(remaining) > threshold:
        chunk = remaining[:threshold]
        split_at = threshold
        for separator in ("\n\n", "\n", " "):
            position = chunk.rfind(separator)
            if position > floor:
                split_at = position + len(separator)
                break
        fragments.append(remaining[:split_at])
        remaining = remaining[split_at:]
    if remaining:
        fragments.append(remaining)
    return fragments


def unit_ref_for_type(data_type: XBRLDataType, currency: str | None = None) -> str | None:
    """Return the default unit id for a numeric type, or None for text types."""
    if data_type is XBRLDataType.MONETARY:
        return f"unit_{(currency or 'EUR').upper()}"
    if data_type.is_numeric:
        return "unit_pure"
    return None


# --------------------------------------------------------------------------- #
# Tagger                                                                      #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class TaggedFact:
    """Markup for one fact.

    Attributes:
        markup: Fragment placed in the content cell.
        continuations: Continuation tags placed after the primary markup.
        is_numeric: True when the fact was emitted as ``ix:nonFraction``.
        is_hidden: True when the fact was registered for ``ix:hidden``.
    """

    markup: str
    continuations: tuple[str, ...] = ()
    is_numeric: bool = False
    is_hidden: bool = False


class InlineTagger:
    """Tag fact values, drawing ids from a shared ``GenerationContext``.

    Args:
        context: Per-call generation state.
        threshold: Text-block length above which continuation kicks in.
    """

    def __init__(
        self,
        context: GenerationContext,
        *,
        threshold: int = TEXT_BLOCK_CONTINUATION_THRESHOLD,
    ) -> None:
        self._context = context
        self._threshold = threshold

    @property
    def context(self) -> GenerationContext:
        """The generation state this tagger writes to."""
        return self._context

    def tag(
        self,
        fact: FactValue | None,
        field: FieldDefinition,
        *,
        id_prefix: str = "fact",
    ) -> TaggedFact | None:
        """Return markup for ``fact``, or None when there is nothing to tag.

        Args:
            fact: Fact value produced by the builder.
            field: Definition of the field being rendered.
            id_prefix: Prefix for the generated fact id (``dim`` for
                dimensional cells).
        """
        if fact is None or not fact.value:
            return None

        if fact.taxonomy_uri:
            hidden_id = self._context.next_id("mica_enum")
            label = fact.display_label or fact.value
            self._context.register_hidden_fact(
                HiddenFactEntry(
                    fact_id=hidden_id,
                    name=field.element,
                    context_ref=fact.context_ref,
                    taxonomy_uri=fact.taxonomy_uri,
                    label=label,
                )
            )
            return TaggedFact(markup=wrap_hidden_link(hidden_id, label), is_hidden=True)

        fact_id = self._context.next_id(id_prefix)
        is_block = field.is_text_block and not field.data_type.is_numeric
        if is_block and len(fact.value) > self._threshold:
            self._context.reference(context_ref=fact.context_ref)
            chain = wrap_continuation_tag(
                fact_id=fact_id,
                name=field.element,
                context_ref=fact.context_ref,
                fragments=split_text_into_fragments(fact.value, self._threshold),
            )
            return TaggedFact(markup=chain.primary, continuations=chain.continuations)

        numeric = field.data_type.is_numeric and is_value_numeric(fact.value)
        unit_ref = fact.unit_ref if numeric else None
        decimals = fact.decimals if numeric else None
        if numeric and unit_ref is None:
            unit_ref = unit_ref_for_type(field.data_type)
        if numeric and decimals is None:
            decimals = 0 if field.data_type is XBRLDataType.INTEGER else 2
        self._context.reference(context_ref=fact.context_ref, unit_ref=unit_ref)
        markup = wrap_inline_tag(
            fact_id=fact_id,
            name=field.element,
            context_ref=fact.context_ref,
            value=fact.value,
            data_type=field.data_type,
            is_text_block=is_block,
            unit_ref=unit_ref,
            decimals=decimals,
        )
        return TaggedFact(markup=markup, is_numeric=numeric)


__all__ = [
    "NUMERIC_FORMAT",
    "PLAIN_TEXT_ATTRS",
    "TEXT_BLOCK_ATTRS",
    "TEXT_BLOCK_CONTINUATION_THRESHOLD",
    "ContinuationMarkup",
    "InlineTagger",
    "TaggedFact",
    "continuation_id",
    "escape_html",
    "split_text_into_fragments",
    "unit_ref_for_type",
    "wrap_continuation_tag",
    "wrap_exclude",
    "wrap_hidden_fact",
    "wrap_hidden_link",
    "wrap_inline_tag",
]
