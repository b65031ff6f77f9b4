# src/mica_ixbrl/domain/services/section_renderer.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Section and dimensional-block rendering.

Purpose:
    Render one white-paper section as a numbered ``No | Field | Content``
    table, and one repeating sub-record block as a
    ``# | Identity | Business Address | Function / Type`` table, with every
    content cell tagged through the ``InlineTagger``.

Layer:
    domain/services

Notes:
    - Dimensional fields are skipped in section tables; they are rendered
      by ``render_dimensional_block`` against their per-index contexts.
    - When a row carries a tagged fact, its number and label cells are
      wrapped in ``ix:exclude``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from mica_ixbrl.domain.entities.ixbrl_document import DimensionalBlock, FactValue
from mica_ixbrl.domain.entities.taxonomy import FieldDefinition, SectionDefinition
from mica_ixbrl.domain.services.inline_tagger import (
    InlineTagger,
    TaggedFact,
    escape_html,
    wrap_exclude,
)

_EMPTY_CELL = '<td class="empty-field"></td>'


def _content_cell(tagged: TaggedFact | None, *, text_block: bool) -> str:
    """Return the ``<td>`` holding tagged markup, or an empty-field cell."""
    if tagged is None:
        return _EMPTY_CELL
    continuations = "".join(tagged.continuations)
    if text_block and not tagged.is_hidden and not tagged.is_numeric:
        return f'<td><div class="text-block">{tagged.markup}</div>{continuations}</td>'
    return f"<td>{tagged.markup}{continuations}</td>"


class SectionRenderer:
    """Render section tables and dimensional blocks for one document."""

    def __init__(self, tagger: InlineTagger) -> None:
        self._tagger = tagger

    def render_section(
        self,
        section: SectionDefinition,
        fields: Sequence[FieldDefinition],
        facts: Mapping[str, FactValue],
    ) -> str:
        """Render the numbered table for ``section``.

        Args:
            section: Section being rendered.
            fields: The section's field definitions, in catalog order.
            facts: Non-dimensional fact values keyed by element name.
        """
        table_class = "sustainability" if section.key == "S" else "accounts"
        rows = "".join(
            self._render_row(field, facts.get(field.element))
            for field in fields
            if not field.is_dimensional
        )
        return (
            f'<h2 class="section-heading">{escape_html(section.title)}</h2>'
            f'<table class="{table_class}">'
            "<thead><tr><th>No</th><th>Field</th><th>Content</th></tr></thead>"
            f"<tbody>{rows}</tbody>"
            "</table>"
        )

    def _render_row(self, field: FieldDefinition, fact: FactValue | None) -> str:
        tagged = self._tagger.tag(fact, field)
        number = escape_html(field.number)
        label = escape_html(field.label)
        if tagged is not None:
            number, label = wrap_exclude(number), wrap_exclude(label)
        content = _content_cell(tagged, text_block=field.is_text_block)
        return f"<tr><td>{number}</td><td>{label}</td>{content}</tr>"

    def render_dimensional_block(
        self,
        block: DimensionalBlock,
        fields_by_element: Mapping[str, FieldDefinition],
    ) -> str:
        """Render one repeating block; returns ``""`` when it has no rows."""
        if not block.rows:
            return ""

        rows: list[str] = []
        for row in block.rows:
            cells = []
            for element, fact in row.cells:
                tagged = self._tagger.tag(fact, fields_by_element[element], id_prefix="dim")
                cells.append(_content_cell(tagged, text_block=False))
            rows.append(f"<tr><td>{row.index + 1}</td>{''.join(cells)}</tr>")

        return (
            f'<h3 class="section-subheading">{escape_html(block.title)}</h3>'
            '<table class="dimensional">'
            "<thead><tr><th>#</th><th>Identity</th><th>Business Address</th>"
            "<th>Function / Type</th></tr></thead>"
            f"<tbody>{''.join(rows)}</tbody>"
            "</table>"
        )


__all__ = ["SectionRenderer"]
