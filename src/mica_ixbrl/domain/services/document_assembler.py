# src/mica_ixbrl/domain/services/document_assembler.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Inline XBRL document assembly.

Purpose:
    Produce the complete XHTML white paper for one record: root element
    with fixed namespace prefixes, head with embedded styles, cover page,
    table of contents, one page per section (with dimensional blocks) and an
    ``ix:header`` holding hidden facts, the taxonomy reference and the
    contexts and units actually referenced by emitted facts.

Layer:
    domain/services

Notes:
    - Every call runs on its own ``GenerationContext`` unless the caller
      supplies one, so identical input yields byte-identical output.
    - ``MissingEntityIdentifierError`` from the builder propagates; no
      partial document is ever returned.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Final

from mica_ixbrl.domain.entities.ixbrl_document import FactModel, XBRLContext, XBRLUnit
from mica_ixbrl.domain.entities.taxonomy import FieldDefinition
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import TokenType
from mica_ixbrl.domain.services.context_builder import resolve_unit
from mica_ixbrl.domain.services.document_template import (
    render_cover_page,
    render_head,
    render_table_of_contents,
    wrap_in_page,
)
from mica_ixbrl.domain.services.fact_model_builder import FactModelBuilder
from mica_ixbrl.domain.services.generation_context import GenerationContext
from mica_ixbrl.domain.services.inline_tagger import InlineTagger, escape_html, wrap_hidden_fact
from mica_ixbrl.domain.services.section_renderer import SectionRenderer
from mica_ixbrl.domain.taxonomy.field_catalog import OTHR_FIELD_DEFINITIONS, SECTIONS
from mica_ixbrl.domain.taxonomy.languages import DEFAULT_LANGUAGE

XHTML_NAMESPACE: Final[str] = "http://www.w3.org/1999/xhtml"

NAMESPACES: Final[Mapping[str, str]] = {
    "xbrli": "http://www.xbrl.org/2003/instance",
    "ix": "http://www.xbrl.org/2013/inlineXBRL",
    "ixt": "http://www.xbrl.org/inlineXBRL/transformation/2020-02-12",
    "ixt4": "http://www.xbrl.org/inlineXBRL/transformation/2020-02-12",
    "link": "http://www.xbrl.org/2003/linkbase",
    "xlink": "http://www.w3.org/1999/xlink",
    "xbrldi": "http://xbrl.org/2006/xbrldi",
    "mica": "https://www.esma.europa.eu/taxonomy/2025-03-31/mica/",
    "iso4217": "http://www.xbrl.org/2003/iso4217",
    "utr": "http://www.xbrl.org/2009/utr",
}

TAXONOMY_REF: Final[str] = (
    "https://www.esma.europa.eu/taxonomy/2025-03-31/mica/mica_entry_table_2.xsd"
)


# --------------------------------------------------------------------------- #
# Resource markup                                                             #
# --------------------------------------------------------------------------- #


def render_context(context: XBRLContext) -> str:
    """Render one ``xbrli:context``."""
    period = context.period
    if period.is_instant:
        period_xml = f"<xbrli:instant>{period.instant_date.isoformat()}</xbrli:instant>"
    else:
        period_xml = (
            f"<xbrli:startDate>{period.start_date.isoformat()}</xbrli:startDate>"
            f"<xbrli:endDate>{period.end_date.isoformat()}</xbrli:endDate>"
        )

    scenario = ""
    if context.typed_member is not None:
        member = context.typed_member
        scenario = (
            "<xbrli:scenario>"
            f'<xbrldi:typedMember dimension="{member.dimension}">'
            f"<mica:value>{escape_html(member.value)}</mica:value>"
            "</xbrldi:typedMember>"
            "</xbrli:scenario>"
        )

    return (
        f'<xbrli:context id="{context.id}">'
        "<xbrli:entity>"
        f'<xbrli:identifier scheme="{context.scheme}">'
        f"{escape_html(context.entity_identifier)}</xbrli:identifier>"
        "</xbrli:entity>"
        f"<xbrli:period>{period_xml}</xbrli:period>"
        f"{scenario}"
        "</xbrli:context>"
    )


def render_unit(unit: XBRLUnit) -> str:
    """Render one ``xbrli:unit``."""
    return f'<xbrli:unit id="{unit.id}"><xbrli:measure>{unit.measure}</xbrli:measure></xbrli:unit>'


# --------------------------------------------------------------------------- #
# Assembler                                                                   #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AssembledDocument:
    """A generated document with the model and state it was built from."""

    html: str
    model: FactModel
    context: GenerationContext

    @property
    def fact_count(self) -> int:
        """Number of facts in the model, dimensional cells included."""
        return len(self.model.records())

    @property
    def hidden_fact_count(self) -> int:
        """Number of enumeration facts placed in ``ix:hidden``."""
        return len(self.context.hidden_facts)


class DocumentAssembler:
    """Generate inline XBRL white papers.

    Args:
        fields: Field catalog to render. Defaults to the OTHR table.
        today: Fallback date when a record carries no usable document date.
    """

    def __init__(
        self,
        fields: Sequence[FieldDefinition] = OTHR_FIELD_DEFINITIONS,
        *,
        today: date | None = None,
    ) -> None:
        self._fields = tuple(fields)
        self._builder = FactModelBuilder(self._fields, today=today)
        self._by_element = {f.element: f for f in self._fields}

    def generate(self, record: WhitepaperData, *, context: GenerationContext | None = None) -> str:
        """Return the complete XHTML document for ``record``.

        Raises:
            MissingEntityIdentifierError: If the primary LEI is unusable.
        """
        return self.assemble(record, context=context).html

    def assemble(
        self, record: WhitepaperData, *, context: GenerationContext | None = None
    ) -> AssembledDocument:
        """Build the fact model and render it, returning both."""
        model = self._builder.build(record)
        state = context if context is not None else GenerationContext()
        html = self._render(record, model, state)
        return AssembledDocument(html=html, model=model, context=state)

    # ------------------------------------------------------------------ #
    # Rendering                                                          #
    # ------------------------------------------------------------------ #

    def _render(self, record: WhitepaperData, model: FactModel, state: GenerationContext) -> str:
        renderer = SectionRenderer(InlineTagger(state))
        language = (record.language or DEFAULT_LANGUAGE).strip().lower() or DEFAULT_LANGUAGE
        asset_name = record.part_d.crypto_asset_name or "Crypto-Asset"

        pages = [
            render_cover_page(
                asset_name=asset_name,
                symbol=record.part_d.crypto_asset_symbol,
                offeror=record.part_a.legal_name,
                token_type=(record.token_type or TokenType.OTHR).value,
                document_date=record.document_date,
                language=language,
            ),
            render_table_of_contents(SECTIONS),
        ]

        for section in SECTIONS:
            fields = [f for f in self._fields if f.section == section.key]
            if not fields:
                continue
            body = renderer.render_section(section, fields, model.facts)
            for block in model.dimensional_blocks:
                if block.section == section.key:
                    body += renderer.render_dimensional_block(block, self._by_element)
            pages.append(wrap_in_page(body, anchor=section.anchor))

        pages.append(self._render_header(model, state))

        namespaces = "".join(f' xmlns:{prefix}="{uri}"' for prefix, uri in NAMESPACES.items())
        return (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            f'<html xmlns="{XHTML_NAMESPACE}"{namespaces} xml:lang="{escape_html(language)}">'
            f"{render_head(f'MiCA Crypto-Asset White Paper - {asset_name}')}"
            f"<body>{''.join(pages)}</body>"
            "</html>\n"
        )

    @staticmethod
    def _render_header(model: FactModel, state: GenerationContext) -> str:
        """Render the ``ix:header`` block inside a hidden container."""
        hidden = "".join(
            wrap_hidden_fact(entry.fact_id, entry.name, entry.context_ref, entry.taxonomy_uri)
            for entry in state.hidden_facts
        )
        hidden_xml = f"<ix:hidden>{hidden}</ix:hidden>" if hidden else ""

        referenced = set(state.referenced_contexts)
        contexts = "".join(
            render_context(ctx) for ctx_id, ctx in model.contexts.items() if ctx_id in referenced
        )
        units = "".join(
            render_unit(model.units.get(unit_id) or resolve_unit(unit_id))
            for unit_id in state.referenced_units
        )

        return (
            '<div style="display:none">'
            "<ix:header>"
            f"{hidden_xml}"
            "<ix:references>"
            f'<link:schemaRef xlink:href="{TAXONOMY_REF}" xlink:type="simple"/>'
            "</ix:references>"
            f"<ix:resources>{contexts}{units}</ix:resources>"
            "</ix:header>"
            "</div>"
        )


__all__ = [
    "NAMESPACES",
    "TAXONOMY_REF",
    "XHTML_NAMESPACE",
    "AssembledDocument",
    "DocumentAssembler",
    "render_context",
    "render_unit",
]
