# src/mica_ixbrl/domain/services/document_template.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Static presentation pieces of the white-paper document.

Purpose:
    Provide the embedded stylesheet, the cover page, the table of contents
    and the page wrapper used by the document assembler.

Layer:
    domain/services

Notes:
    The stylesheet avoids XML-significant characters so the document stays
    well-formed XHTML without a CDATA section.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from mica_ixbrl.domain.entities.taxonomy import SectionDefinition
from mica_ixbrl.domain.services.inline_tagger import escape_html

STYLESHEET: Final[str] = """
* { margin: 0; padding: 0; box-sizing: border-box; }
html { font-size: 10pt; }
body {
  font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
  line-height: 1.5;
  color: #1a1a1a;
  background: #f0f0f0;
}
.page {
  width: 210mm;
  min-height: 297mm;
  margin: 10mm auto;
  padding: 20mm 25mm;
  background: #ffffff;
  box-shadow: 0 1px 4px rgba(0, 0, 0, 0.15);
  page-break-after: always;
}
@media print {
  body { background: #ffffff; }
  .page { margin: 0; padding: 15mm 20mm; box-shadow: none; }
}
.cover-page { text-align: center; padding-top: 60mm; }
.cover-page .title { font-size: 22pt; font-weight: 700; color: #003366; margin-bottom: 5mm; }
.cover-page .subtitle { font-size: 14pt; color: #666666; margin-bottom: 10mm; }
.cover-page .meta { font-size: 10pt; color: #888888; margin-top: 3mm; }
.toc h2 {
  font-size: 16pt;
  color: #003366;
  margin-bottom: 8mm;
  border-bottom: 2px solid #003366;
}
.toc ol { list-style: none; }
.toc li { margin-bottom: 2mm; }
.toc a { color: #003366; text-decoration: none; }
.section-heading {
  font-size: 13pt;
  color: #003366;
  margin: 6mm 0 4mm 0;
  border-bottom: 1px solid #003366;
}
.section-subheading { font-size: 11pt; color: #003366; margin: 6mm 0 3mm 0; }
table { width: 100%; border-collapse: collapse; margin-bottom: 6mm; }
th, td { border: 1px solid #c0c0c0; padding: 2mm 3mm; vertical-align: top; text-align: left; }
th { background: #e8eef5; color: #003366; font-weight: 600; }
table.accounts td:first-child, table.sustainability td:first-child { width: 12mm; }
table.accounts td:nth-child(2), table.sustainability td:nth-child(2) { width: 60mm; }
table.sustainability th { background: #e9f5ec; color: #1d5e2c; }
table.dimensional td:first-child { width: 8mm; }
.empty-field { background: #fafafa; }
.text-block { white-space: pre-wrap; }
"""


def render_head(title: str) -> str:
    """Return the ``<head>`` element with charset, title and stylesheet."""
    return (
        "<head>"
        '<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>'
        f"<title>{escape_html(title)}</title>"
        f'<style type="text/css">{STYLESHEET}</style>'
        "</head>"
    )


def wrap_in_page(content: str, *, anchor: str | None = None, css_class: str = "") -> str:
    """Wrap content in an A4 page ``<div>``."""
    classes = f"page {css_class}".strip()
    anchor_attr = f' id="{anchor}"' if anchor else ""
    return f'<div class="{classes}"{anchor_attr}>{content}</div>'


def render_cover_page(
    *,
    asset_name: str,
    symbol: str | None,
    offeror: str | None,
    token_type: str,
    document_date: str | None,
    language: str,
) -> str:
    """Render the cover page; absent values are simply left out."""
    heading = asset_name if not symbol else f"{asset_name} ({symbol})"
    meta = [
        f"Offeror: {offeror}" if offeror else None,
        f"Crypto-asset type: {token_type}",
        f"Date: {document_date}" if document_date else None,
        f"Language: {language}",
    ]
    meta_html = "".join(f'<p class="meta">{escape_html(m)}</p>' for m in meta if m)
    body = (
        f'<h1 class="title">{escape_html(heading)}</h1>'
        '<p class="subtitle">Crypto-Asset White Paper pursuant to Regulation (EU) 2023/1114</p>'
        f"{meta_html}"
    )
    return wrap_in_page(body, anchor="cover", css_class="cover-page")


def render_table_of_contents(sections: Sequence[SectionDefinition]) -> str:
    """Render a table of contents linking every section anchor."""
    items = "".join(
        f'<li><a href="#{s.anchor}">{escape_html(s.title)}</a></li>' for s in sections
    )
    return wrap_in_page(
        f'<div class="toc"><h2>Table of Contents</h2><ol>{items}</ol></div>', anchor="toc"
    )


__all__ = [
    "STYLESHEET",
    "render_cover_page",
    "render_head",
    "render_table_of_contents",
    "wrap_in_page",
]
