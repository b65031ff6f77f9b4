# src/mica_ixbrl/domain/services/generation_context.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Per-call generation state.

Purpose:
    Hold everything that is mutable during one document generation: the
    fact-id sequence, the hidden-fact registry and the set of contexts and
    units actually referenced by emitted tags.

Layer:
    domain/services

Notes:
    - A fresh instance is created for every generation call, so ids restart
      at 1 and two runs over the same record produce identical output.
    - Concurrent generations must each use their own instance.
"""

from __future__ import annotations

from mica_ixbrl.domain.entities.ixbrl_document import HiddenFactEntry


class GenerationContext:
    """Mutable state threaded through the tagger, renderer and assembler."""

    def __init__(self) -> None:
        """Initialize an empty context with the id sequence at zero."""
        self._counter = 0
        self._hidden_facts: list[HiddenFactEntry] = []
        self._context_refs: list[str] = []
        self._unit_refs: list[str] = []

    def next_id(self, prefix: str = "fact") -> str:
        """Return the next id in the shared sequence, e.g. ``fact_3``."""
        self._counter += 1
        return f"{prefix}_{self._counter}"

    def register_hidden_fact(self, entry: HiddenFactEntry) -> None:
        """Record an enumeration fact destined for ``ix:hidden``."""
        self._hidden_facts.append(entry)
        self.reference(context_ref=entry.context_ref)

    def reference(self, *, context_ref: str, unit_ref: str | None = None) -> None:
        """Mark a context (and unit) as used by an emitted fact."""
        if context_ref not in self._context_refs:
            self._context_refs.append(context_ref)
        if unit_ref and unit_ref not in self._unit_refs:
            self._unit_refs.append(unit_ref)

    @property
    def hidden_facts(self) -> tuple[HiddenFactEntry, ...]:
        """Hidden-fact entries in registration order."""
        return tuple(self._hidden_facts)

    @property
    def referenced_contexts(self) -> tuple[str, ...]:
        """Context ids referenced so far, in first-use order."""
        return tuple(self._context_refs)

    @property
    def referenced_units(self) -> tuple[str, ...]:
        """Unit ids referenced so far, in first-use order."""
        return tuple(self._unit_refs)


__all__ = ["GenerationContext"]
