# tests/arch/test_layering.py
"""Clean Architecture layering guardrail using grimp import graph.

This test builds an import graph for the `mica_ixbrl` package and enforces
a strict layering policy:

    domain         → may depend only on domain
    application    → may depend on {domain, application}
    adapters       → may depend on {domain, application, adapters, infrastructure}
    infrastructure → may depend on {domain, application, adapters, infrastructure}

`config` and `tasks` sit outside the matrix: they wire the layers together.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

import grimp
from grimp import ImportGraph

ROOT_PACKAGE: Final[str] = "mica_ixbrl"

LAYERS: Final[frozenset[str]] = frozenset(
    {"domain", "application", "adapters", "infrastructure"}
)

# Map from top-level "layer" to the set of layers it is allowed to import.
ALLOWED_DEPENDENCIES: Mapping[str, set[str]] = {
    "domain": {"domain"},
    "application": {"domain", "application"},
    "adapters": {"domain", "application", "adapters", "infrastructure"},
    "infrastructure": {"domain", "application", "adapters", "infrastructure"},
}

# Third-party packages the pure core must never reach for.
FORBIDDEN_IN_DOMAIN: Final[frozenset[str]] = frozenset(
    {"httpx", "pydantic", "pydantic_settings", "prometheus_client", "typer", "defusedxml"}
)


def _build_graph(*, include_external_packages: bool = False) -> ImportGraph:
    return grimp.build_graph(ROOT_PACKAGE, include_external_packages=include_external_packages)


def _layer_for_module(module_name: str) -> str | None:
    """Return the layer of ``mica_ixbrl.<layer>.*`` modules, else ``None``."""
    if not module_name.startswith(f"{ROOT_PACKAGE}."):
        return None
    top = module_name[len(ROOT_PACKAGE) + 1 :].split(".", 1)[0]
    return top if top in LAYERS else None


def _find_layering_violations(graph: ImportGraph) -> list[str]:
    violations: set[str] = set()
    for importer in sorted(graph.modules):
        importer_layer = _layer_for_module(importer)
        if importer_layer is None:
            continue
        allowed_targets = ALLOWED_DEPENDENCIES[importer_layer]
        for imported in graph.find_modules_directly_imported_by(importer):
            imported_layer = _layer_for_module(imported)
            if imported_layer is None:
                continue
            if imported_layer not in allowed_targets:
                violations.add(
                    f"{importer} ({importer_layer}) -> {imported} ({imported_layer}) "
                    "is not allowed by ALLOWED_DEPENDENCIES"
                )
    return sorted(violations)


def test_layering_respects_clean_architecture() -> None:
    """Ensure that high-level layering rules are respected."""
    violations = _find_layering_violations(_build_graph())

    if violations:
        message = "Layering violations detected:\n" + "\n".join(violations)
        raise AssertionError(message)


def test_domain_has_no_third_party_imports() -> None:
    graph = _build_graph(include_external_packages=True)
    offenders = sorted(
        f"{importer} -> {imported}"
        for importer in graph.modules
        if _layer_for_module(importer) == "domain"
        for imported in graph.find_modules_directly_imported_by(importer)
        if imported.split(".", 1)[0] in FORBIDDEN_IN_DOMAIN
    )

    assert offenders == []
