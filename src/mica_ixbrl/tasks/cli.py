# src/mica_ixbrl/tasks/cli.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""MiCA iXBRL CLI: generate, validate and inspect white-paper documents.

Commands:
    generate INPUT.json        Write the inline XBRL document for a record.
    validate INPUT.json        Print the validation result as JSON.
    duplicates DOCUMENT.html   Re-read an emitted document and report duplicates.
    requirements TOKEN_TYPE    Print required/recommended field paths.

Environment:
    MICA_LOG_LEVEL             Root log level (JSON logs go to stderr).
    MICA_DEFAULT_LANGUAGE      Language used when a record carries none.
    MICA_CHECK_REGISTRY        Default for ``validate --check-registry``.
    GLEIF_API_URL              GLEIF API base URL.
    GLEIF_API_KEY/LEI_API_KEY  Optional GLEIF bearer token.
"""

from __future__ import annotations

import asyncio
import json
import uuid
from pathlib import Path
from typing import Any

import typer

from mica_ixbrl.adapters.gateways.gleif_registry_gateway import GleifRegistryGateway
from mica_ixbrl.adapters.mappers.ixbrl_fact_reader import IXBRLFactReader
from mica_ixbrl.application.schemas.dto.validation import (
    DuplicateReportDTO,
    ValidationRequirementsDTO,
    ValidationResultDTO,
)
from mica_ixbrl.application.use_cases.generate_ixbrl_document import (
    GenerateIXBRLDocumentUseCase,
)
from mica_ixbrl.application.use_cases.validate_whitepaper import ValidateWhitepaperUseCase
from mica_ixbrl.config.settings import get_settings
from mica_ixbrl.domain.entities.validation import ValidationOptions, ValidationResult
from mica_ixbrl.domain.enums.mica import TokenType
from mica_ixbrl.domain.exceptions.base import DomainError
from mica_ixbrl.domain.services.duplicate_detector import detect_duplicate_facts
from mica_ixbrl.domain.services.validation_orchestrator import get_validation_requirements
from mica_ixbrl.infrastructure.external_apis.gleif.client import GleifClient
from mica_ixbrl.infrastructure.external_apis.gleif.settings import get_gleif_settings
from mica_ixbrl.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
    set_run_context,
)
from mica_ixbrl.infrastructure.observability.recorder import PrometheusMetricsRecorder

log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    log_level: str | None = typer.Option(  # noqa: B008
        None, "--log-level", help="Override MICA_LOG_LEVEL."
    ),
) -> None:
    """Inline XBRL generation and validation for MiCA crypto-asset white papers."""
    settings = get_settings()
    configure_root_logging(log_level or settings.log_level)
    set_run_context(run_id=uuid.uuid4().hex)


def _fail(message: str, exc: DomainError | None = None) -> typer.Exit:
    """Log ``message``, echo it to stderr and return an exit-1 signal."""
    extra: dict[str, Any] = {"error": message}
    if exc is not None:
        extra.update(error_code=exc.code, details=exc.details)
    log.error("cli.failed", extra=extra)
    typer.echo(message, err=True)
    return typer.Exit(code=1)


def _load_json(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise _fail(f"Cannot read JSON from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise _fail(f"{path} must contain a JSON object.")
    return payload


@app.command("generate")
def generate(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False),  # noqa: B008
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Write the document here instead of stdout."
    ),
) -> None:
    """Generate the inline XBRL document for a white-paper record."""
    payload = _load_json(input_path)
    settings = get_settings()
    use_case = GenerateIXBRLDocumentUseCase(
        metrics=PrometheusMetricsRecorder(),
        default_language=settings.default_language,
    )
    try:
        result = asyncio.run(use_case.execute(payload))
    except DomainError as exc:
        raise _fail(f"Generation failed: {exc}", exc) from exc

    if output is None:
        typer.echo(result.html, nl=False)
        return
    output.write_text(result.html, encoding="utf-8")
    log.info(
        "cli.generate.written",
        extra={"path": str(output), "facts": result.fact_count},
    )


async def _validate(payload: dict[str, Any], options: ValidationOptions) -> ValidationResult:
    metrics = PrometheusMetricsRecorder()
    if not options.check_registry:
        return await ValidateWhitepaperUseCase(metrics=metrics).execute(payload, options)
    async with GleifClient(get_gleif_settings()) as client:
        use_case = ValidateWhitepaperUseCase(
            registry=GleifRegistryGateway(client), metrics=metrics
        )
        return await use_case.execute(payload, options)


@app.command("validate")
def validate(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False),  # noqa: B008
    token_type: TokenType | None = typer.Option(  # noqa: B008
        None, "--token-type", case_sensitive=False, help="Override the record's token type."
    ),
    check_registry: bool | None = typer.Option(  # noqa: B008
        None,
        "--check-registry/--no-check-registry",
        help="Look identifiers up in GLEIF (default: MICA_CHECK_REGISTRY).",
    ),
    skip_rule: list[str] = typer.Option(  # noqa: B008
        [], "--skip-rule", help="Rule id to skip; may be repeated."
    ),
) -> None:
    """Validate a white-paper record and print the result as JSON."""
    payload = _load_json(input_path)
    settings = get_settings()
    options = ValidationOptions(
        token_type=token_type,
        skip_rules=frozenset(r.strip() for r in skip_rule if r.strip()),
        check_registry=settings.check_registry if check_registry is None else check_registry,
    )
    try:
        result = asyncio.run(_validate(payload, options))
    except DomainError as exc:
        raise _fail(f"Validation failed: {exc}", exc) from exc

    typer.echo(ValidationResultDTO.from_entity(result).model_dump_json(by_alias=True, indent=2))
    if not result.valid:
        raise typer.Exit(code=1)


@app.command("duplicates")
def duplicates(
    document: Path = typer.Argument(..., exists=True, dir_okay=False),  # noqa: B008
) -> None:
    """Report facts sharing element, context and unit in an emitted document."""
    try:
        records = IXBRLFactReader().read(document.read_bytes())
    except DomainError as exc:
        raise _fail(f"Cannot read facts from {document}: {exc}", exc) from exc

    result = detect_duplicate_facts(records)
    typer.echo(DuplicateReportDTO.from_entity(result).model_dump_json(by_alias=True, indent=2))
    if result.has_duplicates:
        raise typer.Exit(code=1)


@app.command("requirements")
def requirements(
    token_type: TokenType = typer.Argument(..., case_sensitive=False),  # noqa: B008
) -> None:
    """Print the required and recommended field paths for a token type."""
    req = get_validation_requirements(token_type)
    typer.echo(ValidationRequirementsDTO.from_entity(req).model_dump_json(by_alias=True, indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
