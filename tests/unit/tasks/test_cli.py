from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx
from typer.testing import CliRunner

from fixtures.leis import OFFEROR_LEI

from mica_ixbrl.tasks import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_root_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep JSON log lines out of the captured command output.
    monkeypatch.setattr(cli, "configure_root_logging", lambda level=None: None)


@pytest.fixture
def payload_file(tmp_path: Path, whitepaper_payload: dict[str, Any]) -> Path:
    path = tmp_path / "whitepaper.json"
    path.write_text(json.dumps(whitepaper_payload), encoding="utf-8")
    return path


@pytest.fixture
def no_lei_file(tmp_path: Path, whitepaper_payload: dict[str, Any]) -> Path:
    del whitepaper_payload["partA"]["lei"]
    path = tmp_path / "no-lei.json"
    path.write_text(json.dumps(whitepaper_payload), encoding="utf-8")
    return path


def test_generate_writes_document_to_stdout(payload_file: Path) -> None:
    result = runner.invoke(cli.app, ["generate", str(payload_file)])

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith('<?xml version="1.0" encoding="utf-8"?>')
    assert "ix:nonNumeric" in result.stdout


def test_generate_writes_document_to_file(payload_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "whitepaper.xhtml"

    result = runner.invoke(cli.app, ["generate", str(payload_file), "-o", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8").startswith("<?xml")


def test_generate_without_identifier_fails(no_lei_file: Path) -> None:
    result = runner.invoke(cli.app, ["generate", str(no_lei_file)])

    assert result.exit_code == 1
    assert "Generation failed" in result.output


@pytest.mark.parametrize(
    ("content", "message"),
    [("{not json", "Cannot read JSON"), ("[1, 2]", "must contain a JSON object")],
)
def test_unreadable_input_fails(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "broken.json"
    path.write_text(content, encoding="utf-8")

    result = runner.invoke(cli.app, ["validate", str(path)])

    assert result.exit_code == 1
    assert message in result.output


def test_unknown_payload_key_fails(tmp_path: Path) -> None:
    path = tmp_path / "unknown.json"
    path.write_text(json.dumps({"partQ": {}}), encoding="utf-8")

    result = runner.invoke(cli.app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Validation failed" in result.output


def test_validate_valid_record(payload_file: Path) -> None:
    result = runner.invoke(cli.app, ["validate", str(payload_file)])

    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["valid"] is True
    assert body["summary"]["errors"] == 0
    assert body["duplicates"]["hasDuplicates"] is False


def test_validate_invalid_record_exits_nonzero(no_lei_file: Path) -> None:
    result = runner.invoke(cli.app, ["validate", str(no_lei_file)])

    assert result.exit_code == 1
    body = json.loads(result.stdout)
    assert [e["ruleId"] for e in body["errors"]] == ["LEI-000", "EXS-A-002"]


def test_validate_skip_rules(no_lei_file: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["validate", str(no_lei_file), "--skip-rule", "LEI-000", "--skip-rule", " EXS-A-002 "],
    )

    assert result.exit_code == 0, result.output


def test_validate_token_type_override(payload_file: Path) -> None:
    result = runner.invoke(cli.app, ["validate", str(payload_file), "--token-type", "art"])

    assert result.exit_code == 1
    rule_ids = {e["ruleId"] for e in json.loads(result.stdout)["errors"]}
    assert rule_ids == {"EXS-ART-001", "EXS-ART-002"}


def test_validate_with_registry(payload_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLEIF_API_URL", "https://gleif.test/api/v1")

    with respx.mock:
        route = respx.get(f"https://gleif.test/api/v1/lei-records/{OFFEROR_LEI}").mock(
            return_value=httpx.Response(404, json={"errors": [{"title": "Not Found"}]})
        )
        result = runner.invoke(cli.app, ["validate", str(payload_file), "--check-registry"])

    assert route.called
    assert result.exit_code == 0, result.output
    assert [w["ruleId"] for w in json.loads(result.stdout)["warnings"]] == ["LEI-003"]


def test_registry_default_comes_from_settings(
    payload_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MICA_CHECK_REGISTRY", "true")
    monkeypatch.setenv("GLEIF_API_URL", "https://gleif.test/api/v1")

    with respx.mock:
        route = respx.get(f"https://gleif.test/api/v1/lei-records/{OFFEROR_LEI}").mock(
            return_value=httpx.Response(503)
        )
        result = runner.invoke(cli.app, ["validate", str(payload_file)])

    assert route.called
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["warnings"] == []


def test_duplicates_on_generated_document(payload_file: Path, tmp_path: Path) -> None:
    document = tmp_path / "whitepaper.xhtml"
    runner.invoke(cli.app, ["generate", str(payload_file), "-o", str(document)])

    result = runner.invoke(cli.app, ["duplicates", str(document)])

    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["hasDuplicates"] is False
    assert body["totalFacts"] > 0


def test_duplicates_reported(tmp_path: Path) -> None:
    fact = '<ix:nonNumeric name="mica:X" contextRef="c1">{}</ix:nonNumeric>'
    document = tmp_path / "dup.xhtml"
    document.write_text(
        '<html xmlns="http://www.w3.org/1999/xhtml" '
        'xmlns:ix="http://www.xbrl.org/2013/inlineXBRL"><body>'
        f"{fact.format('a')}{fact.format('b')}</body></html>",
        encoding="utf-8",
    )

    result = runner.invoke(cli.app, ["duplicates", str(document)])

    assert result.exit_code == 1
    (group,) = json.loads(result.stdout)["duplicateGroups"]
    assert group["count"] == 2
    assert group["values"] == ["a", "b"]


def test_duplicates_on_malformed_document(tmp_path: Path) -> None:
    document = tmp_path / "broken.xhtml"
    document.write_text("<html><body>", encoding="utf-8")

    result = runner.invoke(cli.app, ["duplicates", str(document)])

    assert result.exit_code == 1
    assert "Cannot read facts" in result.output


@pytest.mark.parametrize(("token_type", "total"), [("othr", 39), ("ART", 40), ("emt", 39)])
def test_requirements(token_type: str, total: int) -> None:
    result = runner.invoke(cli.app, ["requirements", token_type])

    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["tokenType"] == token_type.upper()
    assert body["totalAssertions"] == total
