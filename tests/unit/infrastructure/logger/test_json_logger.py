from __future__ import annotations

import contextvars
import json
import logging
import sys

import pytest

from mica_ixbrl.infrastructure.logging.logger import (
    _JsonFormatter,
    configure_root_logging,
    get_json_logger,
    get_run_id,
    set_run_context,
)


def _record(msg: str = "event", **extra: object) -> logging.LogRecord:
    return logging.getLogger("mica.test").makeRecord(
        "mica.test", logging.INFO, __file__, 1, msg, None, None, extra=extra
    )


def test_stable_keys_and_extras() -> None:
    line = _JsonFormatter().format(_record("ixbrl.generate.success", facts=212, token_type="OTHR"))

    payload = json.loads(line)

    assert payload["level"] == "INFO"
    assert payload["logger"] == "mica.test"
    assert payload["message"] == "ixbrl.generate.success"
    assert payload["facts"] == 212
    assert payload["token_type"] == "OTHR"
    assert "ts" in payload


def test_nested_extra_dict_is_flattened() -> None:
    payload = json.loads(_JsonFormatter().format(_record(extra={"lei": "X", "n": 1})))

    assert payload["lei"] == "X"
    assert payload["n"] == 1
    assert "extra" not in payload


def test_run_id_from_context_then_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MICA_RUN_ID", "from-env")

    def _run_id(**extra: object) -> str:
        return json.loads(_JsonFormatter().format(_record(**extra)))["run_id"]

    def _scenario() -> None:
        assert get_run_id() is None
        assert _run_id() == "from-env"
        set_run_context(run_id="from-context")
        assert get_run_id() == "from-context"
        assert _run_id() == "from-context"
        assert _run_id(run_id="explicit") == "explicit"

    contextvars.Context().run(_scenario)


def test_exception_info_is_summarized() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.getLogger("mica.test").makeRecord(
            "mica.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )

    payload = json.loads(_JsonFormatter().format(record))

    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"


def test_non_serializable_values_are_stringified() -> None:
    payload = json.loads(_JsonFormatter().format(_record(obj=object())))

    assert isinstance(payload["obj"], str)


def test_configure_root_logging_is_idempotent() -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        configure_root_logging("debug")
        configure_root_logging("WARNING")
        json_handlers = [h for h in root.handlers if isinstance(h.formatter, _JsonFormatter)]
        assert len(json_handlers) == 1
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = before
        root.setLevel(level)


def test_get_json_logger_propagates() -> None:
    logger = get_json_logger("mica_ixbrl.some.module")

    assert logger.name == "mica_ixbrl.some.module"
    assert logger.propagate
