# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the ctoresolve CLI entry point."""

import json
import logging
import sys
from pathlib import Path

import pytest

from ctoresolve.cli.main import main
from ctoresolve.model.schema import get_metamodel_cto
from ctoresolve.parser import parse

# ###############
# Helpers
# ###############

_BASE = "namespace org.base\n\nconcept Address {\n  o String street\n}\n"
_HR = "namespace org.hr\n\nimport org.base.Address\n\nconcept Person {\n  o Address home\n}\n"


def _write_models(directory: Path) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "base.cto").write_text(_BASE, encoding="utf-8")
    (directory / "hr.cto").write_text(_HR, encoding="utf-8")


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Run main() with the given arguments and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["ctoresolve", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "usage: ctoresolve" in capsys.readouterr().out


def test_metamodel_prints_schema(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "metamodel") == 0
    assert capsys.readouterr().out == get_metamodel_cto()


def test_verbose_enables_debug_logging(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """-v logs registry activity at DEBUG level."""
    _write_models(tmp_path)
    caplog.set_level(logging.DEBUG, logger="ctoresolve")
    assert _run(monkeypatch, "-v", "check", str(tmp_path)) == 0
    assert any(record.levelno == logging.DEBUG for record in caplog.records)


# -------- check tests --------


def test_check_success(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _write_models(tmp_path)
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "Checked 2 model file(s): all names resolve." in capsys.readouterr().out


def test_check_default_directory_uses_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_models(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "check") == 0


def test_check_reports_dangling_reference(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """A dangling type reference exits with code 1 and names the missing type."""
    (tmp_path / "a.cto").write_text("namespace a\nconcept A {\n  o Missing m\n}\n", encoding="utf-8")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "Error: Name Missing not found" in capsys.readouterr().err


def test_check_reports_parse_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    (tmp_path / "bad.cto").write_text("namespace a\nconcept {}\n", encoding="utf-8")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "bad.cto" in capsys.readouterr().err


def test_check_missing_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "check", str(tmp_path / "nonexistent")) == 1


def test_check_empty_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "No model files found." in capsys.readouterr().out


# -------- resolve tests --------


def test_resolve_prints_resolved_json(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    _write_models(tmp_path)
    assert _run(monkeypatch, "resolve", "org.hr", str(tmp_path)) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["$class"] == "concerto.metamodel.Model"
    home = data["declarations"][0]["properties"][0]
    assert home["type"] == {"$class": "concerto.metamodel.TypeIdentifier", "name": "Address", "namespace": "org.base"}


def test_resolve_unknown_namespace(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    _write_models(tmp_path)
    assert _run(monkeypatch, "resolve", "org.none", str(tmp_path)) == 1
    assert "org.none" in capsys.readouterr().err


# -------- export / import tests --------


def test_export_to_stdout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _write_models(tmp_path)
    assert _run(monkeypatch, "export", str(tmp_path)) == 0
    data = json.loads(capsys.readouterr().out)
    assert [m["namespace"] for m in data["models"]] == ["org.base", "org.hr"]
    home = data["models"][1]["declarations"][0]["properties"][0]
    assert "namespace" not in home["type"]


def test_export_resolved_to_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    models_dir = tmp_path / "models"
    _write_models(models_dir)
    output = tmp_path / "out" / "all.metamodel.json"
    assert _run(monkeypatch, "export", str(models_dir), "--resolve", "-o", str(output)) == 0
    assert f"Wrote 2 model(s) to '{output}'." in capsys.readouterr().out
    data = json.loads(output.read_text(encoding="utf-8"))
    home = data["models"][1]["declarations"][0]["properties"][0]
    assert home["type"]["namespace"] == "org.base"


def test_import_writes_cto_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """An exported artifact converts back to one .cto file per namespace."""
    models_dir = tmp_path / "models"
    _write_models(models_dir)
    artifact = tmp_path / "all.metamodel.json"
    assert _run(monkeypatch, "export", str(models_dir), "-o", str(artifact)) == 0

    out_dir = tmp_path / "imported"
    assert _run(monkeypatch, "import", str(artifact), "-o", str(out_dir)) == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["org.base.cto", "org.hr.cto"]
    assert parse((out_dir / "org.hr.cto").read_text(encoding="utf-8")) == parse(_HR)
    assert _run(monkeypatch, "check", str(out_dir)) == 0


def test_import_missing_artifact(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "import", str(tmp_path / "none.json")) == 1
    assert "Error:" in capsys.readouterr().err


def test_import_invalid_artifact(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    artifact = tmp_path / "bad.json"
    artifact.write_text("[1, 2]", encoding="utf-8")
    assert _run(monkeypatch, "import", str(artifact), "-o", str(tmp_path / "out")) == 1
    assert "Error: Invalid metamodel" in capsys.readouterr().err
