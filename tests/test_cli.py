"""CLI tests for the convert command."""

import json
from pathlib import Path
import sys

import pytest

from stormdefs import cli


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["stormdefs"] + args)
    return cli.main()


def _answers(monkeypatch, *values):
    answers = iter(values)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


def _copy_fixtures(src: Path, dest: Path) -> Path:
    dest.mkdir(parents=True, exist_ok=True)
    for item in src.iterdir():
        (dest / item.name).write_bytes(item.read_bytes())
    return dest


def test_convert_with_flags(monkeypatch, capsys, tmp_path, definitions_fixture_dir):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(definitions_fixture_dir), "--output", str(tmp_path)], monkeypatch)
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "[OK] Conversion complete" in out
    assert "Definitions: 3" in out
    assert "Schema: extended" in out
    document = json.loads((tmp_path / "output.json").read_text(encoding="utf-8"))
    assert [d["name"] for d in document["definitions"]] == ["Box", "Pipe Straight", "Bare Sensor"]


def test_convert_minimal_schema(monkeypatch, tmp_path, definitions_fixture_dir):
    with pytest.raises(SystemExit):
        _run_cli(
            ["convert", "--input", str(definitions_fixture_dir), "--output", str(tmp_path), "--schema", "minimal", "--quiet"],
            monkeypatch,
        )
    document = json.loads((tmp_path / "output.json").read_text(encoding="utf-8"))
    assert "voxelMin" not in document["definitions"][0]


def test_quiet_suppresses_output(monkeypatch, capsys, tmp_path, definitions_fixture_dir):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(definitions_fixture_dir), "--output", str(tmp_path), "--quiet"], monkeypatch)
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == ""


def test_prompts_default_output_is_input_folder(monkeypatch, tmp_path, definitions_fixture_dir):
    defs = _copy_fixtures(definitions_fixture_dir, tmp_path / "defs")
    _answers(monkeypatch, str(defs), "")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--quiet"], monkeypatch)
    assert excinfo.value.code == 0
    assert (defs / "output.json").exists()


def test_prompted_output_folder(monkeypatch, tmp_path, definitions_fixture_dir):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    _answers(monkeypatch, str(out_dir))
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(definitions_fixture_dir), "--quiet"], monkeypatch)
    assert excinfo.value.code == 0
    assert (out_dir / "output.json").exists()


def test_missing_input_folder(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(tmp_path / "missing"), "--output", str(tmp_path)], monkeypatch)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "The input path provided is not a valid folder path!" in err
    assert not (tmp_path / "output.json").exists()


def test_missing_output_folder(monkeypatch, capsys, tmp_path, definitions_fixture_dir):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(definitions_fixture_dir), "--output", str(tmp_path / "missing")], monkeypatch)
    assert excinfo.value.code == 1
    assert "The destination path provided is not a valid folder path!" in capsys.readouterr().err


def test_malformed_file_aborts_without_output(monkeypatch, capsys, tmp_path, write_definition):
    good = write_definition("a.xml", '<definition name="A"/>')
    write_definition("b.xml", "<definition")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(good.parent), "--output", str(tmp_path)], monkeypatch)
    assert excinfo.value.code == 1
    assert "Error: Malformed XML in b.xml" in capsys.readouterr().err
    assert not (tmp_path / "output.json").exists()


def test_skip_invalid(monkeypatch, capsys, tmp_path, write_definition):
    good = write_definition("a.xml", '<definition name="A"/>')
    write_definition("b.xml", "<definition")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(good.parent), "--output", str(tmp_path), "--skip-invalid"], monkeypatch)
    assert excinfo.value.code == 0
    captured = capsys.readouterr()
    assert "Warning: skipped" in captured.err
    assert "MALFORMED_XML" in captured.err
    assert "Skipped: 1" in captured.out
    document = json.loads((tmp_path / "output.json").read_text(encoding="utf-8"))
    assert [d["name"] for d in document["definitions"]] == ["A"]


def test_prompt_eof_aborts(monkeypatch, capsys):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert"], monkeypatch)
    assert excinfo.value.code == 1
    assert "Aborted" in capsys.readouterr().err


def test_no_command_runs_convert_with_prompts(monkeypatch, capsys, tmp_path, definitions_fixture_dir):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    _answers(monkeypatch, str(definitions_fixture_dir), str(out_dir))
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 0
    assert "[OK] Conversion complete" in capsys.readouterr().out
    document = json.loads((out_dir / "output.json").read_text(encoding="utf-8"))
    assert len(document["definitions"]) == 3


def test_options_without_command_go_to_convert(monkeypatch, capsys, tmp_path, definitions_fixture_dir):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["--input", str(definitions_fixture_dir), "--output", str(tmp_path), "--quiet"], monkeypatch)
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == ""
    assert (tmp_path / "output.json").exists()


def test_help_still_prints_usage(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["--help"], monkeypatch)
    assert excinfo.value.code == 0
    assert "usage: stormdefs" in capsys.readouterr().out


def test_skip_invalid_covers_entity_declarations(monkeypatch, capsys, tmp_path, write_definition):
    good = write_definition("a.xml", '<definition name="A"/>')
    write_definition(
        "b.xml",
        '<?xml version="1.0"?><!DOCTYPE definition [<!ENTITY x "y">]><definition name="&x;"/>',
    )
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["convert", "--input", str(good.parent), "--output", str(tmp_path), "--skip-invalid"], monkeypatch)
    assert excinfo.value.code == 0
    assert "MALFORMED_XML" in capsys.readouterr().err
