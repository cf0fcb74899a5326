"""Tests for config loading and the CLI."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json

import pytest

from swift_colon_lint import ConfigurationError, Severity, load_config, load_from_yaml
from swift_colon_lint.cli import main


# ── Config ───────────────────────────────────────────────────────────

def test_defaults():
    config = load_config({})
    assert config.strict_right_spacing is False
    assert config.apply_to_dictionaries is True
    assert config.severity is Severity.WARNING
    assert load_config(None) == config


def test_nested_section():
    config = load_config({"colon": {
        "flexible_right_spacing": True,
        "apply_to_dictionaries": False,
        "severity": "error",
    }})
    assert config.strict_right_spacing is True
    assert config.apply_to_dictionaries is False
    assert config.severity is Severity.ERROR


def test_flat_keys_and_synonym():
    assert load_config({"strict_right_spacing": True}).strict_right_spacing is True
    assert load_config({"severity": "ERROR"}).severity is Severity.ERROR
    assert load_config({"colon": None}) == load_config({})


def test_invalid_values():
    with pytest.raises(ConfigurationError):
        load_config({"apply_to_dictionaries": "no"})
    with pytest.raises(ConfigurationError):
        load_config({"severity": "fatal"})
    with pytest.raises(ConfigurationError):
        load_config({"colon": ["severity"]})
    with pytest.raises(ConfigurationError):
        load_config(["colon"])


def test_load_from_yaml(tmp_path):
    path = tmp_path / ".swiftlint.yml"
    path.write_text("colon:\n  apply_to_dictionaries: false\n  severity: error\n")
    config = load_from_yaml(path)
    assert config.apply_to_dictionaries is False
    assert config.severity is Severity.ERROR


def test_load_from_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("colon: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_from_yaml(path)


# ── CLI ──────────────────────────────────────────────────────────────

SOURCE = "struct A {\n    var name:String\n    var tags: [String:Int]\n}\n"


@pytest.fixture
def swift_file(tmp_path):
    path = tmp_path / "A.swift"
    path.write_text(SOURCE, encoding="utf-8")
    return path


def test_lint_text_output(swift_file, capsys):
    assert main(["lint", str(swift_file)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    assert out[0] == (
        f"{swift_file}:2:9: warning: Colon Spacing Violation: "
        "Colons should be next to the identifier when specifying a type "
        "and next to the key in dictionary literals. (colon)"
    )


def test_lint_error_severity_exit_code(swift_file, capsys):
    assert main(["--severity", "error", "lint", str(swift_file)]) == 2


def test_lint_json_and_dictionary_flag(swift_file, capsys):
    assert main(["--ignore-dictionaries", "lint", "--format", "json", str(swift_file)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [(v["line"], v["character"]) for v in data] == [(2, 9)]
    assert data[0]["rule_id"] == "colon"


def test_lint_config_file(swift_file, tmp_path, capsys):
    config = tmp_path / "lint.yml"
    config.write_text("colon:\n  apply_to_dictionaries: false\n")
    assert main(["--config", str(config), "lint", str(swift_file)]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 1


def test_lint_directory(tmp_path, capsys):
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "B.swift").write_text("let b:Int = 1\n")
    (tmp_path / "C.swift").write_text("let c: Int = 1\n")
    (tmp_path / "notes.txt").write_text("let d:Int\n")
    assert main(["lint", str(tmp_path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 1
    assert out[0].startswith(str(tmp_path / "pkg" / "B.swift") + ":1:5:")


def test_lint_missing_file(tmp_path, capsys):
    assert main(["lint", str(tmp_path / "missing.swift")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_lint_bad_config(swift_file, tmp_path, capsys):
    config = tmp_path / "lint.yml"
    config.write_text("colon:\n  severity: fatal\n")
    assert main(["--config", str(config), "lint", str(swift_file)]) == 1
    assert "severity" in capsys.readouterr().err


def test_lint_with_sourcekitten_tokens(tmp_path, capsys):
    swift = tmp_path / "D.swift"
    swift.write_text("let x:Foo")
    tokens = tmp_path / "D.json"
    # SourceKit tags Foo as a plain identifier here, so nothing is reported
    tokens.write_text(json.dumps([
        {"offset": 0, "length": 3, "type": "source.lang.swift.syntaxtype.keyword"},
        {"offset": 4, "length": 1, "type": "source.lang.swift.syntaxtype.identifier"},
        {"offset": 6, "length": 3, "type": "source.lang.swift.syntaxtype.identifier"},
    ]))
    assert main(["lint", str(swift), "--tokens", str(tokens)]) == 0
    assert capsys.readouterr().out == ""
    assert main(["lint", str(swift)]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 1


def test_lint_crlf_file_with_sourcekitten_tokens(tmp_path, capsys):
    swift = tmp_path / "E.swift"
    swift.write_bytes(b"let a = 1\r\nlet x:Int\r\n")
    tokens = tmp_path / "E.json"
    # offsets count both bytes of each CRLF, as SourceKit does
    tokens.write_text(json.dumps([
        {"offset": 0, "length": 3, "type": "source.lang.swift.syntaxtype.keyword"},
        {"offset": 4, "length": 1, "type": "source.lang.swift.syntaxtype.identifier"},
        {"offset": 8, "length": 1, "type": "source.lang.swift.syntaxtype.number"},
        {"offset": 11, "length": 3, "type": "source.lang.swift.syntaxtype.keyword"},
        {"offset": 15, "length": 1, "type": "source.lang.swift.syntaxtype.identifier"},
        {"offset": 17, "length": 3, "type": "source.lang.swift.syntaxtype.typeidentifier"},
    ]))
    assert main(["lint", "--format", "json", str(swift), "--tokens", str(tokens)]) == 0
    [v] = json.loads(capsys.readouterr().out)
    assert (v["line"], v["character"], v["length"]) == (2, 5, 3)


def test_lint_with_malformed_tokens(swift_file, tmp_path, capsys):
    tokens = tmp_path / "bad.json"
    tokens.write_text("{not json")
    assert main(["lint", str(swift_file), "--tokens", str(tokens)]) == 1


def test_lint_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("let x :Int\n"))
    assert main(["lint-text"]) == 0
    [v] = json.loads(capsys.readouterr().out)
    assert (v["line"], v["character"], v["length"]) == (1, 5, 4)


def test_explain(swift_file, capsys):
    assert main(["--ignore-dictionaries", "explain", str(swift_file)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("2:12\taccepted\tidentifier,typeidentifier")
    assert out[1].startswith("3:21\trejected_dictionary")


def test_tokens_dump(swift_file, capsys):
    assert main(["tokens", str(swift_file)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data[0] == {"offset": 0, "length": 6, "type": "source.lang.swift.syntaxtype.keyword"}


def test_pattern(capsys):
    assert main(["--strict-right-spacing", "pattern"]) == 0
    assert r"\s{2,}" not in capsys.readouterr().out
