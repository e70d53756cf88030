"""
Integration tests for the pikegen command line driver.

These tests run the whole pipeline: load a document, render it and
write the result.
"""

import json
import logging

import pytest

import pikegen
from pikegen.cli import build_arg_parser, main
from pikegen.utils.logging import setup_logging

PERSON_YAML = """\
top_levels:
  Person: Person
types:
  Person:
    kind: class
    description: A person.
    properties:
      name: string
      nickname: {kind: union, members: [null, string]}
      id: Id
  Id:
    kind: union
    members: [integer, string]
"""


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging()


@pytest.fixture
def person_file(tmp_path):
    path = tmp_path / "person.yaml"
    path.write_text(PERSON_YAML)
    return path


class TestCommandLine:
    """Test the pikegen command end to end."""

    def test_render_to_stdout(self, person_file, capsys):
        assert main([str(person_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith(f"// This file was generated by pikegen {pikegen.__version__}.\n")
        assert "typedef int|string Id;\n" in out
        assert "// A person.\nclass Person {\n" in out
        assert "    mixed|string nickname; // json: \"nickname\"\n" in out
        assert out.endswith("    string Person_to_json(Person value) {\n    }\n}\n")

    def test_render_to_file(self, person_file, tmp_path, capsys):
        output = tmp_path / "person.pike"
        assert main([str(person_file), "-o", str(output), "--no-leading-comments"]) == 0
        text = output.read_text()
        assert text.startswith("typedef int|string Id;\n")
        assert capsys.readouterr().out == ""

    def test_indent_option(self, person_file, capsys):
        assert main([str(person_file), "--indent", "2", "--no-leading-comments"]) == 0
        assert "\n  string       name;" in capsys.readouterr().out

    def test_negative_indent(self, person_file, capsys):
        assert main([str(person_file), "--indent", "-1"]) == 1
        assert capsys.readouterr().out == ""

    def test_config_file(self, person_file, tmp_path, capsys):
        config = tmp_path / "pikegen.json"
        config.write_text(json.dumps({
            "output": {"leading_comments": False, "convert_class_name": "Codec"},
        }))
        assert main([str(person_file), "--config", str(config)]) == 0
        out = capsys.readouterr().out
        assert "class Codec {" in out
        assert not out.startswith("//")

    def test_json_document(self, tmp_path, capsys):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({"top_levels": {"Names": {"kind": "array", "items": "string"}}}))
        assert main([str(path), "--no-leading-comments"]) == 0
        assert capsys.readouterr().out == (
            "class Convert {\n"
            "    array(string) to_Names(string json_str) {\n"
            "    }\n"
            "\n"
            "    string Names_to_json(array(string) value) {\n"
            "    }\n"
            "}\n"
        )

    def test_missing_document(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.yaml")]) == 1
        assert capsys.readouterr().out == ""

    def test_malformed_document(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("top_levels:\n  A: Nope\n")
        assert main([str(path)]) == 1

    def test_unwritable_output(self, person_file, tmp_path):
        assert main([str(person_file), "-o", str(tmp_path / "no" / "such" / "dir.pike")]) == 1

    def test_log_level_option(self, person_file):
        assert main([str(person_file), "--log-level", "ERROR", "--no-leading-comments"]) == 0
        assert logging.getLogger("pikegen").level == logging.ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_arg_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert pikegen.__version__ in capsys.readouterr().out

    def test_example_document_renders(self, capsys):
        from pathlib import Path

        example = Path(__file__).resolve().parents[2] / "examples" / "person.yaml"
        assert main([str(example), "--no-leading-comments"]) == 0
        out = capsys.readouterr().out
        assert "enum Color {" in out
        assert "    light_blue, // json: \"light \\\"blue\\\"\"" in out
