from pathlib import Path

import pytest
import yaml

from FlatMark import cli


def test_text_output_to_stdout(tmp_path: Path, capsys):
    source = tmp_path / "note.md"
    source.write_text("# Title\n\nHello *world* @me\n", encoding="utf-8")
    assert cli.main([str(source)]) == 0
    out = capsys.readouterr().out
    assert out == "heading-1: Title\ntext: Hello _world_ @me\n"


def test_yaml_output_to_directory(tmp_path: Path):
    source = tmp_path / "tasks.md"
    source.write_text("- [x] done\n", encoding="utf-8")
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    assert cli.main([str(source), "-o", str(out_dir), "--format", "yaml"]) == 0
    loaded = yaml.safe_load((out_dir / "tasks.yaml").read_text(encoding="utf-8"))
    checkbox = loaded[0]["items"][0][0]["items"][0]
    assert checkbox == {"type": "checkbox", "checked": True, "source_range": {"start": 2, "end": 5}}


def test_html_output_to_file(tmp_path: Path):
    source = tmp_path / "doc.md"
    source.write_text("*Hello World*", encoding="utf-8")
    target = tmp_path / "doc.html"
    assert cli.main([str(source), "-o", str(target), "-f", "html"]) == 0
    assert target.read_text(encoding="utf-8") == "<p><em>Hello World</em></p>\n"


def test_missing_input_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        cli.main([str(tmp_path / "absent.md")])


def test_undecodable_input_fails(tmp_path: Path, capsys):
    source = tmp_path / "bad.md"
    source.write_bytes(b"\xff\xfe\xfa")
    assert cli.main([str(source)]) == 1
    assert capsys.readouterr().out == ""


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        cli.render_output(b"text", "docx")
