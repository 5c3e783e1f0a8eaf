"""Tests for ripple._cli — argument parsing and the render command."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from ripple._cli import _build_parser, main, parse_op
from ripple.updates import Action, UpdateSet


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_render_default_args(self) -> None:
        args = _build_parser().parse_args(["render"])
        assert args.command == "render"
        assert args.templates == "templates"
        assert args.ops == []
        assert args.wire_format == "envelope"
        assert args.bindings == "{}"

    def test_render_repeated_ops(self) -> None:
        args = _build_parser().parse_args([
            "render", "views/",
            "--op", "remove:a",
            "--op", "append:todos=fragments :: todo",
            "--format", "oob",
        ])
        assert args.templates == "views/"
        assert args.ops == ["remove:a", "append:todos=fragments :: todo"]
        assert args.wire_format == "oob"

    def test_no_command(self) -> None:
        args = _build_parser().parse_args([])
        assert args.command is None


class TestParseOp:
    """parse_op — ACTION:TARGET[=FRAGMENT|@TEMPLATE]."""

    def test_remove(self) -> None:
        (op,) = parse_op("remove:todo-3", UpdateSet())
        assert op.action is Action.REMOVE
        assert op.target == "todo-3"

    def test_explicit_fragment(self) -> None:
        (op,) = parse_op("append:todos=fragments :: todo", UpdateSet())
        assert op.action is Action.APPEND
        assert op.fragment == "fragments :: todo"

    def test_within_template(self) -> None:
        (op,) = parse_op("REPLACE:foot@index", UpdateSet())
        assert op.action is Action.REPLACE
        assert op.fragment == "index :: foot"

    def test_appends_to_existing(self) -> None:
        updates = parse_op("remove:b", UpdateSet().remove("a"))
        assert updates.targets == ("a", "b")

    @pytest.mark.parametrize("spec", ["nocolon", "explode:x=y", "append:todos"])
    def test_invalid(self, spec: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_op(spec, UpdateSet())


class TestRenderCommand:
    """main(["render", ...]) end to end."""

    def test_renders_to_stdout(self, templates_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([
                "render", str(templates_dir),
                "--op", "append:todos=fragments :: todo",
                "--op", "remove:todo-3",
                "--bindings", '{"title": "Milk"}',
            ])
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert out.startswith('<update-op action="append" target="todos"><template>')
        assert "<li>Milk</li>" in out
        assert out.rstrip().endswith('<update-op action="remove" target="todo-3"></update-op>')

    def test_oob_format(self, templates_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(templates_dir), "--op", "remove:x", "--format", "oob"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == '<div id="x" data-swap="true"></div>'

    def test_bad_bindings(self, templates_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(templates_dir), "--bindings", "[1, 2]"])
        assert exc_info.value.code == 2
        assert "JSON object" in capsys.readouterr().err

    def test_missing_fragment_reports_error(
        self, templates_dir: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(templates_dir), "--op", "replace:nope@index"])
        assert exc_info.value.code == 1
        assert "nope" in capsys.readouterr().err

    def test_template_error_reports_error(
        self, templates_dir: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        (templates_dir / "broken.html").write_text("{% block row %}<td>{{ cell }}</td>{% endblock %}")
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(templates_dir), "--op", "replace:row@broken"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_format(self, templates_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(templates_dir), "--format", "json"])
        assert exc_info.value.code == 1
        assert "Unknown wire format" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "render" in capsys.readouterr().out
