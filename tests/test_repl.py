from pathlib import Path

import pytest

from repl import run_line, run_scripts
from spancalc.session import Session


def test_run_line_prints_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_line(Session(), "x = 4 %; (x * 2) %")
    assert capsys.readouterr().out == " 4 8\n"


def test_run_line_renders_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert not run_line(Session(), "1 + foo")
    assert capsys.readouterr().out.splitlines() == [
        "",
        "1 + foo",
        "    ~~~",
        "    ^ [Runtime error] Variable 'foo' is not assigned",
        "",
    ]


def test_run_scripts_share_a_session(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    first = tmp_path / "first.clc"
    first.write_text("a = 2\n\nb = a * 3\n")
    second = tmp_path / "second.clc"
    second.write_text("% a + b\n%(a + b)\n")
    session = Session()
    assert run_scripts(session, [first, second]) == 0
    assert session.named_variables() == {"a": 2.0, "b": 6.0}
    assert capsys.readouterr().out == "> \n> \n>  2\n>  8\n"


def test_run_scripts_stop_at_first_error(tmp_path: Path) -> None:
    script = tmp_path / "broken.clc"
    script.write_text("a = 1\n(a\na = 2\n")
    session = Session()
    assert run_scripts(session, [script]) == 1
    assert session.get("a") == 1.0
