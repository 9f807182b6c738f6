import logging
from io import StringIO

import pytest

from rill.config import Settings
from rill.interpreter import Interpreter
from rill.reader.units import UnitReader
from rill.repl import Repl, main, run_file

# -------------------------
# UnitReader
# -------------------------

def test_single_line_unit():
    reader = UnitReader()
    assert reader.feed("(plus 1 2)") == ["(plus 1 2)"]
    assert not reader.pending


def test_unit_across_lines():
    reader = UnitReader()
    assert reader.feed("(plus 1") == []
    assert reader.pending
    assert reader.feed("  (times 2 3)") == []
    assert reader.feed("  4)") == ["(plus 1\n  (times 2 3)\n  4)"]
    assert not reader.pending


def test_several_units_on_one_line():
    reader = UnitReader()
    assert reader.feed("(id 1) (id 2)") == ["(id 1)", "(id 2)"]


def test_parens_inside_strings_are_ignored():
    reader = UnitReader()
    assert reader.feed('(id ")(")') == ['(id ")(")']
    assert reader.feed('(id "(') == []
    assert reader.feed('")') == ['(id "(\n")']


def test_blank_lines_are_skipped():
    reader = UnitReader()
    assert reader.feed("") == []
    assert reader.feed("   ") == []
    assert not reader.pending


def test_stray_text_is_passed_through():
    reader = UnitReader()
    assert reader.feed("  plus  ") == ["plus"]
    assert reader.feed(")") == [")"]


def test_reset_drops_pending_unit():
    reader = UnitReader()
    reader.feed("(plus 1")
    reader.reset()
    assert not reader.pending
    assert reader.feed("(id 2)") == ["(id 2)"]

# -------------------------
# Repl
# -------------------------

def _session(text, **settings):
    stdin, stdout = StringIO(text), StringIO()
    Repl(Interpreter(), Settings(**settings), stdin=stdin, stdout=stdout).run()
    return stdout.getvalue()


def test_repl_session():
    out = _session("(:let @x 2)\n(plus x\n 3)\n(nosuch)\n")
    assert out == (
        "user> 2\n"
        "user>   ... 5\n"
        "user> ERROR: unbound name: nosuch\n"
        "user> \n"
    )


def test_repl_survives_errors():
    out = _session("()\n(id 1)\n", prompt="")
    assert out.splitlines() == ["ERROR: empty call, a callee name is required (at offset 0)", "1", ""]


def test_repl_debug_prints_tree():
    out = _session("(plus 1 2)\n", prompt="", debug=True)
    assert out.splitlines()[0].startswith("AST: Call(func_name='plus'")
    assert out.splitlines()[1] == "3"


def test_repl_errors_are_logged(caplog):
    with caplog.at_level(logging.INFO, logger="rill.repl"):
        _session("(nosuch)\n")
    assert "UnboundNameError" in caplog.text

# -------------------------
# Files and the command line
# -------------------------

def test_run_file(tmp_path):
    script = tmp_path / "prog.rill"
    script.write_text("(:def sq (n) (times n n))\n(sq\n  4)\n", encoding="utf-8")
    out = StringIO()
    assert run_file(str(script), Interpreter(), stdout=out) == 0
    assert out.getvalue() == "<function (n)>\n16\n"


def test_run_file_reports_failures(tmp_path):
    script = tmp_path / "bad.rill"
    script.write_text("(id missing)\n(id 1)\n(plus 1\n", encoding="utf-8")
    out = StringIO()
    assert run_file(str(script), Interpreter(), stdout=out) == 1
    lines = out.getvalue().splitlines()
    assert lines[0] == "ERROR: unbound name: missing"
    assert lines[1] == "1"
    assert lines[2].startswith("ERROR: unexpected end of file")


def test_main_runs_file(tmp_path, capsys):
    script = tmp_path / "prog.rill"
    script.write_text("(plus 1 2)\n", encoding="utf-8")
    assert main([str(script)]) == 0
    assert capsys.readouterr().out == "3\n"


def test_main_checks_transcript(tmp_path, capsys):
    transcript = tmp_path / "t.rill"
    transcript.write_text("(plus 1 2)\n;=>3\n(plus 1 1)\n;=>3\n", encoding="utf-8")
    assert main(["--check", str(transcript)]) == 1
    out = capsys.readouterr().out
    assert "1/2 expectations passed" in out
    assert "actual:   2" in out


def test_main_check_requires_file(capsys):
    assert main(["--check"]) == 2


def test_main_rejects_bad_environment(monkeypatch, capsys):
    monkeypatch.setenv("RILL_DEBUG", "perhaps")
    assert main([]) == 2
    assert "RILL_DEBUG" in capsys.readouterr().err


def test_main_interactive(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", StringIO("(times 6 7)\n"))
    assert main(["--prompt", "> ", "--no-color"]) == 0
    assert capsys.readouterr().out == "> 42\n> \n"
