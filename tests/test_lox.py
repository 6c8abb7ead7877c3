import sys

import pytest

from loxparse import lox


def test_run_prints_tree(capsys) -> None:
    lox.Lox().run("1 + 2 * 3")
    out, err = capsys.readouterr()
    assert out == "(+ 1 (* 2 3))\n"
    assert err == ""


def test_parse_error_at_end(capsys) -> None:
    runner = lox.Lox()
    runner.run("(1")
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "[line 1] Error at end: Expect ')' after expression.\n"
    assert runner.had_error


def test_parse_error_at_token(capsys) -> None:
    lox.Lox().run("1 +\n*")
    _, err = capsys.readouterr()
    assert err == "[line 2] Error at '*': Expect expression.\n"


def test_trailing_tokens_are_an_error(capsys) -> None:
    lox.Lox().run("1 2")
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "[line 1] Error at '2': Expect end of expression.\n"


def test_scan_error_skips_parsing(capsys) -> None:
    runner = lox.Lox()
    runner.run("1 @")
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "[line 1] Error: Unexpected character '@'.\n"
    assert runner.had_error


def test_debug_dumps_tokens(capsys) -> None:
    lox.Lox(debug=True).run("12")
    out, err = capsys.readouterr()
    assert out == "12\n"
    assert "NUMBER 12 12.0" in err
    assert "EOF" in err


def test_run_file(tmp_path, capsys) -> None:
    script = tmp_path / "expr.lox"
    script.write_text("// comment\n(1 + 2) * 3\n", encoding="utf-8")
    lox.Lox().run_file(str(script))
    assert capsys.readouterr().out == "(* (group (+ 1 2)) 3)\n"


def test_run_file_exits_65_on_error(tmp_path) -> None:
    script = tmp_path / "bad.lox"
    script.write_text("1 +", encoding="utf-8")
    with pytest.raises(SystemExit) as exit_info:
        lox.Lox().run_file(str(script))
    assert exit_info.value.code == 65


def test_prompt_keeps_going_after_errors(monkeypatch, capsys) -> None:
    lines = iter(["1 + 1", "(", "!true"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    runner = lox.Lox()
    runner.run_prompt()
    out, err = capsys.readouterr()
    assert out == "(+ 1 1)\n(! true)\n"
    assert err == "[line 1] Error at end: Expect expression.\n"
    assert not runner.had_error


def test_main_usage(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["plox", "a.lox", "b.lox"])
    with pytest.raises(SystemExit) as exit_info:
        lox.main()
    assert exit_info.value.code == 64
    assert "Usage: plox [script]" in capsys.readouterr().err


def test_main_runs_script(monkeypatch, tmp_path, capsys) -> None:
    script = tmp_path / "ok.lox"
    script.write_text("nil", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["plox", str(script)])
    lox.main()
    assert capsys.readouterr().out == "nil\n"


def test_deep_tree_is_reported_not_raised(capsys) -> None:
    runner = lox.Lox()
    runner.run("!" * 600 + "true")
    out, err = capsys.readouterr()
    assert out == ""
    assert err.count("\n") == 1
    assert "Expression nested too deeply." in err
    assert runner.had_error


def test_prompt_survives_deep_nesting(monkeypatch, capsys) -> None:
    lines = iter(["(" * 300 + "1" + ")" * 300, "1"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    lox.Lox().run_prompt()
    out, err = capsys.readouterr()
    assert out == "1\n"
    assert "Expression nested too deeply." in err
