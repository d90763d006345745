import builtins
from collections.abc import Iterator

import pytest

from lox.lox_repl import open_braces, read_entry, start_repl


def feed(monkeypatch: pytest.MonkeyPatch, *lines: str) -> None:
    calls: Iterator[str] = iter(lines)
    monkeypatch.setattr(builtins, "input", lambda _: next(calls))


def test_repl_quit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "Lox REPL" in out
    assert "Exiting Lox REPL" in out


def test_repl_exit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "exit")
    start_repl()
    assert "Exiting Lox REPL" in capsys.readouterr().out


def test_repl_empty_input_skipped(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "   ", "quit")
    start_repl()
    assert capsys.readouterr().out.count("\n") == 2  # banner and goodbye


def test_repl_echoes_expression_value(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "1 + 2", "quit")
    start_repl()
    assert "3\n" in capsys.readouterr().out


def test_repl_keeps_variables_between_lines(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, 'var name = "lox";', "name", "print name + 1;", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "lox\n" in out
    assert "lox1\n" in out


def test_repl_multiline_block(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "{", "  var a = 40;", "  print a + 2;", "}", "quit")
    start_repl()
    assert "42\n" in capsys.readouterr().out


def test_repl_continues_after_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "print ;", "1 / 0", "print 5;", "quit")
    start_repl()
    captured = capsys.readouterr()
    assert "[line 1] Error at ';': Expect expression." in captured.err
    assert "Division by zero." in captured.err
    assert "5\n" in captured.out


def test_repl_error_state_resets_each_line(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "@", "print 7;", "quit")
    start_repl()
    assert "7\n" in capsys.readouterr().out


def test_repl_verbose_mode_toggle(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "verbose-mode", "verbose-mode", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[mode] >>> Verbose mode ON" in out
    assert "[mode] >>> Verbose mode OFF" in out


def test_repl_keyboard_interrupt(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        builtins, "input", lambda _: (_ for _ in ()).throw(KeyboardInterrupt())
    )
    start_repl()
    assert "Exiting Lox REPL" in capsys.readouterr().out


def test_repl_eof(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(builtins, "input", lambda _: (_ for _ in ()).throw(EOFError()))
    start_repl()
    assert "Exiting Lox REPL" in capsys.readouterr().out


def test_read_entry_prompts(monkeypatch: pytest.MonkeyPatch) -> None:
    prompts: list[str] = []
    lines = iter(["{ print 1;", "}"])

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return next(lines)

    monkeypatch.setattr(builtins, "input", fake_input)
    assert read_entry() == "{ print 1;\n}"
    assert prompts == [">>> ", "... "]


def test_read_entry_quit_inside_block_is_source(monkeypatch: pytest.MonkeyPatch) -> None:
    feed(monkeypatch, "{", "quit", "}")
    assert read_entry() == "{\nquit\n}"


def test_repl_brace_in_string_does_not_open_block(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, 'print "{";', "print 2;", "exit")
    start_repl()
    out = capsys.readouterr().out
    assert "{\n2\n" in out
    assert "Exiting Lox REPL" in out


def test_repl_brace_in_comment_does_not_open_block(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "print 1; // {", "print 2; /* } */", "quit")
    start_repl()
    assert "1\n2\n" in capsys.readouterr().out


def test_read_entry_string_spanning_lines_in_block(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    feed(monkeypatch, '{ print "a', '}";', "}")
    assert read_entry() == '{ print "a\n}";\n}'


def test_open_braces_counts_tokens() -> None:
    assert open_braces("{ {") == 2
    assert open_braces('{ "}" }') == 0
    assert open_braces("// {") == 0
    assert open_braces("}") == -1


def test_repl_survives_deep_nesting(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    deep = "(" * 100 + "1" + ")" * 100
    feed(monkeypatch, deep, "print 2;", "exit")
    start_repl()
    captured = capsys.readouterr()
    assert "Expression nested too deeply." in captured.err
    assert "2\n" in captured.out
    assert "Exiting Lox REPL" in captured.out


def test_repl_long_chain_echo(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, " + ".join(["1"] * 1500), "quit")
    start_repl()
    assert "1500\n" in capsys.readouterr().out
