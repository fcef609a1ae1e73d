import io

import pytest

from akcli.spinner import Spinner
from akcli.terminal import Terminal, color_terminal, show_banner


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


def _term(stdin=""):
    out, err = io.StringIO(), io.StringIO()
    return Terminal(out, io.StringIO(stdin), err), out, err


def test_write():
    term, out, _ = _term()
    assert term.write("TestWrite") == 9
    assert out.getvalue() == "TestWrite"


def test_printf():
    term, out, _ = _term()
    term.printf("test: %s", "abc")
    assert out.getvalue() == "test: abc"


def test_writeln():
    term, out, _ = _term()
    count = term.writeln("TestWriteln")
    assert out.getvalue() == "TestWriteln\n"
    assert count == len("TestWriteln\n")


def test_writeln_joins_with_spaces():
    term, out, _ = _term()
    term.writeln("a", 1)
    assert out.getvalue() == "a 1\n"


def test_write_error():
    term, out, err = _term()
    term.write_error("TestWriteError")
    assert err.getvalue() == "TestWriteError"
    assert out.getvalue() == ""


def test_write_errorf():
    term, _, err = _term()
    term.write_errorf("test error: %s", "abc")
    assert err.getvalue() == "test error: abc"


def test_prompt():
    term, _, _ = _term("Tom\r\n")
    assert term.prompt("What is your name", "Tom", "Joe") == "Tom"


def test_prompt_options():
    term, _, _ = _term("yellow\r\n")
    assert term.prompt("What is your favorite color", "yellow", "red", "blue") == "yellow"


def test_prompt_option_by_number():
    term, _, _ = _term("2\n")
    assert term.prompt("Pick", "Tom", "Joe") == "Joe"


def test_prompt_invalid_option():
    term, _, _ = _term("nobody\n")
    with pytest.raises(ValueError):
        term.prompt("Pick", "Tom", "Joe")


def test_prompt_free_text_requires_value():
    term, out, _ = _term("\nTom\n")
    assert term.prompt("What is your name") == "Tom"
    assert "Value is required" in out.getvalue()


def test_prompt_eof():
    term, _, _ = _term("")
    with pytest.raises(EOFError):
        term.prompt("What is your name")


@pytest.mark.parametrize(
    "answer,default,expected",
    [
        ("y\n", False, True),
        ("YES\n", False, True),
        ("n\n", True, False),
        ("no\r\n", True, False),
        ("\n", True, True),
        ("\n", False, False),
        ("maybe\n", True, True),
    ],
)
def test_confirm(answer, default, expected):
    term, _, _ = _term(answer)
    assert term.confirm("Are you here", default) is expected


def test_confirm_eof():
    term, _, _ = _term("")
    with pytest.raises(EOFError):
        term.confirm("Are you here", True)


def test_is_tty_false_for_buffer():
    term, _, _ = _term()
    assert term.is_tty() is False


def test_spinner_writes_to_error_stream():
    term, out, err = _term()
    assert term.spinner.stream is err
    term.spinner.interval = 60
    term.spinner.start("working")
    term.spinner.ok()
    assert "working ... [OK]" in err.getvalue()
    assert out.getvalue() == ""


def test_custom_spinner_is_kept():
    spinner = Spinner(io.StringIO())
    term = Terminal(io.StringIO(), None, io.StringIO(), spinner)
    assert term.spinner is spinner


def test_color_terminal_uses_std_streams():
    import sys

    term = color_terminal()
    assert term.out is sys.stdout
    assert term.err is sys.stderr


def test_show_banner():
    term, out, _ = _term()
    show_banner(term)
    text = out.getvalue()
    assert "Welcome to Akamai CLI v1.5.4" in text
    assert " " * 60 + "\n" in text
    assert text.startswith("\n")