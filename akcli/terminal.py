"""Terminal abstraction for output, prompts and a status spinner."""

from __future__ import annotations

import re
import sys
from typing import TextIO

from akcli.spinner import Spinner, _colorize
from akcli.version import VERSION

_YES_RE = re.compile(r"y(?:es)?", re.IGNORECASE)
_NO_RE = re.compile(r"n(?:o)?", re.IGNORECASE)


class Terminal:
    """Writes to output and error streams and reads answers from an input stream."""

    def __init__(
        self,
        out: TextIO,
        in_: TextIO | None,
        err: TextIO,
        spinner: Spinner | None = None,
    ) -> None:
        self.out = out
        self.in_ = in_
        self.err = err
        self.spinner = spinner if spinner is not None else Spinner(err)

    def write(self, text: str) -> int:
        """Write text to the output stream and return its length."""
        self.out.write(text)
        self.out.flush()
        return len(text)

    def printf(self, fmt: str, *args: object) -> None:
        """Write a formatted message to the output stream."""
        try:
            self.write(fmt % args if args else fmt)
        except OSError as exc:
            self.write_error(exc)

    def writeln(self, *args: object) -> int:
        """Write the arguments separated by spaces, followed by a newline."""
        return self.write(" ".join(str(arg) for arg in args) + "\n")

    def write_error(self, value: object) -> None:
        """Write a value to the error stream."""
        self.err.write(str(value))
        self.err.flush()

    def write_errorf(self, fmt: str, *args: object) -> None:
        """Write a formatted message to the error stream."""
        self.write_error(fmt % args if args else fmt)

    def _read_line(self) -> str:
        if self.in_ is None:
            raise EOFError("no input stream")
        line = self.in_.readline()
        if line == "":
            raise EOFError("no input available")
        return line.rstrip("\r\n")

    def prompt(self, message: str, *args: str) -> str:
        """Ask for an answer; with options, the answer must pick one of them."""
        options = list(args)
        while True:
            self.write(f"? {message}")
            if options:
                self.write("\n")
                for number, option in enumerate(options, 1):
                    self.write(f"  {number}) {option}\n")
                self.write("Choose an option: ")
            else:
                self.write(": ")
            answer = self._read_line().strip()
            if not options:
                if answer:
                    return answer
                self.writeln("Sorry, your reply was invalid: Value is required")
                continue
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            for option in options:
                if option.lower() == answer.lower():
                    return option
            raise ValueError(f"invalid option: {answer!r}")

    def confirm(self, message: str, default: bool) -> bool:
        """Ask a yes/no question; an empty or unrecognised answer gives the default."""
        hint = "(Y/n)" if default else "(y/N)"
        self.write(f"{message} {hint}\n")
        answer = self._read_line()
        if _YES_RE.fullmatch(answer):
            return True
        if _NO_RE.fullmatch(answer):
            return False
        return default

    def is_tty(self) -> bool:
        """Return whether the output stream is a terminal."""
        isatty = getattr(self.out, "isatty", None)
        try:
            return bool(isatty and isatty())
        except ValueError:
            return False


def color_terminal() -> Terminal:
    """Return a terminal bound to the standard streams."""
    return Terminal(sys.stdout, sys.stdin, sys.stderr)


def show_banner(term: Terminal) -> None:
    """Display the welcome banner."""
    term.writeln()
    blank = " " * 60
    term.write(_colorize(blank, "45") + "\n")
    title = "Welcome to Akamai CLI v" + VERSION
    padding = " " * 16
    term.write(_colorize(padding + title + padding, "45;37") + "\n")
    term.write(_colorize(blank, "45") + "\n")
    term.writeln()