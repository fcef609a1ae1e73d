"""Filesystem locations and small string helpers."""

from __future__ import annotations

import os
import shutil
import stat
import sys
from pathlib import Path


class ExitError(Exception):
    """An error that should end the program with the given exit code."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


def self_name() -> str:
    """Return the base name of the running program."""
    return os.path.basename(sys.argv[0])


def get_cli_path() -> str:
    """Return ``$AKAMAI_CLI_HOME/.akamai-cli``, creating it when missing."""
    cli_home = os.environ.get("AKAMAI_CLI_HOME", "")
    if not cli_home:
        try:
            cli_home = str(Path.home())
        except RuntimeError as exc:
            raise ExitError(
                "Package install directory could not be found. Please set $AKAMAI_CLI_HOME.",
                -1,
            ) from exc
    cli_path = os.path.join(cli_home, ".akamai-cli")
    try:
        os.makedirs(cli_path, mode=0o700, exist_ok=True)
    except OSError as exc:
        raise ExitError("Unable to create Akamai CLI root directory.", -1) from exc
    return cli_path


def get_cli_src_path() -> str:
    """Return the directory holding installed packages."""
    return os.path.join(get_cli_path(), "src")


def get_cli_venv_path() -> str:
    """Return the directory holding Python virtual environments."""
    return os.path.join(get_cli_path(), "venv")


def get_pkg_venv_path(pkg_name: str) -> str:
    """Return the virtual environment directory of one package."""
    return os.path.join(get_cli_venv_path(), pkg_name)


def githubize(repo: str) -> str:
    """Turn a package name or shorthand into a repository URI."""
    if repo.startswith(("http", "ssh")) or repo.endswith(".git"):
        return repo.removeprefix("ssh://")
    if repo.startswith("file://"):
        return repo
    if "/" not in repo:
        repo = "akamai/cli-" + repo.removeprefix("cli-")
    if repo.startswith("akamai-open/"):
        repo = "akamai/" + repo.removeprefix("akamai-open/")
    return "https://github.com/" + repo + ".git"


def capitalize_first_word(text: str) -> str:
    """Upper-case only the first character of the string."""
    if len(text) <= 1:
        return text.upper()
    return text[0].upper() + text[1:]


def insert_after_nth_word(text: str, value: str, index: int) -> str:
    """Insert ``value`` as the word at position ``index``; append when past the end."""
    words = text.split()
    if len(words) <= index:
        words.append(value)
    else:
        words.insert(index, value)
    return " ".join(words)


def move_file(src: str, dst: str) -> None:
    """Move a regular file by copying and unlinking, so it works across filesystems."""
    mode = os.stat(src).st_mode
    if not stat.S_ISREG(mode):
        raise OSError(f"{src} is not a regular file")
    shutil.copyfile(src, dst)
    os.chmod(dst, 0o755)
    os.remove(src)