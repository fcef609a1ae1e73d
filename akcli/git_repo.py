"""Package repositories managed through the git command line."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Protocol

DEFAULT_REMOTE_NAME = "origin"

PACKAGE_NOT_AVAILABLE = (
    "package is not available. Supported packages can be found in the Akamai tools documentation"
)

_NOT_INITIALIZED = "repository is not yet initialized"

_AUTH_MARKERS = (
    "authentication failed",
    "authentication required",
    "could not read username",
    "terminal prompts disabled",
    "permission denied (publickey)",
)


class GitError(Exception):
    """A git operation failed."""


class PackageNotAvailableError(GitError):
    """The package repository cannot be reached without credentials."""

    def __init__(self, message: str = PACKAGE_NOT_AVAILABLE) -> None:
        super().__init__(message)


class _Progress(Protocol):
    def write(self, data: str) -> int: ...


@dataclass(frozen=True)
class Commit:
    """A commit as reported by git."""

    hash: str
    author_name: str
    author_email: str
    message: str


def _git_env() -> dict[str, str]:
    env = dict(os.environ)
    env["GIT_TERMINAL_PROMPT"] = "0"
    env["LC_ALL"] = "C"
    return env


def _run(args: list[str], cwd: str | None = None) -> str:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            env=_git_env(),
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found") from exc
    if result.returncode != 0:
        message = result.stderr.strip() or f"git {args[0]} failed with exit code {result.returncode}"
        raise GitError(message)
    return result.stdout


def _translate_error(err: Exception, template: str) -> GitError:
    text = str(err).lower()
    if any(marker in text for marker in _AUTH_MARKERS):
        return PackageNotAvailableError()
    return GitError(template % err)


def _same_path(left: str, right: str) -> bool:
    return os.path.realpath(left) == os.path.realpath(right)


class Repository:
    """A local git repository holding an installed package."""

    def __init__(self) -> None:
        self._path: str | None = None

    @property
    def path(self) -> str | None:
        return self._path

    def _require(self) -> str:
        if self._path is None:
            raise GitError(_NOT_INITIALIZED)
        return self._path

    def open(self, path: str) -> None:
        """Open the repository whose work tree or bare directory is ``path``."""
        if not os.path.isdir(path):
            raise GitError("repository does not exist")
        try:
            git_dir = _run(["rev-parse", "--absolute-git-dir"], cwd=path).strip()
        except GitError as exc:
            raise GitError("repository does not exist") from exc
        if not (_same_path(git_dir, path) or _same_path(git_dir, os.path.join(path, ".git"))):
            raise GitError("repository does not exist")
        self._path = path

    def clone(self, path: str, repo: str, is_bare: bool = False, progress: _Progress | None = None) -> None:
        """Clone ``repo`` into ``path``, reporting progress lines to ``progress``."""
        args = ["git", "clone", "--progress"]
        if is_bare:
            args.append("--bare")
        args += ["--", repo, path]
        template = "Unable to clone repository: %s"
        try:
            proc = subprocess.Popen(
                args,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                env=_git_env(),
            )
        except FileNotFoundError as exc:
            raise _translate_error(GitError("git executable not found"), template) from exc
        lines: list[str] = []
        assert proc.stderr is not None
        with proc.stderr:
            for raw in proc.stderr:
                line = raw.strip()
                if not line:
                    continue
                lines.append(line)
                if progress is not None:
                    progress.write(line)
        code = proc.wait()
        if code != 0:
            failures = [line for line in lines if line.startswith(("fatal:", "error:"))]
            message = "\n".join(failures) or (lines[-1] if lines else f"exit code {code}")
            raise _translate_error(GitError(message), template)
        self._path = path

    def pull(self) -> bool:
        """Fast-forward from the default remote; return whether HEAD moved."""
        path = self._require()
        before = self.head()
        try:
            _run(["pull", "--ff-only", DEFAULT_REMOTE_NAME], cwd=path)
        except GitError as exc:
            raise _translate_error(exc, "Unable to fetch updates (%s)") from exc
        return self.head() != before

    def head(self) -> str:
        """Return the commit hash HEAD points to."""
        path = self._require()
        return _run(["rev-parse", "HEAD"], cwd=path).strip()

    def commit_object(self, sha: str) -> Commit:
        """Return the commit with the given hash."""
        path = self._require()
        if not sha or sha.startswith("-"):
            raise GitError(f"invalid commit hash: {sha!r}")
        output = _run(["show", "-s", "--format=%H%x00%an%x00%ae%x00%B", sha], cwd=path)
        parts = output.split("\x00", 3)
        if len(parts) != 4:
            raise GitError(f"object not found: {sha}")
        commit_hash, name, email, message = parts
        return Commit(commit_hash.strip(), name, email, message.rstrip("\n"))

    def reset(self, hard: bool = True) -> None:
        """Reset the work tree to HEAD, discarding changes when ``hard``."""
        path = self._require()
        mode = "--hard" if hard else "--mixed"
        try:
            _run(["reset", mode], cwd=path)
        except GitError as exc:
            raise GitError(f"unable to perform `git reset`: {exc}") from exc