"""Checking whether a newer CLI release is available."""

from __future__ import annotations

import os
import posixpath
import urllib.error
import urllib.request
from datetime import datetime, timedelta, timezone

from akcli.config import IniConfig
from akcli.spinner import SpinnerStatus, _colorize
from akcli.terminal import Terminal
from akcli.version import VERSION, Comparison, compare

DEFAULT_REPOSITORY = "https://github.com/akamai/cli"
SLEEP_24H = timedelta(hours=24)


def _repository() -> str:
    return os.environ.get("CLI_REPOSITORY") or DEFAULT_REPOSITORY


def _base(location: str) -> str:
    if not location:
        return "."
    trimmed = location.rstrip("/")
    if not trimmed:
        return "/"
    return posixpath.basename(trimmed)


def _parse_rfc3339(text: str) -> datetime | None:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        return None
    return moment


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    def redirect_request(self, req, fp, code, msg, headers, newurl):  # noqa: D401
        return None


def get_latest_release_version() -> str:
    """Return the latest release tag from the redirect of the releases page, or "0"."""
    url = f"{_repository()}/releases/latest"
    opener = urllib.request.build_opener(_NoRedirect)
    request = urllib.request.Request(url, method="HEAD")
    try:
        with opener.open(request, timeout=30):
            return "0"
    except urllib.error.HTTPError as exc:
        with exc:
            if exc.code != 302:
                return "0"
            location = exc.headers.get("Location", "") if exc.headers else ""
    except (urllib.error.URLError, OSError, ValueError):
        return "0"
    return _base(location)


def check_upgrade_version(term: Terminal, cfg: IniConfig, force: bool) -> str:
    """Return the version to upgrade to, the current version if it is the latest, or ""."""
    if not term.is_tty():
        return ""

    data = (cfg.get_value("cli", "last-upgrade-check") or "").strip()
    if data == "ignore" and not force:
        return ""

    check = data == "never" or force
    if not check:
        value = data.removesuffix('"').removeprefix('"')
        last_upgrade = _parse_rfc3339(value)
        if last_upgrade is None:
            return ""
        if last_upgrade + SLEEP_24H < datetime.now(timezone.utc):
            check = True

    if not check:
        return ""

    cfg.set_value("cli", "last-upgrade-check", datetime.now().astimezone().isoformat(timespec="seconds"))
    try:
        cfg.save(term)
    except OSError:
        return ""

    latest = get_latest_release_version()
    comparison = compare(VERSION, latest)
    if comparison is Comparison.SMALLER:
        term.spinner.stop(SpinnerStatus.OK)
        term.writeln(f"You can find more details about the new version here: {DEFAULT_REPOSITORY}/releases")
        question = (
            f"New update found: {_colorize(latest, '34')}. "
            f"You are running: {_colorize(VERSION, '34')}. Upgrade now?"
        )
        try:
            answer = term.confirm(question, True)
        except (EOFError, OSError, ValueError):
            return ""
        return latest if answer else ""
    if comparison is Comparison.EQUALS:
        return VERSION
    return ""