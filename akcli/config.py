"""CLI configuration stored in an ini file."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timedelta, timezone

from akcli.log import LOGGER_NAME
from akcli.terminal import Terminal
from akcli.tools import get_cli_path

CONFIG_VERSION = "1.1"
DEFAULT_SECTION = "DEFAULT"

_LEGACY_DATE_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2}):(\d{2})(?:\.\d{1,9})? "
    r"([+-])(\d{2})(\d{2}) (\S+)$"
)
_QUOTES = ('"', "'", "`")


class ConfigError(ValueError):
    """Raised when the config file cannot be parsed or migrated."""


def _clean_value(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES:
        closing = value.find(value[0], 1)
        if closing != -1:
            return value[1:closing]
    cut = min((i for i in (value.find("#"), value.find(";")) if i != -1), default=-1)
    if cut != -1:
        value = value[:cut]
    return value.strip()


def _parse_ini(text: str) -> dict[str, dict[str, str]]:
    sections: dict[str, dict[str, str]] = {DEFAULT_SECTION: {}}
    current = DEFAULT_SECTION
    for lineno, raw in enumerate(text.lstrip("\ufeff").splitlines(), 1):
        line = raw.strip()
        if not line or line[0] in "#;":
            continue
        if line.startswith("["):
            closing = line.rfind("]")
            if closing == -1:
                raise ConfigError(f"unclosed section at line {lineno}: {raw}")
            name = line[1:closing].strip()
            if not name:
                raise ConfigError(f"empty section name at line {lineno}")
            sections.setdefault(name, {})
            current = name
            continue
        positions = [i for i in (line.find("="), line.find(":")) if i != -1]
        if not positions:
            raise ConfigError(f"key-value delimiter not found at line {lineno}: {raw}")
        split = min(positions)
        key = line[:split].strip()
        if not key:
            raise ConfigError(f"empty key name at line {lineno}")
        sections[current][key] = _clean_value(line[split + 1 :].strip())
    return sections


def _format_value(value: str) -> str:
    needs_quotes = any(ch in value for ch in "#;") or value != value.strip()
    if not needs_quotes and not value.startswith(_QUOTES):
        return value
    if '"' in value:
        return f"`{value}`"
    return f'"{value}"'


def _format_rfc3339(moment: datetime) -> str:
    text = moment.isoformat(timespec="seconds")
    if moment.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_legacy_date(text: str) -> str | None:
    match = _LEGACY_DATE_RE.match(text)
    if match is None:
        return None
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    sign, off_h, off_m, zone = match.group(7), match.group(8), match.group(9), match.group(10)
    if zone == "UTC":
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        tz = timezone(-offset if sign == "-" else offset)
    try:
        moment = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except ValueError:
        return None
    return _format_rfc3339(moment)


class IniConfig:
    """Configuration kept in an ini file; a DEFAULT section always exists."""

    def __init__(self, path: str, sections: dict[str, dict[str, str]] | None = None) -> None:
        self.path = path
        self._sections: dict[str, dict[str, str]] = {DEFAULT_SECTION: {}}
        for name, values in (sections or {}).items():
            self._sections.setdefault(name, {}).update(values)

    def _section(self, name: str) -> dict[str, str]:
        return self._sections.setdefault(name, {})

    def _dump(self) -> str:
        lines: list[str] = []
        for name, values in self._sections.items():
            if name == DEFAULT_SECTION:
                if not values:
                    continue
            else:
                lines.append(f"[{name}]")
            lines.extend(f"{key} = {_format_value(value)}" for key, value in values.items())
            lines.append("")
        return "\n".join(lines)

    def save(self, term: Terminal) -> None:
        """Write the config to its file, reporting failures on the terminal."""
        try:
            with open(self.path, "w", encoding="utf-8") as handle:
                handle.write(self._dump())
        except OSError as exc:
            term.writeln(str(exc))
            logging.getLogger(LOGGER_NAME).error(str(exc))
            raise

    def values(self) -> dict[str, dict[str, str]]:
        """Return every section with a copy of its key-value pairs."""
        return {name: dict(values) for name, values in self._sections.items()}

    def get_value(self, section: str, key: str) -> str | None:
        """Return the value under a key, or None when the key is missing."""
        return self._section(section).get(key)

    def set_value(self, section: str, key: str, value: str) -> None:
        self._section(section)[key] = value

    def unset_value(self, section: str, key: str) -> None:
        self._section(section).pop(key, None)

    def export_env(self, term: Terminal) -> None:
        """Migrate the config, then export every key as AKAMAI_<SECTION>_<KEY>."""
        self._migrate(term)
        for name, values in self._sections.items():
            for key, value in values.items():
                env_var = f"AKAMAI_{name.upper()}_{key.replace('-', '_').upper()}"
                os.environ[env_var] = value

    def _migrate(self, term: Terminal) -> None:
        while True:
            current = ""
            if os.path.exists(self.path):
                current = self.get_value("cli", "config-version") or ""
                if current == CONFIG_VERSION:
                    return
            if current == "":
                self._migrate_legacy_upgrade_check()
                self.set_value("cli", "config-version", "1")
            elif current == "1":
                self.set_value("cli", "config-version", "1.1")
            else:
                raise ConfigError(f"unsupported config version: {current}")
            self.save(term)

    def _migrate_legacy_upgrade_check(self) -> None:
        cli_path = get_cli_path()
        upgrade_file = os.path.join(cli_path, ".upgrade-check")
        if not os.path.exists(upgrade_file):
            upgrade_file = os.path.join(cli_path, ".update-check")
            if not os.path.exists(upgrade_file):
                return
        try:
            with open(upgrade_file, encoding="utf-8") as handle:
                data = handle.read()
        except OSError:
            data = ""
        if not data:
            return
        if data in ("never", "ignore"):
            self.set_value("cli", "last-upgrade-check", data)
        else:
            marker = data.rfind("m=")
            if marker != -1:
                data = data[: max(marker - 1, 0)]
            converted = _parse_legacy_date(data)
            if converted is not None:
                self.set_value("cli", "last-upgrade-check", converted)
        os.remove(upgrade_file)


def new_ini() -> IniConfig:
    """Load the CLI config file, or start an empty one when it does not exist."""
    path = os.path.join(get_cli_path(), "config")
    if not os.path.exists(path):
        return IniConfig(path)
    with open(path, encoding="utf-8") as handle:
        text = handle.read()
    return IniConfig(path, _parse_ini(text))