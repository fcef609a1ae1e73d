"""Package descriptions: the package list, cli.json files and command preparation."""

from __future__ import annotations

import glob
import json
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from akcli.tools import ExitError, get_cli_src_path


class PackageError(ValueError):
    """A package description could not be read."""


def _expect_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise PackageError(f"invalid {what}: expected an object")
    return data


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PackageError(f"invalid value for field {key!r}: {value!r}")
    return value


def _bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise PackageError(f"invalid value for field {key!r}: {value!r}")
    return value


def _float(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PackageError(f"invalid value for field {key!r}: {value!r}")
    return float(value)


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise PackageError(f"invalid value for field {key!r}: {value!r}")
    return value


def _str_list(data: dict[str, Any], key: str) -> list[str]:
    items = _list(data, key)
    if not all(isinstance(item, str) for item in items):
        raise PackageError(f"invalid value for field {key!r}: {items!r}")
    return list(items)


@dataclass
class Command:
    """One command offered by a package."""

    name: str = ""
    aliases: list[str] = field(default_factory=list)
    version: str = ""
    description: str = ""
    usage: str = ""
    arguments: str = ""
    bin: str = ""
    auto_complete: bool = False
    ldflags: str = ""
    flags: list[dict[str, Any]] = field(default_factory=list)
    docs: str = ""
    bin_suffix: str = ""
    os: str = ""
    arch: str = ""
    subcommands: list[Command] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Command:
        data = _expect_object(data, "command")
        flags = _list(data, "flags")
        if not all(isinstance(item, dict) for item in flags):
            raise PackageError(f"invalid value for field 'flags': {flags!r}")
        return cls(
            name=_str(data, "name"),
            aliases=_str_list(data, "aliases"),
            version=_str(data, "version"),
            description=_str(data, "description"),
            usage=_str(data, "usage"),
            arguments=_str(data, "arguments"),
            bin=_str(data, "bin"),
            auto_complete=_bool(data, "auto-complete"),
            ldflags=_str(data, "ldflags"),
            flags=[dict(item) for item in flags],
            docs=_str(data, "docs"),
            subcommands=[cls.from_dict(item) for item in _list(data, "subcommands")],
        )


@dataclass
class Requirements:
    """Language runtimes a package needs."""

    go: str = ""
    php: str = ""
    node: str = ""
    ruby: str = ""
    python: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Requirements:
        if data is None:
            return cls()
        data = _expect_object(data, "requirements")
        return cls(
            go=_str(data, "go"),
            php=_str(data, "php"),
            node=_str(data, "node"),
            ruby=_str(data, "ruby"),
            python=_str(data, "python"),
        )


@dataclass
class PackageListItem:
    """One entry in the list of available packages."""

    title: str = ""
    name: str = ""
    version: str = ""
    url: str = ""
    issues: str = ""
    commands: list[Command] = field(default_factory=list)
    requirements: Requirements = field(default_factory=Requirements)

    @classmethod
    def from_dict(cls, data: Any) -> PackageListItem:
        data = _expect_object(data, "package")
        return cls(
            title=_str(data, "title"),
            name=_str(data, "name"),
            version=_str(data, "version"),
            url=_str(data, "url"),
            issues=_str(data, "issues"),
            commands=[Command.from_dict(item) for item in _list(data, "commands")],
            requirements=Requirements.from_dict(data.get("requirements")),
        )


@dataclass
class PackageList:
    """The list of available packages."""

    version: float = 0.0
    packages: list[PackageListItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> PackageList:
        data = _expect_object(data, "package list")
        return cls(
            version=_float(data, "version"),
            packages=[PackageListItem.from_dict(item) for item in _list(data, "packages")],
        )


@dataclass
class Subcommands:
    """Contents of an installed package's cli.json."""

    commands: list[Command] = field(default_factory=list)
    requirements: Requirements = field(default_factory=Requirements)
    pkg: str = ""


def read_package_list(content: str) -> PackageList:
    """Parse the JSON list of available packages."""
    try:
        return PackageList.from_dict(json.loads(content))
    except (json.JSONDecodeError, PackageError) as exc:
        raise PackageError(f"readPackage: {exc}") from exc


def read_package(directory: str) -> Subcommands:
    """Read cli.json from ``directory`` or its parent."""
    if not os.path.exists(os.path.join(directory, "cli.json")):
        directory = os.path.dirname(directory)
        if not os.path.exists(os.path.join(directory, "cli.json")):
            raise ExitError("Package does not contain a cli.json file.", 1)

    with open(os.path.join(directory, "cli.json"), encoding="utf-8") as handle:
        text = handle.read()
    try:
        data = _expect_object(json.loads(text), "cli.json")
        commands = [Command.from_dict(item) for item in _list(data, "commands")]
        requirements = Requirements.from_dict(data.get("requirements"))
    except json.JSONDecodeError as exc:
        raise PackageError(f"invalid cli.json: {exc}") from exc

    for command in commands:
        command.name = command.name.lower()

    pkg = os.path.basename(os.path.normpath(directory.replace("cli-", "", 1)))
    return Subcommands(commands=commands, requirements=requirements, pkg=pkg)


def get_package_paths() -> list[str]:
    """Return the sorted paths of everything in the package source directory."""
    try:
        src_path = get_cli_src_path()
    except ExitError:
        return []
    if not src_path:
        return []
    return sorted(glob.glob(os.path.join(glob.escape(src_path), "*")))


def find_package_dir(path: str) -> str:
    """Walk up from ``path`` to the directory holding cli.json; "" when none."""
    if os.path.exists(path) and not os.path.isdir(path):
        path = os.path.dirname(path) or "."
    while True:
        try:
            os.stat(os.path.join(path, "cli.json"))
            return path
        except FileNotFoundError:
            pass
        except OSError:
            return path
        parent = os.path.dirname(path)
        if parent in ("", ".") or parent == path:
            return ""
        path = parent


def find_flags(target: Sequence[str], flag_values: Mapping[str, str], *args: str) -> list[str]:
    """Return ``--name value`` pairs for set flags not already present in ``target``."""
    found: list[str] = []
    for name in args:
        value = flag_values.get(name, "")
        option = f"--{name}"
        if value and option not in target:
            found += [option, value]
    return found


def prepare_command(
    command: Sequence[str],
    args: Sequence[str],
    flag_values: Mapping[str, str],
    *flags: str,
) -> list[str]:
    """Build the final command line from the executable, arguments and global flags."""
    if not args:
        return list(command)
    additional = find_flags(args, flag_values, *flags)
    if len(command) > 1:
        # interpreted scripts take the flags after their own arguments
        return [*command, *args, *additional]
    return [*command, *additional, *args]