# akcli

`akcli` holds the core pieces of a command-line toolkit whose add-on
commands come as packages. Each installed package lives in its own
directory under the toolkit's home and describes itself in a `cli.json`
file. The library reads those descriptions, keeps the toolkit's INI
configuration, talks to the user through a terminal and a status spinner,
manages package repositories through git, and checks whether a newer
release is available.

It has no third-party dependencies and supports Python 3.10 and later.
`akcli.git_repo` needs the `git` executable on the `PATH`.

## Modules

| Module | Contents |
| --- | --- |
| `akcli.version` | `VERSION`, `compare()` and the `Comparison` enum |
| `akcli.tools` | `ExitError`, home and package paths, `githubize()`, string helpers, `move_file()` |
| `akcli.log` | `setup_logger()`, `with_command()` and the colour-aware `Handler` |
| `akcli.spinner` | `Spinner` and `SpinnerStatus` |
| `akcli.terminal` | `Terminal`, `color_terminal()` and `show_banner()` |
| `akcli.config` | `IniConfig`, `new_ini()` and `ConfigError` |
| `akcli.git_repo` | `Repository`, `Commit`, `GitError` and `PackageNotAvailableError` |
| `akcli.packages` | `cli.json` and package-list models, `read_package()`, `read_package_list()`, `find_package_dir()`, `get_package_paths()`, `find_flags()`, `prepare_command()` |
| `akcli.upgrade` | `check_upgrade_version()` and `get_latest_release_version()` |

## Where things live

Files are kept under `$AKAMAI_CLI_HOME/.akamai-cli`, or under the user's
home directory when `AKAMAI_CLI_HOME` is unset. `akcli.tools.get_cli_path()`
creates that directory when it is missing.

* `config` – the INI configuration file (`akcli.config.new_ini()`),
* `src/` – one directory per installed package (`get_cli_src_path()`),
* `venv/` – one virtual environment per package (`get_cli_venv_path()`,
  `get_pkg_venv_path(name)`).

## Versions

```python
from akcli.version import Comparison, compare

compare("0.9.9", "1.0.0")      # Comparison.SMALLER
compare("1.0.1", "1.0.0")      # Comparison.GREATER
compare("0.9.0", "0.9.0")      # Comparison.EQUALS
compare("abc", "1.0.0")        # Comparison.ERROR
```

Pre-release versions sort before their release, so `compare("1.1.0",
"1.1.1-dev")` is `Comparison.SMALLER`.

## Small helpers

```python
from akcli.tools import capitalize_first_word, githubize, insert_after_nth_word

capitalize_first_word("abc def")            # "Abc def"
insert_after_nth_word("a b c", "X", 1)      # "a X b c"
githubize("property")                       # expands a short package name to a repository URI
```

`githubize()` leaves `http…`, `file://` and `….git` values alone and strips a
leading `ssh://`. `move_file(src, dst)` copies a regular file, makes the
copy executable and removes the original, so it works across filesystems.

## Logging

`setup_logger(stream)` configures the `akcli` logger. The level comes from
`AKAMAI_LOG` (`fatal`, `error`, `warn`, `warning`, `info`, `debug`;
`error` by default). When `AKAMAI_CLI_LOG_PATH` is set, log lines are
appended to that file without colours; otherwise they go to the given
stream with colours. `with_command(logger, "update")` returns a logger that
adds `command=update` to every line.

## Terminal and spinner

```python
from akcli.terminal import color_terminal, show_banner

term = color_terminal()           # standard output, input and error streams
show_banner(term)
term.printf("Installing %s\n", "echo")
term.spinner.start("Installing %s...", "echo")
term.spinner.ok()                 # prints "Installing echo... ... [OK]"

if term.confirm("Would you like to reinstall it", True):
    ...
colour = term.prompt("What is your favorite color", "yellow", "red", "blue")
```

`Terminal(out, in_, err)` accepts any text streams. `confirm()` reads one
line and accepts `y`/`yes` or `n`/`no` in any case; anything else gives the
default. `prompt()` without options requires a non-empty answer; with
options it accepts an option's number or name and raises `ValueError`
otherwise. Both raise `EOFError` when there is no input left.

The spinner ends with `SpinnerStatus.OK`, `WARN_OK`, `WARN` or `FAIL`
(`ok()`, `warn_ok()`, `warn()`, `fail()`). Writing to it with `write()`
shows the text next to the spinner, which makes it usable as a progress
sink for `Repository.clone()`.

## Configuration

```python
from akcli.config import new_ini
from akcli.terminal import color_terminal

term = color_terminal()
cfg = new_ini()
cfg.set_value("cli", "last-upgrade-check", "ignore")
cfg.save(term)
cfg.get_value("cli", "last-upgrade-check")   # "ignore"; None for a missing key
cfg.values()                                  # {"DEFAULT": {...}, "cli": {...}}
cfg.export_env(term)                          # sets AKAMAI_CLI_LAST_UPGRADE_CHECK and friends
```

`export_env()` first brings the file up to config version `1.1`, taking an
old `.upgrade-check` or `.update-check` file into the `last-upgrade-check`
key and deleting it, then exports every key as
`AKAMAI_<SECTION>_<KEY>` with dashes turned into underscores. An unreadable
file raises `ConfigError`.

## Package repositories

```python
from akcli.git_repo import Repository

repo = Repository()
repo.open("/path/to/.akamai-cli/src/cli-echo")
repo.reset(hard=True)
moved = repo.pull()               # True when HEAD changed
commit = repo.commit_object(repo.head())
```

`clone(path, repo, is_bare, progress)` clones a repository. Failures raise
`GitError`; a repository that asks for credentials raises
`PackageNotAvailableError`. Calling methods before `open()` or `clone()`
raises `GitError("repository is not yet initialized")`.

## Package descriptions

```python
from akcli.packages import find_package_dir, get_package_paths, read_package

package_dir = find_package_dir("/path/to/.akamai-cli/src/cli-echo/bin/akamai-echo")
package = read_package(package_dir)
package.pkg                                  # "echo"
[command.name for command in package.commands]
get_package_paths()                          # everything under the src/ directory
```

`read_package()` also looks in the parent directory and raises `ExitError`
when neither holds a `cli.json`; malformed JSON raises `PackageError`.
`read_package_list(text)` parses the list of available packages into a
`PackageList` of `PackageListItem`s.

`prepare_command()` builds the final command line, passing on global flags
the user did not repeat. A single executable takes the flags before the
arguments; an interpreter plus script takes them after:

```python
from akcli.packages import prepare_command

prepare_command(["akamai-echo"], ["abc"], {"section": "default"}, "edgerc", "section")
# ["akamai-echo", "--section", "default", "abc"]
prepare_command(["python", "echo.py"], ["abc"], {"section": "default"}, "section")
# ["python", "echo.py", "abc", "--section", "default"]
```

## Release checks

`check_upgrade_version(term, cfg, force)` returns the newer version the
user agreed to upgrade to, the current `VERSION` when it is already the
latest, or `""`. It only checks on a terminal, honours
`last-upgrade-check` (`ignore`, `never` or a timestamp checked at most once
every 24 hours unless `force`), and records the time of the check.
`get_latest_release_version()` reads the latest release tag from the
redirect of `<repository>/releases/latest`, where the repository can be
overridden with `CLI_REPOSITORY`; it returns `"0"` when that fails.

## What it does not do

There is no `akcli` command and no console entry point: the library
provides the building blocks only. It does not install, uninstall or
update packages as a whole, does not set up Go, Node, Ruby, PHP or Python
runtimes for them, and does not run package commands — `prepare_command()`
only builds the argument list. Release checks stop at deciding which
version is available; downloading and replacing the running program is not
included.

## Errors

Failures are raised as exceptions. Conditions that should end a program
with a given exit status raise `akcli.tools.ExitError`, which carries
`message` and `exit_code`.