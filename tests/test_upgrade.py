import io
import threading
from datetime import datetime
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from akcli.config import IniConfig
from akcli.terminal import Terminal
from akcli.upgrade import check_upgrade_version, get_latest_release_version
from akcli.version import VERSION


class _TTY(io.StringIO):
    def isatty(self):
        return True


def _terminal(answer="y\n", tty=True):
    out = _TTY() if tty else io.StringIO()
    return Terminal(out, io.StringIO(answer), io.StringIO())


@pytest.fixture
def release_server(monkeypatch):
    for name in ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    state = {"status": 302, "location": "10.0.0", "requests": []}

    class Handler(BaseHTTPRequestHandler):
        def do_HEAD(self):
            state["requests"].append(self.path)
            self.send_response(state["status"])
            if state["status"] == 302:
                self.send_header("Location", state["location"])
            self.send_header("Content-Length", "0")
            self.end_headers()

        def log_message(self, *args):
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    monkeypatch.setenv("CLI_REPOSITORY", f"http://127.0.0.1:{server.server_port}")
    yield state
    server.shutdown()
    server.server_close()


@pytest.fixture
def cfg(tmp_path):
    return IniConfig(str(tmp_path / "config"))


def test_latest_release_from_redirect(release_server):
    assert get_latest_release_version() == "10.0.0"
    assert release_server["requests"] == ["/releases/latest"]


def test_latest_release_without_redirect(release_server):
    release_server["status"] = 200
    assert get_latest_release_version() == "0"


def test_latest_release_unreachable(monkeypatch):
    monkeypatch.setenv("CLI_REPOSITORY", "http://127.0.0.1:1")
    assert get_latest_release_version() == "0"


def test_not_a_tty_skips_check(release_server, cfg):
    cfg.set_value("cli", "last-upgrade-check", "never")
    assert check_upgrade_version(_terminal(tty=False), cfg, True) == ""
    assert release_server["requests"] == []


def test_ignore_without_force(release_server, cfg):
    cfg.set_value("cli", "last-upgrade-check", "ignore")
    assert check_upgrade_version(_terminal(), cfg, False) == ""
    assert cfg.get_value("cli", "last-upgrade-check") == "ignore"


def test_never_and_confirmed(release_server, cfg, tmp_path):
    cfg.set_value("cli", "last-upgrade-check", "never")
    term = _terminal("y\n")
    assert check_upgrade_version(term, cfg, False) == "10.0.0"
    stamp = datetime.fromisoformat(cfg.get_value("cli", "last-upgrade-check"))
    assert stamp.tzinfo is not None
    assert (tmp_path / "config").exists()
    output = term.out.getvalue()
    assert "You can find more details about the new version here" in output
    assert f"New update found: 10.0.0. You are running: {VERSION}. Upgrade now?" in output


def test_ignore_with_force_checks(release_server, cfg):
    cfg.set_value("cli", "last-upgrade-check", "ignore")
    assert check_upgrade_version(_terminal("y\n"), cfg, True) == "10.0.0"


def test_declined_upgrade(release_server, cfg):
    cfg.set_value("cli", "last-upgrade-check", "never")
    assert check_upgrade_version(_terminal("n\n"), cfg, False) == ""


def test_24_hours_passed(release_server, cfg):
    cfg.set_value("cli", "last-upgrade-check", "2021-02-10T11:55:26+01:00")
    assert check_upgrade_version(_terminal("y\n"), cfg, False) == "10.0.0"


def test_quoted_timestamp(release_server, cfg):
    cfg.set_value("cli", "last-upgrade-check", '"2021-02-10T11:55:26+01:00"')
    assert check_upgrade_version(_terminal("y\n"), cfg, False) == "10.0.0"


def test_recent_check_is_skipped(release_server, cfg):
    recent = datetime.now().astimezone().isoformat(timespec="seconds")
    cfg.set_value("cli", "last-upgrade-check", recent)
    assert check_upgrade_version(_terminal(), cfg, False) == ""
    assert release_server["requests"] == []
    assert cfg.get_value("cli", "last-upgrade-check") == recent


def test_invalid_timestamp(release_server, cfg):
    cfg.set_value("cli", "last-upgrade-check", "yesterday")
    assert check_upgrade_version(_terminal(), cfg, False) == ""
    assert release_server["requests"] == []


def test_already_latest(release_server, cfg):
    release_server["location"] = VERSION
    cfg.set_value("cli", "last-upgrade-check", "never")
    assert check_upgrade_version(_terminal(), cfg, False) == VERSION


def test_running_newer_than_latest(release_server, cfg):
    release_server["location"] = "0.0.1"
    cfg.set_value("cli", "last-upgrade-check", "never")
    term = _terminal()
    assert check_upgrade_version(term, cfg, False) == ""
    assert "New update found" not in term.out.getvalue()