import io

import pytest

from akcli.spinner import Spinner, SpinnerStatus


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


def _spinner():
    stream = io.StringIO()
    return Spinner(stream, frames=(".", "..", "..."), interval=60), stream


def test_start_writes_prefix():
    spinner, stream = _spinner()
    spinner.start("spinner %s", "test")
    try:
        assert "spinner test ." in stream.getvalue()
        assert spinner.active is True
    finally:
        spinner.stop(SpinnerStatus.OK)
    assert spinner.active is False


@pytest.mark.parametrize(
    "status,expected",
    [
        (SpinnerStatus.OK, "... [OK]"),
        (SpinnerStatus.WARN_OK, "... [OK]"),
        (SpinnerStatus.WARN, "... [WARN]"),
        (SpinnerStatus.FAIL, "... [FAIL]"),
    ],
)
def test_stop(status, expected):
    spinner, stream = _spinner()
    spinner.start("spinner %s", "test")
    spinner.stop(status)
    assert f"spinner test {expected}" in stream.getvalue()


def test_ok():
    spinner, stream = _spinner()
    spinner.start("spinner %s", "test")
    spinner.ok()
    assert "spinner test ... [OK]" in stream.getvalue()


def test_warn():
    spinner, stream = _spinner()
    spinner.start("spinner %s", "test")
    spinner.warn()
    assert "spinner test ... [WARN]" in stream.getvalue()


def test_warn_ok():
    spinner, stream = _spinner()
    spinner.start("spinner %s", "test")
    spinner.warn_ok()
    assert "spinner test ... [OK]" in stream.getvalue()


def test_fail():
    spinner, stream = _spinner()
    spinner.start("spinner %s", "test")
    spinner.fail()
    assert "spinner test ... [FAIL]" in stream.getvalue()


def test_write_sets_suffix():
    spinner, _ = _spinner()
    assert spinner.write(b"test") == 4
    assert spinner.suffix == " test"


def test_stop_without_start_writes_nothing():
    spinner, stream = _spinner()
    spinner.ok()
    assert stream.getvalue() == ""


def test_final_message_ends_with_newline():
    spinner, stream = _spinner()
    spinner.start("spinner %s", "test")
    spinner.fail()
    assert "spinner test ... [FAIL]\n" in stream.getvalue()