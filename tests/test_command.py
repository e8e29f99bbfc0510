from __future__ import annotations

import sys

import pytest

from terminal_setup.errors import CommandFailed, FileWriteFailure, NetworkFetchFailure
from terminal_setup.lib import net
from terminal_setup.lib.command import run_cmd


def test_dry_run_does_not_execute(tmp_path):
    marker = tmp_path / "ran"
    r = run_cmd([sys.executable, "-c", f"open({str(marker)!r}, 'w')"], dry_run=True)
    assert r.ok
    assert not marker.exists()


def test_captures_output():
    r = run_cmd([sys.executable, "-c", "print('hello')"])
    assert r.stdout.strip() == "hello"


def test_nonzero_exit_raises():
    with pytest.raises(CommandFailed) as exc:
        run_cmd([sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"])
    assert exc.value.returncode == 3
    assert "bad" in exc.value.stderr


def test_nonzero_exit_unchecked():
    r = run_cmd([sys.executable, "-c", "import sys; sys.exit(2)"], check=False)
    assert r.returncode == 2 and not r.ok


def test_missing_executable():
    with pytest.raises(CommandFailed) as exc:
        run_cmd(["definitely-not-a-real-tool-xyz"])
    assert exc.value.returncode == 127


def test_fetch_failure_is_network_failure(monkeypatch, tmp_path, recorder):
    recorder.fail("wget")
    monkeypatch.setattr(net, "run_cmd", recorder)
    monkeypatch.setattr(net.shutil, "which", lambda name: "/usr/bin/wget")

    dest = tmp_path / "font.zip"
    dest.write_bytes(b"")
    with pytest.raises(NetworkFetchFailure):
        net.fetch("https://example.invalid/font.zip", dest)
    assert not dest.exists()


def test_fetch_falls_back_to_curl(monkeypatch, tmp_path, recorder):
    monkeypatch.setattr(net, "run_cmd", recorder)
    monkeypatch.setattr(net.shutil, "which", lambda name: None)

    net.fetch("https://example.invalid/a.sh", tmp_path / "a.sh")

    assert recorder.calls == [["curl", "-fsSL", "-o", str(tmp_path / "a.sh"), "https://example.invalid/a.sh"]]


def test_fetch_unwritable_destination_is_write_failure(monkeypatch, tmp_path, recorder):
    monkeypatch.setattr(net, "run_cmd", recorder)
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(FileWriteFailure):
        net.fetch("https://example.invalid/a.sh", blocker / "a.sh")
    assert recorder.calls == []
