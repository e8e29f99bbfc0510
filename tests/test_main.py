from __future__ import annotations

import logging
import stat

import pytest

from terminal_setup import main as main_mod
from terminal_setup.context import ReplaceProcess
from terminal_setup.errors import MissingPrivilegeTool


class RecordingStep:
    def __init__(self, step_id: str, log: list[str]) -> None:
        self.step_id = step_id
        self.title = step_id
        self.log = log

    def run(self, ctx) -> None:
        self.log.append(self.step_id)


def test_default_step_order():
    ids = [s.step_id for s in main_mod.build_steps()]
    assert ids == [
        "20_install_packages",
        "30_install_font",
        "40_install_prompt",
        "50_install_lister",
        "60_configure_shell",
        "70_post_install_guidance",
    ]


def test_run_returns_replace_intent(make_env):
    ran: list[str] = []
    slept: list[float] = []
    steps = [RecordingStep("a", ran), RecordingStep("b", ran)]

    intent = main_mod.run(environment=make_env(shell="fish"), steps=steps, sleep=slept.append)

    assert intent == ReplaceProcess(executable="/bin/fish", argv=("fish",))
    assert ran == ["a", "b"]
    assert slept == [3.0]


def test_dry_run_does_not_sleep(make_env):
    slept: list[float] = []
    main_mod.run(environment=make_env(), steps=[], dry_run=True, sleep=slept.append)
    assert slept == []


def test_each_run_gets_a_private_tmp_dir(make_env):
    seen: list[tuple] = []

    class RecordTmpDir:
        step_id = "tmp"
        title = "tmp"

        def run(self, ctx) -> None:
            seen.append((ctx.tmp_dir, ctx.tmp_dir.is_dir(), stat.S_IMODE(ctx.tmp_dir.stat().st_mode)))

    for _ in range(2):
        main_mod.run(environment=make_env(), steps=[RecordTmpDir()], sleep=lambda _s: None)

    (first, first_existed, mode), (second, _, _) = seen
    assert first_existed
    assert mode == 0o700
    assert first.name.startswith("terminal-setup-")
    assert first != second
    assert not first.exists() and not second.exists()


def test_step_failure_aborts_remaining_steps(make_env):
    ran: list[str] = []

    class Boom:
        step_id = "boom"
        title = "boom"

        def run(self, ctx) -> None:
            raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        main_mod.run(environment=make_env(), steps=[Boom(), RecordingStep("after", ran)], sleep=lambda _s: None)
    assert ran == []


@pytest.fixture
def quiet_main(monkeypatch):
    monkeypatch.setattr(main_mod, "configure_logging", lambda log_path: log_path)


def test_main_exits_1_without_sudo(monkeypatch, quiet_main, caplog):
    def _run(**_kw):
        raise MissingPrivilegeTool("Not root and 'sudo' not found. Cannot install packages. Exiting.")

    monkeypatch.setattr(main_mod, "run", _run)
    execs: list[ReplaceProcess] = []
    monkeypatch.setattr(main_mod, "replace_process", execs.append)

    with caplog.at_level(logging.ERROR):
        assert main_mod.main([]) == 1
    assert "sudo" in caplog.text
    assert execs == []


def test_main_replaces_process(monkeypatch, quiet_main):
    intent = ReplaceProcess(executable="/bin/zsh", argv=("zsh",))
    monkeypatch.setattr(main_mod, "run", lambda **_kw: intent)
    execs: list[ReplaceProcess] = []
    monkeypatch.setattr(main_mod, "replace_process", execs.append)

    assert main_mod.main([]) == 0
    assert execs == [intent]


def test_main_dry_run_does_not_exec(monkeypatch, quiet_main):
    seen: dict = {}

    def _run(**kw):
        seen.update(kw)
        return ReplaceProcess(executable="/bin/bash", argv=("bash",))

    monkeypatch.setattr(main_mod, "run", _run)
    execs: list[ReplaceProcess] = []
    monkeypatch.setattr(main_mod, "replace_process", execs.append)

    assert main_mod.main(["--dry-run", "--config", "x.yaml"]) == 0
    assert seen == {"config_path": "x.yaml", "dry_run": True}
    assert execs == []
