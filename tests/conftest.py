from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from terminal_setup.context import SetupContext
from terminal_setup.lib.command import CmdResult
from terminal_setup.lib.detect import (
    DistroFamily,
    DistroProfile,
    Environment,
    PrivilegeMode,
    ShellKind,
    ShellProfile,
)
from terminal_setup.lib.manifests import load_settings


class CommandRecorder:
    """Stand-in for run_cmd that records argv and returns canned exit codes."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.failing: dict[str, int] = {}

    def fail(self, argv0_and_arg: str, returncode: int = 1) -> None:
        self.failing[argv0_and_arg] = returncode

    def __call__(self, argv: Sequence[str], *, check: bool = True, input_text=None, dry_run: bool = False, **_kw):
        from terminal_setup.errors import CommandFailed

        argv_list = list(argv)
        self.calls.append(argv_list)
        self.inputs.append(input_text)
        rc = 0
        for key, code in self.failing.items():
            if key in " ".join(argv_list):
                rc = code
        if check and rc != 0:
            raise CommandFailed(argv_list, rc, "boom")
        return CmdResult(argv=argv_list, returncode=rc, stdout="", stderr="")

    def joined(self) -> List[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def recorder() -> CommandRecorder:
    return CommandRecorder()


@pytest.fixture
def settings():
    return load_settings()


def make_environment(
    home: Path,
    *,
    family: DistroFamily = DistroFamily.DEBIAN,
    distro_id: str = "ubuntu",
    privilege: PrivilegeMode = PrivilegeMode.SUDO,
    shell: str = "bash",
) -> Environment:
    commands = {
        DistroFamily.DEBIAN: (("apt-get", "update", "-y"), ("apt-get", "install", "-y")),
        DistroFamily.ARCH: (("pacman", "-Sy"), ("pacman", "-S", "--noconfirm")),
        DistroFamily.TERMUX: (("pkg", "update", "-y"), ("pkg", "install", "-y")),
        DistroFamily.UNKNOWN: ((), ()),
    }
    update, install = commands[family]
    if privilege is PrivilegeMode.SUDO and family is not DistroFamily.UNKNOWN:
        update = ("sudo", *update)
        install = ("sudo", *install)
    kind = {"bash": ShellKind.BASH, "zsh": ShellKind.ZSH, "fish": ShellKind.FISH}.get(shell, ShellKind.OTHER)
    config = {
        ShellKind.ZSH: home / ".zshrc",
        ShellKind.FISH: home / ".config/fish/config.fish",
    }.get(kind, home / ".bashrc")
    return Environment(
        privilege=privilege,
        distro=DistroProfile(id=distro_id, family=family, update_command=update, install_command=install),
        shell=ShellProfile(kind=kind, name=shell, executable=f"/bin/{shell}", config_path=config),
        home=home,
    )


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def make_ctx(home: Path, tmp_path: Path, settings):
    def _make(dry_run: bool = False, **env_kw) -> SetupContext:
        tmp = tmp_path / "tmp"
        tmp.mkdir(exist_ok=True)
        return SetupContext(
            environment=make_environment(home, **env_kw),
            settings=settings,
            timestamp="20240101-120000",
            dry_run=dry_run,
            tmp_dir=tmp,
        )

    return _make


@pytest.fixture
def make_env(home: Path):
    def _make(**kw) -> Environment:
        return make_environment(home, **kw)

    return _make
