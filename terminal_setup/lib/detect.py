from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple

from ..errors import MissingPrivilegeTool, UnknownDistribution
from .env import ELEVATION_HELPER, PATHS, TERMUX_MARKER

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]


class PrivilegeMode(Enum):
    NONE = "none"
    SUDO = "sudo"


class DistroFamily(Enum):
    TERMUX = "termux"
    DEBIAN = "debian"
    ARCH = "arch"
    FEDORA = "fedora"
    ALPINE = "alpine"
    UNKNOWN = "unknown"


class ShellKind(Enum):
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    OTHER = "other"


_DISTRO_FAMILIES: Dict[str, DistroFamily] = {
    "debian": DistroFamily.DEBIAN,
    "ubuntu": DistroFamily.DEBIAN,
    "linuxmint": DistroFamily.DEBIAN,
    "pop": DistroFamily.DEBIAN,
    "kali": DistroFamily.DEBIAN,
    "arch": DistroFamily.ARCH,
    "manjaro": DistroFamily.ARCH,
    "fedora": DistroFamily.FEDORA,
    "centos": DistroFamily.FEDORA,
    "rhel": DistroFamily.FEDORA,
    "alpine": DistroFamily.ALPINE,
}

# family -> (update argv, install argv), before any elevation prefix
_FAMILY_COMMANDS: Dict[DistroFamily, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    DistroFamily.TERMUX: (("pkg", "update", "-y"), ("pkg", "install", "-y")),
    DistroFamily.DEBIAN: (("apt-get", "update", "-y"), ("apt-get", "install", "-y")),
    DistroFamily.ARCH: (("pacman", "-Sy"), ("pacman", "-S", "--noconfirm")),
    DistroFamily.FEDORA: (("dnf", "check-update"), ("dnf", "install", "-y")),
    DistroFamily.ALPINE: (("apk", "update"), ("apk", "add")),
    DistroFamily.UNKNOWN: ((), ()),
}

_SHELL_KINDS: Dict[str, ShellKind] = {
    "bash": ShellKind.BASH,
    "zsh": ShellKind.ZSH,
    "fish": ShellKind.FISH,
}

_SHELL_CONFIGS: Dict[ShellKind, str] = {
    ShellKind.BASH: ".bashrc",
    ShellKind.ZSH: ".zshrc",
    ShellKind.FISH: ".config/fish/config.fish",
    ShellKind.OTHER: ".bashrc",
}


@dataclass(frozen=True)
class DistroProfile:
    id: str
    family: DistroFamily
    update_command: Tuple[str, ...]
    install_command: Tuple[str, ...]

    @property
    def can_install(self) -> bool:
        return bool(self.install_command)


@dataclass(frozen=True)
class ShellProfile:
    kind: ShellKind
    name: str
    executable: str
    config_path: Path

    @property
    def init_name(self) -> str:
        """Shell name passed to `starship init`; unrecognized shells read ~/.bashrc."""
        if self.kind is ShellKind.OTHER:
            return ShellKind.BASH.value
        return self.kind.value


@dataclass(frozen=True)
class Environment:
    privilege: PrivilegeMode
    distro: DistroProfile
    shell: ShellProfile
    home: Path

    def elevate(self, argv: Tuple[str, ...]) -> Tuple[str, ...]:
        """Prefix argv with the elevation helper when one is required."""
        if self.privilege is PrivilegeMode.SUDO:
            return (ELEVATION_HELPER, *argv)
        return tuple(argv)


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release(5) key=value content, stripping optional quotes."""

    out: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
            value = value[1:-1]
        out[key.strip()] = value
    return out


def distro_family(distro_id: str) -> DistroFamily:
    return _DISTRO_FAMILIES.get(distro_id.strip().lower(), DistroFamily.UNKNOWN)


def shell_kind(name: str) -> ShellKind:
    return _SHELL_KINDS.get(name, ShellKind.OTHER)


def resolve_privilege(*, euid: int, which: Which) -> PrivilegeMode:
    if euid == 0:
        logger.warning("Running as ROOT. Sudo will not be used.")
        return PrivilegeMode.NONE
    if which(ELEVATION_HELPER):
        return PrivilegeMode.SUDO
    raise MissingPrivilegeTool(
        f"Not root and '{ELEVATION_HELPER}' not found. Cannot install packages. Exiting."
    )


def resolve_distro(
    environ: Mapping[str, str],
    *,
    privilege: PrivilegeMode,
    os_release_path: Path,
) -> DistroProfile:
    if environ.get(TERMUX_MARKER):
        update, install = _FAMILY_COMMANDS[DistroFamily.TERMUX]
        return DistroProfile(id="termux", family=DistroFamily.TERMUX, update_command=update, install_command=install)

    distro_id = ""
    if os_release_path.is_file():
        info = parse_os_release(os_release_path.read_text(encoding="utf-8", errors="ignore"))
        distro_id = info.get("ID", "").strip().lower()

    family = distro_family(distro_id)
    if family is DistroFamily.UNKNOWN:
        logger.warning("%s", UnknownDistribution(distro_id))
        return DistroProfile(id=distro_id, family=family, update_command=(), install_command=())

    update, install = _FAMILY_COMMANDS[family]
    if privilege is PrivilegeMode.SUDO:
        update = (ELEVATION_HELPER, *update)
        install = (ELEVATION_HELPER, *install)
    return DistroProfile(id=distro_id, family=family, update_command=update, install_command=install)


def resolve_shell(environ: Mapping[str, str], *, home: Path) -> ShellProfile:
    shell_path = environ.get("SHELL", "")
    name = os.path.basename(shell_path)
    kind = shell_kind(name)
    return ShellProfile(
        kind=kind,
        name=name or ShellKind.BASH.value,
        executable=shell_path or ShellKind.BASH.value,
        config_path=home / _SHELL_CONFIGS[kind],
    )


def resolve_environment(
    environ: Optional[Mapping[str, str]] = None,
    *,
    euid: Optional[int] = None,
    which: Which = shutil.which,
    os_release_path: Optional[Path] = None,
    home: Optional[Path] = None,
) -> Environment:
    """Detect privilege mode, distribution and shell.

    All inputs default to the live process; tests pass them explicitly.
    Raises MissingPrivilegeTool when elevation is required but unavailable.
    """

    environ = os.environ if environ is None else environ
    euid = os.geteuid() if euid is None else euid
    os_release_path = Path(PATHS.os_release) if os_release_path is None else os_release_path
    if home is None:
        home = Path(environ.get("HOME") or Path.home())

    privilege = resolve_privilege(euid=euid, which=which)
    distro = resolve_distro(environ, privilege=privilege, os_release_path=os_release_path)
    shell = resolve_shell(environ, home=home)

    logger.info("Detected: %s", distro.id or "unknown")
    logger.info("Targeting Shell Config: %s", shell.config_path)
    return Environment(privilege=privilege, distro=distro, shell=shell, home=home)
