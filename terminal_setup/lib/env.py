from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    os_release: str = "/etc/os-release"
    log_default: str = "~/.cache/terminal-setup/setup.log"
    fonts_dir: str = ".local/share/fonts"
    termux_dir: str = ".termux"
    prompt_config: str = ".config/starship.toml"


PATHS = Paths()

TERMUX_MARKER = "TERMUX_VERSION"
ELEVATION_HELPER = "sudo"
