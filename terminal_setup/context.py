from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .lib.detect import Environment
from .lib.manifests import SetupSettings
from .lib.pkg import PackageManager


@dataclass(frozen=True)
class SetupContext:
    """Everything a step needs, resolved once before the first step runs.

    tmp_dir must be private to the run: downloaded keys and scripts are
    later read by privileged commands.
    """

    environment: Environment
    settings: SetupSettings
    timestamp: str
    tmp_dir: Path
    dry_run: bool = False
    packages: PackageManager = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # One package manager per run, so the index is refreshed once.
        object.__setattr__(self, "packages", PackageManager(self.environment.distro, dry_run=self.dry_run))

    @property
    def home(self) -> Path:
        return self.environment.home

    def elevate(self, argv: Tuple[str, ...]) -> Tuple[str, ...]:
        return self.environment.elevate(argv)


@dataclass(frozen=True)
class ReplaceProcess:
    """Terminal intent: replace the current process with executable."""

    executable: str
    argv: Tuple[str, ...]
