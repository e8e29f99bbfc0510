from __future__ import annotations

import logging
from typing import Sequence

from .command import fmt_argv, run_cmd
from .detect import DistroProfile

logger = logging.getLogger(__name__)


class PackageManager:
    """Update/install wrapper over a resolved DistroProfile.

    The index is always refreshed before the first install.
    """

    def __init__(self, distro: DistroProfile, *, dry_run: bool = False) -> None:
        self.distro = distro
        self.dry_run = dry_run
        self._refreshed = False

    @property
    def available(self) -> bool:
        return self.distro.can_install

    def refresh(self, *, best_effort: bool = True) -> bool:
        """Run the update command.

        best_effort=True logs and ignores a failing refresh; a stale index
        does not block installation attempts.
        """
        if not self.distro.update_command:
            return False

        r = run_cmd(self.distro.update_command, check=not best_effort, dry_run=self.dry_run)
        if not r.ok:
            logger.warning(
                "Package index update exited %s (%s); continuing",
                r.returncode,
                fmt_argv(self.distro.update_command),
            )
        self._refreshed = True
        return r.ok

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        if not self.available:
            logger.warning("No package manager for distro '%s'; skipping %s", self.distro.id, " ".join(packages))
            return
        if not self._refreshed:
            self.refresh()
        run_cmd([*self.distro.install_command, *packages], dry_run=self.dry_run)
