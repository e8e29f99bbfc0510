from __future__ import annotations

import logging

from ..context import SetupContext

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "20_install_packages"
    title = "Installing Dependencies"

    def run(self, ctx: SetupContext) -> None:
        distro = ctx.environment.distro
        if not distro.can_install:
            logger.warning("No package manager for distro '%s'; skipping dependencies", distro.id or "unknown")
            return

        pm = ctx.packages
        # Continue even if the index update has minor errors.
        pm.refresh(best_effort=True)
        pm.install(ctx.settings.base_packages)
