from __future__ import annotations

import logging
import shutil

from ..context import SetupContext
from ..lib.apt_repo import add_signed_repo
from ..lib.detect import DistroFamily

logger = logging.getLogger(__name__)

# Families whose default repositories already ship eza.
_NATIVE_FAMILIES = {
    DistroFamily.TERMUX,
    DistroFamily.ALPINE,
    DistroFamily.ARCH,
    DistroFamily.FEDORA,
}


class InstallListerStep:
    step_id = "50_install_lister"
    title = "Installing eza"

    def run(self, ctx: SetupContext) -> None:
        if shutil.which("eza"):
            logger.info("Eza already installed.")
            return

        distro = ctx.environment.distro
        pm = ctx.packages

        if distro.family in _NATIVE_FAMILIES:
            pm.install(["eza"])
        elif distro.family is DistroFamily.DEBIAN:
            s = ctx.settings
            add_signed_repo(
                key_url=s.lister_key_url,
                keyring=s.lister_keyring,
                sources_list=s.lister_sources_list,
                repo_line=s.lister_repo_line,
                elevate=ctx.elevate,
                tmp_dir=ctx.tmp_dir,
                dry_run=ctx.dry_run,
            )
            # The new repo must be indexed before eza is visible.
            pm.refresh(best_effort=False)
            pm.install(["eza"])
        else:
            logger.warning("Could not automatically install eza for %s. Skipping.", distro.id or "unknown")
