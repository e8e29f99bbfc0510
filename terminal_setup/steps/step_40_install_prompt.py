from __future__ import annotations

import logging
import shutil

from ..context import SetupContext
from ..lib.command import run_cmd
from ..lib.env import PATHS
from ..lib.files import backup_aside, ensure_dir
from ..lib.net import fetch

logger = logging.getLogger(__name__)


class InstallPromptStep:
    """Install Starship and replace its config with the downloaded template."""

    step_id = "40_install_prompt"
    title = "Installing Starship"

    def _install_binary(self, ctx: SetupContext) -> None:
        if shutil.which("starship"):
            logger.info("Starship already installed.")
            return

        script = ctx.tmp_dir / "starship-install.sh"
        try:
            fetch(ctx.settings.prompt_installer_url, script, dry_run=ctx.dry_run)
            run_cmd(["sh", str(script), "-y"], dry_run=ctx.dry_run)
        finally:
            if not ctx.dry_run and script.exists():
                script.unlink()

    def _install_config(self, ctx: SetupContext) -> None:
        config = ctx.home / PATHS.prompt_config
        ensure_dir(config.parent, dry_run=ctx.dry_run)

        # Never merged: the old file is always renamed aside.
        backup_aside(config, ctx.timestamp, dry_run=ctx.dry_run)

        logger.info("Downloading Custom Starship Config...")
        fetch(ctx.settings.prompt_config_url, config, dry_run=ctx.dry_run)

    def run(self, ctx: SetupContext) -> None:
        self._install_binary(ctx)
        self._install_config(ctx)
