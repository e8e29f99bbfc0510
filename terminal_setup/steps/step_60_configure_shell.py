from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.rcfile import apply_mutations, default_mutations

logger = logging.getLogger(__name__)


class ConfigureShellStep:
    step_id = "60_configure_shell"
    title = "Configuring shell"

    def run(self, ctx: SetupContext) -> None:
        shell = ctx.environment.shell
        applied = apply_mutations(shell.config_path, default_mutations(shell), dry_run=ctx.dry_run)
        if not applied:
            logger.info("%s already configured", str(shell.config_path))
