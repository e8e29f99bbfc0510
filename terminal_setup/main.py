from __future__ import annotations

import argparse
import logging
import os
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

from .context import ReplaceProcess, SetupContext
from .errors import SetupError
from .lib.detect import Environment, resolve_environment
from .lib.files import TIMESTAMP_FORMAT
from .lib.manifests import load_settings
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import Step, run_pipeline
from .steps import (
    ConfigureShellStep,
    InstallFontStep,
    InstallListerStep,
    InstallPackagesStep,
    InstallPromptStep,
    PostInstallGuidanceStep,
)

logger = logging.getLogger(__name__)


def build_steps() -> list[Step]:
    return [
        InstallPackagesStep(),
        InstallFontStep(),
        InstallPromptStep(),
        InstallListerStep(),
        ConfigureShellStep(),
        PostInstallGuidanceStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    dry_run: bool = False,
    environment: Optional[Environment] = None,
    steps: Optional[Sequence[Step]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ReplaceProcess:
    """Detect the host, run every setup step and return the shell to restart into.

    Raises SetupError subclasses on fatal failures.
    """

    logger.info("Detecting Environment...")
    env = environment or resolve_environment()
    settings = load_settings(config_path)

    with tempfile.TemporaryDirectory(prefix="terminal-setup-") as tmp:
        ctx = SetupContext(
            environment=env,
            settings=settings,
            timestamp=datetime.now().strftime(TIMESTAMP_FORMAT),
            tmp_dir=Path(tmp),
            dry_run=dry_run,
        )

        result = run_pipeline(ctx=ctx, steps=build_steps() if steps is None else steps)
    logger.debug("Completed steps: %s", ",".join(result.ran_steps))

    logger.info("Restarting shell to apply changes...")
    if not dry_run:
        sleep(settings.restart_delay)

    shell = env.shell
    return ReplaceProcess(executable=shell.executable, argv=(shell.name,))


def replace_process(intent: ReplaceProcess) -> None:
    """Hand the terminal to a fresh shell. Does not return on success."""

    os.execvp(intent.executable, list(intent.argv))


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="terminal-setup",
        description="Install a Nerd Font, Starship and eza and wire them into your shell.",
    )
    p.add_argument("--dry-run", action="store_true", help="Log commands and file writes without performing them")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to setup log")
    p.add_argument("--config", default=None, help="YAML file overriding the packaged defaults")

    args = p.parse_args(argv)
    configure_logging(log_path=args.log)

    try:
        intent = run(config_path=args.config, dry_run=args.dry_run)
    except SetupError as e:
        logger.error("%s", e)
        return 1

    if args.dry_run:
        logger.info("Would exec %s", intent.executable)
        return 0

    replace_process(intent)
    return 0
