from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..errors import CommandFailed, NetworkFetchFailure
from .command import run_cmd
from .files import ensure_dir

logger = logging.getLogger(__name__)


def download_argv(url: str, dest: str) -> list[str]:
    if shutil.which("wget"):
        return ["wget", "-qO", dest, url]
    return ["curl", "-fsSL", "-o", dest, url]


def fetch(url: str, dest: Path, *, dry_run: bool = False) -> Path:
    """Download url to dest. No retry: any failure is fatal."""

    ensure_dir(dest.parent, dry_run=dry_run)
    try:
        run_cmd(download_argv(url, str(dest)), dry_run=dry_run)
    except CommandFailed as e:
        # wget -O leaves an empty file behind on failure.
        if dest.exists() and dest.stat().st_size == 0:
            dest.unlink()
        raise NetworkFetchFailure(url, e.stderr.strip() or f"exit {e.returncode}") from e
    return dest
