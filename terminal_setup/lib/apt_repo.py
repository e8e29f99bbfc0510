from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence, Tuple

from .command import run_cmd
from .net import fetch

logger = logging.getLogger(__name__)

Elevate = Callable[[Tuple[str, ...]], Tuple[str, ...]]


def add_signed_repo(
    *,
    key_url: str,
    keyring: str,
    sources_list: str,
    repo_line: str,
    elevate: Elevate,
    tmp_dir: Path,
    dry_run: bool = False,
) -> None:
    """Register a third-party apt repository signed by a downloaded key.

    Resulting files:
      <keyring>        dearmored signing key
      <sources_list>   single `deb [signed-by=<keyring>] ...` line

    Both are made world-readable so apt can use them.
    """

    def sudo(*argv: str) -> Sequence[str]:
        return elevate(tuple(argv))

    key_tmp = tmp_dir / (Path(key_url).name or "repo.asc")
    run_cmd(sudo("mkdir", "-p", str(Path(keyring).parent)), dry_run=dry_run)
    try:
        fetch(key_url, key_tmp, dry_run=dry_run)
        run_cmd(sudo("gpg", "--batch", "--yes", "--dearmor", "-o", keyring, str(key_tmp)), dry_run=dry_run)
    finally:
        if not dry_run and key_tmp.exists():
            key_tmp.unlink()

    run_cmd(sudo("tee", sources_list), input_text=repo_line + "\n", dry_run=dry_run)
    run_cmd(sudo("chmod", "644", keyring, sources_list), dry_run=dry_run)
    logger.info("Configured apt repo: %s", repo_line)
