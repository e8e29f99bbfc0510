from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import FileWriteFailure

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def backup_path(path: Path, timestamp: str) -> Path:
    return path.with_name(f"{path.name}.bak.{timestamp}")


def backup_aside(path: Path, timestamp: str, *, dry_run: bool = False) -> Optional[Path]:
    """Rename an existing file to <name>.bak.<timestamp>.

    Returns the backup path, or None when there was nothing to back up.
    """

    if not path.exists():
        return None

    dst = backup_path(path, timestamp)
    if dry_run:
        logger.info("Would back up %s -> %s", str(path), str(dst))
        return dst

    logger.warning("Existing config found. Backing up %s -> %s", str(path), str(dst))
    try:
        path.rename(dst)
    except OSError as e:
        raise FileWriteFailure(str(path), e.strerror or str(e)) from e
    return dst


def ensure_dir(path: Path, *, dry_run: bool = False) -> None:
    if dry_run:
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileWriteFailure(str(path), e.strerror or str(e)) from e
