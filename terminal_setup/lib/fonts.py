from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path

from ..errors import FileWriteFailure, NetworkFetchFailure
from .command import run_cmd
from .net import fetch

logger = logging.getLogger(__name__)


def extract_member(archive: Path, member: str, dest: Path) -> Path:
    """Extract a single file from a zip archive to dest (a file path)."""

    try:
        with zipfile.ZipFile(archive) as zf:
            try:
                info = zf.getinfo(member)
            except KeyError as e:
                raise NetworkFetchFailure(str(archive), f"{member} not in archive") from e
            dest.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, dest.open("wb") as out:
                shutil.copyfileobj(src, out)
    except zipfile.BadZipFile as e:
        raise NetworkFetchFailure(str(archive), "downloaded file is not a zip archive") from e
    except OSError as e:
        raise FileWriteFailure(str(dest), e.strerror or str(e)) from e
    return dest


def install_font(
    *,
    url: str,
    member: str,
    dest: Path,
    tmp_dir: Path,
    dry_run: bool = False,
) -> Path:
    """Download the font archive and install one face as dest."""

    archive = tmp_dir / Path(url).name
    try:
        fetch(url, archive, dry_run=dry_run)
        if dry_run:
            logger.info("Would extract %s -> %s", member, str(dest))
        else:
            extract_member(archive, member, dest)
            logger.info("Installed font %s", str(dest))
    finally:
        if not dry_run and archive.exists():
            archive.unlink()
    return dest


def refresh_font_cache(*, dry_run: bool = False) -> bool:
    if not shutil.which("fc-cache"):
        logger.info("fc-cache not found; skipping font cache refresh")
        return False
    run_cmd(["fc-cache", "-fv"], dry_run=dry_run)
    return True
