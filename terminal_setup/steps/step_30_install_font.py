from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.command import run_cmd
from ..lib.detect import DistroFamily
from ..lib.env import PATHS
from ..lib.files import ensure_dir
from ..lib.fonts import install_font, refresh_font_cache

logger = logging.getLogger(__name__)


class InstallFontStep:
    step_id = "30_install_font"
    title = "Installing Ubuntu Mono Nerd Font"

    def run(self, ctx: SetupContext) -> None:
        settings = ctx.settings

        if ctx.environment.distro.family is DistroFamily.TERMUX:
            termux_dir = ctx.home / PATHS.termux_dir
            ensure_dir(termux_dir, dry_run=ctx.dry_run)
            install_font(
                url=settings.font_url,
                member=settings.font_member,
                dest=termux_dir / "font.ttf",
                tmp_dir=ctx.tmp_dir,
                dry_run=ctx.dry_run,
            )
            run_cmd(["termux-reload-settings"], dry_run=ctx.dry_run)
            return

        font_dir = ctx.home / PATHS.fonts_dir
        ensure_dir(font_dir, dry_run=ctx.dry_run)
        install_font(
            url=settings.font_url,
            member=settings.font_member,
            dest=font_dir / settings.font_member,
            tmp_dir=ctx.tmp_dir,
            dry_run=ctx.dry_run,
        )
        refresh_font_cache(dry_run=ctx.dry_run)
