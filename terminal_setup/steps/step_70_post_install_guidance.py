from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule

from ..context import SetupContext

logger = logging.getLogger(__name__)

FONT_NAME = "UbuntuMono Nerd Font"

GUIDANCE = f"""If you see boxes or question marks [?] instead of icons, read this:

[bold]1. IF YOU ARE ON DESKTOP (GNOME/KDE):[/bold]
   Open your Terminal Preferences and set the font to '{FONT_NAME}'.

[bold]2. IF YOU ARE CONNECTING VIA SSH (PROXMOX/REMOTE SERVER):[/bold]
   The font must be installed on YOUR CLIENT COMPUTER (the one you are typing on),
   not just the server. Configure PuTTY, VSCode, or Terminal.app to use
   '{FONT_NAME}' locally."""


class PostInstallGuidanceStep:
    step_id = "70_post_install_guidance"
    title = "Printing post-install guidance"

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def run(self, ctx: SetupContext) -> None:
        self.console.print()
        self.console.print(Rule("[bold green]INSTALLATION COMPLETE[/bold green]", style="green"))
        self.console.print()
        self.console.print(
            Panel(
                GUIDANCE,
                title="[bold cyan]IMPORTANT: ICON DISPLAY ISSUES[/bold cyan]",
                border_style="cyan",
                expand=False,
            )
        )
        logger.info("Shell config updated: %s", str(ctx.environment.shell.config_path))
