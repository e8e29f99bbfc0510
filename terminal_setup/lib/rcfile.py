"""Append-only, idempotent edits to the user's shell config file.

Each mutation is guarded by a sentinel substring: if the sentinel is already
in the file the mutation is skipped, so re-running never duplicates lines.
The file is only ever appended to and is not backed up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from ..errors import FileWriteFailure
from .detect import ShellKind, ShellProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RcMutation:
    marker: str
    payload: Tuple[str, ...]
    priority: int = 100

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self.payload)


PROMPT_PRIORITY = 10
ALIAS_PRIORITY = 20

LISTER_ALIAS = "alias ls='eza'"


def prompt_activation(shell: ShellProfile) -> RcMutation:
    name = shell.init_name
    if shell.kind is ShellKind.FISH:
        line = f"starship init {name} | source"
    else:
        line = f'eval "$(starship init {name})"'
    return RcMutation(
        marker=f"starship init {name}",
        payload=("", "# Starship Prompt", line),
        priority=PROMPT_PRIORITY,
    )


def lister_aliases() -> RcMutation:
    return RcMutation(
        marker=LISTER_ALIAS,
        payload=("", "# Eza Aliases", LISTER_ALIAS),
        priority=ALIAS_PRIORITY,
    )


def default_mutations(shell: ShellProfile) -> List[RcMutation]:
    return [prompt_activation(shell), lister_aliases()]


def _read(path: Path) -> str:
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileWriteFailure(str(path), e.strerror or str(e)) from e


def apply_mutations(
    path: Path,
    mutations: Sequence[RcMutation],
    *,
    dry_run: bool = False,
) -> List[str]:
    """Append each missing mutation to path, in priority order.

    Returns the markers that were (or in dry-run, would be) appended.
    """

    ordered = sorted(mutations, key=lambda m: m.priority)
    content = _read(path)
    applied: List[str] = []

    for m in ordered:
        if m.marker in content:
            logger.info("Already configured in %s: %s", str(path), m.marker)
            continue

        text = m.render()
        if dry_run:
            logger.info("Would append to %s: %s", str(path), m.marker)
        else:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with path.open("a", encoding="utf-8") as f:
                    f.write(text)
            except OSError as e:
                raise FileWriteFailure(str(path), e.strerror or str(e)) from e
            logger.info("Appended to %s: %s", str(path), m.marker)

        content += text
        applied.append(m.marker)

    return applied
