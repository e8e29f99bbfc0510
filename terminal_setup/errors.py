from __future__ import annotations

from typing import Sequence


class SetupError(RuntimeError):
    """Base class for failures that abort a terminal setup run."""


class MissingPrivilegeTool(SetupError):
    pass


class UnknownDistribution(SetupError):
    """Not raised by the resolver; carries the degraded-mode warning text."""

    def __init__(self, distro_id: str) -> None:
        self.distro_id = distro_id
        super().__init__(
            f"Unknown distro '{distro_id}'. Attempting to continue, but package installation might fail."
        )


class NetworkFetchFailure(SetupError):
    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        super().__init__(f"Download failed: {url}" + (f" ({reason})" if reason else ""))


class FileWriteFailure(SetupError):
    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        super().__init__(f"Cannot write {path}" + (f": {reason}" if reason else ""))


class CommandFailed(SetupError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}\n{stderr}".rstrip())


class SettingsError(SetupError):
    pass
