from __future__ import annotations

from terminal_setup.main import main as core_main


def main(argv: list[str] | None = None) -> int:
    try:
        return core_main(argv)
    except KeyboardInterrupt:
        # Interrupted runs are not rolled back.
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
