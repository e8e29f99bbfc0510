"""Terminal setup (Python-first, environment-driven).

Core design goals:
- Detect once, then pass an immutable context to every step
- Idempotent shell config edits (safe to re-run)
- Distro-aware package installation
- Centralized logging
"""

__all__ = []
