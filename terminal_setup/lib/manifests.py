from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..errors import SettingsError

_KNOWN_KEYS = {"font", "prompt", "lister", "packages", "restart_delay"}


def _package_root() -> Path:
    # terminal_setup/lib/manifests.py -> terminal_setup
    return Path(__file__).resolve().parents[1]


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from disk."""
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML required to load settings") from e

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"Settings must be a mapping/dict: {path}")
    return data


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


@dataclass(frozen=True)
class SetupSettings:
    font_url: str
    font_member: str
    prompt_installer_url: str
    prompt_config_url: str
    lister_key_url: str
    lister_keyring: str
    lister_sources_list: str
    lister_repo_line: str
    base_packages: Tuple[str, ...]
    restart_delay: float

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "SetupSettings":
        unknown = set(raw) - _KNOWN_KEYS
        if unknown:
            raise SettingsError(f"Unknown settings keys: {', '.join(sorted(unknown))}")

        def section(name: str) -> Dict[str, Any]:
            value = raw.get(name) or {}
            if not isinstance(value, dict):
                raise SettingsError(f"'{name}' must be a mapping")
            return value

        def required(sec: Dict[str, Any], name: str, key: str) -> str:
            value = sec.get(key)
            if not value:
                raise SettingsError(f"Missing setting {name}.{key}")
            return str(value)

        font = section("font")
        prompt = section("prompt")
        lister = section("lister")
        packages = section("packages")

        base = packages.get("base") or []
        if not isinstance(base, list):
            raise SettingsError("packages.base must be a list")

        try:
            delay = float(raw.get("restart_delay", 3))
        except (TypeError, ValueError) as e:
            raise SettingsError("restart_delay must be a number") from e

        return cls(
            font_url=required(font, "font", "url"),
            font_member=required(font, "font", "member"),
            prompt_installer_url=required(prompt, "prompt", "installer_url"),
            prompt_config_url=required(prompt, "prompt", "config_url"),
            lister_key_url=required(lister, "lister", "key_url"),
            lister_keyring=required(lister, "lister", "keyring"),
            lister_sources_list=required(lister, "lister", "sources_list"),
            lister_repo_line=required(lister, "lister", "repo_line"),
            base_packages=tuple(str(p).strip() for p in base if str(p).strip()),
            restart_delay=max(delay, 0.0),
        )


def load_defaults() -> Dict[str, Any]:
    return load_yaml(_package_root() / "manifests" / "defaults.yaml")


def load_settings(override_path: Optional[str] = None) -> SetupSettings:
    """Packaged defaults, deep-merged with an optional user YAML file."""

    raw = load_defaults()
    if override_path:
        p = Path(override_path).expanduser()
        if not p.exists():
            raise SettingsError(f"Settings file not found: {p}")
        raw = deep_merge(raw, load_yaml(p))
    return SetupSettings.from_mapping(raw)
