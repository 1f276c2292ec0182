"""Configuration loading for gomodsize (.gomodsize.yml)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .graph.resolver import DEFAULT_MAX_ROUNDS, StallPolicy

CONFIG_FILENAME = ".gomodsize.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class GoModSizeConfig:
    """Settings for a gomodsize run, from .gomodsize.yml and CLI flags."""

    root: Path
    module_root: Optional[Path] = None
    max_rounds: int = DEFAULT_MAX_ROUNDS
    stall_policy: StallPolicy = StallPolicy.GREEDY
    measure_leaves: bool = False
    go_binary: str = "go"
    top: Optional[int] = None

    def merged(self, **overrides: Any) -> "GoModSizeConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "stall_policy" in changes:
            changes["stall_policy"] = StallPolicy(changes["stall_policy"])
        if "module_root" in changes:
            changes["module_root"] = Path(changes["module_root"]).expanduser()
        return replace(self, **changes)


def load_config(config_path: Path, *, explicit: bool = False) -> GoModSizeConfig:
    """Load configuration from disk, falling back to defaults when absent.

    ``config_path`` may be a directory or any file inside it; either way the
    `.gomodsize.yml` next to it is read. With ``explicit`` the path names the
    configuration file itself.
    """
    config_file = _resolve_config_path(config_path, explicit=explicit)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GoModSizeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    module_root_str = _as_str(data.get("module_root"))
    module_root = None
    if module_root_str:
        module_root = Path(module_root_str).expanduser()
        if not module_root.is_absolute():
            module_root = root / module_root

    max_rounds = _as_int(data.get("max_rounds"))
    if max_rounds is None or max_rounds < 1:
        max_rounds = DEFAULT_MAX_ROUNDS

    top = _as_int(data.get("top"))
    if top is not None and top < 0:
        top = None

    return GoModSizeConfig(
        root=root,
        module_root=module_root,
        max_rounds=max_rounds,
        stall_policy=_as_policy(data.get("stall_policy")) or StallPolicy.GREEDY,
        measure_leaves=_as_bool(data.get("measure_leaves")) or False,
        go_binary=_as_str(data.get("go_binary")) or "go",
        top=top,
    )


def _resolve_config_path(config_path: Path, *, explicit: bool = False) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if not explicit and config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.replace("_", ""))
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_policy(value: Any) -> Optional[StallPolicy]:
    if not isinstance(value, str):
        return None
    try:
        return StallPolicy(value.strip().lower())
    except ValueError:
        return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "GoModSizeConfig", "load_config"]
