"""Load RippleConfig from ripple.yaml or ripple.toml if present.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from ripple._errors import ConfigError
from ripple.config import RippleConfig

_KNOWN_KEYS = frozenset({
    "templates_dir", "wire_format", "default_channel", "channel_timeout",
    "max_pending", "publish_interval", "event_name",
})


def load_config(root: Path, **overrides: object) -> RippleConfig:
    """Load RippleConfig from root, optionally merging ripple.yaml.

    Looks for ripple.yaml, ripple.yml, or ripple.toml in root.  A relative
    ``templates_dir`` is interpreted relative to root.
    """
    file_config = _read_ripple_config(root)
    merged = {**file_config, **overrides}
    templates_dir = Path(str(merged.pop("templates_dir", "templates")))
    if not templates_dir.is_absolute():
        templates_dir = root / templates_dir
    return RippleConfig(templates_dir=templates_dir, **merged)  # type: ignore[arg-type]


def _read_ripple_config(root: Path) -> dict[str, object]:
    """Read ripple config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("ripple.yaml", "ripple.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "ripple.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ConfigError(msg)
    return _flatten_ripple_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_ripple_section(data)


def _flatten_ripple_section(data: dict[str, object]) -> dict[str, object]:
    """Extract ripple.* keys into top-level config; unknown keys are ignored."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("ripple")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
