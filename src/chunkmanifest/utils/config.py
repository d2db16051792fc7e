from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from chunkmanifest.errors import ManifestConfigError


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """Load YAML config into a dict."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass
class AppConfig:
    raw: Dict[str, Any]

    @classmethod
    def from_files(cls, *paths: str | Path) -> "AppConfig":
        merged: Dict[str, Any] = {}
        for path in paths:
            loaded = load_yaml(path)
            if not isinstance(loaded, dict):
                raise ManifestConfigError(f"Config file {path} must contain a mapping, got {type(loaded).__name__}")
            merged = deep_merge(merged, loaded)
        return cls(raw=merged)

    def manifest_section(self) -> Dict[str, Any]:
        section = self.raw.get("manifest", self.raw)
        if not isinstance(section, dict):
            raise ManifestConfigError("'manifest' config section must be a mapping")
        return section


def option_str(section: Dict[str, Any], *names: str) -> Optional[str]:
    """Return the first option present under any of ``names``; must be a string."""
    for name in names:
        if name in section and section[name] is not None:
            value = section[name]
            if not isinstance(value, str):
                raise ManifestConfigError(f"Option '{name}' must be a string, got {type(value).__name__}")
            return value
    return None
