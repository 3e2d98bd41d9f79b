from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from codestructure.core.errors import ConfigError
from codestructure.core.languages import LanguageFamily, classify

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "analysis": {
        "max_input_bytes": 2 * 1024 * 1024,
        "oversize": "truncate",
    },
    "languages": {
        "enabled": [
            "javascript",
            "typescript",
            "python",
            "rust",
            "go",
            "java",
            "csharp",
        ]
    },
    "scan": {
        "ignored_dirs": [
            ".git",
            ".hg",
            ".svn",
            ".idea",
            ".vscode",
            ".venv",
            "venv",
            "__pycache__",
            "node_modules",
            "dist",
            "build",
            "target",
            "vendor",
            "bin",
            "obj",
        ],
    },
    "reporting": {
        "format": "text",
        "json_indent": 2,
    },
}

OVERSIZE_POLICIES = ("truncate", "skip")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class Config:
    data: Dict[str, Any]

    @classmethod
    def default(cls) -> "Config":
        return cls(copy.deepcopy(DEFAULT_CONFIG))

    @classmethod
    def load(cls, path: Optional[str]) -> "Config":
        if not path:
            return cls.default()
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        raw = config_path.read_text(encoding="utf-8")
        try:
            if config_path.suffix.lower() in {".json"}:
                overrides = json.loads(raw)
            else:
                overrides = yaml.safe_load(raw) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot parse config file {path}: {e}") from e
        if not isinstance(overrides, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        logger.debug("Loaded configuration overrides from %s", path)
        return cls.from_dict(overrides)

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "Config":
        merged = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), overrides)
        config = cls(merged)
        config._validate()
        return config

    def _validate(self) -> None:
        limit = self.max_input_bytes()
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
            raise ConfigError(f"analysis.max_input_bytes must be a positive integer, got {limit!r}")
        if self.oversize_policy() not in OVERSIZE_POLICIES:
            raise ConfigError(
                f"analysis.oversize must be one of {', '.join(OVERSIZE_POLICIES)}, "
                f"got {self.oversize_policy()!r}"
            )

    def max_input_bytes(self) -> int:
        return self.data.get("analysis", {}).get("max_input_bytes", DEFAULT_CONFIG["analysis"]["max_input_bytes"])

    def oversize_policy(self) -> str:
        return self.data.get("analysis", {}).get("oversize", "truncate")

    def languages(self) -> set[LanguageFamily]:
        enabled = self.data.get("languages", {}).get("enabled", [])
        families = {classify(name) for name in enabled}
        families.discard(LanguageFamily.UNKNOWN)
        return families

    def ignored_dirs(self) -> set[str]:
        return set(self.data.get("scan", {}).get("ignored_dirs", []))

    def reporting(self) -> Dict[str, Any]:
        return self.data.get("reporting", {})
