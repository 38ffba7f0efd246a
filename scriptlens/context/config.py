"""Configuration helpers for context extraction."""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

__all__ = [
    "ContextLimits",
    "load_context_config",
]

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path("config/context.yaml")


@dataclass(frozen=True, slots=True)
class ContextLimits:
    """Bounds applied while gathering and rendering prompt context."""

    max_characters: int = 5
    max_action_lines: int = 3
    note_excerpt_chars: int = 300
    visual_excerpt_chars: int = 400
    max_visual_sentences: int = 3

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ContextLimits":
        known = {item.name for item in fields(cls)}
        unknown = sorted(str(key) for key in payload if key not in known)
        if unknown:
            raise ValueError(f"Unknown context settings: {', '.join(unknown)}")

        values: dict[str, int] = {}
        for key, raw in payload.items():
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise ValueError(f"Context setting '{key}' must be an integer")
            if raw <= 0:
                raise ValueError(f"Context setting '{key}' must be positive")
            values[str(key)] = raw
        return cls(**values)


def load_context_config(config_path: Path | None) -> ContextLimits:
    """Load context limits from YAML or fall back to defaults."""

    if config_path is not None:
        resolved = Path(config_path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Context config '{resolved}' does not exist")
        return _load_yaml(resolved)

    if _DEFAULT_CONFIG_PATH.exists():
        return _load_yaml(_DEFAULT_CONFIG_PATH)

    return ContextLimits()


def _load_yaml(path: Path) -> ContextLimits:
    raw = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in '{path}': {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("Context config must be a mapping")
    section = data.get("context", data)
    if not isinstance(section, Mapping):
        raise ValueError("Context config 'context' section must be a mapping")
    logger.debug("Loaded context limits from %s", path)
    return ContextLimits.from_mapping(section)
