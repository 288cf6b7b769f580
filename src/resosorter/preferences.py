"""
Persisted UI preferences.

An opaque key-value store backed by a JSON file. The extraction core never
reads it; only the presentation layer and the CLI do.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Literal, cast

import structlog

from .utils.atomic import atomic_write_json

logger = structlog.get_logger(__name__)

Theme = Literal["light", "dark"]
THEMES = ("light", "dark")

THEME_KEY = "theme"
COLLAPSED_KEY = "collapsed"

DEFAULTS: Dict[str, Any] = {THEME_KEY: "light", COLLAPSED_KEY: False}


class PreferenceStore:
    """JSON-file key-value store with typed accessors for theme and collapsed state."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable preferences file", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed preferences file", path=str(self.path))
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, DEFAULTS.get(key, default))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        atomic_write_json(self.path, self._data)

    @property
    def theme(self) -> Theme:
        value = self.get(THEME_KEY)
        return cast(Theme, value) if value in THEMES else "light"

    @theme.setter
    def theme(self, value: str) -> None:
        if value not in THEMES:
            raise ValueError(f"Unknown theme '{value}'. Available themes: {', '.join(THEMES)}")
        self.set(THEME_KEY, value)

    @property
    def collapsed(self) -> bool:
        return bool(self.get(COLLAPSED_KEY))

    @collapsed.setter
    def collapsed(self, value: bool) -> None:
        self.set(COLLAPSED_KEY, bool(value))

    def toggle_collapsed(self) -> bool:
        self.collapsed = not self.collapsed
        return self.collapsed
