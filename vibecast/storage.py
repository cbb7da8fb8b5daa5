"""Persistent settings and favourite stations."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from vibecast.ui.theme import ThemeType
from vibecast.ui.visualizer import VisualizationMode

APP_NAME = "vibecast"
CONFIG_FILE = "config.json"
FAVORITES_FILE = "favorites.json"


def config_dir() -> Path:
    """The per-user configuration directory, created if missing."""
    path = Path(user_config_dir(APP_NAME, appauthor=False))
    path.mkdir(parents=True, exist_ok=True)
    return path


@dataclass
class Config:
    theme: str = ""
    visualization: str = ""

    @classmethod
    def _from_json(cls, text: str) -> "Config":
        """Parse a saved document; anything malformed yields the defaults."""
        try:
            data: Any = json.loads(text)
        except ValueError:
            return cls()
        if not isinstance(data, dict):
            return cls()
        theme = data.get("theme", "")
        visualization = data.get("visualization", "")
        if not isinstance(theme, str) or not isinstance(visualization, str):
            return cls()
        return cls(theme=theme, visualization=visualization)

    def _to_json(self) -> str:
        return json.dumps(
            {"theme": self.theme, "visualization": self.visualization}, indent=2
        )


class ConfigStore:
    """User preferences kept in a JSON file."""

    def __init__(self, path: Path | str | None = None, config: Config | None = None) -> None:
        self.path = Path(path) if path is not None else Path(CONFIG_FILE)
        self.config = config if config is not None else Config()

    @classmethod
    def load(cls, path: Path | str | None = None) -> "ConfigStore":
        """Read the store; a missing or malformed file gives the defaults."""
        path = Path(path) if path is not None else config_dir() / CONFIG_FILE
        if path.exists():
            config = Config._from_json(path.read_text(encoding="utf-8"))
        else:
            config = Config()
        return cls(path, config)

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.config._to_json(), encoding="utf-8")

    def theme_type(self) -> ThemeType:
        try:
            return ThemeType(self.config.theme)
        except ValueError:
            return ThemeType.CYBERPUNK

    def set_theme(self, theme_type: ThemeType) -> None:
        self.config.theme = theme_type.label()

    def visualization_mode(self) -> VisualizationMode:
        try:
            return VisualizationMode(self.config.visualization)
        except ValueError:
            return VisualizationMode.SPIRAL

    def set_visualization(self, mode: VisualizationMode) -> None:
        self.config.visualization = mode.label()


class FavoritesStore:
    """The set of favourite station ids kept in a JSON file."""

    def __init__(
        self, path: Path | str | None = None, favorites: set[str] | None = None
    ) -> None:
        self.path = Path(path) if path is not None else Path(FAVORITES_FILE)
        self.favorites: set[str] = set(favorites) if favorites is not None else set()

    @classmethod
    def load(cls, path: Path | str | None = None) -> "FavoritesStore":
        """Read the store; a missing or malformed file gives an empty set."""
        path = Path(path) if path is not None else config_dir() / FAVORITES_FILE
        favorites: set[str] = set()
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except ValueError:
                data = None
            if isinstance(data, list) and all(isinstance(item, str) for item in data):
                favorites = set(data)
        return cls(path, favorites)

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(sorted(self.favorites), indent=2), encoding="utf-8")

    def toggle(self, station_id: str) -> bool:
        """Flip a station's favourite flag; return whether it is now a favourite."""
        if station_id in self.favorites:
            self.favorites.remove(station_id)
            return False
        self.favorites.add(station_id)
        return True

    def is_favorite(self, station_id: str) -> bool:
        return station_id in self.favorites