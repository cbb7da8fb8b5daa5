"""On-disk cache of station artwork."""

from __future__ import annotations

from pathlib import Path

import requests
from platformdirs import user_cache_dir

APP_NAME = "vibecast"
FALLBACK_CACHE_DIR = Path(".vibecast-cache") / "artwork"


def default_cache_dir() -> Path:
    """Where artwork is cached for the current user."""
    return Path(user_cache_dir(APP_NAME, appauthor=False)) / "artwork"


class ImageCache:
    """Station images, fetched once and then read from disk."""

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        if cache_dir is None:
            try:
                path = default_cache_dir()
                path.mkdir(parents=True, exist_ok=True)
            except OSError:
                path = FALLBACK_CACHE_DIR
        else:
            path = Path(cache_dir)
            path.mkdir(parents=True, exist_ok=True)
        self.cache_dir = path
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def cache_path(self, station_id: str) -> Path:
        return self.cache_dir / f"{station_id}.png"

    def get_or_fetch(self, url: str, station_id: str) -> bytes:
        """Cached image bytes, downloading and storing them on a miss."""
        path = self.cache_path(station_id)
        if path.exists():
            return path.read_bytes()
        response = self._session.get(url, timeout=self._timeout)
        response.raise_for_status()
        data = bytes(response.content)
        try:
            path.write_bytes(data)
        except OSError:
            pass
        return data

    def get_cached(self, station_id: str) -> bytes | None:
        path = self.cache_path(station_id)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError:
            return None