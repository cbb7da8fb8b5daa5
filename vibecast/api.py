"""Station directory client and the records it returns."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping

import requests

API_BASE_URL = "https://api.somafm.com"
SONGS_URL = "https://somafm.com/songs/{}.json"
FALLBACK_STREAM_URL = "https://ice.somafm.com/{}"

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


class AudioQuality(enum.Enum):
    """Stream quality levels, best first."""

    HIGHEST = "highest"
    HIGH = "high"
    LOW = "low"

    def higher(self) -> "AudioQuality":
        """One step up in quality, staying at the top."""
        if self is AudioQuality.LOW:
            return AudioQuality.HIGH
        return AudioQuality.HIGHEST

    def lower(self) -> "AudioQuality":
        """One step down in quality, staying at the bottom."""
        if self is AudioQuality.HIGHEST:
            return AudioQuality.HIGH
        return AudioQuality.LOW

    def label(self) -> str:
        return {
            AudioQuality.HIGHEST: "HQ",
            AudioQuality.HIGH: "MQ",
            AudioQuality.LOW: "LQ",
        }[self]


def _require_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string or null")
    return value


def _parse_unsigned(text: str, limit: int, key: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"field {key!r} is not an unsigned integer: {text!r}")
    value = int(digits)
    if value > limit:
        raise ValueError(f"field {key!r} is out of range: {text!r}")
    return value


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object")
    return data


@dataclass(frozen=True)
class Playlist:
    url: str
    format: str
    quality: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Playlist":
        data = _require_mapping(data, "playlist")
        return cls(
            url=_require_str(data, "url"),
            format=_require_str(data, "format"),
            quality=_require_str(data, "quality"),
        )


@dataclass
class Channel:
    id: str
    title: str
    description: str
    genre: str
    dj: str
    listeners: int
    image: str
    largeimage: str
    last_playing: str
    playlists: list[Playlist] = field(default_factory=list)
    djmail: str | None = None
    xlimage: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Channel":
        data = _require_mapping(data, "channel")
        playlists = data.get("playlists")
        if not isinstance(playlists, list):
            raise ValueError("field 'playlists' must be a list")
        return cls(
            id=_require_str(data, "id"),
            title=_require_str(data, "title"),
            description=_require_str(data, "description"),
            genre=_require_str(data, "genre"),
            dj=_require_str(data, "dj"),
            listeners=_parse_unsigned(_require_str(data, "listeners"), _U32_MAX, "listeners"),
            image=_require_str(data, "image"),
            largeimage=_require_str(data, "largeimage"),
            last_playing=_require_str(data, "lastPlaying"),
            playlists=[Playlist.from_dict(item) for item in playlists],
            djmail=_optional_str(data, "djmail"),
            xlimage=_optional_str(data, "xlimage"),
        )

    def _find(self, quality: str, fmt: str | None = None) -> Playlist | None:
        return next(
            (
                p
                for p in self.playlists
                if p.quality == quality and (fmt is None or p.format == fmt)
            ),
            None,
        )

    def _preferred(self, quality: str) -> Playlist | None:
        return self._find(quality, "aac") or self._find(quality, "mp3") or self._find(quality)

    def stream_url(self, quality: AudioQuality) -> str:
        """Stream URL for the given quality: AAC, then MP3, then any format."""
        playlist = self._preferred(quality.value)
        if playlist is not None:
            return playlist.url
        return self.best_stream_url()

    def best_stream_url(self) -> str:
        """Highest-quality AAC, then MP3, then any highest, then the first playlist."""
        playlist = self._preferred(AudioQuality.HIGHEST.value)
        if playlist is not None:
            return playlist.url
        if self.playlists:
            return self.playlists[0].url
        return FALLBACK_STREAM_URL.format(self.id)

    def format_listeners(self) -> str:
        if self.listeners >= 1000:
            return f"{self.listeners / 1000.0:.1f}k"
        return str(self.listeners)


@dataclass
class Song:
    title: str
    artist: str
    album: str | None = None
    album_art: str | None = None
    date: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Song":
        data = _require_mapping(data, "song")
        raw_date = _optional_str(data, "date")
        date = _parse_unsigned(raw_date, _U64_MAX, "date") if raw_date else None
        return cls(
            title=_require_str(data, "title"),
            artist=_require_str(data, "artist"),
            album=_optional_str(data, "album"),
            album_art=_optional_str(data, "albumArt"),
            date=date,
        )


def parse_channels(payload: Any) -> list[Channel]:
    """Channels from a decoded channel directory document."""
    payload = _require_mapping(payload, "channel directory")
    channels = payload.get("channels")
    if not isinstance(channels, list):
        raise ValueError("field 'channels' must be a list")
    return [Channel.from_dict(item) for item in channels]


def parse_songs(payload: Any) -> list[Song]:
    """Songs from a decoded song list document, newest first."""
    payload = _require_mapping(payload, "song list")
    songs = payload.get("songs")
    if not isinstance(songs, list):
        raise ValueError("field 'songs' must be a list")
    return [Song.from_dict(item) for item in songs]


class SomaFmClient:
    """Fetches the channel directory and recent songs over HTTP."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def _get_json(self, url: str) -> Any:
        response = self._session.get(url, timeout=self._timeout)
        return response.json()

    def get_channels(self) -> list[Channel]:
        return parse_channels(self._get_json(f"{self.base_url}/channels.json"))

    def get_songs(self, channel_id: str) -> list[Song]:
        return parse_songs(self._get_json(SONGS_URL.format(channel_id)))

    def get_current_song(self, channel_id: str) -> Song | None:
        return next(iter(self.get_songs(channel_id)), None)