"""Control of an mpv process over its JSON IPC interface."""

from __future__ import annotations

import itertools
import json
import logging
import math
import os
import queue
import socket
import subprocess
import tempfile
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Callable, Sequence

log = logging.getLogger(__name__)

_WINDOWS = os.name == "nt"
_ERROR_PIPE_BUSY = 231
_CONNECT_ATTEMPTS = 50
_CONNECT_DELAY = 0.1
_STARTUP_DELAY = 0.5

COMMAND_TIMEOUT = 2.0
STATS_TIMEOUT = 0.2
AUDIO_FILTER = "--af=lavfi=[astats=metadata=1:reset=1:measure_perchannel=none]"
_RMS_PATHS = (
    "af-metadata/lavfi.astats.Overall.RMS_level",
    "af-metadata/lavfi.astats.1.RMS_level",
)


class MpvError(RuntimeError):
    """mpv could not be started, reached or gave an error reply."""


@dataclass
class PlaybackState:
    playing: bool = False
    paused: bool = False
    volume: int = 80
    title: str | None = None
    artist: str | None = None


def split_icy_title(title: str) -> tuple[str, str] | None:
    """Split an "Artist - Title" stream title at its first separator."""
    artist, sep, rest = title.partition(" - ")
    if not sep:
        return None
    return artist, rest


def pseudo_levels(playback_time: float) -> tuple[float, float]:
    """Deterministic (rms_db, peak_db) levels derived from the playback position."""
    t = playback_time
    base = math.sin(t * 7.3) * 0.3 + math.cos(t * 11.7) * 0.2 + 0.5
    beat = abs(math.sin(t * 2.5)) ** 2.0 * 0.3
    variation = math.sin(t * 23.1) * 0.15
    rms = -12.0 + base * 8.0 + beat * 6.0 + variation * 4.0
    peak = rms + 2.0 + abs(math.sin(t * 31.4)) * 3.0
    return min(max(rms, -18.0), -3.0), min(max(peak, -15.0), 0.0)


def _default_ipc_path() -> str:
    if _WINDOWS:
        return rf"\\.\pipe\vibecast_mpv_{os.getpid()}"
    return str(Path(tempfile.gettempdir()) / f"vibecast_mpv_{os.getpid()}.sock")


class _Connection:
    """A line-oriented duplex stream whose incoming lines are read by a thread."""

    def __init__(self, stream: BinaryIO, closer: Callable[[], None]) -> None:
        self._stream = stream
        self._closer = closer
        self._lines: queue.Queue[bytes | None] = queue.Queue()
        self._reader = threading.Thread(target=self._pump, daemon=True)
        self._reader.start()

    @classmethod
    def from_socket(cls, sock: socket.socket) -> "_Connection":
        stream = sock.makefile("rwb")

        def closer() -> None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()

        return cls(stream, closer)  # type: ignore[arg-type]

    def _pump(self) -> None:
        try:
            for line in iter(self._stream.readline, b""):
                self._lines.put(line)
        except (OSError, ValueError):
            pass
        finally:
            self._lines.put(None)
            try:
                self._stream.close()
            except (OSError, ValueError):
                pass

    def send(self, data: bytes) -> None:
        try:
            self._stream.write(data)
            self._stream.flush()
        except (OSError, ValueError) as exc:
            raise MpvError(f"Write error: {exc}") from exc

    def read_line(self, timeout: float) -> bytes:
        try:
            line = self._lines.get(timeout=timeout)
        except queue.Empty:
            raise MpvError("Timeout waiting for mpv response") from None
        if line is None:
            self._lines.put(None)
            raise MpvError("mpv connection closed")
        return line

    def close(self) -> None:
        try:
            self._closer()
        except OSError:
            pass


class MpvController:
    """Starts mpv for a stream URL and drives it over IPC."""

    def __init__(self, socket_path: str | os.PathLike[str] | None = None) -> None:
        self.socket_path = str(socket_path) if socket_path is not None else _default_ipc_path()
        self.state = PlaybackState()
        self._child: subprocess.Popen[bytes] | None = None
        self._connection: _Connection | None = None
        self._request_ids = itertools.count(1)

    def ipc_server_arg(self) -> str:
        return f"--input-ipc-server={self.socket_path}"

    def play(self, url: str) -> None:
        """Stop any current stream and start playing the given URL."""
        self.stop()
        self._remove_socket()
        args = [
            "mpv",
            "--no-video",
            "--no-terminal",
            "--really-quiet",
            self.ipc_server_arg(),
            f"--volume={self.state.volume}",
            AUDIO_FILTER,
            url,
        ]
        try:
            self._child = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise MpvError(f"failed to start mpv: {exc}") from exc

        if _WINDOWS:
            self._connect_pipe()
        else:
            self._connect_socket()

        time.sleep(_STARTUP_DELAY)
        self.state.playing = True
        self.state.paused = False

    def _attach_socket(self, sock: socket.socket) -> None:
        self._connection = _Connection.from_socket(sock)

    def _connect_socket(self) -> None:
        path = Path(self.socket_path)
        for _ in range(_CONNECT_ATTEMPTS):
            time.sleep(_CONNECT_DELAY)
            if path.exists():
                break
        if not path.exists():
            self._discard_child()
            raise MpvError("mpv socket not created")

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(self.socket_path)
        except OSError as exc:
            sock.close()
            self.stop()
            raise MpvError(f"cannot connect to mpv: {exc}") from exc
        self._attach_socket(sock)

    def _connect_pipe(self) -> None:
        for _ in range(_CONNECT_ATTEMPTS):
            try:
                stream = open(self.socket_path, "r+b", buffering=0)
            except FileNotFoundError:
                pass
            except OSError as exc:
                if getattr(exc, "winerror", None) != _ERROR_PIPE_BUSY:
                    self.stop()
                    raise MpvError(f"cannot connect to mpv: {exc}") from exc
            else:
                self._connection = _Connection(stream, stream.close)
                return
            time.sleep(_CONNECT_DELAY)
        self._discard_child()
        raise MpvError("mpv pipe not created")

    @staticmethod
    def _kill(child: subprocess.Popen[bytes]) -> None:
        try:
            if _WINDOWS:
                subprocess.run(
                    ["taskkill", "/F", "/T", "/PID", str(child.pid)],
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    check=False,
                )
            else:
                child.kill()
        except OSError:
            pass
        try:
            child.wait()
        except OSError:
            pass

    def _discard_child(self) -> None:
        child, self._child = self._child, None
        if child is not None:
            self._kill(child)

    def _remove_socket(self) -> None:
        if _WINDOWS:
            return
        try:
            Path(self.socket_path).unlink(missing_ok=True)
        except OSError:
            pass

    def stop(self) -> None:
        """Close the IPC connection, end the mpv process and reset the state."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self._discard_child()
        self.state.playing = False
        self.state.paused = False
        self._remove_socket()

    def send_command(self, command: Sequence[Any], timeout: float = COMMAND_TIMEOUT) -> Any:
        """Send one command and return the data of its reply, skipping events."""
        connection = self._connection
        if connection is None:
            raise MpvError("Not connected to mpv")
        request_id = next(self._request_ids)
        message = json.dumps({"command": list(command), "request_id": request_id})
        connection.send(message.encode("utf-8") + b"\n")

        while True:
            line = connection.read_line(timeout)
            try:
                response = json.loads(line)
            except ValueError:
                continue
            if not isinstance(response, dict) or response.get("event") is not None:
                continue
            if response.get("request_id", 0) != request_id:
                continue
            error = response.get("error", "")
            if error and error != "success":
                raise MpvError(f"mpv error: {error}")
            return response.get("data")

    def toggle_pause(self) -> None:
        if not self.state.playing:
            return
        try:
            self.send_command(["cycle", "pause"])
        except MpvError as exc:
            log.warning("Failed to toggle pause: %s", exc)
            return
        self.state.paused = not self.state.paused

    def set_volume(self, volume: int) -> None:
        """Set the volume, capped at 100; the local value is kept even if mpv fails."""
        volume = min(max(volume, 0), 100)
        if self.state.playing:
            try:
                self.send_command(["set_property", "volume", volume])
            except MpvError as exc:
                log.warning("Failed to set volume: %s", exc)
        self.state.volume = volume

    def volume_up(self) -> None:
        self.set_volume(min(self.state.volume + 5, 100))

    def volume_down(self) -> None:
        self.set_volume(max(self.state.volume - 5, 0))

    def _remember(self, artist: str, title: str) -> tuple[str, str]:
        self.state.artist = artist
        self.state.title = title
        return artist, title

    def get_metadata(self) -> tuple[str, str] | None:
        """The current (artist, title) from the stream, if mpv knows it."""
        if self._connection is None:
            return None

        try:
            media_title = self.send_command(["get_property", "media-title"])
        except MpvError:
            media_title = None
        if isinstance(media_title, str) and media_title:
            parts = split_icy_title(media_title)
            if parts is not None:
                return self._remember(*parts)
            self.state.title = media_title
            return "", media_title

        try:
            metadata = self.send_command(["get_property", "metadata"])
        except MpvError:
            return None
        if not isinstance(metadata, dict):
            return None

        raw_title = metadata["icy-title"] if "icy-title" in metadata else metadata.get("title")
        title = raw_title if isinstance(raw_title, str) else None
        raw_artist = metadata.get("artist")
        artist = raw_artist if isinstance(raw_artist, str) else None

        if title is not None:
            parts = split_icy_title(title)
            if parts is not None:
                return self._remember(*parts)

        self.state.title = title
        self.state.artist = artist
        if title is not None or artist is not None:
            return artist or "", title or ""
        return None

    def is_playing(self) -> bool:
        return self.state.playing and not self.state.paused

    def _get_property(self, name: str) -> Any:
        try:
            return self.send_command(["get_property", name], STATS_TIMEOUT)
        except MpvError:
            return None

    def get_audio_stats(self) -> tuple[float, float] | None:
        """Current (rms_db, peak_db) from the astats filter, or an estimate."""
        if self._connection is None or not self.state.playing or self.state.paused:
            return None

        for path in _RMS_PATHS:
            value = self._get_property(path)
            if not isinstance(value, str):
                continue
            try:
                rms = float(value)
            except ValueError:
                continue
            peak_value = self._get_property(path.replace("RMS_level", "Peak_level"))
            peak = rms + 3.0
            if isinstance(peak_value, str):
                try:
                    peak = float(peak_value)
                except ValueError:
                    pass
            return rms, peak

        playback_time = self._get_property("playback-time")
        if isinstance(playback_time, (int, float)) and not isinstance(playback_time, bool):
            return pseudo_levels(float(playback_time))
        return None

    def close(self) -> None:
        self.stop()

    def __enter__(self) -> "MpvController":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()