"""Audio level tracking that drives the visualizer."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

NUM_BINS = 32


def db_to_linear(db: float) -> float:
    """Convert decibels to a linear level clamped to 0..1."""
    return min(max(10.0 ** (db / 20.0), 0.0), 1.0)


def _zeros() -> list[float]:
    return [0.0] * NUM_BINS


@dataclass
class SpectrumData:
    """Bin levels, their decaying peaks and the overall levels, all 0..1."""

    bins: list[float] = field(default_factory=_zeros)
    peaks: list[float] = field(default_factory=_zeros)
    rms: float = 0.0
    peak: float = 0.0
    has_audio: bool = False
    last_update: float = field(default_factory=time.monotonic)

    def decay(self, factor: float) -> None:
        """Scale every value down; peaks fall slightly faster than bins."""
        self.bins = [b * factor for b in self.bins]
        peak_factor = factor * 0.98
        self.peaks = [p * peak_factor for p in self.peaks]
        self.rms *= factor
        self.peak *= factor

    def simulate_from_levels(self, rms: float, peak: float) -> None:
        """Drive every bin from the overall energy, with fast attack and slow release."""
        self.rms = rms
        self.peak = peak
        self.has_audio = True
        self.last_update = time.monotonic()

        energy = min(max(rms * 0.5 + peak * 0.5, 0.0), 1.0)
        new_bins = []
        new_peaks = []
        for bin_value, peak_value in zip(self.bins, self.peaks):
            smoothing = 0.3 if energy > bin_value else 0.85
            bin_value = bin_value * smoothing + energy * (1.0 - smoothing)
            peak_value = bin_value if bin_value > peak_value else peak_value * 0.99
            new_bins.append(bin_value)
            new_peaks.append(peak_value)
        self.bins = new_bins
        self.peaks = new_peaks

    def animate(self, playing: bool, paused: bool) -> None:
        """Decay when there is no fresh audio data."""
        self.decay(0.85 if not playing or paused else 0.92)
        self.last_update = time.monotonic()

    def copy(self) -> "SpectrumData":
        return SpectrumData(
            bins=list(self.bins),
            peaks=list(self.peaks),
            rms=self.rms,
            peak=self.peak,
            has_audio=self.has_audio,
            last_update=self.last_update,
        )


class SpectrumAnalyzer:
    """Thread-safe holder of spectrum data fed from audio level readings."""

    def __init__(self) -> None:
        self._data = SpectrumData()
        self._lock = threading.Lock()
        self._active = threading.Event()

    def get_data(self) -> SpectrumData:
        with self._lock:
            return self._data.copy()

    def update_from_levels(self, rms_db: float, peak_db: float) -> None:
        rms = db_to_linear(min(max(rms_db, -60.0), 0.0))
        peak = db_to_linear(min(max(peak_db, -60.0), 0.0))
        with self._lock:
            self._data.simulate_from_levels(rms, peak)
        self._active.set()

    def animate(self, playing: bool, paused: bool) -> None:
        with self._lock:
            self._data.animate(playing, paused)

    def has_audio(self) -> bool:
        return self._active.is_set()

    def set_inactive(self) -> None:
        self._active.clear()