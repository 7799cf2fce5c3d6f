"""
Audio value types shared by every pipeline stage.

    AudioSignal   - Immutable multi-channel float32 buffer + sample rate
    SpeechSegment - Interval of detected speech in the voice timeline

Samples are stored channel-major, shape ``(channels, frames)``. The
array is flagged read-only so a stage can never mutate a buffer it
received from the previous stage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from voiceover_mixer.errors import InvalidInputError


@dataclass(frozen=True, eq=False)
class AudioSignal:
    """Decoded audio, as produced by a host decoder.

    Attributes:
        samples: float32 array shaped (channels, frames). A 1-D array
            is treated as a single channel.
        sample_rate: Sample rate in Hz.
    """
    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        samples = np.array(self.samples, dtype=np.float32, copy=True)
        if samples.ndim == 1:
            samples = samples.reshape(1, -1)
        if samples.ndim != 2:
            raise InvalidInputError(
                f"samples must be 1-D or 2-D, got {samples.ndim} dimensions",
                field="samples",
            )
        samples.flags.writeable = False
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))

    @classmethod
    def from_channels(
        cls,
        channels: Sequence[Sequence[float]],
        sample_rate: int,
    ) -> "AudioSignal":
        """Build a signal from per-channel sample sequences."""
        lengths = {len(ch) for ch in channels}
        if len(lengths) > 1:
            raise InvalidInputError(
                f"all channels must have the same frame count, got {sorted(lengths)}",
                field="samples",
            )
        return cls(np.asarray(channels, dtype=np.float32), sample_rate)

    @classmethod
    def silence(cls, channels: int, frames: int, sample_rate: int) -> "AudioSignal":
        """Create an all-zero signal."""
        return cls(np.zeros((channels, frames), dtype=np.float32), sample_rate)

    @property
    def channels(self) -> int:
        return self.samples.shape[0]

    @property
    def frames(self) -> int:
        return self.samples.shape[1]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        if self.sample_rate <= 0:
            return 0.0
        return self.frames / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        """Read-only view of one channel."""
        return self.samples[index]

    def validate(self, name: str = "signal") -> "AudioSignal":
        """Fail fast on input the pipeline cannot process.

        Returns:
            self, so calls can be chained.

        Raises:
            InvalidInputError: On zero channels/frames, non-positive
                sample rate, or non-finite samples.
        """
        if self.sample_rate <= 0:
            raise InvalidInputError(
                f"{name}: sample rate must be positive, got {self.sample_rate}",
                field="sample_rate",
                details={"signal": name},
            )
        if self.channels == 0:
            raise InvalidInputError(
                f"{name}: signal has no channels",
                field="samples",
                details={"signal": name},
            )
        if self.frames == 0:
            raise InvalidInputError(
                f"{name}: signal has zero frames",
                field="samples",
                details={"signal": name},
            )
        if not np.all(np.isfinite(self.samples)):
            raise InvalidInputError(
                f"{name}: signal contains NaN or infinite samples",
                field="samples",
                details={"signal": name},
            )
        return self

    def __repr__(self) -> str:
        return (
            f"AudioSignal(channels={self.channels}, frames={self.frames}, "
            f"sample_rate={self.sample_rate})"
        )


@dataclass(frozen=True)
class SpeechSegment:
    """A span of detected speech, in seconds from the start of the voice."""
    start: float
    end: float

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"end must be > start, got start={self.start}, end={self.end}")

    @property
    def duration(self) -> float:
        return self.end - self.start


__all__ = [
    "AudioSignal",
    "SpeechSegment",
]
