"""
Sample rate conversion utilities.

The music track is aligned to the voice's rate before rendering.
Linear interpolation is enough for a background bed.
"""

from __future__ import annotations

import numpy as np

from voiceover_mixer.audio import AudioSignal


def convert_sample_rate(
    audio: np.ndarray,
    from_rate: int,
    to_rate: int,
) -> np.ndarray:
    """
    Convert sample rate of 1-D audio by linear interpolation.

    Args:
        audio: Input audio samples
        from_rate: Source sample rate
        to_rate: Target sample rate

    Returns:
        Resampled audio (same dtype), never shorter than one sample
        unless the input is empty
    """
    if from_rate == to_rate:
        return audio.copy()

    if len(audio) == 0:
        return np.array([], dtype=audio.dtype)

    new_length = max(1, int(len(audio) * to_rate / from_rate))

    positions = np.arange(new_length) * (from_rate / to_rate)
    return np.interp(positions, np.arange(len(audio)), audio).astype(audio.dtype)


def resample_signal(signal: AudioSignal, to_rate: int) -> AudioSignal:
    """Resample every channel of a signal. Returns the input if rates match."""
    if signal.sample_rate == to_rate:
        return signal

    channels = [
        convert_sample_rate(signal.channel(ch), signal.sample_rate, to_rate)
        for ch in range(signal.channels)
    ]
    return AudioSignal(np.stack(channels), to_rate)


__all__ = [
    "convert_sample_rate",
    "resample_signal",
]
