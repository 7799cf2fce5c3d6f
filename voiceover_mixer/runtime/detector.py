"""
Speech Activity Detector - Peak-based voice activity over fixed windows.

The first channel of the voice is cut into consecutive windows of
``analysis_window_frames``. A window counts as speech when its peak
absolute amplitude exceeds ``speech_threshold``. Pauses shorter than
``speech_hold_time`` are bridged, so breaths and short gaps do not
split a phrase into several segments.

Single pass, no look-ahead, deterministic.
"""

from __future__ import annotations

import logging

import numpy as np

from voiceover_mixer.audio import AudioSignal, SpeechSegment
from voiceover_mixer.config import MixParameters

logger = logging.getLogger(__name__)


def window_peaks(samples: np.ndarray, window: int) -> np.ndarray:
    """Peak absolute value of each consecutive window.

    The last window may be shorter than ``window``.
    """
    if len(samples) == 0:
        return np.zeros(0, dtype=np.float32)
    starts = np.arange(0, len(samples), window)
    return np.maximum.reduceat(np.abs(samples), starts)


def detect_speech(
    voice: AudioSignal,
    params: MixParameters | None = None,
    *,
    validate: bool = True,
) -> list[SpeechSegment]:
    """Detect speech segments in a voice signal.

    Args:
        voice: Voice-over signal (only channel 0 is analyzed)
        params: Detection parameters
        validate: Check the voice first. Callers that already did may skip it.

    Returns:
        Ordered, non-overlapping speech segments. Empty if the voice
        never crosses the threshold.
    """
    params = params or MixParameters()
    if validate:
        voice.validate("voice")

    data = voice.channel(0)
    rate = voice.sample_rate
    window = params.analysis_window_frames
    peaks = window_peaks(data, window)

    segments: list[SpeechSegment] = []
    seg_start: float | None = None
    seg_end = 0.0
    last_active = -1.0

    for index, peak in enumerate(peaks):
        first = index * window
        current_time = first / rate

        if peak > params.speech_threshold:
            window_end = min(first + window, voice.frames) / rate
            last_active = window_end
            if seg_start is None:
                seg_start = current_time
            seg_end = window_end
        elif seg_start is not None and current_time > last_active + params.speech_hold_time:
            segments.append(SpeechSegment(seg_start, seg_end))
            seg_start = None

    if seg_start is not None:
        segments.append(SpeechSegment(seg_start, seg_end))

    logger.debug(
        f"Detected {len(segments)} speech segment(s) in {voice.duration:.2f}s of voice"
    )
    return segments


__all__ = [
    "detect_speech",
    "window_peaks",
]
