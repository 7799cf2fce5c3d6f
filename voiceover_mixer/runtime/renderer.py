"""
Offline Renderer - Sum the boosted voice and the ducked, looping music.

Output layout:
    - Length: voice duration + post-speech padding, rounded up to a frame
    - Channels: min(2, max(voice.channels, music.channels))
    - Sample rate: the voice's

The voice plays once from t=0. The music loops for the full output:
output frame ``i`` reads music frame ``i % music.frames``. No limiting
is applied here; the normalizer takes care of the final level.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from voiceover_mixer.audio import AudioSignal
from voiceover_mixer.config import MixParameters
from voiceover_mixer.errors import DegenerateSignalError, InvalidInputError
from voiceover_mixer.runtime.ducking import GainEnvelope

logger = logging.getLogger(__name__)

MAX_OUTPUT_CHANNELS = 2


def output_duration(voice: AudioSignal, params: MixParameters) -> float:
    """Duration of the rendered mix in seconds."""
    return voice.duration + params.post_speech_padding


def output_frame_count(voice: AudioSignal, params: MixParameters) -> int:
    """Number of frames in the rendered mix."""
    exact = voice.sample_rate * output_duration(voice, params)
    # Float error in duration * rate must not add a spurious frame.
    return math.ceil(round(exact, 9))


def output_channel_count(voice: AudioSignal, music: AudioSignal) -> int:
    return min(MAX_OUTPUT_CHANNELS, max(voice.channels, music.channels))


def _map_channels(samples: np.ndarray, channels: int) -> np.ndarray:
    """Fit a (channels, frames) array to the output channel count."""
    if samples.shape[0] == 1 and channels > 1:
        return np.repeat(samples, channels, axis=0)
    return samples[:channels]


def render_mix(
    voice: AudioSignal,
    music: AudioSignal,
    envelope: GainEnvelope,
    params: MixParameters | None = None,
    *,
    validate: bool = True,
) -> AudioSignal:
    """Render voice and looping music into a new buffer.

    Args:
        voice: Voice-over signal
        music: Music signal, already at the voice's sample rate
        envelope: Music gain over time
        params: Mix parameters (voice boost, padding)
        validate: Check both inputs first. Callers that already did may skip it.

    Returns:
        Unnormalized mix

    Raises:
        InvalidInputError: On empty/invalid inputs or mismatched rates
        DegenerateSignalError: If the sum is not finite
    """
    params = params or MixParameters()
    if validate:
        voice.validate("voice")
        music.validate("music")
    if music.sample_rate != voice.sample_rate:
        raise InvalidInputError(
            f"music sample rate {music.sample_rate} does not match voice "
            f"sample rate {voice.sample_rate}; resample first",
            field="sample_rate",
        )

    rate = voice.sample_rate
    frames = output_frame_count(voice, params)
    channels = output_channel_count(voice, music)

    output = np.zeros((channels, frames), dtype=np.float32)

    # Music: stateless loop + gain automation
    indices = np.arange(frames)
    gains = envelope.evaluate(indices / rate).astype(np.float32)
    looped = _map_channels(music.samples, channels)[:, indices % music.frames]
    output += looped * gains

    # Voice: once, from the start
    voice_frames = min(voice.frames, frames)
    voice_part = _map_channels(voice.samples, channels)[:, :voice_frames]
    output[:, :voice_frames] += voice_part * np.float32(params.voice_boost)

    if not np.all(np.isfinite(output)):
        raise DegenerateSignalError("render", "mix contains non-finite samples")

    logger.debug(
        f"Rendered {frames} frames x {channels} channel(s) at {rate}Hz "
        f"(music looped {frames / music.frames:.2f}x)"
    )
    return AudioSignal(output, rate)


__all__ = [
    "render_mix",
    "output_duration",
    "output_frame_count",
    "output_channel_count",
    "MAX_OUTPUT_CHANNELS",
]
