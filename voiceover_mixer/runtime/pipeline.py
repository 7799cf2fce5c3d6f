"""
Mixing pipeline - voice + music in, WAV bytes out.

    detect_speech -> generate_envelope -> render_mix -> normalize_peak -> encode_wav

Each stage allocates its own output; nothing is mutated in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from voiceover_mixer.audio import AudioSignal, SpeechSegment
from voiceover_mixer.config import MixParameters
from voiceover_mixer.formats.converter import encode_wav
from voiceover_mixer.formats.normalize import normalize_peak, peak_level
from voiceover_mixer.formats.sample_rate import resample_signal
from voiceover_mixer.runtime.detector import detect_speech
from voiceover_mixer.runtime.ducking import GainEnvelope, generate_envelope
from voiceover_mixer.runtime.renderer import output_duration, render_mix

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]

STATUS_MIXING = "Mixing audio with ducking effect..."
STATUS_NORMALIZING = "Normalizing final audio..."
STATUS_ENCODING = "Encoding final audio to WAV..."
STATUS_DONE = "Done!"


@dataclass
class MixResult:
    """Result of a complete mix."""

    signal: AudioSignal
    wav: bytes
    segments: list[SpeechSegment] = field(default_factory=list)
    envelope: GainEnvelope | None = None

    # Peak of the rendered mix before normalization
    raw_peak: float = 0.0

    @property
    def duration(self) -> float:
        return self.signal.duration

    @property
    def sample_rate(self) -> int:
        return self.signal.sample_rate

    @property
    def channels(self) -> int:
        return self.signal.channels


class DuckingMixer:
    """
    Mix a voice-over over looping background music with auto-ducking.

    Example:
        mixer = DuckingMixer(on_status=print)
        result = mixer.mix(voice, music)
        Path("mixed.wav").write_bytes(result.wav)
    """

    def __init__(
        self,
        params: MixParameters | None = None,
        on_status: StatusCallback | None = None,
    ):
        self.params = params or MixParameters()
        self._on_status = on_status

    def _status(self, message: str) -> None:
        logger.info(message)
        if self._on_status is not None:
            self._on_status(message)

    def analyze(self, voice: AudioSignal) -> tuple[list[SpeechSegment], GainEnvelope]:
        """Detect speech and build the music envelope for a voice."""
        voice.validate("voice")
        return self._analyze(voice)

    def _analyze(self, voice: AudioSignal) -> tuple[list[SpeechSegment], GainEnvelope]:
        segments = detect_speech(voice, self.params, validate=False)
        envelope = generate_envelope(
            segments,
            output_duration(voice, self.params),
            self.params,
        )
        return segments, envelope

    def render(self, voice: AudioSignal, music: AudioSignal) -> AudioSignal:
        """Render the unnormalized mix."""
        return self._render(voice, music)[0]

    def mix(self, voice: AudioSignal, music: AudioSignal) -> MixResult:
        """
        Run the full pipeline.

        Args:
            voice: Voice-over signal
            music: Background music signal (looped)

        Returns:
            MixResult with the normalized signal and WAV payload

        Raises:
            InvalidInputError: If either input is empty or malformed
        """
        rendered, segments, envelope = self._render(voice, music)

        self._status(STATUS_NORMALIZING)
        raw_peak = peak_level(rendered)
        normalized = normalize_peak(rendered, self.params.normalization_target_peak)

        self._status(STATUS_ENCODING)
        wav = encode_wav(normalized)

        self._status(STATUS_DONE)
        return MixResult(
            signal=normalized,
            wav=wav,
            segments=segments,
            envelope=envelope,
            raw_peak=raw_peak,
        )

    def _render(
        self,
        voice: AudioSignal,
        music: AudioSignal,
    ) -> tuple[AudioSignal, list[SpeechSegment], GainEnvelope]:
        voice.validate("voice")
        music.validate("music")

        self._status(STATUS_MIXING)
        if music.sample_rate != voice.sample_rate:
            logger.info(
                f"Resampling music {music.sample_rate}Hz -> {voice.sample_rate}Hz"
            )
            music = resample_signal(music, voice.sample_rate)

        segments, envelope = self._analyze(voice)
        rendered = render_mix(voice, music, envelope, self.params, validate=False)
        return rendered, segments, envelope


def mix_with_ducking(
    voice: AudioSignal,
    music: AudioSignal,
    params: MixParameters | None = None,
) -> MixResult:
    """
    Mix voice and music in one call.

    Convenience wrapper around DuckingMixer.

    Example:
        result = mix_with_ducking(voice, music)
        with open("output.wav", "wb") as f:
            f.write(result.wav)
    """
    return DuckingMixer(params).mix(voice, music)


__all__ = [
    "DuckingMixer",
    "MixResult",
    "mix_with_ducking",
    "StatusCallback",
    "STATUS_MIXING",
    "STATUS_NORMALIZING",
    "STATUS_ENCODING",
    "STATUS_DONE",
]
