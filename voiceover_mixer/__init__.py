"""
Voiceover Mixer - Offline voice-over + music mixing with auto-ducking.

Architecture:
    Detector → Envelope → Renderer → Normalizer → WAV

Public API (stable):
    DuckingMixer      - Main interface. Call .mix(voice, music).
    MixResult         - Returned by .mix(). Contains .wav bytes and the signal.
    MixParameters     - Ducking, detection and output settings.
    AudioSignal       - Decoded audio (float32, channels x frames).
    mix_with_ducking  - One-liner: mix_with_ducking(voice, music) -> MixResult

Building blocks:
    voiceover_mixer.runtime   - detect_speech, generate_envelope, render_mix
    voiceover_mixer.formats   - normalize_peak, encode_wav, decode_wav, load_signal
    voiceover_mixer.testing   - Synthetic signal fixtures

Example:
    from voiceover_mixer import DuckingMixer
    from voiceover_mixer.formats import load_signal

    voice = load_signal("voice.wav")
    music = load_signal("music.mp3")

    result = DuckingMixer().mix(voice, music)
    Path("mixed.wav").write_bytes(result.wav)
"""

from voiceover_mixer.audio import AudioSignal, SpeechSegment
from voiceover_mixer.config import (
    MixParameters,
    DEFAULT_PARAMETERS,
    PODCAST_PARAMETERS,
)
from voiceover_mixer.errors import (
    MixerError,
    InvalidInputError,
    DegenerateSignalError,
)
from voiceover_mixer.runtime import (
    DuckingMixer,
    MixResult,
    mix_with_ducking,
    GainEnvelope,
    GainBreakpoint,
    RampMode,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "DuckingMixer",
    "MixResult",
    "mix_with_ducking",
    # Types
    "AudioSignal",
    "SpeechSegment",
    "GainEnvelope",
    "GainBreakpoint",
    "RampMode",
    # Config
    "MixParameters",
    "DEFAULT_PARAMETERS",
    "PODCAST_PARAMETERS",
    # Errors
    "MixerError",
    "InvalidInputError",
    "DegenerateSignalError",
    "__version__",
]
