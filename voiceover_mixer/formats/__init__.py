"""
Audio Formats Module.

Provides output shaping and container handling:
- Peak normalization
- 16-bit PCM WAV encoding/decoding
- Sample rate alignment
- File loading (via soundfile) and saving

Example:
    from voiceover_mixer.formats import normalize_peak, encode_wav

    normalized = normalize_peak(mix, target_peak=0.98)
    wav_bytes = encode_wav(normalized)
"""

from voiceover_mixer.formats.normalize import (
    normalize_peak,
    peak_level,
    DEFAULT_TARGET_PEAK,
)
from voiceover_mixer.formats.converter import (
    encode_wav,
    decode_wav,
    save_wav,
    load_signal,
    float_to_pcm16,
    pcm16_to_float,
    WAV_HEADER_SIZE,
)
from voiceover_mixer.formats.sample_rate import (
    convert_sample_rate,
    resample_signal,
)

__all__ = [
    # Normalization
    "normalize_peak",
    "peak_level",
    "DEFAULT_TARGET_PEAK",
    # WAV
    "encode_wav",
    "decode_wav",
    "save_wav",
    "load_signal",
    "float_to_pcm16",
    "pcm16_to_float",
    "WAV_HEADER_SIZE",
    # Sample Rate
    "convert_sample_rate",
    "resample_signal",
]
