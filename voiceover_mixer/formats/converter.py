"""
WAV encoding and file I/O.

Output is always 16-bit PCM WAV with the canonical 44-byte header.
Float samples are clamped to [-1, 1] and scaled asymmetrically
(negative x 32768, non-negative x 32767) so +1.0 cannot overflow int16.
"""

from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import Union

import numpy as np
import soundfile as sf

from voiceover_mixer.audio import AudioSignal
from voiceover_mixer.errors import InvalidInputError

logger = logging.getLogger(__name__)

WAV_HEADER_SIZE = 44
PCM_FORMAT = 1
BIT_DEPTH = 16


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Clamp and quantize float samples to int16, truncating toward zero."""
    finite = np.nan_to_num(samples.astype(np.float64), nan=0.0, posinf=1.0, neginf=-1.0)
    clipped = np.clip(finite, -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    return np.trunc(scaled).astype(np.int16)


def pcm16_to_float(pcm: np.ndarray) -> np.ndarray:
    """Inverse of :func:`float_to_pcm16` (up to quantization)."""
    values = pcm.astype(np.float64)
    return np.where(values < 0, values / 32768.0, values / 32767.0).astype(np.float32)


def encode_wav(signal: AudioSignal) -> bytes:
    """
    Encode a signal as a 16-bit PCM WAV file.

    Args:
        signal: Signal to encode (any channel count)

    Returns:
        Complete WAV payload: 44-byte header + interleaved samples
    """
    channels = signal.channels
    block_align = channels * BIT_DEPTH // 8
    byte_rate = signal.sample_rate * block_align
    data_size = signal.frames * block_align

    buffer = io.BytesIO()

    # RIFF chunk
    buffer.write(b"RIFF")
    buffer.write(struct.pack("<I", 36 + data_size))
    buffer.write(b"WAVE")

    # fmt chunk
    buffer.write(b"fmt ")
    buffer.write(struct.pack("<I", 16))  # Chunk size
    buffer.write(struct.pack("<H", PCM_FORMAT))
    buffer.write(struct.pack("<H", channels))
    buffer.write(struct.pack("<I", signal.sample_rate))
    buffer.write(struct.pack("<I", byte_rate))
    buffer.write(struct.pack("<H", block_align))
    buffer.write(struct.pack("<H", BIT_DEPTH))

    # data chunk, frames interleaved
    buffer.write(b"data")
    buffer.write(struct.pack("<I", data_size))
    pcm = float_to_pcm16(signal.samples)
    buffer.write(pcm.T.astype("<i2").tobytes())

    return buffer.getvalue()


def decode_wav(data: bytes) -> AudioSignal:
    """
    Decode a 16-bit PCM WAV payload back into a signal.

    All channels are kept. Unknown chunks are skipped.

    Raises:
        InvalidInputError: If the payload is not PCM16 WAV
    """
    if len(data) < 12 or data[:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise InvalidInputError("Invalid WAV: missing RIFF/WAVE header", field="data")

    buffer = io.BytesIO(data)
    buffer.seek(12)

    fmt = None
    audio_data = None

    while buffer.tell() < len(data):
        chunk_id = buffer.read(4)
        size_bytes = buffer.read(4)
        if len(chunk_id) < 4 or len(size_bytes) < 4:
            break
        chunk_size = struct.unpack("<I", size_bytes)[0]

        if chunk_id == b"fmt ":
            fmt = buffer.read(chunk_size)
        elif chunk_id == b"data":
            audio_data = buffer.read(chunk_size)
        else:
            buffer.seek(chunk_size, 1)  # Skip unknown chunk

    if fmt is None or len(fmt) < 16:
        raise InvalidInputError("Invalid WAV: missing fmt chunk", field="data")
    if audio_data is None:
        raise InvalidInputError("Invalid WAV: missing data chunk", field="data")

    audio_format, channels, sample_rate = struct.unpack("<HHI", fmt[0:8])
    bit_depth = struct.unpack("<H", fmt[14:16])[0]
    if audio_format != PCM_FORMAT or bit_depth != BIT_DEPTH:
        raise InvalidInputError(
            f"Unsupported WAV encoding: format={audio_format}, bits={bit_depth}",
            field="data",
        )
    if channels == 0:
        raise InvalidInputError("Invalid WAV: zero channels", field="data")

    usable = len(audio_data) - len(audio_data) % (2 * channels)
    pcm = np.frombuffer(audio_data[:usable], dtype="<i2").reshape(-1, channels)
    return AudioSignal(pcm16_to_float(pcm.T), sample_rate)


def save_wav(signal: AudioSignal, path: Union[str, Path]) -> Path:
    """Encode a signal and write it to ``path``."""
    path = Path(path)
    path.write_bytes(encode_wav(signal))
    logger.info(f"Saved {signal.duration:.2f}s WAV to {path}")
    return path


def load_signal(path: Union[str, Path]) -> AudioSignal:
    """
    Decode any soundfile-supported audio file into a signal.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidInputError: If the file cannot be decoded or holds no audio
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Audio file not found: {path}")

    try:
        data, sample_rate = sf.read(str(path), dtype="float32", always_2d=True)
    except sf.SoundFileError as e:
        raise InvalidInputError(
            f"Could not decode {path.name}: {e}",
            field="path",
            details={"path": str(path)},
        ) from e
    signal = AudioSignal(data.T, sample_rate)
    logger.debug(
        f"Loaded {path}: {signal.channels} channel(s), {sample_rate}Hz, "
        f"{signal.duration:.2f}s"
    )
    return signal.validate(path.name)


__all__ = [
    "encode_wav",
    "decode_wav",
    "save_wav",
    "load_signal",
    "float_to_pcm16",
    "pcm16_to_float",
    "WAV_HEADER_SIZE",
]
