"""
Test Fixtures - Synthetic signals for testing.

Provides:
    - Tones, silence and noise
    - Voice-like signals with speech bursts at known times
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from voiceover_mixer.audio import AudioSignal


def create_test_audio(
    duration: float = 1.0,
    sample_rate: int = 8000,
    frequency: float = 440.0,
    amplitude: float = 0.5,
    audio_type: str = "tone",
) -> np.ndarray:
    """
    Create 1-D test audio data.
    
    Args:
        duration: Duration in seconds
        sample_rate: Sample rate in Hz
        frequency: Frequency for tone (if audio_type == "tone")
        amplitude: Amplitude (0-1)
        audio_type: Type of audio ("tone", "silence", "noise", "dc")
        
    Returns:
        Float32 numpy array
    """
    num_samples = int(round(duration * sample_rate))
    
    if audio_type == "silence":
        return np.zeros(num_samples, dtype=np.float32)
    
    elif audio_type == "tone":
        t = np.arange(num_samples) / sample_rate
        return (np.sin(2 * np.pi * frequency * t) * amplitude).astype(np.float32)
    
    elif audio_type == "noise":
        rng = np.random.default_rng(0)
        return rng.uniform(-amplitude, amplitude, num_samples).astype(np.float32)
    
    elif audio_type == "dc":
        return np.full(num_samples, amplitude, dtype=np.float32)
    
    else:
        raise ValueError(f"Unknown audio_type: {audio_type}")


def create_test_signal(
    duration: float = 1.0,
    sample_rate: int = 8000,
    channels: int = 1,
    **kwargs,
) -> AudioSignal:
    """Create a test AudioSignal with the same content on every channel."""
    audio = create_test_audio(duration, sample_rate, **kwargs)
    return AudioSignal(np.tile(audio, (channels, 1)), sample_rate)


def create_speech_signal(
    bursts: Sequence[tuple[float, float]],
    duration: float,
    sample_rate: int = 8000,
    amplitude: float = 0.5,
    frequency: float = 220.0,
    channels: int = 1,
) -> AudioSignal:
    """
    Create a voice-like signal: tone bursts over silence.
    
    Args:
        bursts: (start, end) times in seconds where "speech" is present
        duration: Total duration in seconds
        sample_rate: Sample rate in Hz
        amplitude: Burst amplitude
        frequency: Burst tone frequency
        channels: Channel count
        
    Returns:
        AudioSignal with silence outside the bursts
    """
    num_samples = int(round(duration * sample_rate))
    t = np.arange(num_samples) / sample_rate
    tone = np.sin(2 * np.pi * frequency * t) * amplitude
    
    mask = np.zeros(num_samples, dtype=bool)
    for start, end in bursts:
        mask[int(round(start * sample_rate)):int(round(end * sample_rate))] = True
    
    audio = np.where(mask, tone, 0.0).astype(np.float32)
    return AudioSignal(np.tile(audio, (channels, 1)), sample_rate)
