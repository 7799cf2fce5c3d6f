"""
Peak normalization.

Scales every channel by the same gain so the loudest sample lands on
the target peak. Channel balance is preserved.
"""

from __future__ import annotations

import numpy as np

from voiceover_mixer.audio import AudioSignal
from voiceover_mixer.errors import DegenerateSignalError

DEFAULT_TARGET_PEAK = 0.98  # ~ -0.17 dBFS


def peak_level(signal: AudioSignal) -> float:
    """Maximum absolute sample across all channels."""
    if signal.samples.size == 0:
        return 0.0
    return float(np.max(np.abs(signal.samples)))


def normalize_peak(
    signal: AudioSignal,
    target_peak: float = DEFAULT_TARGET_PEAK,
) -> AudioSignal:
    """
    Normalize a signal to a target peak level.
    
    Args:
        signal: Signal to normalize
        target_peak: Linear peak level to reach
        
    Returns:
        A new, scaled signal. Silent input is returned as-is, since
        there is nothing to scale.
        
    Raises:
        DegenerateSignalError: If the signal peak is not finite
    """
    peak = peak_level(signal)
    
    if peak == 0.0:
        return signal
    
    if not np.isfinite(peak):
        raise DegenerateSignalError("normalize", f"signal peak is {peak}")
    
    gain = target_peak / peak
    scaled = signal.samples.astype(np.float64) * gain
    return AudioSignal(scaled.astype(np.float32), signal.sample_rate)


__all__ = [
    "normalize_peak",
    "peak_level",
    "DEFAULT_TARGET_PEAK",
]
