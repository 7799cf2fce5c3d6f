"""
Runtime module - Speech detection, ducking and offline rendering.
"""

from voiceover_mixer.runtime.detector import (
    detect_speech,
    window_peaks,
)

from voiceover_mixer.runtime.ducking import (
    RampMode,
    GainBreakpoint,
    GainEnvelope,
    generate_envelope,
)

from voiceover_mixer.runtime.renderer import (
    render_mix,
    output_duration,
    output_frame_count,
    output_channel_count,
)

from voiceover_mixer.runtime.pipeline import (
    DuckingMixer,
    MixResult,
    mix_with_ducking,
)

__all__ = [
    # Detection
    "detect_speech",
    "window_peaks",
    # Ducking
    "RampMode",
    "GainBreakpoint",
    "GainEnvelope",
    "generate_envelope",
    # Rendering
    "render_mix",
    "output_duration",
    "output_frame_count",
    "output_channel_count",
    # Pipeline
    "DuckingMixer",
    "MixResult",
    "mix_with_ducking",
]
