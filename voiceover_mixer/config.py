"""
Mix configuration.

All timing values are in seconds, all gains are linear.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any


@dataclass(frozen=True)
class MixParameters:
    """Parameters for speech detection, ducking and output shaping.

    Fields:
        ducking_amount: Music gain while speech is active.
        normal_volume: Music gain during intro and long silences.
        attack_time: Ramp time from normal to ducked level.
        release_time: Ramp time from ducked back to normal level.
        long_silence_threshold: Minimum gap between speech segments
            for music to come back up.
        voice_boost: Constant gain applied to the voice track.
        speech_threshold: Peak amplitude above which a window is speech.
        analysis_window_frames: Frames per detection window.
        speech_hold_time: Pauses shorter than this are bridged.
        post_speech_padding: Output is this much longer than the voice.
        fade_out_duration: Length of the final music fade.
        normalization_target_peak: Peak level after normalization.
        silence_floor: Gain the final fade lands on (never exactly 0).
    """
    ducking_amount: float = 0.2
    normal_volume: float = 1.0
    attack_time: float = 0.2
    release_time: float = 0.8
    long_silence_threshold: float = 5.0
    voice_boost: float = 1.4
    speech_threshold: float = 0.01
    analysis_window_frames: int = 1024
    speech_hold_time: float = 0.3
    post_speech_padding: float = 3.0
    fade_out_duration: float = 5.0
    normalization_target_peak: float = 0.98
    silence_floor: float = 0.001

    def __post_init__(self):
        for name in ("ducking_amount", "normal_volume", "voice_boost", "speech_threshold"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        for name in ("attack_time", "release_time", "fade_out_duration"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        for name in ("speech_hold_time", "post_speech_padding"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.silence_floor <= 0.0:
            raise ValueError(f"silence_floor must be > 0, got {self.silence_floor}")
        if self.analysis_window_frames < 1:
            raise ValueError(
                f"analysis_window_frames must be >= 1, got {self.analysis_window_frames}"
            )
        if not 0.0 < self.normalization_target_peak <= 1.0:
            raise ValueError(
                "normalization_target_peak must be in (0.0, 1.0], "
                f"got {self.normalization_target_peak}"
            )
        if self.long_silence_threshold < self.attack_time + self.release_time:
            raise ValueError(
                "long_silence_threshold must be >= attack_time + release_time, "
                f"got {self.long_silence_threshold}"
            )

    def with_overrides(self, **changes: Any) -> "MixParameters":
        """Return a validated copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


# =============================================================================
# Presets
# =============================================================================

DEFAULT_PARAMETERS = MixParameters()
"""Voice-over defaults: strong ducking, quick attack, 3s tail."""

PODCAST_PARAMETERS = MixParameters(ducking_amount=0.3, release_time=1.2)
"""Podcast-style ducking - music stays more present, returns more slowly."""


__all__ = [
    "MixParameters",
    "DEFAULT_PARAMETERS",
    "PODCAST_PARAMETERS",
]
