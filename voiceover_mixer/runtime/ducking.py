"""
Ducking System - Gain envelope for the music track.

The envelope is an ordered list of breakpoints describing a
piecewise-linear gain curve:

    STEP     - value is set instantly at ``time``
    RAMP_TO  - value ramps linearly from the previous breakpoint,
               arriving at ``value`` exactly at ``time``

Shape of a typical voice-over envelope:

    1.0 ‾‾‾‾\\                    /‾‾‾‾‾‾‾\\
             \\                  /         \\
    0.2       \\________________/           \\
                 speech   long silence      fade-out

Invariants:
    - Exactly one STEP, at time 0, as the first breakpoint
    - Breakpoint times are strictly increasing after it
    - Every transition is a ramp of non-zero duration (no clicks)

Gain before the first breakpoint and after the last one is constant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

import numpy as np

from voiceover_mixer.audio import SpeechSegment
from voiceover_mixer.config import MixParameters

logger = logging.getLogger(__name__)


class RampMode(str, Enum):
    """How a breakpoint is reached from the previous one."""
    STEP = "step"
    RAMP_TO = "ramp_to"


@dataclass(frozen=True)
class GainBreakpoint:
    """A (time, value) anchor of the gain curve."""
    time: float
    value: float
    mode: RampMode = RampMode.RAMP_TO


class GainEnvelope:
    """Immutable piecewise-linear gain curve.

    Example:
        envelope = generate_envelope(segments, total_duration=10.0)
        gains = envelope.evaluate(np.arange(frames) / sample_rate)
    """

    def __init__(self, breakpoints: Sequence[GainBreakpoint]):
        if not breakpoints:
            raise ValueError("envelope needs at least one breakpoint")
        self._breakpoints = tuple(breakpoints)
        self._times = np.array([bp.time for bp in self._breakpoints], dtype=np.float64)
        self._values = np.array([bp.value for bp in self._breakpoints], dtype=np.float64)

    @property
    def breakpoints(self) -> tuple[GainBreakpoint, ...]:
        return self._breakpoints

    def __len__(self) -> int:
        return len(self._breakpoints)

    def __iter__(self) -> Iterator[GainBreakpoint]:
        return iter(self._breakpoints)

    def __getitem__(self, index: int) -> GainBreakpoint:
        return self._breakpoints[index]

    def __repr__(self) -> str:
        points = ", ".join(f"{bp.mode.value}({bp.time:.3f}s={bp.value:.3f})" for bp in self)
        return f"GainEnvelope([{points}])"

    def evaluate(self, times: np.ndarray) -> np.ndarray:
        """Gain at each of ``times`` (seconds), as float64."""
        return np.interp(np.asarray(times, dtype=np.float64), self._times, self._values)

    def value_at(self, time: float) -> float:
        """Gain at a single point in time."""
        return float(np.interp(time, self._times, self._values))

    def is_continuous(self) -> bool:
        """True if the only instantaneous change is the initial STEP."""
        first = self._breakpoints[0]
        if first.mode is not RampMode.STEP or first.time != 0.0:
            return False
        if any(bp.mode is RampMode.STEP for bp in self._breakpoints[1:]):
            return False
        return bool(np.all(np.diff(self._times) > 0.0))


class _EnvelopeBuilder:
    """Collects breakpoints while keeping the curve continuous."""

    def __init__(self, initial: float):
        self.points = [GainBreakpoint(0.0, initial, RampMode.STEP)]

    @property
    def last(self) -> GainBreakpoint:
        return self.points[-1]

    def ramp_to(self, value: float, time: float) -> None:
        last = self.last
        if time <= last.time:
            if value == last.value:
                return
            if last.time == 0.0 and len(self.points) == 1:
                # Ramp landing on t=0 starts the curve at the new level.
                self.points[0] = GainBreakpoint(0.0, value, RampMode.STEP)
                return
            raise ValueError(
                f"breakpoint at {time:.6f}s would precede {last.time:.6f}s"
            )
        self.points.append(GainBreakpoint(time, value))

    def hold_until(self, time: float) -> None:
        self.ramp_to(self.last.value, time)

    def truncate_at(self, time: float) -> None:
        """Drop breakpoints after ``time`` and pin the curve's value there."""
        if time >= self.last.time:
            return
        value = GainEnvelope(self.points).value_at(time)
        self.points = [bp for bp in self.points if bp.time <= time]
        self.ramp_to(value, time)

    def fade_under(self, start: float, end: float, floor: float) -> None:
        """Fade to ``floor`` by ``end`` without rising above the curve.

        The fade line starts from the curve's value at ``start``. Where the
        existing curve is lower (ducked speech after the fade has begun) it
        is kept, with a breakpoint added wherever the two lines cross.
        """
        curve = GainEnvelope(self.points)
        origin = curve.value_at(start)
        slope = (floor - origin) / (end - start)

        def fade(t: float) -> float:
            return origin + slope * (t - start)

        times = [start] + [bp.time for bp in self.points if start < bp.time < end] + [end]
        knots = []
        for t0, t1 in zip(times, times[1:]):
            d0 = curve.value_at(t0) - fade(t0)
            d1 = curve.value_at(t1) - fade(t1)
            if d0 * d1 < 0:
                crossing = t0 + (t1 - t0) * d0 / (d0 - d1)
                if t0 < crossing < t1:
                    knots.append(crossing)
            knots.append(t1)

        self.truncate_at(start)
        self.hold_until(start)
        for t in knots[:-1]:
            self.ramp_to(min(curve.value_at(t), fade(t)), t)
        self.ramp_to(floor, end)

    def build(self) -> GainEnvelope:
        return GainEnvelope(self.points)


def generate_envelope(
    segments: Sequence[SpeechSegment],
    total_duration: float,
    params: MixParameters | None = None,
) -> GainEnvelope:
    """Build the music gain envelope for the detected speech.

    Args:
        segments: Ordered, non-overlapping speech segments
        total_duration: Length of the rendered output in seconds
        params: Ducking parameters

    Returns:
        GainEnvelope starting at ``normal_volume`` and ending on
        ``silence_floor`` at ``total_duration``.
    """
    params = params or MixParameters()
    normal = params.normal_volume
    ducked = params.ducking_amount
    fade_start = max(0.0, total_duration - params.fade_out_duration)

    builder = _EnvelopeBuilder(normal)

    if not segments:
        builder.hold_until(fade_start)
        builder.ramp_to(params.silence_floor, total_duration)
        logger.debug("No speech: holding music until fade-out")
        return builder.build()

    # Intro
    first = segments[0]
    builder.hold_until(max(0.0, first.start - params.attack_time))
    builder.ramp_to(ducked, first.start)

    # Long silences bring the music back up between phrases
    for current, following in zip(segments, segments[1:]):
        gap_start = current.end
        gap_end = following.start
        if gap_end - gap_start >= params.long_silence_threshold:
            builder.hold_until(gap_start)
            builder.ramp_to(normal, gap_start + params.release_time)
            builder.hold_until(gap_end - params.attack_time)
            builder.ramp_to(ducked, gap_end)

    # Outro
    restore_start = segments[-1].end
    restore_end = restore_start + params.release_time

    if fade_start >= restore_end:
        outro = "restore-then-fade"
        builder.hold_until(restore_start)
        builder.ramp_to(normal, restore_end)
        builder.hold_until(fade_start)
    elif fade_start <= restore_start:
        # Speech still running at fade_start stays ducked under the fade
        outro = "fade-from-ducked"
    else:
        outro = "fade-during-restore"
        progress = (fade_start - restore_start) / params.release_time
        builder.hold_until(restore_start)
        builder.ramp_to(ducked + (normal - ducked) * progress, fade_start)
    builder.fade_under(fade_start, total_duration, params.silence_floor)

    envelope = builder.build()
    logger.debug(
        f"Generated {len(envelope)} breakpoints for {len(segments)} segment(s), "
        f"outro={outro}"
    )
    return envelope


__all__ = [
    "RampMode",
    "GainBreakpoint",
    "GainEnvelope",
    "generate_envelope",
]
