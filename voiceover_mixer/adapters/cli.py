"""
CLI Adapter - Command-line interface.

Thin wrapper over the file loaders + DuckingMixer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Flag name -> MixParameters field
PARAMETER_FLAGS = {
    "ducking_amount": "ducking_amount",
    "voice_boost": "voice_boost",
    "padding": "post_speech_padding",
    "fade_out": "fade_out_duration",
    "threshold": "speech_threshold",
    "target_peak": "normalization_target_peak",
}


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="voiceover-mixer",
        description="Mix a voice-over with background music and automatic ducking",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # mix command
    mix_parser = subparsers.add_parser("mix", help="Mix voice-over and music into a WAV file")
    mix_parser.add_argument("voice", help="Voice-over audio file")
    mix_parser.add_argument("music", help="Background music file (looped)")
    mix_parser.add_argument("-o", "--output", default="mixed.wav", help="Output WAV path")
    mix_parser.add_argument("--ducking-amount", type=float, help="Music gain during speech (default: 0.2)")
    mix_parser.add_argument("--voice-boost", type=float, help="Voice gain (default: 1.4)")
    mix_parser.add_argument("--padding", type=float, help="Seconds of music after the voice ends (default: 3.0)")
    mix_parser.add_argument("--fade-out", type=float, help="Final fade-out length in seconds (default: 5.0)")
    mix_parser.add_argument("--threshold", type=float, help="Speech detection amplitude (default: 0.01)")
    mix_parser.add_argument("--target-peak", type=float, help="Normalization peak (default: 0.98)")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Show detected speech and music envelope")
    analyze_parser.add_argument("voice", help="Voice-over audio file")
    analyze_parser.add_argument("--threshold", type=float, help="Speech detection amplitude (default: 0.01)")

    # version command
    subparsers.add_parser("version", help="Show version")

    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if parsed.command is None:
        parser.print_help()
        return 0

    if parsed.command == "version":
        from voiceover_mixer import __version__
        print(f"voiceover-mixer {__version__}")
        return 0

    if parsed.command == "mix":
        return _cmd_mix(parsed)

    if parsed.command == "analyze":
        return _cmd_analyze(parsed)

    return 1


def _build_params(args: argparse.Namespace):
    """MixParameters with any flags the user passed."""
    from voiceover_mixer.config import MixParameters

    overrides = {
        field: getattr(args, flag)
        for flag, field in PARAMETER_FLAGS.items()
        if getattr(args, flag, None) is not None
    }
    return MixParameters().with_overrides(**overrides)


def _cmd_mix(args: argparse.Namespace) -> int:
    """Handle mix command."""
    from voiceover_mixer.errors import MixerError
    from voiceover_mixer.formats import load_signal
    from voiceover_mixer.runtime import DuckingMixer

    try:
        params = _build_params(args)
        voice = load_signal(args.voice)
        music = load_signal(args.music)

        mixer = DuckingMixer(params, on_status=print)
        result = mixer.mix(voice, music)

        output = Path(args.output)
        output.write_bytes(result.wav)

        print(f"Audio saved to: {output}")
        print(f"Duration: {result.duration:.2f}s")
        print(f"Speech segments: {len(result.segments)}")
        return 0

    except (MixerError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _cmd_analyze(args: argparse.Namespace) -> int:
    """Print speech segments and envelope breakpoints."""
    from voiceover_mixer.errors import MixerError
    from voiceover_mixer.formats import load_signal
    from voiceover_mixer.runtime import DuckingMixer

    try:
        params = _build_params(args)
        voice = load_signal(args.voice)
        segments, envelope = DuckingMixer(params).analyze(voice)
    except (MixerError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Voice: {voice.duration:.2f}s, {voice.channels} channel(s), {voice.sample_rate}Hz")
    print()
    print(f"Speech segments ({len(segments)}):")
    for segment in segments:
        print(f"  {segment.start:8.3f}s - {segment.end:8.3f}s  ({segment.duration:.2f}s)")
    print()
    print(f"Music envelope ({len(envelope)} breakpoints):")
    for bp in envelope:
        print(f"  {bp.time:8.3f}s  {bp.mode.value:8}  {bp.value:.3f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
