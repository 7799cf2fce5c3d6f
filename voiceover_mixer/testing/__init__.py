"""
Testing utilities for voiceover_mixer.

Example:
    from voiceover_mixer.testing import create_speech_signal

    voice = create_speech_signal([(1.0, 2.0)], duration=4.0)
"""

from voiceover_mixer.testing.fixtures import (
    create_test_audio,
    create_test_signal,
    create_speech_signal,
)

__all__ = [
    "create_test_audio",
    "create_test_signal",
    "create_speech_signal",
]
