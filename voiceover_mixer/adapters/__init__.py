"""
Adapters - Host-facing entry points.

    cli - `voiceover-mixer` command
"""

from voiceover_mixer.adapters.cli import main

__all__ = ["main"]
