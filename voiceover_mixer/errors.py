"""
Mixer Errors - Domain-specific error types.

Error hierarchy:
    MixerError (base)
    ├── InvalidInputError
    └── DegenerateSignalError
"""

from __future__ import annotations

from typing import Any


class MixerError(Exception):
    """Base error for all mixing pipeline errors."""
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(MixerError):
    """
    Raised when an input signal cannot be processed.
    
    Examples:
    - Signal with zero frames
    - Non-positive sample rate
    - NaN or infinite samples
    - Malformed WAV payload
    
    Raised before any processing happens, so no partial result exists.
    """
    
    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.field = field


class DegenerateSignalError(MixerError):
    """
    Raised when processing produces values that cannot be encoded.
    
    Silence is not degenerate: the normalizer returns silent input
    unchanged instead of raising.
    """
    
    def __init__(
        self,
        stage: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"[{stage}] {message}", details)
        self.stage = stage
