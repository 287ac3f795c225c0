"""Gemini-backed generation of font pairings and code snippets."""

from .client import (
    GenerationClient,
    DEFAULT_MODEL,
    PAIRING_FAILED_MESSAGE,
    SNIPPETS_FAILED_MESSAGE,
)
from .errors import GenerationError

__all__ = [
    "GenerationClient",
    "GenerationError",
    "DEFAULT_MODEL",
    "PAIRING_FAILED_MESSAGE",
    "SNIPPETS_FAILED_MESSAGE",
]
