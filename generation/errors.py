"""Errors raised by the generation client."""

from typing import Optional


class GenerationError(Exception):
    """
    A generation call failed.

    ``str(error)`` is the message shown to the user; ``detail`` holds the
    internal diagnostic (backend error text, validation errors) for logs.
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
