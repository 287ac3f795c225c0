"""Utility modules for the FontPairer service."""

from .font_loader import FontLoader, font_link_id, generate_google_fonts_url, generate_specimen_url
from .observable import Observable
from .rate_limiter import RateLimiter, RateLimitMiddleware

__all__ = [
    "FontLoader",
    "font_link_id",
    "generate_google_fonts_url",
    "generate_specimen_url",
    "Observable",
    "RateLimiter",
    "RateLimitMiddleware",
]
