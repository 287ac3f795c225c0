"""
Font Loader - Registers Google Fonts stylesheet references for the page head.

Each (family, weight) pair is registered at most once per process. Entries are
never removed; whether the remote stylesheet actually resolves is not checked.
"""

import logging
from typing import Iterator, List
from urllib.parse import quote_plus

from models import FontLink

logger = logging.getLogger(__name__)

GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2"
GOOGLE_FONTS_SPECIMEN_URL = "https://fonts.google.com/specimen"


def font_link_id(font_name: str, weight: int) -> str:
    """Deterministic identifier for a family/weight, e.g. 'font-Playfair-Display-600'."""
    sanitized = "-".join(font_name.split())
    return f"font-{sanitized}-{weight}"


def generate_google_fonts_url(font_name: str, weight: int) -> str:
    """
    Generate a Google Fonts css2 URL for a single family and weight.

    Format: family=Font+Name:wght@700&display=swap
    """
    family = quote_plus(" ".join(font_name.split()))
    return f"{GOOGLE_FONTS_CSS_URL}?family={family}:wght@{weight}&display=swap"


def generate_specimen_url(font_name: str) -> str:
    """Google Fonts specimen page, where the family can be downloaded."""
    return f"{GOOGLE_FONTS_SPECIMEN_URL}/{quote_plus(' '.join(font_name.split()))}"


class FontLoader:
    """Append-only registry of web font stylesheet references, keyed by family and weight."""

    def __init__(self):
        self._links: dict[str, FontLink] = {}

    def ensure_loaded(self, font_name: str, weight: int) -> None:
        link_id = font_link_id(font_name, weight)
        if link_id in self._links:
            return

        self._links[link_id] = FontLink(
            id=link_id,
            family=font_name,
            weight=weight,
            href=generate_google_fonts_url(font_name, weight),
        )
        logger.debug(f"Registered font stylesheet {link_id}")

    @property
    def links(self) -> List[FontLink]:
        return list(self._links.values())

    def __contains__(self, key) -> bool:
        font_name, weight = key
        return font_link_id(font_name, weight) in self._links

    def __iter__(self) -> Iterator[FontLink]:
        return iter(self.links)

    def __len__(self) -> int:
        return len(self._links)
