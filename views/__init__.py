"""HTML presentation surfaces."""

from .components import SNIPPET_FILENAMES, render_export, render_pairing_region
from .page import render_page

__all__ = ["render_page", "render_pairing_region", "render_export", "SNIPPET_FILENAMES"]
