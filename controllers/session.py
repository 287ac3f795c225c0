"""Process-local session: both request controllers, the font loader and UI flags."""

import asyncio
import logging
from typing import Optional

from config import Settings
from models import SessionSnapshot
from utils import FontLoader

from .pairing import PairingController
from .snippets import DEFAULT_ACK_SECONDS, Clipboard, SnippetController

logger = logging.getLogger(__name__)

DEFAULT_FONT = "Montserrat"


class Session:
    """
    Aggregate state of one running app.

    ``dark_mode`` is seeded once from the host's color-scheme preference;
    ``preview_dark_mode`` only affects the live preview.
    """

    def __init__(
        self,
        generator,
        default_font: str = DEFAULT_FONT,
        prefers_dark: bool = False,
        ack_seconds: float = DEFAULT_ACK_SECONDS,
        font_loader: Optional[FontLoader] = None,
        clipboard: Optional[Clipboard] = None,
    ):
        self.default_font = default_font
        self.dark_mode = prefers_dark
        self.preview_dark_mode = False
        self.font_loader = font_loader or FontLoader()
        self.pairing = PairingController(generator, self.font_loader, initial_font=default_font)
        self.snippets = SnippetController(generator, clipboard=clipboard, ack_seconds=ack_seconds)
        self._unbind = self.snippets.bind(self.pairing.state)

    @classmethod
    def create(cls, generator, settings: Settings) -> "Session":
        return cls(
            generator,
            default_font=settings.default_font,
            prefers_dark=settings.prefers_dark,
            ack_seconds=settings.copy_ack_seconds,
        )

    def start(self) -> Optional[asyncio.Task]:
        """Kick off the initial search for the default font."""
        logger.info(f"Starting session with default font '{self.default_font}'")
        return self.pairing.submit(self.default_font)

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    def toggle_preview_dark_mode(self) -> bool:
        self.preview_dark_mode = not self.preview_dark_mode
        return self.preview_dark_mode

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            pairing=self.pairing.current,
            snippets=self.snippets.current,
            font_links=self.font_loader.links,
            dark_mode=self.dark_mode,
            preview_dark_mode=self.preview_dark_mode,
        )

    def close(self) -> None:
        """Stop following the pairing slot and cancel outstanding requests."""
        self._unbind()
        for task in (self.pairing.task, self.snippets.task):
            if task is not None and not task.done():
                task.cancel()
