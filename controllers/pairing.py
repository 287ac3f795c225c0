"""
Pairing Request Controller - drives the search state machine.

    IDLE -> LOADING -> SUCCESS | FAILED, and back to LOADING on every new search.

Each search is tagged with a sequence number; a resolution is applied only if
it belongs to the latest search, so an out-of-order response never overwrites
newer state.
"""

import asyncio
import logging
from typing import Optional, Protocol

from generation import GenerationError
from models import PairingResult, PairingState, PairingStatus
from utils import FontLoader, Observable

logger = logging.getLogger(__name__)

INPUT_FONT_WEIGHT = 400
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class PairingGenerator(Protocol):
    async def request_pairing(self, font_name: str) -> PairingResult: ...


class PairingController:
    """Owns the pairing state slot and the in-flight pairing request."""

    def __init__(self, generator: PairingGenerator, font_loader: FontLoader, initial_font: str = ""):
        self._generator = generator
        self._font_loader = font_loader
        self._seq = 0
        self.task: Optional[asyncio.Task] = None
        self.state: Observable[PairingState] = Observable(PairingState(input_font=initial_font))

    @property
    def current(self) -> PairingState:
        return self.state.value

    def submit(self, font_name: str) -> Optional[asyncio.Task]:
        """
        User submission: schedule a search on the running loop.

        Blank input and submissions while a search is loading are ignored
        (returns None). Must be called from within the event loop.
        """
        font_name = font_name.strip()
        if not font_name:
            logger.debug("Ignoring blank search submission")
            return None
        if self.current.is_loading:
            logger.info(f"Ignoring search for '{font_name}': a search is already in flight")
            return None

        return self.request(font_name)

    async def search(self, font_name: str) -> None:
        """Run one pairing search to completion; re-entrant, the latest call wins."""
        await self.request(font_name)

    def request(self, font_name: str) -> asyncio.Task:
        """Enter LOADING (clearing result and error) and schedule the pairing call."""
        font_name = font_name.strip()
        self._seq += 1
        seq = self._seq

        self.state.set(PairingState(status=PairingStatus.LOADING, input_font=font_name))
        logger.info(f"Search #{seq} started for '{font_name}'")
        self.task = asyncio.create_task(self._fetch(seq, font_name))
        return self.task

    async def _fetch(self, seq: int, font_name: str) -> None:
        try:
            result = await self._generator.request_pairing(font_name)
        except GenerationError as e:
            if seq != self._seq:
                logger.debug(f"Discarding stale failure of search #{seq}")
                return
            logger.warning(f"Search #{seq} for '{font_name}' failed: {e.detail or e}")
            self._fail(font_name, str(e))
            return
        except Exception:
            if seq != self._seq:
                return
            logger.exception(f"Search #{seq} for '{font_name}' raised unexpectedly")
            self._fail(font_name, "")
            return

        if seq != self._seq:
            logger.debug(f"Discarding stale result of search #{seq}")
            return

        self._font_loader.ensure_loaded(font_name, INPUT_FONT_WEIGHT)
        for _, font in result.fonts():
            self._font_loader.ensure_loaded(font.name, font.weight)

        self.state.set(PairingState(
            status=PairingStatus.SUCCESS,
            input_font=font_name,
            result=result,
        ))
        logger.info(
            f"Search #{seq} for '{font_name}' succeeded: "
            f"{result.headline.name} / {result.body.name} / {result.accent.name}"
        )

    def _fail(self, font_name: str, message: str) -> None:
        self.state.set(PairingState(
            status=PairingStatus.FAILED,
            input_font=font_name,
            error=message or UNEXPECTED_ERROR_MESSAGE,
        ))
