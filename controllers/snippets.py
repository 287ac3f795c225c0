"""
Snippet Request Controller - code snippets for the current pairing.

Follows the pairing controller's state: every new (input font, pairing result)
key triggers exactly one snippet request; clearing the result clears the
snippets. Also owns the export panel's tab selection and the transient
"copied" acknowledgment.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol, Tuple, Union

from generation import GenerationError
from models import (
    CodeSnippets,
    PairingResult,
    PairingState,
    SnippetState,
    SnippetStatus,
    SnippetTab,
)
from utils import Observable

logger = logging.getLogger(__name__)

DEFAULT_ACK_SECONDS = 2.0
SNIPPETS_UNAVAILABLE_MESSAGE = "Could not generate code snippets."


class SnippetGenerator(Protocol):
    async def request_snippets(self, font_name: str, result: PairingResult) -> CodeSnippets: ...


class Clipboard:
    """Clipboard sink. Keeps the last copied text so the web layer can hand it to the browser."""

    def __init__(self):
        self.text: Optional[str] = None

    def write(self, text: str) -> None:
        self.text = text


class SnippetController:
    """Owns the snippet state slot, keyed by (input font, pairing result)."""

    def __init__(
        self,
        generator: SnippetGenerator,
        clipboard: Optional[Clipboard] = None,
        ack_seconds: float = DEFAULT_ACK_SECONDS,
    ):
        self._generator = generator
        self.clipboard = clipboard or Clipboard()
        self.ack_seconds = ack_seconds
        self._seq = 0
        self._key: Optional[Tuple[str, PairingResult]] = None
        self._ack_handle: Optional[asyncio.TimerHandle] = None
        self.task: Optional[asyncio.Task] = None
        self.state: Observable[SnippetState] = Observable(SnippetState())

    @property
    def current(self) -> SnippetState:
        return self.state.value

    def bind(self, pairing_state: Observable[PairingState]) -> Callable[[], None]:
        """Follow a pairing state slot; returns the unsubscribe function."""
        unsubscribe = pairing_state.subscribe(self._on_pairing_state)
        self._on_pairing_state(pairing_state.value)
        return unsubscribe

    def _on_pairing_state(self, pairing: PairingState) -> None:
        if pairing.result is None:
            if self._key is not None or self.current.status != SnippetStatus.IDLE:
                self.reset()
            return

        key = (pairing.input_font, pairing.result)
        if key == self._key:
            return
        self._key = key
        self.request(pairing.input_font, pairing.result)

    def reset(self) -> None:
        """Drop snippets, error and tab selection; any in-flight request becomes stale."""
        self._seq += 1
        self._key = None
        self._cancel_ack()
        self.state.set(SnippetState())

    def request(self, font_name: str, result: PairingResult) -> asyncio.Task:
        """Switch to LOADING and schedule a fresh snippet request on the running loop."""
        self._seq += 1
        seq = self._seq
        self._cancel_ack()
        self.state.set(SnippetState(status=SnippetStatus.LOADING, active_tab=self.current.active_tab))
        self.task = asyncio.create_task(self._fetch(seq, font_name, result))
        return self.task

    async def _fetch(self, seq: int, font_name: str, result: PairingResult) -> None:
        try:
            snippets = await self._generator.request_snippets(font_name, result)
        except GenerationError as e:
            if seq != self._seq:
                logger.debug(f"Discarding stale snippet failure #{seq}")
                return
            logger.warning(f"Snippet request #{seq} for '{font_name}' failed: {e.detail or e}")
            self._fail(str(e))
            return
        except Exception:
            if seq != self._seq:
                return
            logger.exception(f"Snippet request #{seq} for '{font_name}' raised unexpectedly")
            self._fail("")
            return

        if seq != self._seq:
            logger.debug(f"Discarding stale snippets #{seq}")
            return

        self.state.set(SnippetState(
            status=SnippetStatus.READY,
            snippets=snippets,
            active_tab=self.current.active_tab,
        ))
        logger.info(f"Snippet request #{seq} for '{font_name}' succeeded")

    def _fail(self, message: str) -> None:
        self.state.set(SnippetState(
            status=SnippetStatus.FAILED,
            error=message or SNIPPETS_UNAVAILABLE_MESSAGE,
            active_tab=self.current.active_tab,
        ))

    def select_tab(self, tab: Union[SnippetTab, str]) -> None:
        """Make ``tab`` the active export tab; raises ValueError for unknown tabs."""
        tab = SnippetTab(tab)
        if tab != self.current.active_tab:
            self.state.set(self.current.model_copy(update={"active_tab": tab}))

    def copy(self) -> Optional[str]:
        """
        Copy the active tab's snippet to the clipboard.

        Returns the copied text, or None when no snippets are loaded. Starts the
        acknowledgment window; a copy during an open window restarts it. Must be
        called from within the event loop.
        """
        text = self.current.active_text
        if text is None:
            return None

        self.clipboard.write(text)
        self._cancel_ack()
        self._ack_handle = asyncio.get_running_loop().call_later(self.ack_seconds, self._clear_copied)
        self.state.set(self.current.model_copy(update={"copied": True}))
        return text

    def _clear_copied(self) -> None:
        self._ack_handle = None
        if self.current.copied:
            self.state.set(self.current.model_copy(update={"copied": False}))

    def _cancel_ack(self) -> None:
        if self._ack_handle is not None:
            self._ack_handle.cancel()
            self._ack_handle = None
