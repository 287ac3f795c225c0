"""Request controllers and the session that ties them together."""

from .pairing import PairingController
from .snippets import Clipboard, SnippetController
from .session import Session

__all__ = ["PairingController", "SnippetController", "Clipboard", "Session"]
