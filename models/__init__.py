"""Pydantic models for the FontPairer service."""

from .schemas import (
    # Enums
    Role,
    SnippetTab,
    PairingStatus,
    SnippetStatus,
    SnippetView,
    # Generation payloads
    FontRecommendation,
    PairingResult,
    CodeSnippets,
    # Controller state
    PairingState,
    SnippetState,
    FontLink,
    SessionSnapshot,
    # Request/Response models
    SearchRequest,
    SearchResponse,
    TabRequest,
    CopyResponse,
    HealthResponse,
)

__all__ = [
    # Enums
    "Role",
    "SnippetTab",
    "PairingStatus",
    "SnippetStatus",
    "SnippetView",
    # Generation payloads
    "FontRecommendation",
    "PairingResult",
    "CodeSnippets",
    # Controller state
    "PairingState",
    "SnippetState",
    "FontLink",
    "SessionSnapshot",
    # Request/Response models
    "SearchRequest",
    "SearchResponse",
    "TabRequest",
    "CopyResponse",
    "HealthResponse",
]
