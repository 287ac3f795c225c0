"""Pydantic schemas for pairings, snippets, controller state and API requests."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================

class Role(str, Enum):
    """Typographic role a recommended font is assigned to."""
    HEADLINE = "headline"
    BODY = "body"
    ACCENT = "accent"


class SnippetTab(str, Enum):
    """Export tab, one per generated snippet."""
    HTML = "html"
    CSS = "css"
    TAILWIND = "tailwind"


class PairingStatus(str, Enum):
    """Status of the pairing request controller."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class SnippetStatus(str, Enum):
    """Status of the snippet request controller."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class SnippetView(str, Enum):
    """Mutually exclusive export panel views."""
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


# ============================================================================
# Generation payloads
# ============================================================================

class FontRecommendation(BaseModel):
    """One role's chosen Google Fonts family and numeric weight."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Google Fonts family name")
    weight: int = Field(..., description="Font weight, typically 100-900")


class PairingResult(BaseModel):
    """Headline/body/accent recommendations plus the rationale behind them."""
    model_config = ConfigDict(frozen=True)

    headline: FontRecommendation
    body: FontRecommendation
    accent: FontRecommendation
    reasoning: str = Field(..., min_length=1)

    def font_for(self, role: Role) -> FontRecommendation:
        return getattr(self, Role(role).value)

    def fonts(self) -> list[tuple[Role, FontRecommendation]]:
        return [(role, self.font_for(role)) for role in Role]


class CodeSnippets(BaseModel):
    """Integration snippets generated for a pairing."""
    model_config = ConfigDict(frozen=True)

    html: str = Field(..., min_length=1)
    css: str = Field(..., min_length=1)
    tailwind: str = Field(..., min_length=1)

    def text_for(self, tab: SnippetTab) -> str:
        return getattr(self, SnippetTab(tab).value)


# ============================================================================
# Controller state
# ============================================================================

class PairingState(BaseModel):
    """Observable state of the pairing request controller."""
    model_config = ConfigDict(frozen=True)

    status: PairingStatus = PairingStatus.IDLE
    input_font: str = ""
    result: Optional[PairingResult] = None
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status == PairingStatus.LOADING


class SnippetState(BaseModel):
    """Observable state of the snippet request controller."""
    model_config = ConfigDict(frozen=True)

    status: SnippetStatus = SnippetStatus.IDLE
    snippets: Optional[CodeSnippets] = None
    error: Optional[str] = None
    active_tab: SnippetTab = SnippetTab.CSS
    copied: bool = False

    @property
    def view(self) -> Optional[SnippetView]:
        if self.status == SnippetStatus.LOADING:
            return SnippetView.LOADING
        if self.status == SnippetStatus.FAILED:
            return SnippetView.ERROR
        if self.status == SnippetStatus.READY:
            return SnippetView.READY
        return None

    @property
    def active_text(self) -> Optional[str]:
        if self.snippets is None:
            return None
        return self.snippets.text_for(self.active_tab)


class FontLink(BaseModel):
    """A registered web font stylesheet reference."""
    model_config = ConfigDict(frozen=True)

    id: str
    family: str
    weight: int
    href: str


class SessionSnapshot(BaseModel):
    """Everything the presentation layer needs to render one frame."""
    pairing: PairingState
    snippets: SnippetState
    font_links: list[FontLink] = Field(default_factory=list)
    dark_mode: bool = False
    preview_dark_mode: bool = False


# ============================================================================
# Request / Response Models
# ============================================================================

class SearchRequest(BaseModel):
    """Request a pairing for a font."""
    font_name: str = Field(..., max_length=100, description="Font family name (e.g., 'Lato')")


class SearchResponse(BaseModel):
    accepted: bool
    state: SessionSnapshot


class TabRequest(BaseModel):
    tab: SnippetTab


class CopyResponse(BaseModel):
    tab: SnippetTab
    text: str
    copied: bool


class HealthResponse(BaseModel):
    status: str
    uptime_seconds: float
    version: str
