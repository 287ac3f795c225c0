"""
Presentation components - pure functions from state to HTML fragments.

Every string that came from the user or the model goes through ``escape``.
"""

from html import escape
from typing import Optional

from models import (
    FontLink,
    FontRecommendation,
    PairingResult,
    PairingState,
    SnippetState,
    SnippetTab,
    SnippetView,
)
from utils import generate_specimen_url

SPECIMEN_TEXT = "Ag"

SNIPPET_FILENAMES = {
    SnippetTab.HTML: "fonts.html",
    SnippetTab.CSS: "fonts.css",
    SnippetTab.TAILWIND: "tailwind.config.js",
}

PREVIEW_HEADLINE = "The Quick Brown Fox Jumps Over"
PREVIEW_SUBTITLE = "A story of typography and design"
PREVIEW_PARAGRAPHS = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed non risus. Suspendisse "
    "lectus tortor, dignissim sit amet, adipiscing nec, ultricies sed, dolor. Cras elementum "
    "ultrices diam. Maecenas ligula massa, varius a, semper congue, euismod non, mi.",
    "Duis arcu massa, scelerisque vitae, consequat in, pretium a, enim. Pellentesque congue. "
    "Ut in risus volutpat libero pharetra tempor. Cras vestibulum bibendum augue. Praesent "
    "egestas leo in pede. Praesent blandit odio eu enim.",
)


def font_style(name: str, weight: int, fallback: str = "sans-serif") -> str:
    """Inline CSS for rendering text in a family/weight, quoted for the style attribute."""
    return escape(f"font-family: \"{name}\", {fallback}; font-weight: {weight};")


def render_font_links(links: list[FontLink]) -> str:
    return "\n".join(
        f'<link id="{escape(link.id)}" rel="stylesheet" href="{escape(link.href)}">'
        for link in links
    )


def render_search_form(input_font: str, is_loading: bool) -> str:
    disabled = " disabled" if is_loading else ""
    label = "Searching..." if is_loading else "Find Pairings"
    return (
        '<form class="search" method="post" action="/search">'
        f'<input type="text" name="font_name" value="{escape(input_font)}" '
        'placeholder="Enter a font name (e.g., Lato)" aria-label="Font Name Input">'
        f'<button type="submit"{disabled}>{label}</button>'
        "</form>"
    )


def render_skeleton(cards: int = 4) -> str:
    blocks = "".join('<div class="skeleton card"></div>' for _ in range(cards))
    return f'<div class="skeleton-grid">{blocks}</div><div class="skeleton wide"></div>'


def render_error(message: str) -> str:
    return f'<div class="error" role="alert">{escape(message)}</div>'


def render_font_card(role: str, font: FontRecommendation, link_label: str = "Get font") -> str:
    return (
        '<div class="font-card">'
        f'<div class="font-card-header"><h3>{escape(role)}</h3>'
        f'<span class="font-name">{escape(font.name)} {font.weight}</span></div>'
        f'<p class="specimen" style="{font_style(font.name, font.weight)}" '
        f'title="{escape(font.name)}">{SPECIMEN_TEXT}</p>'
        f'<a class="download" href="{escape(generate_specimen_url(font.name))}" '
        f'target="_blank" rel="noopener">{link_label}</a>'
        "</div>"
    )


def render_recommendations(input_font: str, result: PairingResult) -> str:
    cards = [render_font_card("Input Font", FontRecommendation(name=input_font, weight=400))]
    for role, font in result.fonts():
        cards.append(render_font_card(role.value.capitalize(), font))
    return (
        '<section class="recommendations">'
        f'<div class="card-grid">{"".join(cards)}</div>'
        '<div class="rationale"><h3>Pairing Rationale</h3>'
        f"<p>{escape(result.reasoning)}</p></div>"
        "</section>"
    )


def render_preview(result: PairingResult, dark: bool) -> str:
    mode = "dark" if dark else "light"
    toggle_label = "Dark Mode" if dark else "Light Mode"
    body_style = font_style(result.body.name, result.body.weight)
    paragraphs = "".join(
        f'<p style="{body_style}">{escape(text)}</p>' for text in PREVIEW_PARAGRAPHS
    )
    return (
        f'<section class="preview preview-{mode}">'
        "<h2>Visual Preview</h2>"
        '<form method="post" action="/preview/theme">'
        f'<button type="submit" class="preview-toggle">{toggle_label}</button></form>'
        '<div class="preview-canvas">'
        f'<h1 style="{font_style(result.headline.name, result.headline.weight)}">'
        f"{PREVIEW_HEADLINE}</h1>"
        f'<p class="subtitle" style="{font_style(result.accent.name, result.accent.weight, "serif")}">'
        f"{PREVIEW_SUBTITLE}</p>"
        f"{paragraphs}"
        "</div></section>"
    )


def _render_tabs(state: SnippetState) -> str:
    disabled = "" if state.view == SnippetView.READY else " disabled"
    buttons = []
    for tab in SnippetTab:
        active = " active" if tab == state.active_tab else ""
        buttons.append(
            f'<button type="submit" name="tab" value="{tab.value}" class="tab{active}"{disabled}>'
            f"{tab.value.upper()}</button>"
        )
    return f'<form class="tabs" method="post" action="/snippets/tab">{"".join(buttons)}</form>'


def render_snippet_body(state: SnippetState) -> str:
    view = state.view
    if view == SnippetView.LOADING:
        lines = "".join('<div class="skeleton line"></div>' for _ in range(5))
        return f'<div class="snippet-skeleton">{lines}</div>'
    if view == SnippetView.ERROR:
        return f'<div class="snippet-error">{escape(state.error or "")}</div>'
    if view == SnippetView.READY:
        tab = state.active_tab
        copy_label = "Copied!" if state.copied else "Copy"
        return (
            f'<button type="button" class="copy" onclick="copySnippet(this)" '
            f'aria-label="Copy to clipboard">{copy_label}</button>'
            f'<a class="download" href="/api/snippets/{tab.value}/download">'
            f"Download {SNIPPET_FILENAMES[tab]}</a>"
            f'<pre><code class="language-{tab.value}">{escape(state.active_text or "")}</code></pre>'
        )
    return ""


def render_export(state: SnippetState) -> Optional[str]:
    if state.view is None:
        return None
    return (
        '<section class="export"><h2>Export &amp; Use</h2>'
        f"{_render_tabs(state)}"
        f'<div class="snippet">{render_snippet_body(state)}</div>'
        "</section>"
    )


def render_pairing_region(pairing: PairingState, snippets: SnippetState, preview_dark: bool) -> str:
    """Skeleton while loading, the error on failure, or the full result."""
    if pairing.is_loading:
        return render_skeleton()
    parts = []
    if pairing.error:
        parts.append(render_error(pairing.error))
    if pairing.result is not None:
        parts.append(render_recommendations(pairing.input_font, pairing.result))
        parts.append(render_preview(pairing.result, preview_dark))
        export = render_export(snippets)
        if export:
            parts.append(export)
    return "".join(parts)
