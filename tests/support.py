"""Shared test doubles and sample payloads."""

import asyncio
import sys
from pathlib import Path

# Project root on path so the top-level packages import without installation
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models import CodeSnippets, FontRecommendation, PairingResult  # noqa: E402

LATO_PAIRING = PairingResult(
    headline=FontRecommendation(name="Oswald", weight=700),
    body=FontRecommendation(name="Lato", weight=400),
    accent=FontRecommendation(name="Playfair Display", weight=600),
    reasoning="Oswald's condensed strokes contrast with Lato's open forms; Playfair adds editorial flair.",
)

ROBOTO_PAIRING = PairingResult(
    headline=FontRecommendation(name="Roboto Slab", weight=700),
    body=FontRecommendation(name="Open Sans", weight=400),
    accent=FontRecommendation(name="Merriweather", weight=300),
    reasoning="Slab serifs anchor the headlines while Open Sans keeps body copy neutral.",
)

SAMPLE_SNIPPETS = CodeSnippets(
    html='<link rel="preconnect" href="https://fonts.googleapis.com">\n'
         '<link href="https://fonts.googleapis.com/css2?family=Oswald:wght@700&family=Lato:wght@400'
         '&family=Playfair+Display:wght@600&display=swap" rel="stylesheet">',
    css=":root {\n  --font-headline: 'Oswald', sans-serif;\n  --font-body: 'Lato', sans-serif;\n"
        "  --font-accent: 'Playfair Display', serif;\n}\nh1 { font-family: var(--font-headline); }",
    tailwind="const defaultTheme = require('tailwindcss/defaultTheme')\n"
             "module.exports = { theme: { extend: { fontFamily: { headline: ['Oswald', ...defaultTheme.fontFamily.sans] } } } }",
)

OTHER_SNIPPETS = CodeSnippets(html="<link>", css=":root {}", tailwind="module.exports = {}")


class FakeGenerator:
    """Generator double returning canned results and recording every call."""

    def __init__(self, pairing=LATO_PAIRING, snippets=SAMPLE_SNIPPETS, pairing_error=None, snippets_error=None):
        self.pairing = pairing
        self.snippets = snippets
        self.pairing_error = pairing_error
        self.snippets_error = snippets_error
        self.pairing_calls: list[str] = []
        self.snippet_calls: list[tuple[str, PairingResult]] = []

    async def request_pairing(self, font_name):
        self.pairing_calls.append(font_name)
        if self.pairing_error is not None:
            raise self.pairing_error
        return self.pairing

    async def request_snippets(self, font_name, result):
        self.snippet_calls.append((font_name, result))
        if self.snippets_error is not None:
            raise self.snippets_error
        return self.snippets


class ControlledGenerator:
    """Generator double whose calls block on futures the test resolves in any order."""

    def __init__(self):
        self.pairing_calls: list[tuple[str, asyncio.Future]] = []
        self.snippet_calls: list[tuple[str, PairingResult, asyncio.Future]] = []

    async def request_pairing(self, font_name):
        future = asyncio.get_running_loop().create_future()
        self.pairing_calls.append((font_name, future))
        return await future

    async def request_snippets(self, font_name, result):
        future = asyncio.get_running_loop().create_future()
        self.snippet_calls.append((font_name, result, future))
        return await future

    async def wait_for_calls(self, pairing: int = 0, snippets: int = 0) -> None:
        for _ in range(100):
            if len(self.pairing_calls) >= pairing and len(self.snippet_calls) >= snippets:
                return
            await asyncio.sleep(0)
        raise AssertionError(
            f"expected {pairing} pairing / {snippets} snippet calls, "
            f"got {len(self.pairing_calls)} / {len(self.snippet_calls)}"
        )


class NeverGenerator:
    """Generator double whose calls never complete."""

    def __init__(self):
        self.pairing_calls: list[str] = []

    async def request_pairing(self, font_name):
        self.pairing_calls.append(font_name)
        await asyncio.sleep(3600)

    async def request_snippets(self, font_name, result):
        await asyncio.sleep(3600)
