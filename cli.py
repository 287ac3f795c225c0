#!/usr/bin/env python3
"""
FontPairer CLI
Asks Gemini for headline/body/accent fonts that pair with a given font and,
optionally, the HTML/CSS/Tailwind snippets to use them.

Usage:
    python cli.py Lato
    python cli.py "Playfair Display" --snippets --tab css
    python cli.py Montserrat --snippets --output json --output-file pairing.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from config import LOG_FORMAT, ConfigurationError, Settings
from generation import GenerationClient, GenerationError
from models import CodeSnippets, PairingResult, SnippetTab
from utils import generate_google_fonts_url, generate_specimen_url

logger = logging.getLogger(__name__)

EXIT_GENERATION_FAILED = 1
EXIT_CONFIGURATION = 2


async def fetch(
    client: GenerationClient,
    font_name: str,
    with_snippets: bool = False,
) -> tuple[PairingResult, Optional[CodeSnippets]]:
    """Run the pairing call and, if asked, the snippet call for its result."""
    result = await client.request_pairing(font_name)
    snippets = None
    if with_snippets:
        snippets = await client.request_snippets(font_name, result)
    return result, snippets


def format_table(
    font_name: str,
    result: PairingResult,
    snippets: Optional[CodeSnippets] = None,
    tab: str = "all",
) -> str:
    """Human-readable report of a pairing (and snippets)."""
    lines = [
        "",
        f"Font pairing for: {font_name}",
        "=" * 80,
        f"{'Role':<10} {'Font':<30} {'Weight':>6}  Specimen",
        "-" * 80,
    ]
    for role, font in result.fonts():
        lines.append(
            f"{role.value.capitalize():<10} {font.name[:29]:<30} {font.weight:>6}  {generate_specimen_url(font.name)}"
        )
    lines += ["-" * 80, "", "Why it works:", f"  {result.reasoning}", ""]

    lines.append("Stylesheets:")
    lines.append(f"  {generate_google_fonts_url(font_name, 400)}")
    for _, font in result.fonts():
        lines.append(f"  {generate_google_fonts_url(font.name, font.weight)}")

    if snippets is not None:
        tabs = list(SnippetTab) if tab == "all" else [SnippetTab(tab)]
        for snippet_tab in tabs:
            lines += ["", f"--- {snippet_tab.value.upper()} ---", snippets.text_for(snippet_tab)]

    return "\n".join(lines)


def format_json(
    font_name: str,
    result: PairingResult,
    snippets: Optional[CodeSnippets] = None,
    tab: str = "all",
) -> str:
    data = {"input_font": font_name, "pairing": result.model_dump()}
    if snippets is not None:
        data["snippets"] = (
            snippets.model_dump() if tab == "all" else {tab: snippets.text_for(SnippetTab(tab))}
        )
    return json.dumps(data, indent=2)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Get complementary headline, body and accent fonts for a typeface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python cli.py Lato
    python cli.py "Playfair Display" --snippets --tab css
    python cli.py Montserrat --snippets --output json

Requires GEMINI_API_KEY in the environment or a .env file.
    """,
    )

    parser.add_argument("font",
                        help="Font family name to find pairings for")
    parser.add_argument("--snippets", "-s", action="store_true",
                        help="Also generate HTML/CSS/Tailwind snippets")
    parser.add_argument("--tab", "-t", choices=["all"] + [t.value for t in SnippetTab],
                        help="Which snippet to print; requires --snippets (default: all)")
    parser.add_argument("--output", "-o", choices=["table", "json"], default="table",
                        help="Output format (default: table)")
    parser.add_argument("--output-file", "-f",
                        help="Save output to file")
    parser.add_argument("--model", "-m",
                        help="Gemini model (default: GEMINI_MODEL or gemini-2.5-flash)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log request details")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)

    font_name = args.font.strip()
    if not font_name:
        parser.error("font name must not be empty")
    if args.tab is not None and not args.snippets:
        parser.error("--tab requires --snippets")
    tab = args.tab or "all"

    load_dotenv()
    try:
        settings = Settings()
        if args.model:
            settings.gemini_model = args.model
        client = GenerationClient.from_settings(settings)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION

    try:
        result, snippets = asyncio.run(fetch(client, font_name, with_snippets=args.snippets))
    except GenerationError as e:
        logger.debug(f"Generation failed: {e.detail}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_GENERATION_FAILED

    if args.output == "json":
        output = format_json(font_name, result, snippets, tab)
    else:
        output = format_table(font_name, result, snippets, tab)

    if args.output_file:
        Path(args.output_file).write_text(output, encoding="utf-8")
        print(f"Saved pairing for {font_name} to {args.output_file}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
