"""
Instructions and response schemas for the two generation calls.

The schemas are sent with every request so the model answers with JSON in
exactly the shape of PairingResult / CodeSnippets.
"""

from google.genai import types

from models import PairingResult

PAIRING_SYSTEM_INSTRUCTION = (
    "You are an expert typographer and design assistant. Your goal is to provide "
    "professional font pairings for web design. For any given font, you must recommend "
    "a complementary headline font, body font, and accent font exclusively from the "
    "Google Fonts library. Ensure the font names are spelled correctly for use with "
    "the Google Fonts API."
)

SNIPPETS_SYSTEM_INSTRUCTION = (
    "You are an expert web development assistant specializing in typography. You provide "
    "clean, correct, and ready-to-use code snippets for HTML, CSS, and Tailwind CSS based "
    "on a given font pairing. The font names must be correct for the Google Fonts API."
)


def _font_schema(description: str, example_name: str, example_weight: int) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        description=description,
        properties={
            "name": types.Schema(
                type=types.Type.STRING,
                description=f'The Google Font family name (e.g., "{example_name}").',
            ),
            "weight": types.Schema(
                type=types.Type.INTEGER,
                description=f"A suitable font weight, e.g., {example_weight}.",
            ),
        },
        required=["name", "weight"],
    )


PAIRING_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "headline": _font_schema("The recommended font for headlines.", "Roboto Slab", 700),
        "body": _font_schema("The recommended font for body text.", "Open Sans", 400),
        "accent": _font_schema(
            "The recommended font for accents or secondary headings.", "Playfair Display", 600
        ),
        "reasoning": types.Schema(
            type=types.Type.STRING,
            description=(
                "A 2-3 sentence explanation of why this font combination works well together, "
                "explaining the principles of contrast, harmony, and mood."
            ),
        ),
    },
    required=["headline", "body", "accent", "reasoning"],
)

SNIPPETS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "html": types.Schema(
            type=types.Type.STRING,
            description=(
                "A string containing the complete HTML <link> tags to import all necessary "
                "Google Fonts. Preconnect links should be included. All font families and "
                "weights should be in a single request to Google Fonts."
            ),
        ),
        "css": types.Schema(
            type=types.Type.STRING,
            description=(
                "A string containing the complete CSS code. It must include the @import rule "
                "for Google Fonts, define CSS custom properties (--font-headline, --font-body, "
                "--font-accent), and provide example usage for h1, body, and an .accent-text class."
            ),
        ),
        "tailwind": types.Schema(
            type=types.Type.STRING,
            description=(
                "A string containing the full JavaScript code for a tailwind.config.js file. "
                "It must import 'defaultTheme' from 'tailwindcss/defaultTheme' and extend the "
                "'fontFamily' with 'headline', 'body', and 'accent' keys, spreading the default "
                "theme's sans/serif fonts as fallbacks."
            ),
        ),
    },
    required=["html", "css", "tailwind"],
)


def build_pairing_prompt(font_name: str) -> str:
    return (
        f'The user has selected the font "{font_name}". '
        "Please provide a font pairing recommendation from the Google Fonts library."
    )


def build_snippets_prompt(font_name: str, result: PairingResult) -> str:
    return (
        f'Given the font pairing for the base font "{font_name}":\n'
        f"- Headline: {result.headline.name} (weight: {result.headline.weight})\n"
        f"- Body: {result.body.name} (weight: {result.body.weight})\n"
        f"- Accent: {result.accent.name} (weight: {result.accent.weight})\n"
        "\n"
        "Generate code snippets for a web developer to use this pairing.\n"
        "- The HTML snippet must include preconnect links and a single <link> to Google Fonts "
        "for all unique families and weights.\n"
        "- The CSS snippet must include an @import, CSS custom properties for each font role, "
        "and example usage.\n"
        "- The Tailwind snippet must show the full content for a tailwind.config.js file that "
        "extends the theme."
    )
