"""Full page rendering for the FontPairer UI."""

from models import SessionSnapshot, SnippetView

from .components import render_font_links, render_pairing_region, render_search_form

TITLE = "FontPairer"
TAGLINE = "Enter one font. Get three perfect pairs. Professional font pairings in seconds."

# Reload while a request is in flight so the page follows the controllers.
REFRESH_SECONDS = 1

STYLES = """
:root { color-scheme: light; --bg: #f9fafb; --fg: #111827; --card: #ffffff; --muted: #6b7280; --accent: #4f46e5; }
html.dark { color-scheme: dark; --bg: #111827; --fg: #f3f4f6; --card: #1f2937; --muted: #9ca3af; }
body { margin: 0; background: var(--bg); color: var(--fg); font-family: system-ui, sans-serif; }
.container { max-width: 72rem; margin: 0 auto; padding: 2rem 1rem; }
header { text-align: center; margin-bottom: 2rem; }
header p { color: var(--muted); }
.search { display: flex; gap: .5rem; max-width: 40rem; margin: 0 auto; }
.search input { flex: 1; padding: .9rem 1.2rem; font-size: 1.1rem; border-radius: 999px; border: 2px solid transparent; }
.search button, .tab, .copy, .preview-toggle, .theme-toggle { cursor: pointer; border: 0; border-radius: 999px; padding: .6rem 1.2rem; background: var(--accent); color: #fff; }
button[disabled] { opacity: .5; cursor: not-allowed; }
.card-grid, .skeleton-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(14rem, 1fr)); gap: 1.5rem; margin-top: 2rem; }
.font-card, .rationale { background: var(--card); border-radius: 1rem; padding: 1.5rem; }
.font-card-header { display: flex; justify-content: space-between; align-items: center; }
.font-name { color: var(--muted); font-size: .875rem; }
.specimen { font-size: 3rem; margin: 1rem 0; }
.rationale { margin-top: 2rem; }
.skeleton { background: #e5e7eb; border-radius: 1rem; animation: pulse 1.5s infinite; }
.skeleton.card { height: 7rem; } .skeleton.wide { height: 6rem; margin-top: 2rem; } .skeleton.line { height: 1rem; margin: .75rem 0; }
@keyframes pulse { 50% { opacity: .5; } }
.error { margin-top: 2rem; text-align: center; color: #ef4444; background: #fee2e2; padding: 1rem; border-radius: .5rem; }
.preview, .export { margin-top: 2rem; }
.preview h2, .export h2 { text-align: center; }
.preview-canvas { padding: 3rem; border-radius: 1rem; }
.preview-light .preview-canvas { background: #fff; color: #374151; }
.preview-dark .preview-canvas { background: #111827; color: #d1d5db; }
.preview .subtitle { color: var(--accent); font-size: 1.25rem; }
.export .tabs { display: flex; gap: .5rem; }
.tab { background: transparent; color: var(--fg); } .tab.active { background: var(--accent); color: #fff; }
.snippet { position: relative; background: #1f2937; color: #e5e7eb; border-radius: 1rem; padding: 1rem; min-height: 12rem; margin-top: .5rem; }
.snippet pre { overflow-x: auto; } .snippet .copy { position: absolute; top: 1rem; right: 1rem; }
.snippet .download { color: #a5b4fc; } .snippet-error { color: #f87171; }
footer { text-align: center; margin-top: 4rem; color: var(--muted); }
"""

# A copy during an open acknowledgment window restarts it instead of stacking timers.
COPY_SCRIPT = """
async function copySnippet(button) {
  const response = await fetch('/api/snippets/copy', {method: 'POST'});
  if (!response.ok) return;
  const data = await response.json();
  await navigator.clipboard.writeText(data.text);
  clearTimeout(button.copyTimer);
  button.textContent = data.copied ? 'Copied!' : 'Copy';
  button.copyTimer = setTimeout(() => {
    button.textContent = 'Copy';
    button.copyTimer = null;
  }, COPY_ACK_MS);
}
"""


def render_page(snapshot: SessionSnapshot, copy_ack_seconds: float = 2.0) -> str:
    """Render the whole UI for one session snapshot."""
    pairing = snapshot.pairing
    in_flight = pairing.is_loading or snapshot.snippets.view == SnippetView.LOADING
    refresh = f'<meta http-equiv="refresh" content="{REFRESH_SECONDS}">' if in_flight else ""
    html_class = ' class="dark"' if snapshot.dark_mode else ""
    theme_label = "Light" if snapshot.dark_mode else "Dark"

    return f"""<!DOCTYPE html>
<html lang="en"{html_class}>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
{refresh}
<title>{TITLE}</title>
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
{render_font_links(snapshot.font_links)}
<style>{STYLES}</style>
<script>const COPY_ACK_MS = {round(copy_ack_seconds * 1000)};{COPY_SCRIPT}</script>
</head>
<body>
<div class="container">
<header>
<h1>{TITLE}</h1>
<form method="post" action="/theme"><button type="submit" class="theme-toggle">{theme_label} mode</button></form>
<p>{TAGLINE}</p>
</header>
<main>
{render_search_form(pairing.input_font, pairing.is_loading)}
{render_pairing_region(pairing, snapshot.snippets, snapshot.preview_dark_mode)}
</main>
<footer><p>Powered by Google Gemini. Designed for creators.</p></footer>
</div>
</body>
</html>
"""
