"""
FontPairer Service - Font pairing recommendations powered by Google Gemini

FastAPI service providing:
- A server-rendered UI (search, recommendations, live preview, export panel)
- A JSON API over the same session state
- Pairing and code-snippet generation via the Gemini API
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional
from urllib.parse import parse_qs

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

# Load environment variables
load_dotenv()

from config import LOG_FORMAT, Settings
from controllers import Session
from generation import GenerationClient
from models import (
    CopyResponse,
    HealthResponse,
    SearchRequest,
    SearchResponse,
    SessionSnapshot,
    SnippetTab,
    TabRequest,
)
from utils import RateLimiter, RateLimitMiddleware
from views import SNIPPET_FILENAMES, render_page

VERSION = "1.0.0"

# Endpoints that start a Gemini call
GENERATION_PATHS = ("/search", "/api/search")

# Configure logging
settings = Settings()
logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Service start time for uptime tracking
start_time = time.time()


# ============================================================================
# Lifespan
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the generation client and session; a missing API key aborts startup."""
    logger.info("Starting FontPairer service...")
    app_settings: Settings = app.state.settings
    generator = app.state.generator or GenerationClient.from_settings(app_settings)

    session = Session.create(generator, app_settings)
    app.state.session = session
    if app.state.autostart:
        session.start()

    logger.info("FontPairer service ready")
    yield
    logger.info("Shutting down FontPairer service...")
    session.close()


def get_session(request: Request) -> Session:
    return request.app.state.session


async def read_form(request: Request) -> dict[str, str]:
    """Decode an urlencoded form body into single values."""
    try:
        body = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Form body is not valid UTF-8")
    return {key: values[0] for key, values in parse_qs(body).items()}


def parse_tab(value: Optional[str]) -> SnippetTab:
    try:
        return SnippetTab(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown snippet tab: {value!r}")


def redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


# ============================================================================
# FastAPI App
# ============================================================================

def create_app(
    app_settings: Optional[Settings] = None,
    generator=None,
    autostart: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the module-level settings)
        generator: Object with request_pairing/request_snippets; defaults to a GenerationClient
        autostart: Run the initial search for the default font on startup
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="FontPairer",
        description="Font pairing recommendations and integration snippets powered by Gemini",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.generator = generator
    app.state.autostart = autostart

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Rate limiting middleware - every search spends Gemini quota
    app.add_middleware(
        RateLimitMiddleware,
        rate_limiter=RateLimiter(
            requests_per_minute=app_settings.rate_limit_per_minute,
            burst_limit=app_settings.rate_limit_burst,
        ),
        paths=GENERATION_PATHS,
        trust_forwarded_for=app_settings.trust_forwarded_for,
    )

    register_routes(app)
    return app


def register_routes(app: FastAPI) -> None:

    # ========================================================================
    # Health Check
    # ========================================================================

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            uptime_seconds=time.time() - start_time,
            version=VERSION,
        )

    # ========================================================================
    # UI
    # ========================================================================

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Render the page for the current session state."""
        session = get_session(request)
        return HTMLResponse(render_page(session.snapshot(), copy_ack_seconds=session.snippets.ack_seconds))

    @app.post("/search")
    async def search_form(request: Request):
        form = await read_form(request)
        get_session(request).pairing.submit(form.get("font_name", ""))
        return redirect_home()

    @app.post("/theme")
    async def toggle_theme_form(request: Request):
        get_session(request).toggle_dark_mode()
        return redirect_home()

    @app.post("/preview/theme")
    async def toggle_preview_theme_form(request: Request):
        get_session(request).toggle_preview_dark_mode()
        return redirect_home()

    @app.post("/snippets/tab")
    async def select_tab_form(request: Request):
        form = await read_form(request)
        get_session(request).snippets.select_tab(parse_tab(form.get("tab")))
        return redirect_home()

    # ========================================================================
    # JSON API
    # ========================================================================

    @app.get("/api/state", response_model=SessionSnapshot)
    async def get_state(request: Request):
        return get_session(request).snapshot()

    @app.post("/api/search", response_model=SearchResponse, status_code=202)
    async def search(payload: SearchRequest, request: Request):
        """
        Start a pairing search.

        ``accepted`` is false when the name is blank or a search is already running.
        """
        session = get_session(request)
        logger.info(f"Search requested for '{payload.font_name}'")

        try:
            task = session.pairing.submit(payload.font_name)
        except Exception as e:
            logger.exception(f"Error starting search for {payload.font_name!r}")
            raise HTTPException(status_code=500, detail=f"Failed to start search: {str(e)}")

        return SearchResponse(accepted=task is not None, state=session.snapshot())

    @app.post("/api/theme/toggle", response_model=SessionSnapshot)
    async def toggle_theme(request: Request):
        session = get_session(request)
        session.toggle_dark_mode()
        return session.snapshot()

    @app.post("/api/preview/theme/toggle", response_model=SessionSnapshot)
    async def toggle_preview_theme(request: Request):
        session = get_session(request)
        session.toggle_preview_dark_mode()
        return session.snapshot()

    @app.post("/api/snippets/tab", response_model=SessionSnapshot)
    async def select_tab(payload: TabRequest, request: Request):
        session = get_session(request)
        session.snippets.select_tab(payload.tab)
        return session.snapshot()

    @app.post("/api/snippets/copy", response_model=CopyResponse)
    async def copy_snippet(request: Request):
        """Copy the active tab's snippet; the browser writes ``text`` to its clipboard."""
        snippets = get_session(request).snippets
        text = snippets.copy()
        if text is None:
            raise HTTPException(status_code=409, detail="No code snippets available to copy")
        state = snippets.current
        return CopyResponse(tab=state.active_tab, text=text, copied=state.copied)

    @app.get("/api/snippets/{tab}/download", response_class=PlainTextResponse)
    async def download_snippet(tab: str, request: Request):
        snippet_tab = parse_tab(tab)
        snippets = get_session(request).snippets.current.snippets
        if snippets is None:
            raise HTTPException(status_code=404, detail="No code snippets available")

        filename = SNIPPET_FILENAMES[snippet_tab]
        return PlainTextResponse(
            snippets.text_for(snippet_tab),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api")
    async def root():
        """Service info."""
        return {
            "service": "FontPairer",
            "version": VERSION,
            "status": "running",
            "endpoints": [
                "/",
                "/health",
                "/api/state",
                "/api/search",
                "/api/theme/toggle",
                "/api/preview/theme/toggle",
                "/api/snippets/tab",
                "/api/snippets/copy",
                "/api/snippets/{tab}/download",
            ],
        }


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
