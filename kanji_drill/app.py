"""FastAPI application: the drill's render and event boundary."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse

from kanji_drill.config import Settings, apply_env_overrides, load_settings
from kanji_drill.loader import DeckLoader, LoadStatus
from kanji_drill.session import DrillSession

# Global state (initialized in startup)
_settings: Settings | None = None
_loader: DeckLoader | None = None
_session: DrillSession | None = None


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


async def startup():
    global _settings, _loader
    if _loader is not None or _session is not None:
        return  # Already initialized (e.g. by tests)
    if _settings is None:
        _settings = apply_env_overrides(load_settings())
    _loader = DeckLoader(_settings.vocab_full_path)
    _loader.start()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    await startup()
    yield


app = FastAPI(title="Kanji Drill", lifespan=lifespan)


def _current_state() -> dict:
    """Poll the loader and return the render snapshot for the current phase."""
    global _session
    if _session is not None:
        return {"status": LoadStatus.READY.value, **_session.snapshot()}

    assert _loader is not None
    state = _loader.poll()
    if state.status is LoadStatus.PENDING:
        return {"status": state.status.value, "source": str(_loader.path)}
    if state.status is LoadStatus.FAILED:
        return {
            "status": state.status.value,
            "error": str(state.error),
            "kind": type(state.error).__name__,
        }

    s = get_settings()
    _session = DrillSession(state.deck, s.display_prefs(), min_similarity=s.min_similarity)
    return {"status": LoadStatus.READY.value, **_session.snapshot()}


def _require_session() -> DrillSession:
    state = _current_state()
    if _session is None:
        detail = state.get("error", "Vocabulary is still loading")
        raise HTTPException(409, detail)
    return _session


# ── Static files ──────────────────────────────────────────────────────────

static_dir = Path(__file__).parent / "static"


@app.get("/")
async def index():
    return FileResponse(static_dir / "index.html")


@app.get("/style.css")
async def style():
    return FileResponse(static_dir / "style.css", media_type="text/css")


@app.get("/app.js")
async def script():
    return FileResponse(static_dir / "app.js", media_type="application/javascript")


# ── API: Session ──────────────────────────────────────────────────────────

async def _json_body(request: Request) -> dict:
    """Parse an optional JSON object body; anything else is a 400."""
    if not await request.body():
        return {}
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(400, "Request body is not valid JSON")
    if not isinstance(body, dict):
        raise HTTPException(400, "Request body must be a JSON object")
    return body


@app.get("/api/state")
async def api_state():
    return _current_state()


@app.post("/api/input")
async def api_input(request: Request):
    body = await _json_body(request)
    text = body.get("text", "")
    if not isinstance(text, str):
        raise HTTPException(400, "text must be a string")
    session = _require_session()
    session.edit_input(text)
    return {"input": session.input_text}


@app.post("/api/hint")
async def api_hint():
    session = _require_session()
    session.toggle_hint()
    return _current_state()


@app.post("/api/confirm")
async def api_confirm(request: Request):
    body = await _json_body(request)
    text = body.get("text")
    if text is not None and not isinstance(text, str):
        raise HTTPException(400, "text must be a string")
    session = _require_session()
    record = session.confirm(text)
    return {"result": record.to_dict(), "state": _current_state()}


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()
