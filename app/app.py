"""
FastAPI application — backend for the lead search UI.

Run as a script:
    python app/app.py

Or as a module:
    uvicorn app.app:app --reload

Endpoints:
    POST /search
        body:    {"keyword": "...", "min_followers": "...", "max_followers": "...",
                  "bio_keyword": "..."}   (filters are optional)
        returns: {"keyword": str, "count": int, "profiles": [...]}
    GET /suggestions
        returns: {"suggestions": [...]}
    GET /health

Logs each search and wall-clock response time to stdout and logs/app.log
(rotating, 5 MB max, 3 backups).
"""

import logging
import logging.handlers
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

# Ensure project root is on sys.path when running as a script (python app/app.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from leads import config
from leads.errors import GENERIC_MESSAGE, NoProfilesFoundError, RateLimitedError
from leads.llm import SearchModel, get_model
from leads.models import Profile, SearchFilters
from leads.search import search_profiles

LOG_DIR  = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"

def _setup_logging() -> None:
    LOG_DIR.mkdir(exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(stream)
    root.addHandler(rotating)

_setup_logging()
log = logging.getLogger("api")


# ---------------------------------------------------------------------------
# Model client
# ---------------------------------------------------------------------------

_model: SearchModel | None = None


def set_model(model: SearchModel | None) -> None:
    """Swap the search model (tests inject a fake one here)."""
    global _model
    _model = model


def _get_model() -> SearchModel:
    global _model
    if _model is None:
        _model = get_model()
    return _model


@asynccontextmanager
async def lifespan(_: FastAPI):
    log.info("Initialising %s client…", config.PROVIDER)
    _get_model()
    log.info("  Ready (model=%s).", config.MODEL)

    yield  # server runs here


app = FastAPI(title="Acelera Leads", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class SearchRequest(BaseModel):
    keyword: str
    min_followers: str | None = None
    max_followers: str | None = None
    bio_keyword: str | None = None

    def filters(self) -> SearchFilters:
        return SearchFilters(
            min_followers=self.min_followers,
            max_followers=self.max_followers,
            bio_keyword=self.bio_keyword,
        )


class SearchResponse(BaseModel):
    keyword: str
    count: int
    profiles: list[Profile]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.post("/search", response_model=SearchResponse)
async def search(req: SearchRequest) -> SearchResponse:
    keyword = req.keyword.strip()
    if not keyword:
        raise HTTPException(status_code=400, detail="Keyword must not be empty.")

    t0 = time.perf_counter()
    filters = req.filters()
    log.info("Searching: keyword=%r  filters=%s", keyword, filters.model_dump(exclude_none=True))

    try:
        profiles = await search_profiles(_get_model(), keyword, filters)
    except NoProfilesFoundError as exc:
        log.info("keyword=%r  hits=0  %.2fs", keyword, time.perf_counter() - t0)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RateLimitedError as exc:
        log.warning("keyword=%r  rate limited  %.2fs", keyword, time.perf_counter() - t0)
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except Exception as exc:
        log.exception("keyword=%r  failed  %.2fs", keyword, time.perf_counter() - t0)
        raise HTTPException(status_code=502, detail=GENERIC_MESSAGE) from exc

    elapsed = time.perf_counter() - t0
    log.info("keyword=%r  hits=%d  %.2fs", keyword, len(profiles), elapsed)

    return SearchResponse(keyword=keyword, count=len(profiles), profiles=profiles)


@app.get("/suggestions")
def suggestions() -> dict[str, list[str]]:
    return {"suggestions": config.SUGGESTED_KEYWORDS}


@app.get("/health")
def health() -> dict[str, str]:
    model = _model.name if _model is not None else config.MODEL
    return {"status": "ok", "provider": config.PROVIDER, "model": model}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _launch_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    log.info("=== Acelera Leads — launching server on http://%s:%d ===", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    _launch_server()
