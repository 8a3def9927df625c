"""FastAPI server for the stop desk checker.

Goals
-----
- Load both datasets once at startup (do NOT reload per request)
- Answer per-keystroke commune searches from memory
- Browse stop desks by wilaya

Endpoints
---------
GET /health
GET /communes/search?q=...
GET /wilayas
GET /wilayas/{key}/desks

If the datasets failed to load, search and desk endpoints answer 503 with the
user-facing error message until the process is restarted.

Run (example)
-------------
    export STOPDESK_COMMUNES_SOURCE="https://example.org/data/communes.json"
    export STOPDESK_DESKS_SOURCE="https://example.org/data/desks.json"
    uvicorn stopdesk.api:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from .config import Settings
from .desks import DeskDirectory, DeskRecord, WilayaOption, unknown_wilayas
from .gazetteer import CommuneIndex
from .loader import load_datasets
from .matcher import MatchResult
from .session import LookupSession
from .wilayas import wilaya_name


class CommuneMatchOut(BaseModel):
    key: str
    name: str
    wilaya_id: int
    wilaya_name: str | None
    postal_code: str
    has_stop_desk: bool
    score: float


class SearchResponse(BaseModel):
    query: str
    results: list[CommuneMatchOut]


class WilayaOut(BaseModel):
    key: str
    name: str
    label: str


class WilayasResponse(BaseModel):
    options: list[WilayaOut]
    unknown: list[WilayaOut]
    wilaya_count: int
    desk_count: int


class DeskOut(BaseModel):
    name: str
    postal_code: str
    maps_link: str | None


class DesksResponse(BaseModel):
    key: str
    wilaya_name: str | None
    desks: list[DeskOut]


class HealthResponse(BaseModel):
    status: str
    error: str | None


def _match_out(m: MatchResult) -> CommuneMatchOut:
    return CommuneMatchOut(
        key=m.key,
        name=m.record.name,
        wilaya_id=m.record.wilaya_id,
        wilaya_name=wilaya_name(m.record.wilaya_id),
        postal_code=m.record.postal_code,
        has_stop_desk=m.record.has_stop_desk,
        score=m.score,
    )


def _wilaya_out(w: WilayaOption) -> WilayaOut:
    return WilayaOut(key=w.key, name=w.name, label=w.label)


def _desk_out(d: DeskRecord) -> DeskOut:
    return DeskOut(name=d.name, postal_code=d.postal_code, maps_link=d.maps_link)


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the app.

    Args:
        settings: Explicit settings. Read from the environment at startup if None.
        transport: Optional httpx transport (tests pass a `MockTransport`).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the datasets once and keep the session for all requests."""
        cfg = settings or Settings.from_env()
        session = LookupSession(threshold=cfg.match_threshold, limit=cfg.match_limit)
        app.state.session = session

        async def loader() -> tuple[CommuneIndex, DeskDirectory]:
            async with httpx.AsyncClient(
                timeout=cfg.http_timeout, transport=transport
            ) as client:
                return await load_datasets(
                    cfg.communes_source, cfg.desks_source, client=client
                )

        await session.load(loader)
        yield

    app = FastAPI(title="Stop Desk Checker API", version="0.1.0", lifespan=lifespan)

    def _ready_session() -> LookupSession:
        session: LookupSession | None = getattr(app.state, "session", None)
        if session is None or session.state.status == "loading":
            raise HTTPException(status_code=503, detail="Server is still starting up")
        if not session.state.ready:
            raise HTTPException(status_code=503, detail=session.state.error)
        return session

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        session: LookupSession | None = getattr(app.state, "session", None)
        if session is None:
            return HealthResponse(status="loading", error=None)
        return HealthResponse(status=session.state.status, error=session.state.error)

    @app.get("/communes/search", response_model=SearchResponse)
    def search_communes(q: str = Query("", description="Free-text commune name.")):
        """Fuzzy-search communes by name (accent- and case-insensitive)."""
        session = _ready_session()
        results = session.search(q)
        return SearchResponse(query=q, results=[_match_out(m) for m in results])

    @app.get("/wilayas", response_model=WilayasResponse)
    def list_wilayas() -> WilayasResponse:
        """List selectable wilayas plus the ones with no known desks."""
        session = _ready_session()
        desks = session.state.desks
        assert desks is not None

        summary = desks.summary()
        return WilayasResponse(
            options=[_wilaya_out(w) for w in desks.options()],
            unknown=[_wilaya_out(w) for w in unknown_wilayas()],
            wilaya_count=summary.wilaya_count,
            desk_count=summary.desk_count,
        )

    @app.get("/wilayas/{key}/desks", response_model=DesksResponse)
    def wilaya_desks(key: str) -> DesksResponse:
        """Stop desks of one wilaya, in source order. Unknown keys yield no desks."""
        session = _ready_session()
        desks = session.select_wilaya(key)
        return DesksResponse(
            key=key,
            wilaya_name=wilaya_name(key),
            desks=[_desk_out(d) for d in desks],
        )

    return app


app = create_app()
