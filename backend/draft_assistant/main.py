"""FastAPI entry point for the Fantasy Draft Assistant."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import assistant_config
from .routers import draft, export, players, roster


@asynccontextmanager
async def lifespan(app: FastAPI):
    import logging
    logger = logging.getLogger(__name__)
    from .services.draft_tracker import initialize_state
    state = initialize_state()
    logger.info(f"Draft assistant ready with {len(state.players)} players")
    yield


app = FastAPI(
    title=assistant_config.app_name,
    description="Live draft tracker with roster needs, scarcity-aware picks, and bye-week alerts",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(players.router, prefix="/api/players", tags=["players"])
app.include_router(roster.router, prefix="/api/roster", tags=["roster"])
app.include_router(draft.router, prefix="/api/draft", tags=["draft"])
app.include_router(export.router, prefix="/api/export", tags=["export"])


@app.get("/api/health")
def health():
    return {"status": "ok"}
