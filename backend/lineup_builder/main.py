"""FastAPI entry point for the Chemistry Lineup Builder."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import chemistry, export, lineup, saved


@asynccontextmanager
async def lifespan(app: FastAPI):
    import logging
    logger = logging.getLogger(__name__)
    from .services.chemistry_loader import load_persisted_chemistry
    from .services.lineup_session import load_saved_lineups
    loaded = load_persisted_chemistry()
    if loaded:
        logger.info(f"Auto-loaded chemistry for {loaded} players")
    load_saved_lineups()
    yield


app = FastAPI(
    title="Chemistry Lineup Builder",
    description="Field positions, batting order, and pairwise team chemistry",
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

app.include_router(lineup.router, prefix="/api/lineup", tags=["lineup"])
app.include_router(saved.router, prefix="/api/saved", tags=["saved"])
app.include_router(chemistry.router, prefix="/api/chemistry", tags=["chemistry"])
app.include_router(export.router, prefix="/api/export", tags=["export"])


@app.get("/api/health")
def health():
    return {"status": "ok"}
