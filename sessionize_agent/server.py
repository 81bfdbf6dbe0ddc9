"""FastAPI server for the Sessionize agent.

Run with:
    uvicorn sessionize_agent.server:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from sessionize_agent.agent import create_concierge_agent
from sessionize_agent.api.routes import router
from sessionize_agent.config import CORS_ORIGINS, SERVER_HOST, SERVER_PORT
from sessionize_agent.tools.dispatcher import get_dispatcher

# ── Logging ──────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan: initialise shared resources ────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Create the dispatcher and compile the agent once per process.

    The tool endpoints work without an Anthropic key; only ``/api/chat``
    needs the agent, and it answers 503 when the agent could not be built.
    """
    application.state.dispatcher = get_dispatcher()
    try:
        logger.info("Compiling concierge agent…")
        application.state.agent = create_concierge_agent()
        logger.info("Agent ready.")
    except OSError as exc:
        logger.warning("Chat agent disabled: %s", exc)
        application.state.agent = None
    yield


# ── FastAPI application ──────────────────────────────────────────────
app = FastAPI(
    title="Sessionize Agent",
    description="Conference speakers, sessions and schedule from Sessionize, as agent tools.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request-ID middleware ────────────────────────────────────────────
@app.middleware("http")
async def add_request_id(request: Request, call_next) -> Response:
    """Tag every request with an ``X-Request-ID`` (client-supplied or new)."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    request.state.request_id = request_id
    logger.info("[%s] %s %s", request_id, request.method, request.url.path)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {
        "service": "Sessionize Agent",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
        "tools": "/api/tools",
    }


if __name__ == "__main__":
    logger.info("Starting Sessionize Agent API server on %s:%d", SERVER_HOST, SERVER_PORT)
    uvicorn.run(
        "sessionize_agent.server:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        reload=True,
    )
