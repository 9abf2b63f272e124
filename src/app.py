"""Escape Log FastAPI application.

Serves the public review log and the signed-in author's write operations.
Commands are processed synchronously inside each request's domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from escapelog/domain.toml:
#   - unset/"test" → in-memory store
#   - "production" → PostgreSQL (DATABASE_URL)
from escapelog.domain import escapelog  # noqa: E402
from escapelog.utils.logging import (  # noqa: E402
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

configure_logging()
escapelog.init()

_DOMAIN_ROUTES = ("/reviews", "/session")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Escape Log API",
    description="Escape-room theme reviews: public reading, signed-in writing",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Escape Log domain context for domain routes."""
    if request.url.path.startswith(_DOMAIN_ROUTES):
        bind_request_context(request.method, request.url.path)
        try:
            with escapelog.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from escapelog.api import review_router, session_router  # noqa: E402

app.include_router(review_router)
app.include_router(session_router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": escapelog.name}})
