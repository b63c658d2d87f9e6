"""
Main FastAPI application for the CHSI assistant backend.
Handles CORS, request logging middleware, lifespan events, and router registration.
"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chsi.config import settings
from chsi.database import close_db, init_db
from chsi.routers import chat, chats, documents, health, profile

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Startup / shutdown helpers
# ---------------------------------------------------------------------------

async def _check_database() -> bool:
    """Initialise DB tables and verify the connection.  Returns True on success."""
    try:
        await init_db()
        logger.info("✓ Database connection OK")
        return True
    except Exception as exc:
        logger.error("✗ Database connection failed: %s", exc)
        raise


async def _check_ollama() -> dict:
    """
    Verify Ollama is reachable and that the chat model is pulled.
    Never raises; problems are logged as warnings.
    """
    result = {"reachable": False, "llm_model": False, "models": []}
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.get(f"{settings.OLLAMA_BASE_URL}/api/tags")
        if resp.status_code != 200:
            logger.warning("⚠ Ollama responded with status %d", resp.status_code)
            return result

        result["reachable"] = True
        available = [m["name"] for m in resp.json().get("models", [])]
        result["models"] = available
        logger.info("✓ Ollama reachable, available models: %s", available)

        llm_model = settings.OLLAMA_LLM_MODEL
        result["llm_model"] = any(
            m == llm_model or m.startswith(llm_model.split(":")[0])
            for m in available
        )
        if result["llm_model"]:
            logger.info("  ✓ LLM model '%s' is available", llm_model)
        else:
            logger.warning(
                "  ⚠ LLM model '%s' not found, run: ollama pull %s",
                llm_model,
                llm_model,
            )

    except Exception as exc:
        logger.error("✗ Ollama unreachable (%s), chat replies will fail", exc)
    return result


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("=" * 60)
    logger.info("  Starting CHSI assistant backend …")
    logger.info("=" * 60)

    # 1: Database (required; raises on failure)
    await _check_database()

    # 2: Ollama (optional; logs warnings but continues)
    ollama_status = await _check_ollama()
    if not ollama_status["reachable"]:
        logger.warning(
            "Ollama is not running.  Start it with: ollama serve\n"
            "  Chat replies are unavailable until Ollama is up; "
            "direct document generation still works."
        )

    logger.info("=" * 60)
    logger.info("  CHSI backend ready on http://%s:%d", settings.HOST, settings.PORT)
    logger.info("  Swagger UI : http://%s:%d/docs", settings.HOST, settings.PORT)
    logger.info("  Health     : http://%s:%d/api/health", settings.HOST, settings.PORT)
    logger.info("=" * 60)

    yield  # ← server is running

    logger.info("Shutting down CHSI backend …")
    await close_db()
    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="CHSI Assistant API",
    description=(
        "**CHSI Assistant**: legal assistant and document generator for "
        "private enforcement officers of the Republic of Kazakhstan.\n\n"
        "Key endpoints:\n"
        "- `POST /api/chat`: one assistant turn, with optional .docx attachment\n"
        "- `GET  /api/chats`: chat history\n"
        "- `GET  /api/profile`: officer profile\n"
        "- `GET  /api/documents/types`: supported document templates\n"
        "- `POST /api/documents/generate`: render a document to .docx\n"
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Process-Time"],
)


# ---------------------------------------------------------------------------
# Request / response logging middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code, and elapsed time.
    Attaches an ``X-Process-Time`` header (milliseconds) to every response.
    """
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

    # Skip noisy health-check polling from the frontend
    if request.url.path not in ("/api/health", "/api/health/", "/"):
        logger.info(
            "%s %s → %d  (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

    response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
    return response


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return a structured JSON error for any unhandled exception."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error": str(exc),
            "path": str(request.url.path),
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health.router,    prefix="/api/health",    tags=["Health"])
app.include_router(chat.router,      prefix="/api/chat",      tags=["Chat"])
app.include_router(chats.router,     prefix="/api/chats",     tags=["Chats"])
app.include_router(profile.router,   prefix="/api/profile",   tags=["Profile"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["Root"], include_in_schema=False)
async def root():
    """API root: returns basic service info."""
    return {
        "name": "CHSI Assistant API",
        "version": "0.1.0",
        "description": "Legal assistant and document generator for private enforcement officers",
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "chat": "/api/chat",
            "chats": "/api/chats",
            "profile": "/api/profile",
            "document_types": "/api/documents/types",
            "generate": "/api/documents/generate",
        },
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chsi.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
