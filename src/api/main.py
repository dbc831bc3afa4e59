import asyncio
import contextlib
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import build_rate_limiter, get_settings
from src.api.responses import error_response
from src.app_shell.config import ConfigError
from src.app_shell.rate_limit import run_purge_loop
from src.core.errors import PipelineError
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        limiter = build_rate_limiter(rules)
        logger.info("Rules loaded from %s", settings.rules_path)
    except (FileNotFoundError, ValueError, ConfigError) as e:
        logger.critical("Startup configuration failed: %s", e)
        sys.exit(1)

    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()

    interval = settings.purge_interval_seconds or rules.rate_limits.purge_interval_seconds
    purge_task = asyncio.create_task(run_purge_loop(limiter, interval))

    yield

    purge_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await purge_task


app = FastAPI(
    title="NextGen Site API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """Errors raised from dependencies (admin auth) use the route envelope."""
    return error_response(exc)


# --- Routers ---
from src.api.routes import (  # noqa: E402
    admin_auth,
    admin_comments,
    admin_newsletter,
    admin_revalidate,
    admin_stats,
    health,
    public_comments,
    public_contact,
    public_newsletter,
)

app.include_router(public_comments.router, prefix="/api/blog", tags=["Blog"])
app.include_router(public_newsletter.router, prefix="/api/blog", tags=["Blog"])
app.include_router(public_contact.router, prefix="/api", tags=["Contact"])
app.include_router(admin_auth.router, prefix="/api/admin/auth", tags=["Admin Auth"])
app.include_router(admin_comments.router, prefix="/api/admin", tags=["Admin Comments"])
app.include_router(admin_newsletter.router, prefix="/api/admin", tags=["Admin Subscribers"])
app.include_router(admin_stats.router, prefix="/api/admin", tags=["Admin Dashboard"])
app.include_router(admin_revalidate.router, prefix="/api", tags=["Revalidation"])
app.include_router(health.router, prefix="/api/health", tags=["Health"])


# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
