"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import execute, health, query, verify
from api.errors import (
    APIError,
    airdrop_error_handler,
    api_error_handler,
    generic_error_handler,
)
from core.schemas.errors import AirdropException


# Respects AIRDROP_LOG_LEVEL and the log_level key of airdrop.json
def _resolve_log_level() -> int:
    """Resolve log level from env var or airdrop.json, defaulting to INFO."""
    raw = os.getenv("AIRDROP_LOG_LEVEL")
    if raw is None:
        try:
            import json
            from pathlib import Path
            cfg_path = Path.cwd() / "airdrop.json"
            if cfg_path.exists():
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
        except (OSError, ValueError):
            pass
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Airdrop API",
        description="""
HTTP API for a Merkle-committed token airdrop with a vesting schedule.

## Endpoints

- **POST /execute/{operation}** - Apply one ledger operation
  (initialize, update_config, register_merkle_root, participate, claim,
  withdraw, migrate)
- **GET /query/{view}** - Read config, global state, a user, or the root
- **POST /verify/proof** - Check a recipient proof without touching the ledger
- **GET /health** - Health check

## Caller context

- `X-Sender` header - identity performing the operation (required)
- `X-Block-Time` header - operation time in unix seconds (default: server clock)
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AirdropException, airdrop_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(execute.router)
    app.include_router(query.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    from core.config.runtime import get_default_config

    api_config = get_default_config().api
    uvicorn.run(app, host=api_config.host, port=api_config.port)
