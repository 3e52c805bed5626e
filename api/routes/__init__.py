"""API route handlers."""

from api.routes import execute, health, query, verify

__all__ = ["execute", "health", "query", "verify"]
