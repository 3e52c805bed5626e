"""
Minimal API (FastAPI)

HTTP API for the Merkle airdrop:
- POST /execute/* - Run one ledger operation
- GET /query/* - Read config, totals, recipient state and the active root
- POST /verify/proof - Check a proof without touching the ledger
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
