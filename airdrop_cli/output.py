"""
Shared exit codes and printing helpers for CLI commands.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from core.schemas.errors import AirdropException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_REJECTED = 2


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def print_rejection(exc: AirdropException, as_json: bool = False) -> int:
    """Report a rejected operation and return the matching exit code."""
    if as_json:
        print_json({"ok": False, "error": exc.to_error_model().model_dump(mode="json")})
    else:
        print(f"Rejected [{exc.code}]: {exc.message}", file=sys.stderr)
        for key, value in exc.details.items():
            print(f"  {key}: {value}", file=sys.stderr)
    return EXIT_REJECTED
