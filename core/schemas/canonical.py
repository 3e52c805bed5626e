"""
Schemas & Errors
File: canonical.py

Purpose: Deterministic serialization of ledger records, used when the
ledger is persisted to disk.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import json
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Rules:
        - Decimals become their plain string form ("0.5", never "5E-1")
        - Enums become their values
        - Pydantic models are dumped in JSON mode, None fields kept
        - Floats are rejected; ledger amounts are integers

    Raises:
        CanonicalizationException: If the value cannot be canonicalized.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        raise CanonicalizationException(
            message=f"Float values are not allowed in ledger records: {value}",
            details={"path": path},
        )

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise CanonicalizationException(
                message=f"Non-finite decimal value encountered: {value}",
                details={"path": path},
            )
        return format(value, "f")

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, BaseModel):
        return canonicalize_value(value.model_dump(mode="python"), path)

    if isinstance(value, dict):
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, bytes):
        return value.hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to canonical JSON string.

    Example:
        >>> dumps_canonical({"b": 2, "a": Decimal("0.50")})
        '{"a":"0.50","b":2}'
    """
    try:
        return json.dumps(
            canonicalize_value(obj),
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def loads_canonical(json_str: str) -> Any:
    """Parse a canonical JSON string. Decimals stay as strings."""
    return json.loads(json_str)
