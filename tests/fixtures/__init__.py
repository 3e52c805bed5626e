"""
Test fixtures package for airdrop tests.

This package provides factory functions for creating test objects:
- common.py: schedules, recipient lists, built claims and state machines

Usage:
    from fixtures.common import make_registered_machine, participate_request

    def test_something():
        machine, claims = make_registered_machine()
        machine.participate(ctx("wasm1alice"), participate_request(claims, "wasm1alice"))
"""

from .common import (
    ADMIN,
    EXPIRY,
    TOKEN,
    ctx,
    make_claims,
    make_initialized_machine,
    make_linear_schedule,
    make_machine,
    make_recipients,
    make_registered_machine,
    make_schedule,
    make_segment,
    make_uneven_schedule,
    participate_request,
    write_recipients_csv,
)

__all__ = [
    "ADMIN",
    "EXPIRY",
    "TOKEN",
    "ctx",
    "make_claims",
    "make_initialized_machine",
    "make_linear_schedule",
    "make_machine",
    "make_recipients",
    "make_registered_machine",
    "make_schedule",
    "make_segment",
    "make_uneven_schedule",
    "participate_request",
    "write_recipients_csv",
]
