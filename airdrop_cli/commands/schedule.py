"""
CLI Schedule Commands

- validate: check a distribution schedule file
- claimable: evaluate the vesting calculator for one recipient

Schedule files are JSON or YAML, either a bare list of segments or an
object with a `distribution_schedule` key. Segments may be mappings
({start, end, fraction}) or [start, end, fraction] triples. Fractions are
best written as strings ("0.25") so no float rounding is involved.

Usage:
    airdrop schedule validate schedule.json [--json]
    airdrop schedule claimable --schedule schedule.json --assigned 1000 --now 150
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from airdrop_cli.output import (
    EXIT_REJECTED,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_json,
    print_rejection,
)
from core.schemas.errors import AirdropException
from core.schemas.ledger import Segment
from core.vesting.calculator import calc_claimable_amount, segment_contributions
from core.vesting.schedule import check_distribution_schedule, validate_distribution_schedule


logger = logging.getLogger(__name__)


def load_schedule(path: Path) -> list[Segment]:
    """
    Parse a schedule file into segments. Structural only; call
    validate_distribution_schedule for the ordering/sum invariants.

    Raises:
        OSError: If the file cannot be read
        ValueError: On malformed content (pydantic ValidationError included)
    """
    text = path.read_text(encoding="utf-8")
    data: Any
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text, parse_float=Decimal)

    if isinstance(data, dict):
        data = data.get("distribution_schedule")
    if not isinstance(data, list):
        raise ValueError("schedule file must hold a list of segments or a distribution_schedule key")

    return [Segment.model_validate(item) for item in data]


def schedule_validate_cmd(args: Namespace) -> int:
    """Exit 0 if the schedule is valid, 2 if it is rejected."""
    try:
        segments = load_schedule(Path(args.schedule_path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading schedule: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    check = check_distribution_schedule(segments)

    if args.json:
        print_json(check.model_dump(mode="json"))
    else:
        status = "✓" if check.ok else "✗"
        print(f"{status} {check.message}")
        if check.ok:
            for segment in segments:
                start, end, fraction = segment.as_tuple()
                kind = "instant" if segment.is_instant else "linear"
                print(f"  [{start}, {end}] {fraction} ({kind})")

    return EXIT_SUCCESS if check.ok else EXIT_REJECTED


def schedule_claimable_cmd(args: Namespace) -> int:
    """Print the claimable amount and, with --debug, the per-segment breakdown."""
    try:
        segments = load_schedule(Path(args.schedule))
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading schedule: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.now < args.last_claim:
        print("Error: --now must not be earlier than --last-claim", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        validate_distribution_schedule(segments)
    except AirdropException as e:
        return print_rejection(e, as_json=args.json)

    claimable = calc_claimable_amount(
        assigned_amount=args.assigned,
        claimed_amount=args.claimed,
        schedule=segments,
        last_claim_time=args.last_claim,
        now=args.now,
    )
    contributions, _ = segment_contributions(args.assigned, segments, args.last_claim, args.now)

    if args.json:
        result: dict[str, Any] = {
            "assigned_amount": str(args.assigned),
            "claimed_amount": str(args.claimed),
            "last_claim_time": args.last_claim,
            "now": args.now,
            "claimable_amount": str(claimable),
        }
        if args.debug:
            result["segments"] = [
                {
                    "index": c.index,
                    "segment_total": str(c.segment_total),
                    "elapsed_seconds": c.elapsed_seconds,
                    "amount": str(c.amount),
                }
                for c in contributions
            ]
        print_json(result)
    else:
        print(f"claimable: {claimable}")
        if args.debug:
            for c in contributions:
                print(
                    f"  segment {c.index}: total={c.segment_total} "
                    f"elapsed={c.elapsed_seconds}s amount={c.amount}"
                )

    return EXIT_SUCCESS
