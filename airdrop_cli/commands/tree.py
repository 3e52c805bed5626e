"""
CLI Tree Commands

Operator tooling for the Merkle commitment:
- build: recipients CSV (address,amount) -> root, total and per-recipient proofs
- verify: check one (address, amount, proof) against a root offline

Usage:
    airdrop tree build recipients.csv [--out claims.json] [--json]
    airdrop tree verify --address A --amount N --root HEX --proof HEX [HEX ...]
    airdrop tree verify --address A --claims claims.json
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from airdrop_cli.output import (
    EXIT_REJECTED,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_json,
    print_rejection,
)
from core.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from core.schemas.errors import AirdropException, InvalidInputException


logger = logging.getLogger(__name__)


def load_recipients_csv(path: Path) -> list[tuple[str, int]]:
    """
    Read recipients from a CSV with an `address,amount` header.

    Rows with an empty address or amount are skipped.

    Raises:
        InvalidInputException: Missing header, non-integer amount, or no rows
    """
    recipients: list[tuple[str, int]] = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        fieldnames = reader.fieldnames or []
        if "address" not in fieldnames or "amount" not in fieldnames:
            raise InvalidInputException(
                "CSV needs header: address,amount",
                field_path="csv",
                details={"header": list(fieldnames)},
            )
        for line_no, row in enumerate(reader, start=2):
            address = (row.get("address") or "").strip()
            amount = (row.get("amount") or "").strip()
            if not address or not amount:
                continue
            if not amount.isdigit():
                raise InvalidInputException(
                    f"Amount on line {line_no} is not an unsigned integer: {amount!r}",
                    field_path="csv.amount",
                )
            recipients.append((address, int(amount)))

    if not recipients:
        raise InvalidInputException("No valid rows in CSV", field_path="csv")
    return recipients


def tree_build_cmd(args: Namespace) -> int:
    """Build the airdrop tree and write (or print) the claims file."""
    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        print(f"Error: CSV not found: {csv_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        recipients = load_recipients_csv(csv_path)
        built = MerkleProver.build_claims(recipients)
    except AirdropException as e:
        return print_rejection(e, as_json=args.json)

    claims = built.to_dict()
    logger.info(f"Built tree over {len(recipients)} recipients, root {claims['merkle_root']}")

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(claims, indent=2) + "\n", encoding="utf-8")

    if args.json:
        print_json(claims if not args.out else {
            "merkle_root": claims["merkle_root"],
            "total_amount": claims["total_amount"],
            "recipients": len(recipients),
            "out": args.out,
        })
    else:
        print(f"merkle_root: {claims['merkle_root']}")
        print(f"total_amount: {claims['total_amount']}")
        print(f"recipients: {len(recipients)}")
        if args.out:
            print(f"claims written to: {args.out}")
        else:
            print(json.dumps(claims["claims"], indent=2))

    return EXIT_SUCCESS


def _load_claim_entry(claims_path: Path, address: str) -> tuple[str, int, list[str]]:
    """(root, amount, proof) for one address from a claims file."""
    data = json.loads(claims_path.read_text(encoding="utf-8"))
    entry = data.get("claims", {}).get(address)
    if entry is None:
        raise InvalidInputException(
            f"Address not in claims file: {address}",
            field_path="address",
        )
    return data["merkle_root"], int(entry["amount"]), list(entry["proof"])


def tree_verify_cmd(args: Namespace) -> int:
    """
    Verify a single proof.

    Exit code 0 if the proof resolves to the root, 2 otherwise.
    """
    try:
        if args.claims:
            root, amount, proof = _load_claim_entry(Path(args.claims), args.address)
            if args.amount is not None:
                amount = args.amount
        else:
            if args.root is None or args.amount is None:
                print("Error: --root and --amount are required without --claims", file=sys.stderr)
                return EXIT_RUNTIME_ERROR
            root, amount, proof = args.root, args.amount, list(args.proof or [])

        ok = MerkleVerifier.verify_hex(args.address, amount, proof, root)
    except AirdropException as e:
        return print_rejection(e, as_json=args.json)
    except (OSError, ValueError, KeyError) as e:
        print(f"Error reading claims file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print_json({
            "ok": ok,
            "address": args.address,
            "amount": str(amount),
            "merkle_root": root,
        })
    else:
        status = "valid" if ok else "INVALID"
        print(f"proof for {args.address} ({amount}): {status}")

    return EXIT_SUCCESS if ok else EXIT_REJECTED
