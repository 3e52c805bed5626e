"""
Merkle Airdrop CLI

Command-line interface for building airdrop trees and operating a ledger.

Usage:
    python -m airdrop_cli tree build recipients.csv --out claims.json
    python -m airdrop_cli tree verify --address A --amount N --root HEX --proof HEX ...
    python -m airdrop_cli schedule validate schedule.json
    python -m airdrop_cli exec claim --sender A --ledger ledger.json
    python -m airdrop_cli query user A --ledger ledger.json
"""

__version__ = "0.1.0"
