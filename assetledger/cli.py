#!/usr/bin/env python3
"""
Asset Ledger CLI

Runs registry transactions against a local file-backed ledger state.

Usage:
  assetledger init
  assetledger create <id> <owner> <type> [--file PATH | --base64 TEXT]
  assetledger read <id>
  assetledger update <id> <owner> <type> [--file PATH | --base64 TEXT]
  assetledger delete <id>
  assetledger transfer <id> <new_owner>
  assetledger exists <id>
  assetledger list
  assetledger invoke <Transaction> [args...]

Global options (before the command):
  --config <file.yaml>  --store-dir <dir>  --log-level <level>
"""

import argparse
import base64
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import LedgerConfig
from .contract import AssetTransferContract
from .errors import AssetRegistryError, ContractError, InvalidAssetError, StoreError
from .store import FileStore


def load_config(args) -> LedgerConfig:
    """Build config from --config, then apply command line overrides."""
    config = LedgerConfig.from_file(args.config) if args.config else LedgerConfig()
    if args.store_dir:
        config.store_dir = Path(args.store_dir)
    if args.log_level:
        config = LedgerConfig(store_dir=config.store_dir, log_level=args.log_level)
    return config


def read_payload(args) -> str:
    """Payload for create/update: --file contents base64-encoded, or --base64 as given."""
    if args.file:
        path = Path(args.file)
        if not path.exists():
            raise FileNotFoundError(f"Payload file not found: {path}")
        return base64.b64encode(path.read_bytes()).decode("ascii")
    return args.base64 or ""


def transaction_for(args) -> tuple[str, List[str]]:
    """Map a parsed command onto (transaction name, string args)."""
    if args.command == "init":
        return "InitLedger", []
    if args.command == "create":
        return "CreateAsset", [args.asset_id, args.owner, args.type_file, read_payload(args)]
    if args.command == "read":
        return "ReadAsset", [args.asset_id]
    if args.command == "update":
        return "UpdateAsset", [args.asset_id, args.owner, args.type_file, read_payload(args)]
    if args.command == "delete":
        return "DeleteAsset", [args.asset_id]
    if args.command == "transfer":
        return "TransferAsset", [args.asset_id, args.new_owner]
    if args.command == "exists":
        return "AssetExists", [args.asset_id]
    if args.command == "list":
        return "GetAllAssets", []
    if args.command == "invoke":
        return args.transaction, list(args.args)
    raise ValueError(f"Unknown command: {args.command}")


def _add_payload_args(parser: argparse.ArgumentParser):
    parser.add_argument("asset_id", help="Asset ID")
    parser.add_argument("owner", help="Owner")
    parser.add_argument("type_file", help="Payload type (e.g. csv, png)")
    payload = parser.add_mutually_exclusive_group()
    payload.add_argument("--file", help="Read payload from file and base64-encode it")
    payload.add_argument("--base64", help="Payload as base64 text")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetledger",
        description="Asset Ledger - asset registry on a key-value ledger",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--store-dir", help="Ledger state directory")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("init", help="Create the bootstrap assets")

    create_parser = subparsers.add_parser("create", help="Create an asset")
    _add_payload_args(create_parser)

    read_parser = subparsers.add_parser("read", help="Read an asset")
    read_parser.add_argument("asset_id", help="Asset ID")

    update_parser = subparsers.add_parser("update", help="Replace an asset's fields")
    _add_payload_args(update_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete an asset")
    delete_parser.add_argument("asset_id", help="Asset ID")

    transfer_parser = subparsers.add_parser("transfer", help="Transfer ownership")
    transfer_parser.add_argument("asset_id", help="Asset ID")
    transfer_parser.add_argument("new_owner", help="New owner")

    exists_parser = subparsers.add_parser("exists", help="Check whether an asset exists")
    exists_parser.add_argument("asset_id", help="Asset ID")

    subparsers.add_parser("list", help="List all assets in key order")

    invoke_parser = subparsers.add_parser("invoke", help="Invoke a transaction by name")
    invoke_parser.add_argument("transaction", help="Transaction name (e.g. ReadAsset)")
    invoke_parser.add_argument("args", nargs="*", help="Transaction arguments")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    contract = AssetTransferContract()
    try:
        store = FileStore(config.store_dir)
        name, tx_args = transaction_for(args)
        response = contract.invoke(store, name, tx_args)
    except AssetRegistryError as e:
        print(f"Error [{e.code.value}]: {e}", file=sys.stderr)
        return 1
    except (ContractError, InvalidAssetError, StoreError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if response:
        print(response)
    return 0


if __name__ == "__main__":
    sys.exit(main())
