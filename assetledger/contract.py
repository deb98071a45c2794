# assetledger/contract.py
"""
Transaction surface for a hosting ledger.

A ledger peer invokes transactions by name with string arguments and
expects a text response. This module maps those names onto the
AssetRegistry operations and renders their results:

    Asset        -> canonical JSON object
    list[Asset]  -> canonical JSON array
    bool         -> "true" / "false"
    str          -> unchanged
    None         -> ""

Transactions are tagged SUBMIT (may write) or EVALUATE (read-only).
EVALUATE transactions run against a read-only view of the store.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Sequence

from .asset import Asset, serialize_assets
from .errors import TransactionArgumentError, UnknownTransactionError
from .registry import AssetRegistry
from .store import ReadOnlyStore, Store

logger = logging.getLogger(__name__)


class Intent(Enum):
    """Whether a transaction may change ledger state."""
    SUBMIT = auto()
    EVALUATE = auto()


@dataclass(frozen=True)
class ContractInfo:
    """Descriptive metadata published with the contract."""
    name: str
    title: str
    description: str
    version: str
    license_name: str
    license_url: str


@dataclass(frozen=True)
class TransactionSpec:
    """A registered transaction: its public name, intent and parameters."""
    name: str
    intent: Intent
    attr: str
    params: tuple


def transaction(name: str, intent: Intent = Intent.SUBMIT) -> Callable:
    """
    Decorator to expose a contract method as a named transaction.

    The method must take (self, store, *string_args).

    Usage:
        @transaction("ReadAsset", Intent.EVALUATE)
        def read_asset(self, store, asset_id):
            ...
    """
    def decorator(func: Callable) -> Callable:
        params = tuple(inspect.signature(func).parameters)[2:]
        func._transaction = TransactionSpec(name, intent, func.__name__, params)
        return func
    return decorator


def render_response(result: Any) -> str:
    """Render a transaction result as the text returned to the ledger."""
    if result is None:
        return ""
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, Asset):
        return result.to_json()
    if isinstance(result, list):
        return serialize_assets(result)
    return str(result)


class AssetTransferContract:
    """
    The asset transfer contract.

    Wraps an AssetRegistry and exposes its operations under the
    transaction names clients use.

    Usage:
        contract = AssetTransferContract()
        contract.invoke(store, "CreateAsset", ["a1", "Tomoko", "csv", ""])
        contract.invoke(store, "ReadAsset", ["a1"])
    """

    info = ContractInfo(
        name="basic",
        title="Asset Transfer",
        description="Asset registry with ownership transfer",
        version="0.0.1",
        license_name="Apache 2.0 License",
        license_url="http://www.apache.org/licenses/LICENSE-2.0.html",
    )

    def __init__(self, registry: AssetRegistry = None):
        self.registry = registry or AssetRegistry()
        self._transactions: Dict[str, TransactionSpec] = {
            spec.name: spec for spec in self.transactions()
        }

    @classmethod
    def transactions(cls) -> List[TransactionSpec]:
        """List registered transactions, base classes first, in definition order."""
        specs: Dict[str, TransactionSpec] = {}
        for klass in reversed(cls.__mro__):
            for attr in vars(klass).values():
                spec = getattr(attr, "_transaction", None)
                if spec is not None:
                    specs[spec.name] = spec
        return list(specs.values())

    def get_transaction(self, name: str) -> TransactionSpec:
        spec = self._transactions.get(name)
        if spec is None:
            raise UnknownTransactionError(f"Unknown transaction: {name}")
        return spec

    def invoke(self, store: Store, name: str, args: Sequence[str] = ()) -> str:
        """
        Run a transaction by name.

        Args:
            store: Ledger state for this transaction
            name: Transaction name (e.g. "TransferAsset")
            args: String arguments in declaration order

        Returns:
            Text response for the ledger

        Raises:
            UnknownTransactionError: If name is not registered
            TransactionArgumentError: If the argument count is wrong
            AssetRegistryError: If a registry precondition fails
        """
        spec = self.get_transaction(name)
        args = list(args)
        if len(args) != len(spec.params):
            raise TransactionArgumentError(
                f"{name} expects {len(spec.params)} arguments "
                f"({', '.join(spec.params)}), got {len(args)}"
            )

        if spec.intent is Intent.EVALUATE:
            store = ReadOnlyStore(store)

        logger.debug(f"Invoking {name} ({spec.intent.name}) with {len(args)} args")
        result = getattr(self, spec.attr)(store, *args)
        return render_response(result)

    @transaction("InitLedger", Intent.SUBMIT)
    def init_ledger(self, store: Store) -> None:
        self.registry.init_ledger(store)

    @transaction("CreateAsset", Intent.SUBMIT)
    def create_asset(self, store: Store, asset_id: str, owner: str,
                     type_file: str, base64_file: str) -> Asset:
        return self.registry.create_asset(store, asset_id, owner, type_file, base64_file)

    @transaction("ReadAsset", Intent.EVALUATE)
    def read_asset(self, store: Store, asset_id: str) -> Asset:
        return self.registry.read_asset(store, asset_id)

    @transaction("UpdateAsset", Intent.SUBMIT)
    def update_asset(self, store: Store, asset_id: str, owner: str,
                     type_file: str, base64_file: str) -> Asset:
        return self.registry.update_asset(store, asset_id, owner, type_file, base64_file)

    @transaction("DeleteAsset", Intent.SUBMIT)
    def delete_asset(self, store: Store, asset_id: str) -> None:
        self.registry.delete_asset(store, asset_id)

    @transaction("AssetExists", Intent.EVALUATE)
    def asset_exists(self, store: Store, asset_id: str) -> bool:
        return self.registry.asset_exists(store, asset_id)

    @transaction("TransferAsset", Intent.SUBMIT)
    def transfer_asset(self, store: Store, asset_id: str, new_owner: str) -> str:
        return self.registry.transfer_asset(store, asset_id, new_owner)

    @transaction("GetAllAssets", Intent.EVALUATE)
    def get_all_assets(self, store: Store) -> List[Asset]:
        return self.registry.get_all_assets(store)
