# assetledger - Asset registry on an ordered key-value ledger
#
# Creates, reads, updates, deletes and transfers ownership of asset
# records held in an external key-value store. Assets are stored in a
# canonical JSON encoding so equal assets produce identical bytes.
#
# Core concepts:
# - Asset: Immutable record (ID, owner, payload type, base64 payload)
# - Store: Ordered key-value state supplied by the hosting ledger
# - AssetRegistry: The ledger operations, each given the store to act on
# - AssetTransferContract: Named string-argument transactions over the registry

from .asset import Asset, serialize_assets
from .errors import (
    ErrorCode,
    AssetRegistryError,
    NotFoundError,
    AlreadyExistsError,
    InvalidAssetError,
    StoreError,
    ReadOnlyStoreError,
    ContractError,
    UnknownTransactionError,
    TransactionArgumentError,
)
from .store import Store, MemoryStore, FileStore, ReadOnlyStore
from .registry import AssetRegistry, BOOTSTRAP_ASSETS
from .contract import AssetTransferContract, Intent, transaction
from .config import LedgerConfig

__all__ = [
    # Core
    "Asset",
    "serialize_assets",
    "AssetRegistry",
    "BOOTSTRAP_ASSETS",
    # Stores
    "Store",
    "MemoryStore",
    "FileStore",
    "ReadOnlyStore",
    # Contract
    "AssetTransferContract",
    "Intent",
    "transaction",
    "LedgerConfig",
    # Errors
    "ErrorCode",
    "AssetRegistryError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidAssetError",
    "StoreError",
    "ReadOnlyStoreError",
    "ContractError",
    "UnknownTransactionError",
    "TransactionArgumentError",
]

__version__ = "0.1.0"
