# assetledger/errors.py
"""
Error types for the asset ledger.

Registry failures carry an ErrorCode so hosting environments can
report them as structured, named errors rather than bare messages.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain error kinds raised by the registry."""
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    ASSET_ALREADY_EXISTS = "ASSET_ALREADY_EXISTS"


class AssetRegistryError(Exception):
    """
    Base class for registry precondition failures.

    Attributes:
        code: The ErrorCode for this failure
        asset_id: The asset key the operation was called with
    """
    code: ErrorCode

    def __init__(self, asset_id: str, message: str):
        super().__init__(message)
        self.asset_id = asset_id
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(AssetRegistryError):
    """The operation required the asset to exist and it did not."""
    code = ErrorCode.ASSET_NOT_FOUND

    def __init__(self, asset_id: str):
        super().__init__(asset_id, f"Asset {asset_id} does not exist")


class AlreadyExistsError(AssetRegistryError):
    """Create was called for a key that is already occupied."""
    code = ErrorCode.ASSET_ALREADY_EXISTS

    def __init__(self, asset_id: str):
        super().__init__(asset_id, f"Asset {asset_id} already exists")


class InvalidAssetError(ValueError):
    """Stored or supplied text is not a canonical asset document."""


class StoreError(Exception):
    """A key-value store could not complete an operation."""


class ReadOnlyStoreError(StoreError):
    """A write was attempted through a read-only store view."""


class ContractError(Exception):
    """Base class for transaction dispatch failures."""


class UnknownTransactionError(ContractError):
    """No transaction is registered under the requested name."""


class TransactionArgumentError(ContractError):
    """A transaction was invoked with the wrong number of arguments."""
