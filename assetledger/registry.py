# assetledger/registry.py
"""
Asset registry operations.

The registry keeps no state of its own. Every operation receives the
store handle for the current transaction, checks existence against it,
and reads or writes canonical asset documents under the asset ID.

Existence rule: a key is present only if the store returns a non-empty
value. An absent key and an empty value are treated the same.
"""

import logging
from typing import List, Optional, Tuple

from .asset import Asset
from .errors import AlreadyExistsError, InvalidAssetError, NotFoundError
from .store import Store

logger = logging.getLogger(__name__)

# (asset_id, owner, type_file, base64_file)
BOOTSTRAP_ASSETS: Tuple[Tuple[str, str, str, str], ...] = (
    ("asset1", "Tomoko", "csv", ""),
    ("asset2", "Brad", "csv", ""),
    ("asset3", "Jin Soo", "csv", ""),
    ("asset4", "Max", "csv", ""),
    ("asset5", "Adrian", "csv", ""),
    ("asset6", "Michel", "csv", ""),
)


class AssetRegistry:
    """
    Create, read, update, delete and transfer assets on a ledger store.

    Usage:
        registry = AssetRegistry()
        store = MemoryStore()
        registry.create_asset(store, "a1", "Tomoko", "csv", "")
        previous = registry.transfer_asset(store, "a1", "Brad")
    """

    def _get_state(self, store: Store, asset_id: str) -> Optional[bytes]:
        """Return the stored document, or None if absent or empty."""
        value = store.get(asset_id)
        if not value:
            return None
        return value

    def _require_state(self, store: Store, asset_id: str) -> bytes:
        value = self._get_state(store, asset_id)
        if value is None:
            error = NotFoundError(asset_id)
            logger.warning(str(error))
            raise error
        return value

    def _decode(self, key: str, value: bytes) -> Asset:
        """Decode a stored document and check it belongs under key."""
        asset = Asset.from_json(value)
        if asset.asset_id != key:
            raise InvalidAssetError(
                f"Record under {key} has assetID {asset.asset_id}"
            )
        return asset

    def _put_asset(self, store: Store, asset: Asset) -> None:
        store.put(asset.asset_id, asset.to_bytes())

    def init_ledger(self, store: Store) -> None:
        """
        Create the bootstrap assets.

        Stops at the first asset that already exists. Assets created
        before that point are left in place.
        """
        logger.info("InitLedger starting")
        for asset_id, owner, type_file, base64_file in BOOTSTRAP_ASSETS:
            self.create_asset(store, asset_id, owner, type_file, base64_file)
        logger.info(f"InitLedger completed ({len(BOOTSTRAP_ASSETS)} assets)")

    def asset_exists(self, store: Store, asset_id: str) -> bool:
        """Check whether an asset is stored under asset_id."""
        return self._get_state(store, asset_id) is not None

    def create_asset(
        self,
        store: Store,
        asset_id: str,
        owner: str,
        type_file: str,
        base64_file: str,
    ) -> Asset:
        """
        Create a new asset.

        Args:
            store: Ledger state for this transaction
            asset_id: Key for the new asset
            owner: Initial owner
            type_file: Payload format tag
            base64_file: Base64-encoded payload (may be empty)

        Returns:
            The created Asset

        Raises:
            AlreadyExistsError: If asset_id is already present
        """
        if self.asset_exists(store, asset_id):
            error = AlreadyExistsError(asset_id)
            logger.warning(str(error))
            raise error

        asset = Asset(asset_id, owner, type_file, base64_file)
        self._put_asset(store, asset)
        logger.info(f"Created asset {asset_id}")
        return asset

    def read_asset(self, store: Store, asset_id: str) -> Asset:
        """
        Read an asset.

        Raises:
            NotFoundError: If asset_id is absent
            InvalidAssetError: If the stored document cannot be decoded or
                names a different assetID
        """
        return self._decode(asset_id, self._require_state(store, asset_id))

    def update_asset(
        self,
        store: Store,
        asset_id: str,
        owner: str,
        type_file: str,
        base64_file: str,
    ) -> Asset:
        """
        Replace every field of an existing asset.

        This is a full replace, not a merge: the stored document is
        overwritten even where values are unchanged.

        Raises:
            NotFoundError: If asset_id is absent
        """
        self._require_state(store, asset_id)

        asset = Asset(asset_id, owner, type_file, base64_file)
        self._put_asset(store, asset)
        logger.info(f"Updated asset {asset_id}")
        return asset

    def delete_asset(self, store: Store, asset_id: str) -> None:
        """
        Remove an asset.

        Raises:
            NotFoundError: If asset_id is absent
        """
        self._require_state(store, asset_id)
        store.delete(asset_id)
        logger.info(f"Deleted asset {asset_id}")

    def transfer_asset(self, store: Store, asset_id: str, new_owner: str) -> str:
        """
        Change the owner of an asset.

        All other fields are kept as stored.

        Returns:
            The previous owner

        Raises:
            NotFoundError: If asset_id is absent
        """
        current = self._decode(asset_id, self._require_state(store, asset_id))
        self._put_asset(store, current.with_owner(new_owner))
        logger.info(f"Transferred asset {asset_id}: {current.owner} -> {new_owner}")
        return current.owner

    def get_assets_by_range(self, store: Store, start_key: str, end_key: str) -> List[Asset]:
        """
        Read every asset with a key in [start_key, end_key).

        Results keep the store's key order. Keys holding an empty value
        are skipped. A record that fails to decode aborts the whole call.
        """
        assets = []
        for key, value in store.scan_range(start_key, end_key):
            # Empty values count as absent, same as asset_exists
            if not value:
                continue
            asset = self._decode(key, value)
            logger.debug(f"Scanned {key}: {asset}")
            assets.append(asset)
        return assets

    def get_all_assets(self, store: Store) -> List[Asset]:
        """Read every asset on the ledger, in key order."""
        return self.get_assets_by_range(store, "", "")
