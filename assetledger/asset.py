# assetledger/asset.py
"""
The Asset value type and its canonical encoding.

An asset is stored on the ledger as a JSON object whose members are
always emitted in alphabetical order:

    {"assetID":"...","base64File":"...","owner":"...","typeFile":"..."}

Two assets with the same field values therefore serialize to
byte-identical text, which lets consumers hash or diff raw ledger
entries.
"""

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple, Union

from .errors import InvalidAssetError

# Python attribute -> wire member name
_WIRE_NAMES = {
    "asset_id": "assetID",
    "owner": "owner",
    "type_file": "typeFile",
    "base64_file": "base64File",
}
_FIELDS_BY_WIRE = {wire: attr for attr, wire in _WIRE_NAMES.items()}


def _canonicalize(data: Any) -> str:
    """Sorted keys, no whitespace."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _reject_duplicates(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    """object_pairs_hook that refuses repeated member names."""
    data = {}
    for name, value in pairs:
        if name in data:
            raise InvalidAssetError(f"Duplicate asset field: {name}")
        data[name] = value
    return data


@dataclass(frozen=True)
class Asset:
    """
    One record on the ledger.

    Identity is asset_id alone; equality and hashing are structural
    over all four fields.

    Attributes:
        asset_id: Store key for the record
        owner: Current owner
        type_file: Payload format tag (file extension or MIME hint)
        base64_file: Base64-encoded payload, may be empty
    """
    asset_id: str
    owner: str
    type_file: str
    base64_file: str

    def __post_init__(self):
        for attr in _WIRE_NAMES:
            value = getattr(self, attr)
            if not isinstance(value, str):
                raise TypeError(
                    f"Asset.{attr} must be a string, got {type(value).__name__}"
                )

    def __str__(self) -> str:
        return (
            f"Asset [assetID={self.asset_id}, owner={self.owner}, "
            f"typeFile={self.type_file}]"
        )

    def with_owner(self, new_owner: str) -> "Asset":
        """Return a copy of this asset owned by new_owner."""
        return Asset(self.asset_id, new_owner, self.type_file, self.base64_file)

    def to_dict(self) -> Dict[str, str]:
        data = {wire: getattr(self, attr) for attr, wire in _WIRE_NAMES.items()}
        return dict(sorted(data.items()))

    def to_json(self) -> str:
        """Canonical text encoding."""
        return _canonicalize(self.to_dict())

    def to_bytes(self) -> bytes:
        return self.to_json().encode("utf-8")

    def content_hash(self, algorithm: str = "sha3_256") -> str:
        """Hex digest of the canonical encoding."""
        hasher = hashlib.new(algorithm)
        hasher.update(self.to_bytes())
        return hasher.hexdigest()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        """
        Build an asset from a decoded document.

        Exactly the four wire members must be present, all strings.
        Unknown members are rejected rather than dropped.
        """
        if not isinstance(data, dict):
            raise InvalidAssetError(
                f"Asset document must be an object, got {type(data).__name__}"
            )

        unknown = sorted(set(data) - set(_FIELDS_BY_WIRE))
        if unknown:
            raise InvalidAssetError(f"Unknown asset fields: {', '.join(unknown)}")
        missing = sorted(set(_FIELDS_BY_WIRE) - set(data))
        if missing:
            raise InvalidAssetError(f"Missing asset fields: {', '.join(missing)}")

        kwargs = {}
        for wire, attr in _FIELDS_BY_WIRE.items():
            value = data[wire]
            if not isinstance(value, str):
                raise InvalidAssetError(
                    f"Asset field {wire} must be a string, got {type(value).__name__}"
                )
            kwargs[attr] = value
        return cls(**kwargs)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Asset":
        if isinstance(text, (bytes, bytearray)):
            try:
                text = bytes(text).decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidAssetError(f"Asset document is not UTF-8: {e}") from e
        try:
            data = json.loads(text, object_pairs_hook=_reject_duplicates)
        except json.JSONDecodeError as e:
            raise InvalidAssetError(f"Asset document is not valid JSON: {e}") from e
        return cls.from_dict(data)


def serialize_assets(assets: Iterable[Asset]) -> str:
    """Canonical JSON array of assets, in the order given."""
    return _canonicalize([asset.to_dict() for asset in assets])
