# assetledger/config.py
"""
Ledger configuration.

Example config file:

    store_dir: ./ledger_state
    log_level: INFO
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_STORE_DIR = "./ledger_state"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class LedgerConfig:
    """
    Settings for the command line tools.

    Attributes:
        store_dir: Directory holding the FileStore state
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
    """
    store_dir: Path = Path(DEFAULT_STORE_DIR)
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        self.store_dir = Path(self.store_dir)
        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LedgerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "LedgerConfig":
        """Parse config from YAML string. An empty document gives defaults."""
        data = yaml.safe_load(yaml_content) or {}
        if not isinstance(data, dict):
            raise ValueError("Config must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path | str) -> "LedgerConfig":
        """Load config from YAML file."""
        with open(path, "r") as f:
            return cls.from_yaml(f.read())
