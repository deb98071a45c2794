# tests/test_config.py
"""Tests for ledger configuration."""

import tempfile
from pathlib import Path

import pytest

from assetledger.config import LedgerConfig


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestLedgerConfig:
    """Test LedgerConfig parsing."""

    def test_defaults(self):
        """Defaults apply without a file."""
        config = LedgerConfig()
        assert config.store_dir == Path("./ledger_state")
        assert config.log_level == "WARNING"

    def test_from_yaml(self):
        """Keys are read from YAML."""
        config = LedgerConfig.from_yaml("store_dir: /tmp/ledger\nlog_level: debug\n")
        assert config.store_dir == Path("/tmp/ledger")
        assert config.log_level == "DEBUG"

    def test_empty_yaml(self):
        """An empty document gives defaults."""
        assert LedgerConfig.from_yaml("") == LedgerConfig()

    def test_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(ValueError, match="stor_dir"):
            LedgerConfig.from_yaml("stor_dir: /tmp/x\n")

    def test_not_a_mapping(self):
        """Top level must be a mapping."""
        with pytest.raises(ValueError):
            LedgerConfig.from_yaml("- a\n- b\n")

    def test_bad_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(ValueError, match="LOUD"):
            LedgerConfig.from_yaml("log_level: loud\n")

    def test_from_file(self, temp_dir):
        """Config loads from a file."""
        path = temp_dir / "ledger.yaml"
        path.write_text(f"store_dir: {temp_dir / 'state'}\n")
        config = LedgerConfig.from_file(path)
        assert config.store_dir == temp_dir / "state"

    def test_missing_file(self, temp_dir):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            LedgerConfig.from_file(temp_dir / "nope.yaml")
