"""Tests for StoreConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from contextstore import LogLevel, Permission, StoreConfig, load_store_config_from_env


class TestStoreConfig:
    """Tests for StoreConfig model."""

    def test_create_default_config(self) -> None:
        """Test creating a StoreConfig with defaults."""
        config = StoreConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.redact_values is True
        assert config.default_policy == Permission.READ_WRITE
        assert config.service_name is None

    def test_create_custom_config(self) -> None:
        """Test creating a StoreConfig with custom values."""
        config = StoreConfig(
            log_level=LogLevel.DEBUG,
            log_json=True,
            redact_values=False,
            default_policy=Permission.NONE,
            service_name="inventory",
        )
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.redact_values is False
        assert config.default_policy == Permission.NONE
        assert config.service_name == "inventory"

    def test_log_level_from_string(self) -> None:
        """Test creating config with log level as string."""
        config = StoreConfig(log_level="debug")
        assert config.log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        """Test creating config with invalid log level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            StoreConfig(log_level="INVALID")

    def test_default_policy_from_string(self) -> None:
        """Policy strings are normalized."""
        for raw, expected in (("r", Permission.READ), (" RW ", Permission.READ_WRITE), ("none", Permission.NONE)):
            assert StoreConfig(default_policy=raw).default_policy == expected

    def test_default_policy_invalid(self) -> None:
        """Unknown policies are rejected."""
        with pytest.raises(ValueError, match="Invalid permission"):
            StoreConfig(default_policy="rwx")

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(Exception):  # Pydantic validation error
            StoreConfig(extra_field="value")  # type: ignore[call-arg]


class TestLoadStoreConfigFromEnv:
    """Tests for load_store_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        """Test loading config with no environment variables."""
        config = load_store_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.redact_values is True
        assert config.default_policy == Permission.READ_WRITE

    @patch.dict(
        os.environ,
        {
            "LOG_LEVEL": "DEBUG",
            "LOG_JSON": "true",
            "STORE_DEFAULT_POLICY": "r",
            "STORE_REDACT_VALUES": "false",
            "SERVICE_NAME": "inventory",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        """Test loading config from environment variables."""
        config = load_store_config_from_env()
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.default_policy == Permission.READ
        assert config.redact_values is False
        assert config.service_name == "inventory"

    def test_redact_values_variants(self) -> None:
        """STORE_REDACT_VALUES accepts various true values."""
        for value in ("true", "1", "yes", "on"):
            with patch.dict(os.environ, {"STORE_REDACT_VALUES": value}, clear=True):
                assert load_store_config_from_env().redact_values is True

    @patch.dict(os.environ, {"STORE_DEFAULT_POLICY": "admin"}, clear=True)
    def test_invalid_policy_from_env(self) -> None:
        """An invalid policy in the environment fails loudly."""
        with pytest.raises(ValueError):
            load_store_config_from_env()
