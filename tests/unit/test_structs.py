"""Unit tests for ConnectOptions."""

from __future__ import annotations

import pydantic
import pytest

from elk_controller.structs import ConnectOptions


class TestConnectOptions:
    """Tests for option validation."""

    def test_defaults(self):
        """Test defaults for a plain connection."""
        options = ConnectOptions(host="10.0.0.5", secure=False)
        assert options.username is None or options.secure is False
        assert options.request_timeout > 0
        assert options.reconnect_mode == "backoff"
        assert options.reconnect_max_attempts >= 1

    def test_secure_requires_credentials(self):
        """Test a secure connection without credentials is rejected."""
        with pytest.raises(pydantic.ValidationError, match="username and password"):
            _ = ConnectOptions(host="10.0.0.5", secure=True, username=None, password=None)

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_range(self, port: int):
        """Test ports outside 1-65535 are rejected."""
        with pytest.raises(pydantic.ValidationError):
            _ = ConnectOptions(host="10.0.0.5", port=port)

    @pytest.mark.parametrize("code", ["12a4", "1234567"])
    def test_keypad_code_digits(self, code: str):
        """Test keypad codes are up to six digits."""
        with pytest.raises(pydantic.ValidationError):
            _ = ConnectOptions(host="10.0.0.5", keypad_code=code)

    def test_unknown_reconnect_mode(self):
        """Test reconnect mode is restricted."""
        with pytest.raises(pydantic.ValidationError):
            _ = ConnectOptions(host="10.0.0.5", reconnect_mode="eventually")  # type: ignore[arg-type]

    def test_timeouts_positive(self):
        """Test zero timeouts are rejected."""
        with pytest.raises(pydantic.ValidationError):
            _ = ConnectOptions(host="10.0.0.5", request_timeout=0)


class TestFromEnv:
    """Tests for ConnectOptions.from_env."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Test values are read at call time."""
        monkeypatch.setenv("ELK_HOST", "elk.local")
        monkeypatch.setenv("ELK_PORT", "2601")
        monkeypatch.setenv("ELK_SECURE", "true")
        monkeypatch.setenv("ELK_USERNAME", "installer")
        monkeypatch.setenv("ELK_PASSWORD", "not-a-real-password")
        monkeypatch.setenv("ELK_KEYPAD_CODE", "4321")
        monkeypatch.setenv("ELK_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("ELK_RECONNECT_MODE", "Immediate")
        monkeypatch.setenv("ELK_TLS_MIN_VERSION", "TLSv1_2")

        options = ConnectOptions.from_env()

        assert options.host == "elk.local"
        assert options.port == 2601
        assert options.secure is True
        assert options.username == "installer"
        assert options.keypad_code == "4321"
        assert options.request_timeout == 2.5
        assert options.reconnect_mode == "immediate"
        assert options.tls_min_version == "TLSv1_2"

    def test_invalid_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Test invalid environment values surface as validation errors."""
        monkeypatch.setenv("ELK_PORT", "not-a-port")
        with pytest.raises(pydantic.ValidationError):
            _ = ConnectOptions.from_env()

    def test_unset_environment_uses_defaults(self, monkeypatch: pytest.MonkeyPatch):
        """Test unset and empty variables keep the field defaults."""
        for name in ("ELK_HOST", "ELK_SECURE", "ELK_KEYPAD_CODE", "ELK_TLS_MIN_VERSION", "ELK_RECONNECT_MODE"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("ELK_PORT", "")

        options = ConnectOptions.from_env()

        assert options.port == 2101
        assert options.secure is False
        assert options.tls_min_version == "TLSv1"
        assert options.reconnect_mode == "backoff"

    def test_tls_min_version_null(self, monkeypatch: pytest.MonkeyPatch):
        """Test "null" disables the minimum TLS version."""
        monkeypatch.delenv("ELK_SECURE", raising=False)
        monkeypatch.setenv("ELK_TLS_MIN_VERSION", "null")
        assert ConnectOptions.from_env().tls_min_version is None
