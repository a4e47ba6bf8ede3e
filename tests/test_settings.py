"""
Tests for configuration and audit logging.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from eazzy.audit import AuditLogger, create_correlation_id
from eazzy.config import AppSettings, get_settings, validate_all_settings
from eazzy.models import AuditEventBuilder


class TestAppSettings:
    """Tests for application settings."""

    def test_defaults(self):
        """Test the out-of-the-box configuration."""
        settings = AppSettings()
        assert settings.name == "eazzy"
        assert settings.log_level == "INFO"
        assert settings.local_store_path == Path("data") / "eazzy_transactions.json"

    def test_environment_overrides(self, monkeypatch):
        """Test APP_ prefixed variables."""
        monkeypatch.setenv("APP_DATA_DIR", "/var/lib/eazzy")
        monkeypatch.setenv("APP_LOCAL_STORE_SLOT", "cache")
        monkeypatch.setenv("APP_LOG_LEVEL", "debug")
        settings = AppSettings()
        assert settings.local_store_path == Path("/var/lib/eazzy/cache.json")
        assert settings.log_level == "DEBUG"

    def test_environment_and_debug_mode(self, monkeypatch):
        """Test the values shown in the status panel."""
        monkeypatch.setenv("APP_ENVIRONMENT", "production")
        monkeypatch.setenv("APP_DEBUG_MODE", "true")
        settings = AppSettings()
        assert settings.environment == "production"
        assert settings.debug_mode is True

    def test_unknown_log_level(self, monkeypatch):
        """Test that a typo in the level name is rejected."""
        monkeypatch.setenv("APP_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_dotenv_file_is_read(self, tmp_path):
        """Test that a .env in the working directory is picked up."""
        (tmp_path / ".env").write_text(
            "SUPABASE_URL=https://abc.supabase.co\nSUPABASE_ANON_KEY=eyJhbGci\n",
            encoding="utf-8",
        )
        assert get_settings().supabase.is_configured is True


class TestValidateAllSettings:
    """Tests for the settings health check."""

    def test_unconfigured_supabase_is_reported(self):
        """Test that missing credentials are flagged but the app is fine."""
        results = validate_all_settings()
        assert results["supabase"] is False
        assert "supabase_error" in results
        assert results["app"] is True

    def test_configured(self, monkeypatch):
        """Test a fully configured environment."""
        monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "eyJhbGci")
        results = validate_all_settings()
        assert results["supabase"] is True
        assert "supabase_error" not in results

    def test_get_settings_is_cached(self):
        """Test that the settings object is reused."""
        assert get_settings() is get_settings()


class TestAuditLogger:
    """Tests for the audit logger."""

    def test_log_routes_by_severity(self):
        """Test that warnings are logged as warnings."""
        logger = AuditLogger()
        logger._logger = MagicMock()

        assert logger.log(AuditEventBuilder.remote_fallback("load", "timeout")) is True

        logger._logger.warning.assert_called_once()
        fields = logger._logger.warning.call_args.kwargs
        assert fields["event_type"] == "remote_fallback"
        assert fields["error_message"] == "timeout"

    def test_errors_are_logged_as_errors(self):
        """Test log_error."""
        logger = AuditLogger()
        logger._logger = MagicMock()
        logger.log_error("ExportError", "disk full", details={"filename": "x.csv"})
        fields = logger._logger.error.call_args.kwargs
        assert fields["event_type"] == "system_error"
        assert fields["details"] == {"filename": "x.csv"}

    def test_log_never_raises(self):
        """Test that a broken sink does not break the caller."""
        logger = AuditLogger()
        logger._logger = MagicMock()
        logger._logger.info.side_effect = RuntimeError("sink closed")
        assert logger.log(AuditEventBuilder.signed_out("user-1")) is False

    def test_correlation_id_propagates(self):
        """Test that the correlation id reaches the log line."""
        logger = AuditLogger()
        logger._logger = MagicMock()
        correlation_id = create_correlation_id()

        logger.log_signed_in("user-1", "ana@example.com", correlation_id=correlation_id)

        fields = logger._logger.info.call_args.kwargs
        assert fields["correlation_id"] == str(correlation_id)
        assert fields["user_id"] == "user-1"

    def test_correlation_ids_are_unique(self):
        """Test create_correlation_id."""
        assert create_correlation_id() != create_correlation_id()
