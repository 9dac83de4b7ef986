"""
Tests for the logging module.
"""

import json
import logging

import pytest
import structlog


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_development_mode(self):
        from core.logging import configure_logging

        # Should not raise
        configure_logging(json_logs=False, log_level="DEBUG")

    def test_configure_log_level(self):
        from core.logging import configure_logging

        configure_logging(log_level="WARNING")
        assert logging.getLogger().level == logging.WARNING

        configure_logging(log_level="INFO")
        assert logging.getLogger().level == logging.INFO

    def test_noisy_loggers_quieted(self):
        from core.logging import configure_logging

        configure_logging(log_level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING


class TestConfigureFromSettings:

    def test_debug_settings_log_at_debug(self):
        from config.settings import get_settings_for_testing
        from core.logging import configure_logging_from_settings

        configure_logging_from_settings(get_settings_for_testing(debug=True))
        assert logging.getLogger().level == logging.DEBUG

        configure_logging_from_settings(get_settings_for_testing(debug=False))
        assert logging.getLogger().level == logging.INFO

    def test_production_logs_json(self, capsys):
        from config.settings import get_settings_for_testing
        from core.logging import configure_logging_from_settings, get_logger

        configure_logging_from_settings(get_settings_for_testing(environment="production", debug=False))
        get_logger("settings_test").info("Product query", top_k=12)

        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        assert lines
        data = json.loads(lines[-1])
        assert data["event"] == "Product query"
        assert data["top_k"] == 12
        assert data["level"] == "info"

    def test_token_masked(self, capsys):
        from config.settings import get_settings_for_testing
        from core.logging import configure_logging_from_settings, get_logger

        settings = get_settings_for_testing(upstash_vector_rest_token="s3cr3t-token", debug=False)
        configure_logging_from_settings(settings, json_logs=True)
        get_logger("settings_test").error(
            "Vector index query failed",
            error="401 for Authorization: Bearer s3cr3t-token",
        )

        out = capsys.readouterr().out
        assert "s3cr3t-token" not in out
        assert "Bearer ***" in out


class TestSecretMasker:

    def test_replaces_secret_in_strings(self):
        from core.logging import REDACTED, SecretMasker

        masker = SecretMasker(["tok"])
        event = masker(None, "info", {"event": "bad tok", "top_k": 12})
        assert event == {"event": f"bad {REDACTED}", "top_k": 12}

    def test_empty_secret_ignored(self):
        from core.logging import SecretMasker

        masker = SecretMasker([""])
        event = {"event": "Product query"}
        assert masker(None, "info", dict(event)) == event


class TestGetLogger:

    def test_logger_can_log(self):
        from core.logging import configure_logging, get_logger

        configure_logging(json_logs=False, log_level="DEBUG")
        logger = get_logger("test")

        # Should not raise
        logger.info("Product query", top_k=12)
        logger.error("Vector index query failed", error="timeout")


class TestContextBinding:

    def test_bind_and_clear(self):
        from core.logging import bind_context, clear_context

        clear_context()
        bind_context(request_id="abc", path="/api/products")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx.get("request_id") == "abc"
        assert ctx.get("path") == "/api/products"

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
