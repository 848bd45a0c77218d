"""
Tests for configuration and structured logging
"""

import json
import logging

from account_ledger.config import LedgerConfig, get_config, reload_config
from account_ledger.logging_config import JSONFormatter, setup_logging, log_action


class TestLedgerConfig:
    """Test environment-based configuration"""

    def test_defaults(self):
        """Test default values"""
        config = LedgerConfig()

        assert config.api_port == 8090
        assert config.api_prefix == "/api/v1/accounts"
        assert config.account_id_length == 10
        assert config.description_min_length == 1
        assert config.description_max_length == 100

    def test_environment_override(self, monkeypatch):
        """Test LEDGER_ prefixed environment variables"""
        monkeypatch.setenv("LEDGER_API_PORT", "9000")
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "DEBUG")

        config = LedgerConfig()

        assert config.api_port == 9000
        assert config.log_level == "DEBUG"

    def test_reload_config(self, monkeypatch):
        """Test that reload picks up a changed environment"""
        monkeypatch.setenv("LEDGER_ACCOUNT_ID_LENGTH", "12")
        try:
            assert reload_config().account_id_length == 12
            assert get_config().account_id_length == 12
        finally:
            monkeypatch.delenv("LEDGER_ACCOUNT_ID_LENGTH")
            reload_config()

        assert get_config().account_id_length == 10


class TestStructuredLogging:
    """Test JSON log formatting"""

    def test_json_formatter(self):
        """Test that structured fields end up in the JSON output"""
        logger = logging.getLogger("ledger.test.formatter")
        record = logger.makeRecord(logger.name, logging.INFO, __name__, 0,
                                   "Deposit successful", (), None)
        record.action = "deposit"
        record.extra = {"amount": "10.00"}

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["message"] == "Deposit successful"
        assert entry["action"] == "deposit"
        assert entry["extra"] == {"amount": "10.00"}
        assert "resource" not in entry

    def test_setup_logging(self):
        """Test handler and level configuration"""
        logger = setup_logging("WARNING", "text", logger_name="ledger_setup_test")

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

        logger = setup_logging("DEBUG", "json", logger_name="ledger_setup_test")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_log_action_respects_level(self, caplog):
        """Test that log_action drops records below the logger level"""
        logger = logging.getLogger("ledger.test.action")

        with caplog.at_level(logging.WARNING, logger="ledger.test.action"):
            log_action(logger, "info", "hidden")
            log_action(logger, "warning", "shown", action="withdrawal")

        messages = [r.getMessage() for r in caplog.records]
        assert "shown" in messages
        assert "hidden" not in messages
        assert caplog.records[-1].action == "withdrawal"
