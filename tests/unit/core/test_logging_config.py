"""Tests unitarios para la configuración de logging."""

import io
import json
import logging
import logging.handlers
import sys

from shiporder.core.config import Settings
from shiporder.core.logging_config import (
    ColoredFormatter,
    LogContext,
    StructuredFormatter,
    get_logger,
    get_logging_configuration,
    setup_logging,
)


def _make_record(message="Converted order", **extra):
    record = logging.LogRecord(
        name="shiporder.services",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLoggingConfiguration:
    """Tests para get_logging_configuration."""

    def test_console_only_by_default(self, settings):
        """Sin LOG_FILE_PATH solo hay handler de consola en stderr."""
        config = get_logging_configuration(settings)

        assert list(config["handlers"]) == ["console"]
        assert config["handlers"]["console"]["stream"] == "ext://sys.stderr"
        assert config["handlers"]["console"]["formatter"] == "standard"
        assert config["root"]["level"] == "WARNING"

    def test_level_override(self, settings):
        """El nivel explícito reemplaza a LOG_LEVEL."""
        config = get_logging_configuration(settings, level="debug")

        assert config["root"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["level"] == "DEBUG"

    def test_file_handler(self, tmp_path):
        """Con LOG_FILE_PATH se agrega un handler rotativo."""
        log_file = tmp_path / "logs" / "shiporder.log"
        settings = Settings(_env_file=None, LOG_FILE_PATH=str(log_file), LOG_MAX_SIZE_MB=2, LOG_BACKUP_COUNT=3)

        config = get_logging_configuration(settings)

        file_handler = config["handlers"]["file"]
        assert file_handler["class"] == "logging.handlers.RotatingFileHandler"
        assert file_handler["maxBytes"] == 2 * 1024 * 1024
        assert file_handler["backupCount"] == 3
        assert config["root"]["handlers"] == ["console", "file"]

    def test_formatter_selection(self):
        """LOG_JSON tiene prioridad sobre DEBUG para el formato de consola."""
        assert get_logging_configuration(Settings(_env_file=None, DEBUG=True))["handlers"]["console"][
            "formatter"
        ] == "colored"
        assert get_logging_configuration(Settings(_env_file=None, DEBUG=True, LOG_JSON=True))["handlers"][
            "console"
        ]["formatter"] == "json"

    def test_setup_logging_creates_log_directory(self, tmp_path):
        """setup_logging debe crear el directorio del archivo de log."""
        log_file = tmp_path / "nested" / "app.log"
        settings = Settings(_env_file=None, LOG_FILE_PATH=str(log_file))

        setup_logging(level="INFO", settings=settings)
        logging.getLogger("shiporder.test").warning("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.parent.is_dir()
        assert "written to file" in log_file.read_text(encoding="utf-8")
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logging.getLogger().handlers)

        for handler in logging.getLogger().handlers:
            if isinstance(handler, logging.handlers.RotatingFileHandler):
                handler.close()


class TestFormatters:
    """Tests para los formatters."""

    def test_structured_formatter_outputs_json(self):
        """StructuredFormatter debe producir una línea JSON con los campos extra."""
        formatter = StructuredFormatter(app_name="ShipOrder", app_version="1.0.0", environment="testing")

        payload = json.loads(formatter.format(_make_record(source="order.xml")))

        assert payload["message"] == "Converted order"
        assert payload["level"] == "INFO"
        assert payload["app_name"] == "ShipOrder"
        assert payload["environment"] == "testing"
        assert payload["extra"] == {"source": "order.xml"}

    def test_colored_formatter_without_tty(self, monkeypatch):
        """Sin TTY no se agregan códigos de color."""
        monkeypatch.setattr(sys, "stderr", io.StringIO())
        formatter = ColoredFormatter("%(levelname)s - %(message)s")

        assert formatter.format(_make_record()) == "INFO - Converted order"


class TestLogContext:
    """Tests para LogContext."""

    def test_adds_attributes_inside_context(self, caplog):
        """Los registros dentro del contexto llevan los atributos extra."""
        logger = get_logger("shiporder.test.context")

        with caplog.at_level(logging.INFO, logger="shiporder.test.context"):
            with LogContext(source="order.xml"):
                logger.info("inside")
            logger.info("outside")

        inside, outside = caplog.records[-2:]
        assert inside.source == "order.xml"
        assert not hasattr(outside, "source")

    def test_restores_factory(self):
        """Al salir del contexto se restaura la factory anterior."""
        factory = logging.getLogRecordFactory()

        with LogContext(request="x"):
            assert logging.getLogRecordFactory() is not factory

        assert logging.getLogRecordFactory() is factory
