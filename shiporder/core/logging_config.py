"""
Configuración del sistema de logging.

Este módulo configura el logging de la aplicación con:
- Handler de consola con colores o en formato JSON
- Handler de archivo con rotación (opcional)
- Contexto temporal para los registros (LogContext)

Los módulos de la librería solo usan logging.getLogger(__name__);
la configuración de handlers la hace el punto de entrada.
"""

import json
import logging
import logging.config
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from shiporder.core.config import Settings, get_settings

# Atributos estándar de LogRecord que no se copian como campos extra
_RESERVED_RECORD_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    ]
)


class ColoredFormatter(logging.Formatter):
    """
    Formatter personalizado que agrega colores a los logs en consola.
    """

    # Códigos de color ANSI
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Verde
        "WARNING": "\033[33m",  # Amarillo
        "ERROR": "\033[31m",  # Rojo
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record):
        """
        Formatea el record con colores si es para consola.

        Args:
            record: LogRecord a formatear

        Returns:
            str: Mensaje formateado con colores
        """
        formatted = super().format(record)

        # Agregar color solo si es TTY (terminal)
        if hasattr(sys.stderr, "isatty") and sys.stderr.isatty():
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            formatted = formatted.replace(record.levelname, f"{color}{record.levelname}{reset}", 1)

        return formatted


class StructuredFormatter(logging.Formatter):
    """
    Formatter para logging estructurado en JSON.
    Una línea JSON por registro.
    """

    def __init__(self, app_name: str = "", app_version: str = "", environment: str = "", **kwargs):
        super().__init__(**kwargs)
        self.app_name = app_name
        self.app_version = app_version
        self.environment = environment

    def format(self, record):
        """
        Formatea el record como JSON estructurado.

        Args:
            record: LogRecord a formatear

        Returns:
            str: Mensaje en formato JSON
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "app_name": self.app_name,
            "app_version": self.app_version,
            "environment": self.environment,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def get_logging_configuration(settings: Optional[Settings] = None, level: Optional[str] = None) -> Dict[str, Any]:
    """
    Genera configuración completa de logging.

    Args:
        settings: Configuración a usar (por defecto get_settings())
        level: Nivel que reemplaza a LOG_LEVEL

    Returns:
        Dict: Configuración para logging.config.dictConfig
    """
    settings = settings or get_settings()
    log_level = (level or settings.LOG_LEVEL).upper()

    if settings.LOG_JSON:
        console_formatter = "json"
    elif settings.DEBUG:
        console_formatter = "colored"
    else:
        console_formatter = "standard"

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": ("%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "colored": {
                "()": ColoredFormatter,
                "format": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": StructuredFormatter,
                "app_name": settings.APP_NAME,
                "app_version": settings.APP_VERSION,
                "environment": settings.ENVIRONMENT,
            },
        },
        # Los logs van a stderr; stdout queda para el reporte
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": console_formatter,
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            "shiporder": {"level": log_level},
        },
        "root": {"level": log_level, "handlers": ["console"]},
    }

    if settings.LOG_FILE_PATH:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": "detailed",
            "filename": settings.LOG_FILE_PATH,
            "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }
        config["root"]["handlers"].append("file")

    return config


def setup_logging(level: Optional[str] = None, settings: Optional[Settings] = None) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Args:
        level: Nivel que reemplaza a LOG_LEVEL (p. ej. DEBUG con --verbose)
        settings: Configuración a usar (por defecto get_settings())
    """
    settings = settings or get_settings()

    # Crear directorio de logs si no existe
    if settings.LOG_FILE_PATH:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration(settings, level))

    logger = logging.getLogger(__name__)
    logger.debug(f"Sistema de logging configurado - Nivel: {level or settings.LOG_LEVEL}")


def get_logger(name: str, **kwargs) -> logging.Logger:
    """
    Obtiene un logger con atributos adicionales.

    Args:
        name: Nombre del logger
        **kwargs: Atributos adicionales para el logger

    Returns:
        logging.Logger: Logger configurado
    """
    logger = logging.getLogger(name)

    for key, value in kwargs.items():
        setattr(logger, key, value)

    return logger


class LogContext:
    """
    Context manager para agregar contexto temporal a los logs.

    Ejemplo:
        with LogContext(source="order.xml"):
            logger.info("Convirtiendo documento")  # incluye source
    """

    def __init__(self, **context):
        """
        Inicializa el context manager.

        Args:
            **context: Datos de contexto a agregar
        """
        self.context = context
        self.old_factory = None

    def __enter__(self):
        """Entra al contexto."""
        self.old_factory = logging.getLogRecordFactory()
        old_factory = self.old_factory
        context = self.context

        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            for key, value in context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Sale del contexto."""
        logging.setLogRecordFactory(self.old_factory)
