"""
Sistema de manejo de errores personalizado.

Este módulo define las excepciones de la aplicación (errores de parseo XML
y de mapeo a objetos de dominio) y utilidades para manejo consistente de errores.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados para la aplicación.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Errores de documento
    XML_PARSE_ERROR = "XML_PARSE_ERROR"

    # Errores de mapeo
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            severity: Severidad del error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.severity = severity
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        """String representation del error."""
        return f"{self.error_code.value}: {self.message}"


class ParseError(AppException):
    """
    Excepción para documentos que no son XML bien formado.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de parseo.

        Args:
            message: Diagnóstico del parser
            line: Línea donde se detectó el error
            column: Columna donde se detectó el error
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.XML_PARSE_ERROR,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )
        self.line = line
        self.column = column

        self.details.update({"line": line, "column": column})


class MappingError(AppException):
    """
    Excepción para nodos faltantes o valores que no se pueden convertir.

    El mensaje nombra el campo ("shipTo missing", "invalid quantity") y
    ``path`` indica la ruta exacta dentro del documento.
    """

    def __init__(
        self,
        message: str,
        field: str,
        path: Optional[str] = None,
        invalid_value: Any = None,
        error_code: ErrorCode = ErrorCode.MISSING_REQUIRED_FIELD,
        **kwargs,
    ):
        """
        Inicializa la excepción de mapeo.

        Args:
            message: Mensaje de error
            field: Campo que falló
            path: Ruta del nodo (p. ej. shipOrder/items/item[2]/price)
            invalid_value: Texto que no se pudo convertir
            error_code: MISSING_REQUIRED_FIELD o INVALID_FIELD_VALUE
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.path = path or field
        self.invalid_value = invalid_value

        self.details.update(
            {
                "field": field,
                "path": self.path,
                "invalid_value": invalid_value,
            }
        )

    @classmethod
    def missing(cls, field: str, path: Optional[str] = None) -> "MappingError":
        """Crea el error para un nodo requerido que no existe."""
        return cls(f"{field} missing", field=field, path=path)

    @classmethod
    def invalid(cls, field: str, value: Any, path: Optional[str] = None) -> "MappingError":
        """Crea el error para un texto que no se puede convertir al tipo del campo."""
        return cls(
            f"invalid {field}",
            field=field,
            path=path,
            invalid_value=value,
            error_code=ErrorCode.INVALID_FIELD_VALUE,
        )


class ConfigurationException(AppException):
    """
    Excepción para configuraciones inválidas.
    """

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )


# === FUNCIONES DE UTILIDAD ===


def convert_to_app_exception(exception: Exception, context: Optional[Dict[str, Any]] = None) -> AppException:
    """
    Convierte una excepción estándar a AppException.

    Args:
        exception: Excepción a convertir
        context: Contexto adicional

    Returns:
        AppException: Excepción convertida
    """
    context = context or {}

    if isinstance(exception, AppException):
        exception.details.update(context)
        return exception

    exception_type = type(exception).__name__
    return AppException(
        message=f"{exception_type}: {exception}",
        details={"original_exception": exception_type, **context},
    )


def create_error_response(exception: Union[AppException, Exception]) -> Dict[str, Any]:
    """
    Crea respuesta de error estandardizada.

    Args:
        exception: Excepción a convertir

    Returns:
        Dict: Respuesta de error
    """
    app_exc = convert_to_app_exception(exception)
    return {"error": True, **app_exc.to_dict()}


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Loggea un error de manera consistente.

    Args:
        exception: Excepción a loggear
        context: Contexto adicional
        level: Nivel de logging
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "error_details": exception.details,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {exception}"
        log_data["traceback"] = "".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        )

    logger.log(level, message, extra=log_data)
