"""Tests unitarios para la jerarquía de excepciones y utilidades de errores."""

import logging

from shiporder.utils.error_handler import (
    AppException,
    ConfigurationException,
    ErrorCode,
    ErrorSeverity,
    MappingError,
    ParseError,
    convert_to_app_exception,
    create_error_response,
    log_error,
)


class TestMappingError:
    """Tests para MappingError."""

    def test_missing_factory(self):
        """missing() debe nombrar el campo en el mensaje."""
        error = MappingError.missing("shipTo", path="shipOrder/shipTo")

        assert error.message == "shipTo missing"
        assert error.field == "shipTo"
        assert error.path == "shipOrder/shipTo"
        assert error.error_code == ErrorCode.MISSING_REQUIRED_FIELD
        assert error.severity == ErrorSeverity.LOW

    def test_invalid_factory(self):
        """invalid() debe guardar el valor que no se pudo convertir."""
        error = MappingError.invalid("price", "abc", path="shipOrder/items/item[1]/price")

        assert error.message == "invalid price"
        assert error.invalid_value == "abc"
        assert error.error_code == ErrorCode.INVALID_FIELD_VALUE
        assert error.details == {
            "field": "price",
            "path": "shipOrder/items/item[1]/price",
            "invalid_value": "abc",
        }

    def test_path_defaults_to_field(self):
        """Sin ruta explícita, la ruta es el nombre del campo."""
        assert MappingError.missing("title").path == "title"

    def test_str_includes_code(self):
        """str() debe incluir el código de error y el mensaje."""
        assert str(MappingError.invalid("quantity", "x")) == "INVALID_FIELD_VALUE: invalid quantity"

    def test_is_app_exception(self):
        """MappingError y ParseError heredan de AppException."""
        assert issubclass(MappingError, AppException)
        assert issubclass(ParseError, AppException)
        assert not issubclass(MappingError, ParseError)


class TestParseError:
    """Tests para ParseError."""

    def test_position_in_details(self):
        """Línea y columna deben estar en details."""
        error = ParseError("Premature end of data", line=3, column=7)

        assert error.line == 3
        assert error.column == 7
        assert error.details == {"line": 3, "column": 7}
        assert error.error_code == ErrorCode.XML_PARSE_ERROR

    def test_extra_details_are_kept(self):
        """Los details adicionales se combinan con la posición."""
        error = ParseError("too big", details={"size": 10})

        assert error.details == {"size": 10, "line": None, "column": None}


class TestUtilities:
    """Tests para las funciones de utilidad."""

    def test_to_dict(self):
        """to_dict debe exponer tipo, código y severidad."""
        data = ConfigurationException("bad setting").to_dict()

        assert data["error_type"] == "ConfigurationException"
        assert data["error_code"] == "CONFIGURATION_ERROR"
        assert data["severity"] == "high"
        assert data["message"] == "bad setting"
        assert "timestamp" in data

    def test_convert_standard_exception(self):
        """Excepciones estándar se convierten en AppException genérica."""
        converted = convert_to_app_exception(KeyError("x"), {"step": "read"})

        assert isinstance(converted, AppException)
        assert converted.error_code == ErrorCode.UNKNOWN_ERROR
        assert converted.details == {"original_exception": "KeyError", "step": "read"}

    def test_convert_app_exception_adds_context(self):
        """Una AppException se devuelve tal cual con el contexto agregado."""
        error = MappingError.missing("title")

        converted = convert_to_app_exception(error, {"source": "order.xml"})

        assert converted is error
        assert error.details["source"] == "order.xml"

    def test_create_error_response(self):
        """La respuesta de error debe marcar error=True."""
        response = create_error_response(MappingError.invalid("quantity", "abc"))

        assert response["error"] is True
        assert response["error_code"] == "INVALID_FIELD_VALUE"
        assert response["details"]["invalid_value"] == "abc"

    def test_log_error_app_exception(self, caplog):
        """log_error debe registrar código y severidad."""
        with caplog.at_level(logging.DEBUG, logger="shiporder.utils.error_handler"):
            log_error(MappingError.missing("price"), {"input_source": "a.xml"}, level=logging.WARNING)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "MISSING_REQUIRED_FIELD: price missing"
        assert record.error_code == "MISSING_REQUIRED_FIELD"
        assert record.input_source == "a.xml"

    def test_log_error_standard_exception(self, caplog):
        """Excepciones estándar se registran con su traceback."""
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            with caplog.at_level(logging.ERROR, logger="shiporder.utils.error_handler"):
                log_error(e)

        record = caplog.records[-1]
        assert "RuntimeError: boom" in record.getMessage()
        assert "RuntimeError" in record.traceback
