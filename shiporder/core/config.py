"""
Configuración centralizada de la aplicación.

Este módulo maneja las variables de entorno y configuraciones
del conversor usando Pydantic Settings para validación automática.
Todas las variables se leen con el prefijo SHIPORDER_.
"""

from functools import lru_cache
from typing import Literal, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shiporder.version import VERSION


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para uso en consola.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "ShipOrder XML Converter"
    APP_VERSION: str = VERSION
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_LEVEL: str = Field(default="WARNING")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    LOG_JSON: bool = Field(default=False)

    # === CONFIGURACIÓN DEL PARSER XML ===
    # 10 MB; documentos mayores se rechazan antes de parsear
    XML_MAX_DOCUMENT_BYTES: int = Field(default=10 * 1024 * 1024)
    # "internal": solo entidades declaradas en el DTD interno; True también carga las externas
    XML_RESOLVE_ENTITIES: Union[bool, Literal["internal"]] = Field(default="internal")
    XML_NO_NETWORK: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="SHIPORDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("XML_RESOLVE_ENTITIES", mode="before")
    @classmethod
    def validate_resolve_entities(cls, v):
        """Normaliza el modo de resolución de entidades."""
        if isinstance(v, str) and v.strip().lower() == "internal":
            return "internal"
        return v

    @field_validator("XML_MAX_DOCUMENT_BYTES", "LOG_MAX_SIZE_MB")
    @classmethod
    def validate_positive(cls, v):
        """Valida que los tamaños sean positivos."""
        if v <= 0:
            raise ValueError("El tamaño debe ser mayor que 0")
        return v

    @field_validator("LOG_BACKUP_COUNT")
    @classmethod
    def validate_backup_count(cls, v):
        """Valida que la cantidad de respaldos no sea negativa."""
        if v < 0:
            raise ValueError("LOG_BACKUP_COUNT no puede ser negativo")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        """Verifica si está en entorno de desarrollo."""
        return self.ENVIRONMENT == "development"

    def get_parser_options(self) -> dict:
        """
        Obtiene las opciones para construir el parser de lxml.

        Returns:
            dict: Argumentos para lxml.etree.XMLParser
        """
        return {
            "resolve_entities": self.XML_RESOLVE_ENTITIES,
            "no_network": self.XML_NO_NETWORK,
            "huge_tree": False,
            "recover": False,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()


def get_environment_info() -> dict:
    """
    Obtiene información del entorno actual.

    Returns:
        dict: Información del entorno
    """
    settings = get_settings()

    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "is_production": settings.is_production,
        "is_development": settings.is_development,
        "log_level": settings.LOG_LEVEL,
        "parser": {
            "max_document_bytes": settings.XML_MAX_DOCUMENT_BYTES,
            "resolve_entities": settings.XML_RESOLVE_ENTITIES,
            "no_network": settings.XML_NO_NETWORK,
        },
    }
