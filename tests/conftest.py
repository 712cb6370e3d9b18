"""Fixtures compartidos para los tests del conversor shipOrder."""

import logging
import os

import pytest

from shiporder.core.config import Settings, get_settings
from shiporder.services.orders.converters import XmlOrderConverter
from shiporder.services.orders.sample import SAMPLE_SHIP_ORDER_XML

DEFAULT_SHIP_TO = (
    "<shipTo><name>Tove Svendson</name><street>Ragnhildvei 2</street>"
    "<address>4000 Stavanger</address><country>Norway</country></shipTo>"
)


def build_ship_order(ship_to: str | None = DEFAULT_SHIP_TO, items: str | None = "") -> str:
    """
    Construye un documento shipOrder.

    Args:
        ship_to: XML completo del nodo shipTo (None lo omite)
        items: Contenido del nodo items (None omite el nodo items)
    """
    ship_to_xml = ship_to or ""
    items_xml = "" if items is None else f"<items>{items}</items>"
    return f"<shipOrder>{ship_to_xml}{items_xml}</shipOrder>"


def item_xml(title="Empire Burlesque", quantity="1", price="10.90") -> str:
    """XML de un item; None omite el campo."""
    parts = []
    if title is not None:
        parts.append(f"<title>{title}</title>")
    if quantity is not None:
        parts.append(f"<quantity>{quantity}</quantity>")
    if price is not None:
        parts.append(f"<price>{price}</price>")
    return f"<item>{''.join(parts)}</item>"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Aísla cada test de variables SHIPORDER_ y del cache de configuración."""
    for key in list(os.environ):
        if key.startswith("SHIPORDER_"):
            monkeypatch.delenv(key, raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_logging():
    """Restaura handlers, nivel y record factory del logging después de cada test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    factory = logging.getLogRecordFactory()
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.setLogRecordFactory(factory)


@pytest.fixture
def settings():
    """Configuración por defecto, sin leer archivo .env."""
    return Settings(_env_file=None)


@pytest.fixture
def converter(settings):
    """Conversor construido con la configuración por defecto."""
    return XmlOrderConverter(settings)


@pytest.fixture
def sample_xml():
    """Documento shipOrder canónico (Tove Svendson, dos items)."""
    return SAMPLE_SHIP_ORDER_XML


@pytest.fixture
def order_xml():
    """Fábrica de documentos shipOrder (ver build_ship_order)."""
    return build_ship_order


@pytest.fixture
def make_item():
    """Fábrica de nodos item (ver item_xml)."""
    return item_xml


@pytest.fixture
def default_ship_to():
    """Nodo shipTo completo del documento canónico."""
    return DEFAULT_SHIP_TO
