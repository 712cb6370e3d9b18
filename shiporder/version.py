"""
Version information for the ShipOrder XML converter.

Single source of truth: pyproject.toml (distribution "shiporder-xml").
"""

from importlib.metadata import PackageNotFoundError, version

# Used when running from a source tree without installed metadata
_FALLBACK_VERSION = "1.0.0"

_DISTRIBUTION_NAME = "shiporder-xml"


def get_version() -> str:
    """Get the package version from metadata or fallback."""
    try:
        return version(_DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _FALLBACK_VERSION


VERSION = get_version()


def version_string() -> str:
    """Version as shown by ``shiporder --version``, e.g. "v1.0.0"."""
    return f"v{VERSION}"
