from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures that make a load fall back to bundled data."""


class FetchError(CatalogError):
    """Network/transport failure or non-success HTTP status."""


class DecodeError(CatalogError):
    """Malformed envelope or missing table structure in a sheet response."""
