"""Output and config contracts backed by bundled JSON schemas."""

from .catalog import CatalogEntry, load_catalog, schema_path_for
from .validate import validate

__all__ = ["CatalogEntry", "load_catalog", "schema_path_for", "validate"]
