"""catobase - tag files with categories and query them from a flat registry."""

__version__ = "0.1.0"
__description__ = "Tag files with categories and query them from a flat registry"

from .core import (
    Record, BulkRegistrationResult, CategoryStore, format_record,
    RegistryStore, Registrar, QueryEngine, Catalog
)
from .cli.main import cli

__all__ = [
    "Record",
    "BulkRegistrationResult",
    "CategoryStore",
    "format_record",
    "RegistryStore",
    "Registrar",
    "QueryEngine",
    "Catalog",
    "cli"
]
