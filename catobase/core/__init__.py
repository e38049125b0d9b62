"""Core engine: category listings, registry records, registration and queries."""

from .models import Record, BulkRegistrationResult
from .categories import CategoryStore
from .formatter import format_record
from .registry import RegistryStore
from .registration import Registrar
from .query import QueryEngine
from .catalog import Catalog

__all__ = [
    "Record",
    "BulkRegistrationResult",
    "CategoryStore",
    "format_record",
    "RegistryStore",
    "Registrar",
    "QueryEngine",
    "Catalog"
]
