"""Wiring of the catobase components from configuration."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .categories import CategoryStore
from .config import AppConfig, get_config
from .models import Record
from .query import QueryEngine
from .registration import Registrar
from .registry import RegistryStore


class Catalog:
    """Entry point bundling the stores, the registrar and the query engine.

    Every component receives the registry location explicitly, so several
    catalogs with different registries can live in one process.
    """

    def __init__(self, registry_path: Optional[Union[str, Path]] = None,
                 categories_file: Optional[Union[str, Path]] = None,
                 config: Optional[AppConfig] = None):
        app_config = config or get_config()
        settings = app_config.registry

        self.registry_path = Path(registry_path or settings.path)
        self.categories_file = categories_file or settings.categories_file
        self.categories = CategoryStore(encoding=settings.encoding)
        self.registry = RegistryStore(self.registry_path, encoding=settings.encoding)
        self.query = QueryEngine(self.registry)
        self.snapshot_suffix = settings.snapshot_suffix
        self.logger = logging.getLogger(__name__)

    def known_categories(self) -> Optional[List[str]]:
        """Reference category set, or None when no listing is configured."""
        if not self.categories_file:
            return None
        return self.categories.read(self.categories_file)

    def registrar(self) -> Registrar:
        """Build a registrar validating against the current reference listing."""
        return Registrar(
            self.registry,
            known_categories=self.known_categories(),
            category_store=self.categories,
            snapshot_suffix=self.snapshot_suffix
        )

    def initialize(self) -> bool:
        return self.registry.initialize(exist_ok=True)

    def register_file(self, path, categories: Sequence[str], make_snapshot: bool = False) -> Record:
        return self.registrar().register_file(path, categories, make_snapshot)

    def register_files(self, root, pattern: str, keep_going: bool = False):
        return self.registrar().register_files(root, pattern, keep_going=keep_going)

    def get(self, pattern: str, categories: Sequence[str] = ()) -> List[str]:
        return self.query.get(pattern, categories)

    def find(self, pattern: str, categories: Sequence[str] = ()) -> List[Record]:
        return self.query.find(pattern, categories)
