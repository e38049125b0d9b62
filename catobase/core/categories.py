"""Category listing files: one category label per line."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from .error_handler import safe_path_operation, translate_os_error
from .exceptions import CategoryListError
from .formatter import validate_labels

PathLike = Union[str, Path]


class CategoryStore:
    """Creates, reads and edits category listing files."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self.logger = logging.getLogger(__name__)

    def create(self, categories: Iterable[str], path: PathLike) -> None:
        """
        Create a new category listing.

        The file is opened in exclusive mode so an existing listing is never
        overwritten.

        Args:
            categories: Labels to write, one per line, in order
            path: Location of the new listing

        Raises:
            AlreadyExistsError: If path already exists
            ValidationError: If a label cannot be stored in a registry record
        """
        categories = list(categories)
        validate_labels(categories)
        self._write(path, categories, mode="x")
        self.logger.info(f"Created category listing {path} with {len(categories)} entries")

    def delete_entry(self, category: str, path: PathLike) -> None:
        """
        Remove every line equal to category and rewrite the listing.

        Removing a label that is not listed leaves the file unchanged.

        Raises:
            PathNotFoundError: If the listing does not exist
        """
        categories = self.read(path)
        remaining = [entry for entry in categories if entry != category]
        removed = len(categories) - len(remaining)
        if removed:
            self._write(path, remaining, mode="w")
        self.logger.info(f"Removed {removed} occurrence(s) of {category!r} from {path}")

    @safe_path_operation("read category listing", CategoryListError)
    def read(self, path: PathLike) -> List[str]:
        """Return the listing's lines in order."""
        try:
            with open(path, "r", encoding=self.encoding) as f:
                return [line.rstrip("\n") for line in f]
        except UnicodeDecodeError as e:
            raise CategoryListError(f"failed to read category listing {path}: {e}") from e

    def _write(self, path: PathLike, categories: List[str], mode: str) -> None:
        try:
            with open(path, mode, encoding=self.encoding) as f:
                for category in categories:
                    f.write(category + "\n")
        except OSError as e:
            raise translate_os_error(e, path, "write category listing", CategoryListError) from e
