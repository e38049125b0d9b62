"""Registration of files into the registry."""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from .categories import CategoryStore
from .error_handler import compile_pattern, translate_os_error
from .exceptions import (
    CatobaseError, InvalidCategoriesError, PathNotFoundError, SnapshotError
)
from .formatter import format_record, validate_labels, validate_path
from .models import DEFAULT_SEPARATOR, BulkRegistrationResult, Record
from .registry import RegistryStore

PathLike = Union[str, Path]


class Registrar:
    """Validates files and their categories and appends them to the registry."""

    def __init__(
        self,
        registry: RegistryStore,
        known_categories: Optional[Iterable[str]] = None,
        category_store: Optional[CategoryStore] = None,
        snapshot_suffix: str = ".copy"
    ):
        """
        Initialize the registrar.

        Args:
            registry: Registry the records are appended to
            known_categories: Reference category set. When None, categories
                are not checked against a vocabulary.
            category_store: Store used to read category listings
            snapshot_suffix: Suffix appended to a file's path for its snapshot
        """
        self.registry = registry
        self.known_categories = set(known_categories) if known_categories is not None else None
        self.category_store = category_store or CategoryStore()
        self.snapshot_suffix = snapshot_suffix
        self.logger = logging.getLogger(__name__)

    def register_file(self, path: PathLike, categories: Sequence[str],
                      make_snapshot: bool = False) -> Record:
        """
        Register a single file.

        Every check runs before the registry is touched, so a failed
        registration never leaves a record behind.

        Args:
            path: File to register
            categories: Category labels for the file
            make_snapshot: Copy the file's content to ``path + snapshot_suffix``

        Returns:
            The record that was appended

        Raises:
            PathNotFoundError: If the file or the registry does not exist
            ValidationError: If the path or a label holds reserved characters
            InvalidCategoriesError: If a category is not in the reference set
            SnapshotError: If the snapshot copy fails
            RegistryError: If the record cannot be written
        """
        subject = str(path)
        categories = list(categories)

        if not os.path.isfile(subject):
            raise PathNotFoundError(f"file does not exist: {subject}")

        validate_path(subject)
        validate_labels(categories)
        self.check_categories(categories)

        if not self.registry.exists():
            raise PathNotFoundError(f"registry does not exist: {self.registry.path}")

        if make_snapshot:
            self.snapshot(subject)

        line = format_record(subject, categories, DEFAULT_SEPARATOR)
        self.registry.append(line)
        self.logger.info(f"Registered {subject} with categories {categories}")
        return Record.parse(line)

    def check_categories(self, categories: Sequence[str]) -> None:
        """Raise InvalidCategoriesError if any category is outside the reference set."""
        if self.known_categories is None:
            return
        missing = [category for category in categories if category not in self.known_categories]
        if missing:
            raise InvalidCategoriesError(missing)

    def snapshot(self, path: str) -> Path:
        """Copy a file byte for byte next to itself, replacing an older copy."""
        destination = Path(path + self.snapshot_suffix)
        try:
            shutil.copyfile(path, destination)
        except OSError as e:
            raise translate_os_error(e, path, "copy file", SnapshotError) from e
        self.logger.debug(f"Snapshot of {path} written to {destination}")
        return destination

    def register_files(self, root: PathLike, pattern: str, keep_going: bool = False):
        """
        Register every file under root whose base name matches pattern.

        Each matched file is read as a category listing and its own lines
        become its categories; a snapshot is taken of every registered file.

        Args:
            root: Directory to walk recursively
            pattern: Regular expression searched in each file's base name
            keep_going: Register the remaining files after a failure instead
                of stopping at the first one

        Returns:
            List of registered paths in traversal order, or a
            BulkRegistrationResult when keep_going is set

        Raises:
            PatternError: If pattern is not a valid regular expression
            PathNotFoundError: If root does not exist
        """
        regex = compile_pattern(pattern)
        result = BulkRegistrationResult()

        for file_path in self._walk(root):
            name = os.path.basename(file_path)
            if not regex.search(name):
                continue
            try:
                categories = self.category_store.read(file_path)
                self.register_file(file_path, categories, make_snapshot=True)
            except CatobaseError as e:
                if not keep_going:
                    raise
                result.failures.append((file_path, e))
                continue
            result.registered.append(file_path)

        self.logger.info(
            f"Registered {len(result.registered)} file(s) under {root}"
            + (f", {len(result.failures)} failed" if result.failures else "")
        )
        if keep_going:
            return result
        return result.registered

    def _walk(self, root: PathLike) -> Iterator[str]:
        """Yield non-directory entries under root in lexical order."""
        root = str(root)
        try:
            if not os.path.isdir(root):
                if os.path.lexists(root):
                    yield root
                    return
                raise PathNotFoundError(f"directory does not exist: {root}")
            with os.scandir(root) as it:
                entries: List[os.DirEntry] = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise translate_os_error(e, root, "read directory") from e

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from self._walk(entry.path)
            else:
                yield entry.path
