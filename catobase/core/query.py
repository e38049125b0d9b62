"""Queries over the registry by path pattern and categories."""

import logging
from typing import List, Sequence

from .error_handler import compile_pattern
from .exceptions import PathNotFoundError
from .models import Record
from .registry import RegistryStore


class QueryEngine:
    """Linear scan of the registry; every query re-reads the file."""

    def __init__(self, registry: RegistryStore):
        self.registry = registry
        self.logger = logging.getLogger(__name__)

    def find(self, pattern: str, required: Sequence[str] = ()) -> List[Record]:
        """
        Return the records whose path matches pattern and that carry every
        required category.

        Malformed lines are skipped. Records are returned in registry order,
        including repeated registrations of the same file.

        Raises:
            PathNotFoundError: If the registry does not exist
            PatternError: If pattern is not a valid regular expression
        """
        if not self.registry.exists():
            raise PathNotFoundError(f"file does not exist: {self.registry.path}")
        regex = compile_pattern(pattern)

        matches = []
        for line in self.registry.scan():
            record = Record.parse(line)
            if record is None:
                continue
            if regex.search(record.path) and record.has_categories(required):
                matches.append(record)

        self.logger.debug(f"Query {pattern!r} {list(required)} matched {len(matches)} record(s)")
        return matches

    def get(self, pattern: str, required: Sequence[str] = ()) -> List[str]:
        """Return the paths of the records matched by :meth:`find`."""
        return [record.path for record in self.find(pattern, required)]
