"""Core data models for catobase."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from .exceptions import CatobaseError

DEFAULT_SEPARATOR = "|"
CATEGORY_DELIMITER = ","


@dataclass(frozen=True)
class Record:
    """One registration entry of the registry."""
    path: str
    categories: Tuple[str, ...]
    timestamp: str

    @classmethod
    def parse(cls, line: str, separator: str = DEFAULT_SEPARATOR) -> Optional["Record"]:
        """
        Parse a registry line.

        Lines with fewer than three fields are malformed and yield None.
        Fields after the third are ignored.
        """
        parts = line.split(separator)
        if len(parts) < 3:
            return None
        return cls(
            path=parts[0],
            categories=tuple(parts[1].split(CATEGORY_DELIMITER)) if parts[1] else (),
            timestamp=parts[2]
        )

    @property
    def recorded_at(self) -> Optional[datetime]:
        """Timestamp as a datetime, or None if it does not parse."""
        try:
            return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        except ValueError:
            return None

    def has_categories(self, required) -> bool:
        """Check that every required category is present on this record."""
        return set(required).issubset(self.categories)


@dataclass
class BulkRegistrationResult:
    """Outcome of a directory registration that runs to completion."""
    registered: List[str] = field(default_factory=list)
    failures: List[Tuple[str, CatobaseError]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.registered) + len(self.failures)

    @property
    def success_rate(self) -> float:
        """Fraction of matched files that were registered."""
        if self.total == 0:
            return 1.0
        return len(self.registered) / self.total
