"""Serialization of registration records into registry lines."""

from datetime import datetime
from typing import Iterable, Sequence

from .exceptions import ValidationError
from .models import CATEGORY_DELIMITER, DEFAULT_SEPARATOR


def timestamp_now() -> str:
    """Current local time as an RFC 3339 instant with an explicit offset."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


def format_record(path: str, categories: Sequence[str], separator: str = "") -> str:
    """
    Format a registration entry as a single registry line.

    Args:
        path: Path of the registered file
        categories: Category labels, joined with commas in the given order
        separator: Field separator; an empty string selects "|"

    Returns:
        "path SEP categories SEP timestamp" without a trailing newline
    """
    if not separator:
        separator = DEFAULT_SEPARATOR
    joined = CATEGORY_DELIMITER.join(categories)
    return f"{path}{separator}{joined}{separator}{timestamp_now()}"


def validate_labels(labels: Iterable[str], separator: str = DEFAULT_SEPARATOR) -> None:
    """
    Reject labels that could not be read back from a registry line.

    Raises:
        ValidationError: If a label contains the separator, a comma or a line break
    """
    forbidden = {separator, CATEGORY_DELIMITER, "\n", "\r"}
    for label in labels:
        bad = sorted(char for char in forbidden if char in label)
        if bad:
            raise ValidationError(
                f"category {label!r} contains reserved characters: {' '.join(map(repr, bad))}"
            )


def validate_path(path: str, separator: str = DEFAULT_SEPARATOR) -> None:
    """Reject subject paths containing the separator or a line break."""
    if separator in path or "\n" in path or "\r" in path:
        raise ValidationError(f"path {path!r} contains reserved characters")
