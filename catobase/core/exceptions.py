"""Custom exceptions for catobase."""


class CatobaseError(Exception):
    """Base exception for catobase errors."""
    pass


class FileSystemError(CatobaseError):
    """Exception for file system related errors."""
    pass


class ValidationError(CatobaseError):
    """Exception for data validation errors."""
    pass


class ConfigurationError(CatobaseError):
    """Exception for configuration related errors."""
    pass


class PermissionError(FileSystemError):
    """Exception for file permission errors."""
    pass


class PathNotFoundError(FileSystemError):
    """Exception for path not found errors."""
    pass


class AlreadyExistsError(FileSystemError):
    """Exception raised when a file that must be new already exists."""
    pass


class CategoryListError(FileSystemError):
    """Exception for category listing read/write failures."""
    pass


class RegistryError(FileSystemError):
    """Exception for registry read/write failures."""
    pass


class SnapshotError(FileSystemError):
    """Exception for snapshot copy failures."""
    pass


class InvalidCategoriesError(ValidationError):
    """Exception raised when a registration names unknown categories."""

    def __init__(self, missing=None, message="some categories do not exist"):
        super().__init__(message)
        self.missing = list(missing or [])


class PatternError(ValidationError):
    """Exception for malformed regular expressions."""

    def __init__(self, pattern, error):
        super().__init__(f"invalid pattern {pattern!r}: {error}")
        self.pattern = pattern
