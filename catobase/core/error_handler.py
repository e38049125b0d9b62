"""Translation of OS level errors into catobase exceptions."""

import errno
import re
from functools import wraps
from pathlib import Path
from typing import Callable, Pattern, Type, Union

from .exceptions import (
    AlreadyExistsError, FileSystemError, PathNotFoundError, PatternError,
    PermissionError
)


def translate_os_error(
    error: OSError,
    path: Union[str, Path],
    operation: str,
    fallback: Type[FileSystemError] = FileSystemError
) -> FileSystemError:
    """
    Map an OSError to the matching catobase exception.

    Args:
        error: The OS error that occurred
        path: Path the operation was working on
        operation: Short description of the failed operation
        fallback: Exception type used when no specific mapping applies

    Returns:
        Exception instance for the caller to raise
    """
    if isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT:
        return PathNotFoundError(f"file does not exist: {path}")
    if isinstance(error, FileExistsError) or error.errno == errno.EEXIST:
        return AlreadyExistsError(f"file already exists: {path}")
    if error.errno in (errno.EACCES, errno.EPERM):
        return PermissionError(f"permission denied: {path}")
    return fallback(f"failed to {operation} {path}: {error}")


def safe_path_operation(operation: str, fallback: Type[FileSystemError] = FileSystemError):
    """
    Decorator that converts OSError raised by a path operation.

    The first str or Path argument of the call is used as the path in the
    error message.

    Args:
        operation: Description of the operation for error messages
        fallback: Exception type for errors with no specific mapping
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except OSError as e:
                file_path = next(
                    (arg for arg in args if isinstance(arg, (str, Path))), "unknown"
                )
                raise translate_os_error(e, file_path, operation, fallback) from e

        return wrapper
    return decorator


def compile_pattern(pattern: str) -> Pattern:
    """Compile a regular expression, raising PatternError when it is malformed."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, e) from e
