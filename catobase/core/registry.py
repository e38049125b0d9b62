"""Append-only registry file holding one record per line."""

import logging
import os
from pathlib import Path
from typing import List, Union

from .error_handler import translate_os_error
from .exceptions import AlreadyExistsError, RegistryError


class RegistryStore:
    """Reads and appends registry lines.

    The registry file is created by an explicit setup step
    (:meth:`initialize`); appending never creates it.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self.logger = logging.getLogger(__name__)

    def exists(self) -> bool:
        return self.path.exists()

    def initialize(self, exist_ok: bool = True) -> bool:
        """
        Create an empty registry file.

        Args:
            exist_ok: When False, an existing registry raises AlreadyExistsError

        Returns:
            True if a new file was created
        """
        try:
            with open(self.path, "x", encoding=self.encoding):
                pass
        except FileExistsError as e:
            if not exist_ok:
                raise AlreadyExistsError(f"registry already exists: {self.path}") from e
            return False
        except OSError as e:
            raise translate_os_error(e, self.path, "create registry", RegistryError) from e

        self.logger.info(f"Initialized registry at {self.path}")
        return True

    def append(self, line: str) -> None:
        """
        Append one record line followed by a newline.

        Raises:
            PathNotFoundError: If the registry file does not exist
            RegistryError: For any other write failure
        """
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_APPEND)
        except OSError as e:
            raise translate_os_error(e, self.path, "open registry for writing", RegistryError) from e

        try:
            with os.fdopen(fd, "a", encoding=self.encoding) as f:
                f.write(line + "\n")
        except OSError as e:
            raise RegistryError(f"failed to write to {self.path}: {e}") from e

        self.logger.debug(f"Appended record to {self.path}")

    def scan(self) -> List[str]:
        """
        Read every line of the registry in file order.

        Raises:
            PathNotFoundError: If the registry file does not exist
            RegistryError: For any other read failure
        """
        try:
            with open(self.path, "r", encoding=self.encoding) as f:
                return [line.rstrip("\n") for line in f]
        except UnicodeDecodeError as e:
            raise RegistryError(f"failed to read {self.path}: {e}") from e
        except OSError as e:
            raise translate_os_error(e, self.path, "read registry", RegistryError) from e
