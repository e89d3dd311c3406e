"""Exception hierarchy for fileref.

Every error raised by the package derives from FileRefError. File
operations translate the underlying OSError into one of the FileIOError
subclasses and chain the original exception.
"""

import errno
from collections.abc import Iterator
from contextlib import contextmanager


class FileRefError(Exception):
    """Base exception for all fileref errors."""


class FileIOError(FileRefError):
    """A file operation failed.

    Used directly for platform errors that have no dedicated subclass.

    Attributes:
        path: Path the operation was performed on.
        action: Short name of the failed operation (e.g. "read").
    """

    def __init__(self, message: str, *, path: str = "", action: str = "") -> None:
        super().__init__(message)
        self.path = path
        self.action = action


class PathNotFoundError(FileIOError):
    """Raised when a required file or directory does not exist."""


class PathPermissionError(FileIOError):
    """Raised when the filesystem denies access to a path."""


class PathEncodingError(FileIOError):
    """Raised when file content is not valid UTF-8 text."""


class PathExistsError(FileIOError):
    """Raised when an operation must not overwrite an existing path."""


class NotAFileError(FileIOError):
    """Raised when a file-only operation is applied to a directory."""


class WorkingDirError(FileRefError):
    """Raised when the process working directory cannot be determined."""


class ScanError(FileRefError):
    """Raised by a strict scanner when a directory cannot be listed.

    Attributes:
        path: Directory that could not be read.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ScannerStateError(FileRefError):
    """Raised when a scanner is reconfigured after iteration started."""


class ConfigError(FileRefError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


@contextmanager
def translate_os_errors(path: str, action: str) -> Iterator[None]:
    """Convert OSError and UnicodeDecodeError into FileIOError subclasses.

    Args:
        path: Path the wrapped operation acts on (used in messages).
        action: Operation name used in messages (e.g. "read").

    Raises:
        PathNotFoundError: On FileNotFoundError / ENOENT.
        PathPermissionError: On PermissionError.
        PathExistsError: On FileExistsError.
        NotAFileError: On IsADirectoryError.
        PathEncodingError: On UnicodeDecodeError.
        FileIOError: On any other OSError.
    """
    try:
        yield
    except UnicodeDecodeError as e:
        msg = f"Could not {action} '{path}': content is not valid UTF-8 text"
        raise PathEncodingError(msg, path=path, action=action) from e
    except FileNotFoundError as e:
        msg = f"Could not {action} '{path}': path does not exist"
        raise PathNotFoundError(msg, path=path, action=action) from e
    except PermissionError as e:
        msg = f"Could not {action} '{path}': permission denied"
        raise PathPermissionError(msg, path=path, action=action) from e
    except FileExistsError as e:
        msg = f"Could not {action} '{path}': path already exists"
        raise PathExistsError(msg, path=path, action=action) from e
    except IsADirectoryError as e:
        msg = f"Could not {action} '{path}': path is a directory"
        raise NotAFileError(msg, path=path, action=action) from e
    except OSError as e:
        if e.errno == errno.ENOENT:
            msg = f"Could not {action} '{path}': path does not exist"
            raise PathNotFoundError(msg, path=path, action=action) from e
        msg = f"Could not {action} '{path}': {e.strerror or e}"
        raise FileIOError(msg, path=path, action=action) from e
