"""
Loading of SRR files into memory.

SRR files are small (they contain only metadata and a few text files), so they are always read whole and decoded from
the resulting buffer.
"""

import stat

from os import PathLike
from pathlib import Path
from typing import Union

from .errors import SrrFileNotFoundError, MetadataUnavailableError, ReadFailureError


def load_file_data(path: Union[str, PathLike]) -> bytes:
    """
    Reads the entire content of a file.

    Raises:
        SrrFileNotFoundError: If there is no file at the given path.
        MetadataUnavailableError: If the file's metadata could not be read, or it is not a regular file.
        ReadFailureError: If the file could not be opened or read completely.
    """

    path = Path(path)

    try:
        file_stat = path.stat()
    except FileNotFoundError as e:
        raise SrrFileNotFoundError(path) from e
    except OSError as e:
        raise MetadataUnavailableError(path, e.strerror or str(e)) from e

    if not stat.S_ISREG(file_stat.st_mode):
        raise MetadataUnavailableError(path, "not a regular file")

    try:
        with path.open('rb') as f:
            data = f.read()
    except OSError as e:
        raise ReadFailureError(path, e.strerror or str(e)) from e

    if len(data) < file_stat.st_size:
        raise ReadFailureError(path, f"expected {file_stat.st_size} bytes, but only {len(data)} could be read")

    return data
