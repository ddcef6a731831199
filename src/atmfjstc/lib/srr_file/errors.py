"""
Exceptions raised while loading and decoding SRR files.

All of them derive from `SrrError`. Problems with accessing the file itself derive from `SrrLoadError`, while problems
with the content of the file derive from `SrrFormatError` and carry the position in the data where they were detected.
"""

from os import PathLike
from typing import Optional, Union


class SrrError(Exception):
    """
    Base class for all errors raised by this package.
    """


class SrrLoadError(SrrError):
    path: Union[str, PathLike]

    def __init__(self, path: Union[str, PathLike], message: str):
        self.path = path

        super().__init__(message)


class SrrFileNotFoundError(SrrLoadError):
    def __init__(self, path: Union[str, PathLike]):
        super().__init__(path, f"File '{path}' does not exist")


class MetadataUnavailableError(SrrLoadError):
    reason: str

    def __init__(self, path: Union[str, PathLike], reason: str):
        self.reason = reason

        super().__init__(path, f"Could not get metadata for '{path}': {reason}")


class ReadFailureError(SrrLoadError):
    reason: str

    def __init__(self, path: Union[str, PathLike], reason: str):
        self.reason = reason

        super().__init__(path, f"Could not read '{path}': {reason}")


class SrrFormatError(SrrError):
    """
    Signals that the data does not match the SRR format.
    """
    position: int

    def __init__(self, position: int, message: str):
        self.position = position

        super().__init__(f"At position {position}, {message}")


class IncoherentFileSizeError(SrrFormatError):
    actual_size: int

    def __init__(self, actual_size: int):
        self.actual_size = actual_size

        super().__init__(
            0, f"expected at least 7 bytes for the SRR header, but the data is only {actual_size} bytes long"
        )


class TruncatedHeaderError(SrrFormatError):
    available: int

    def __init__(self, position: int, available: int, message: Optional[str] = None):
        self.available = available

        super().__init__(
            position, message or f"expected 7 bytes for block header, but only {available} were found"
        )


class IncoherentBlockSizeError(TruncatedHeaderError):
    declared_size: int

    def __init__(self, position: int, available: int, declared_size: int):
        self.declared_size = declared_size

        super().__init__(
            position, available,
            f"block header declares a size of {declared_size} bytes, less than the 7 bytes of the header itself"
        )


class InvalidBlockTypeError(SrrFormatError):
    expected: int
    actual: int

    def __init__(self, position: int, expected: int, actual: int):
        self.expected = expected
        self.actual = actual

        super().__init__(position, f"expected block of type 0x{expected:02x}, but found type 0x{actual:02x}")


class InvalidChecksumError(SrrFormatError):
    head_type: int
    expected: int
    actual: int

    def __init__(self, position: int, head_type: int, expected: int, actual: int):
        self.head_type = head_type
        self.expected = expected
        self.actual = actual

        super().__init__(
            position, f"block of type 0x{head_type:02x} should have CRC 0x{expected:04x}, but it is 0x{actual:04x}"
        )


class InvalidFlagsError(SrrFormatError):
    head_type: int
    expected: int
    actual: int

    def __init__(self, position: int, head_type: int, expected: int, actual: int):
        self.head_type = head_type
        self.expected = expected
        self.actual = actual

        super().__init__(
            position, f"block of type 0x{head_type:02x} should have flags 0x{expected:04x}, but they are 0x{actual:04x}"
        )


class InvalidUtf8Error(SrrFormatError):
    meaning: Optional[str]

    def __init__(self, position: int, meaning: Optional[str]):
        self.meaning = meaning

        super().__init__(position, f"{meaning or 'text'} is not valid UTF-8")


class TruncatedBodyError(SrrFormatError):
    expected_length: int
    actual_length: int
    meaning: Optional[str]

    def __init__(self, position: int, expected_length: int, actual_length: int, meaning: Optional[str]):
        self.expected_length = expected_length
        self.actual_length = actual_length
        self.meaning = meaning

        super().__init__(
            position,
            f"expected {expected_length} bytes{f' for {meaning}' if meaning is not None else ''}"
            f", but only {actual_length} were found"
        )
