"""
Utilities for decoding SRR files.

SRR files are produced by ReScene and contain the metadata needed to verify and reconstruct the RAR volumes of a
release, along with small auxiliary files (.nfo, .sfv etc.) stored inline. The format is based on the RAR 1.5-4.x
block format: every block starts with a 7-byte header (CRC, type, flags, size) followed by a type-specific body. In
SRR blocks the "CRC" field is not a real checksum, but a constant made from the block type repeated twice.

This package decodes the SRR header and the stored file and RAR file blocks into immutable objects. It does not write
SRR files, nor does it extract or verify the stored data.

Typical use::

    srr = read_srr_file('release.srr')

    print(srr.application_name)
    for block in srr.blocks:
        print(block.description())
"""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from os import PathLike
from typing import Optional, Tuple, Union

from .errors import SrrError, SrrLoadError, SrrFormatError, SrrFileNotFoundError, MetadataUnavailableError, \
    ReadFailureError, IncoherentFileSizeError, TruncatedHeaderError, IncoherentBlockSizeError, InvalidBlockTypeError, \
    InvalidChecksumError, InvalidFlagsError, InvalidUtf8Error, TruncatedBodyError


__version__ = '0.1.0'


HEADER_LENGTH = 7
"""Length of the header that starts every block: CRC (2 bytes), type (1), flags (2), size (2)"""


class BlockType(IntEnum):
    FILE_HEADER = 0x69
    STORED_FILE = 0x6A
    OSO_HASH = 0x6B
    RAR_PADDING = 0x6C
    RAR_FILE = 0x71

    @property
    def expected_crc(self) -> int:
        """The constant that must be present in the CRC field of blocks of this type"""
        return (self.value << 8) | self.value


def block_type_from_tag(tag: int) -> Optional[BlockType]:
    """
    Gets the `BlockType` for a raw type byte, or None if the type is not one used by SRR files.
    """
    try:
        return BlockType(tag)
    except ValueError:
        return None


class SrrHeaderFlags(IntFlag):
    APP_NAME_PRESENT = 1 << 0


class StoredFileFlags(IntFlag):
    LONG_BLOCK = 1 << 15  # Data follows the block; must always be set


class RarFileFlags(IntFlag):
    RECOVERY_BLOCKS_REMOVED = 1 << 0
    PATHS_SAVED = 1 << 1


@dataclass(frozen=True)
class BlockHeader:
    crc: int
    head_type: int
    flags: int
    size: int
    position: int = 0

    @property
    def block_type(self) -> Optional[BlockType]:
        return block_type_from_tag(self.head_type)

    def description(self) -> str:
        type_text = f"0x{self.head_type:02x}" if self.block_type is None else self.block_type.name

        return f"CRC: 0x{self.crc:04x} - type: {type_text} - flags: 0x{self.flags:04x} - size: {self.size}"


@dataclass(frozen=True)
class SrrBlock:
    header: BlockHeader

    @property
    def position(self) -> int:
        return self.header.position

    @property
    def trailing_data_size(self) -> int:
        """
        The number of bytes following the block header region that belong to this block (e.g. stored file data).
        """
        return 0

    def description(self) -> str:
        return f"[0x{self.position:08x}] {self.header.description()}"


@dataclass(frozen=True)
class FileHeaderBlock(SrrBlock):
    application_name: str

    def description(self) -> str:
        return f"[0x{self.position:08x}] SRR header, created by {self.application_name or '(unknown application)'}"


@dataclass(frozen=True)
class StoredFileBlock(SrrBlock):
    """
    Metadata of a file whose data is stored inline, right after the block.

    The data starts at `data_offset`, i.e. right after the header region whose size is declared in the block header.
    For blocks written by ReScene this is also right after the name. If the declared size were larger than the
    metadata, the gap would be skipped.
    """

    file_size: int
    name: str
    data_offset: int

    @property
    def trailing_data_size(self) -> int:
        return self.file_size

    @property
    def data_end(self) -> int:
        return self.data_offset + self.file_size

    def description(self) -> str:
        return f"[0x{self.position:08x}] Stored file '{self.name}' ({self.file_size} bytes at 0x{self.data_offset:x})"


@dataclass(frozen=True)
class RarFileBlock(SrrBlock):
    file_name: str

    @property
    def recovery_blocks_removed(self) -> bool:
        return bool(self.header.flags & RarFileFlags.RECOVERY_BLOCKS_REMOVED)

    @property
    def paths_saved(self) -> bool:
        return bool(self.header.flags & RarFileFlags.PATHS_SAVED)

    def description(self) -> str:
        return f"[0x{self.position:08x}] RAR volume '{self.file_name}'"


@dataclass(frozen=True)
class SrrFile:
    application_name: str
    blocks: Tuple[SrrBlock, ...] = ()

    @property
    def stored_files(self) -> Tuple[StoredFileBlock, ...]:
        return tuple(block for block in self.blocks if isinstance(block, StoredFileBlock))

    @property
    def rar_files(self) -> Tuple[RarFileBlock, ...]:
        return tuple(block for block in self.blocks if isinstance(block, RarFileBlock))


def decode_block_header(data: bytes, offset: int = 0) -> BlockHeader:
    from ._parse import decode_block_header as _decode

    return _decode(data, offset)


def parse_srr_data(data: bytes) -> SrrFile:
    """
    Decodes an SRR file that has been fully loaded into memory.

    Args:
        data: The entire content of the file.

    Returns:
        An `SrrFile` with the application name and the decoded blocks, in file order. Decoding stops without error at
        the first block of a type that is not handled (OSO hash, RAR padding or unknown).

    Raises:
        SrrFormatError: If the data is not a valid SRR file. No partial result is available in that case.
    """
    from ._parse import parse_srr_buffer

    return parse_srr_buffer(data)


def load_file_data(path: Union[str, PathLike]) -> bytes:
    from .loader import load_file_data as _load

    return _load(path)


def read_srr_file(path: Union[str, PathLike]) -> SrrFile:
    """
    Loads and decodes the SRR file at the given path.

    Raises:
        SrrLoadError: If the file could not be read.
        SrrFormatError: If the file is not a valid SRR file.
    """
    return parse_srr_data(load_file_data(path))
