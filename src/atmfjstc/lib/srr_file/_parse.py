import logging

from contextlib import contextmanager
from os import SEEK_SET
from typing import Callable, ContextManager, Dict, List

from atmfjstc.lib.binary_utils.BinaryReader import BinaryReader, BinaryReaderFormatError

from . import HEADER_LENGTH, BlockType, BlockHeader, SrrBlock, FileHeaderBlock, StoredFileBlock, RarFileBlock, \
    SrrFile, SrrHeaderFlags, StoredFileFlags
from .errors import IncoherentFileSizeError, TruncatedHeaderError, IncoherentBlockSizeError, InvalidBlockTypeError, \
    InvalidChecksumError, InvalidFlagsError, InvalidUtf8Error, TruncatedBodyError


LOG = logging.getLogger(__name__)


def parse_srr_buffer(data: bytes) -> SrrFile:
    if len(data) < HEADER_LENGTH:
        raise IncoherentFileSizeError(len(data))

    header = decode_block_header(data, 0)
    if header.head_type != BlockType.FILE_HEADER:
        raise InvalidBlockTypeError(0, BlockType.FILE_HEADER, header.head_type)
    _check_declared_size(header, data)

    header_block = decode_file_header_body(header, data)
    LOG.debug("%s", header_block.description())

    blocks: List[SrrBlock] = []
    cursor = header.size

    while cursor < len(data) - HEADER_LENGTH:
        header = decode_block_header(data, cursor)
        LOG.debug("Block at 0x%08x: %s", cursor, header.description())

        decoder = _DECODERS_BY_TYPE.get(header.block_type)
        if decoder is None:
            LOG.debug("Stopping at block of unhandled type 0x%02x", header.head_type)
            break

        _check_declared_size(header, data)

        block = decoder(header, data)
        LOG.debug("%s", block.description())
        blocks.append(block)

        # Stored file data comes right after the header region and is not counted in its size
        cursor += header.size + block.trailing_data_size

    return SrrFile(application_name=header_block.application_name, blocks=tuple(blocks))


def decode_block_header(data: bytes, offset: int = 0) -> BlockHeader:
    available = max(0, len(data) - offset)
    if available < HEADER_LENGTH:
        raise TruncatedHeaderError(offset, available)

    crc, head_type, flags, size = _reader_at(data, offset).read_struct('HBHH', 'block header')

    return BlockHeader(crc=crc, head_type=head_type, flags=flags, size=size, position=offset)


def decode_file_header_body(header: BlockHeader, data: bytes) -> FileHeaderBlock:
    _expect_crc(header, BlockType.FILE_HEADER)

    application_name = ''

    # ReScene writes a bare 7-byte header when there is no app name
    if (header.flags & SrrHeaderFlags.APP_NAME_PRESENT) or (header.size > HEADER_LENGTH):
        reader = _reader_at(data, header.position + HEADER_LENGTH)
        application_name = _read_text(reader, 'application name')

    return FileHeaderBlock(header, application_name)


def decode_stored_file_body(header: BlockHeader, data: bytes) -> StoredFileBlock:
    _expect_crc(header, BlockType.STORED_FILE)

    if header.flags != StoredFileFlags.LONG_BLOCK:
        raise InvalidFlagsError(header.position, header.head_type, int(StoredFileFlags.LONG_BLOCK), header.flags)

    reader = _reader_at(data, header.position + HEADER_LENGTH)

    with _truncation_errors():
        file_size = reader.read_struct('I', 'stored file size')[0]

    name = _read_text(reader, 'stored file name')

    data_offset = header.position + header.size

    with _truncation_errors():
        reader.seek(data_offset, SEEK_SET).skip_bytes(file_size, f"data of stored file '{name}'")

    return StoredFileBlock(header, file_size, name, data_offset)


def decode_rar_file_body(header: BlockHeader, data: bytes) -> RarFileBlock:
    _expect_crc(header, BlockType.RAR_FILE)

    file_name = _read_text(_reader_at(data, header.position + HEADER_LENGTH), 'RAR volume name')

    return RarFileBlock(header, file_name)


def _reader_at(data: bytes, position: int) -> BinaryReader:
    return BinaryReader(data, big_endian=False).seek(position, SEEK_SET)


def _read_text(reader: BinaryReader, meaning: str) -> str:
    position = reader.tell()

    with _truncation_errors():
        raw = reader.read_length_prefixed_bytes(meaning, length_bytes=2)

    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error(position, meaning) from e


@contextmanager
def _truncation_errors() -> ContextManager[None]:
    try:
        yield
    except BinaryReaderFormatError as e:
        raise TruncatedBodyError(
            getattr(e, 'position', 0), getattr(e, 'expected_length', 0), max(0, getattr(e, 'actual_length', 0)),
            getattr(e, 'meaning', None),
        ) from e


def _expect_crc(header: BlockHeader, block_type: BlockType):
    if header.crc != block_type.expected_crc:
        raise InvalidChecksumError(header.position, header.head_type, block_type.expected_crc, header.crc)


def _check_declared_size(header: BlockHeader, data: bytes):
    if header.size < HEADER_LENGTH:
        raise IncoherentBlockSizeError(header.position, len(data) - header.position, header.size)


_DECODERS_BY_TYPE: Dict[BlockType, Callable[[BlockHeader, bytes], SrrBlock]] = {
    BlockType.STORED_FILE: decode_stored_file_body,
    BlockType.RAR_FILE: decode_rar_file_body,
}
