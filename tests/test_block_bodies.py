import unittest

from atmfjstc.lib.srr_file import decode_block_header, FileHeaderBlock, StoredFileBlock, RarFileBlock
from atmfjstc.lib.srr_file._parse import decode_file_header_body, decode_stored_file_body, decode_rar_file_body
from atmfjstc.lib.srr_file.errors import InvalidChecksumError, InvalidFlagsError, InvalidUtf8Error, \
    TruncatedBodyError

from srr_samples import block_header, file_header_block, stored_file_block, rar_file_block


def _decode_at(decoder, data: bytes, offset: int = 0):
    return decoder(decode_block_header(data, offset), data)


class FileHeaderBodyTest(unittest.TestCase):
    def test_app_name(self):
        block = _decode_at(decode_file_header_body, file_header_block('pyReScene Auto 0.7'))

        self.assertIsInstance(block, FileHeaderBlock)
        self.assertEqual(block.application_name, 'pyReScene Auto 0.7')

    def test_empty_name(self):
        data = file_header_block('')

        self.assertEqual(len(data), 9)
        self.assertEqual(_decode_at(decode_file_header_body, data).application_name, '')

    def test_no_body(self):
        data = block_header(0x69, 7, flags=0)

        self.assertEqual(_decode_at(decode_file_header_body, data).application_name, '')

    def test_flagged_name_in_bare_header(self):
        data = block_header(0x69, 7, flags=0x0001) + b'\x05\x00Hello'

        self.assertEqual(_decode_at(decode_file_header_body, data).application_name, 'Hello')

    def test_flagged_bare_header_without_name(self):
        with self.assertRaises(TruncatedBodyError):
            _decode_at(decode_file_header_body, block_header(0x69, 7, flags=0x0001))

    def test_non_ascii_name(self):
        self.assertEqual(
            _decode_at(decode_file_header_body, file_header_block('ReScène ✓')).application_name, 'ReScène ✓'
        )

    def test_bad_crc(self):
        with self.assertRaises(InvalidChecksumError) as cm:
            _decode_at(decode_file_header_body, file_header_block('Hello', crc=0x1234))

        self.assertEqual(cm.exception.expected, 0x6969)
        self.assertEqual(cm.exception.actual, 0x1234)

    def test_name_past_end(self):
        data = block_header(0x69, 12) + b'\x05\x00Hel'

        with self.assertRaises(TruncatedBodyError) as cm:
            _decode_at(decode_file_header_body, data)

        self.assertEqual(cm.exception.expected_length, 5)
        self.assertEqual(cm.exception.actual_length, 3)

    def test_invalid_utf8(self):
        data = block_header(0x69, 11) + b'\x02\x00\xff\xfe'

        with self.assertRaises(InvalidUtf8Error) as cm:
            _decode_at(decode_file_header_body, data)

        self.assertIsInstance(cm.exception.__cause__, UnicodeDecodeError)


class StoredFileBodyTest(unittest.TestCase):
    def test_decode(self):
        payload = b'Release notes\r\n'
        data = stored_file_block('release.nfo', payload)

        block = _decode_at(decode_stored_file_body, data)

        self.assertIsInstance(block, StoredFileBlock)
        self.assertEqual(block.name, 'release.nfo')
        self.assertEqual(block.file_size, len(payload))
        self.assertEqual(block.header.size, 7 + 4 + 2 + len('release.nfo'))
        self.assertEqual(block.data_offset, block.header.size)
        self.assertEqual(data[block.data_offset:block.data_end], payload)
        self.assertEqual(block.trailing_data_size, len(payload))

    def test_empty_payload(self):
        block = _decode_at(decode_stored_file_body, stored_file_block('empty.txt', b''))

        self.assertEqual(block.file_size, 0)

    def test_at_offset(self):
        prefix = file_header_block()
        data = prefix + stored_file_block('a.sfv', b'; crc\n')

        block = _decode_at(decode_stored_file_body, data, len(prefix))

        self.assertEqual(block.position, len(prefix))
        self.assertEqual(data[block.data_offset:block.data_end], b'; crc\n')

    def test_data_starts_after_declared_header_size(self):
        # 4-byte size, 2-byte name length, 5-byte name, then 2 bytes of padding inside the declared header region
        data = block_header(0x6A, 20, flags=0x8000) + b'\x03\x00\x00\x00\x05\x00a.nfo' + b'\x00\x00' + b'abc'

        block = _decode_at(decode_stored_file_body, data)

        self.assertEqual(block.name, 'a.nfo')
        self.assertEqual(block.data_offset, 20)
        self.assertEqual(data[block.data_offset:block.data_end], b'abc')

    def test_bad_crc(self):
        with self.assertRaises(InvalidChecksumError) as cm:
            _decode_at(decode_stored_file_body, stored_file_block('a.nfo', b'x', crc=0x6969))

        self.assertEqual(cm.exception.expected, 0x6A6A)
        self.assertEqual(cm.exception.actual, 0x6969)

    def test_bad_flags(self):
        with self.assertRaises(InvalidFlagsError) as cm:
            _decode_at(decode_stored_file_body, stored_file_block('a.nfo', b'x', flags=0x0000))

        self.assertEqual(cm.exception.expected, 0x8000)
        self.assertEqual(cm.exception.actual, 0x0000)

    def test_extra_flags_rejected(self):
        with self.assertRaises(InvalidFlagsError):
            _decode_at(decode_stored_file_body, stored_file_block('a.nfo', b'x', flags=0x8002))

    def test_payload_past_end(self):
        data = stored_file_block('a.nfo', b'0123456789')[:-3]

        with self.assertRaises(TruncatedBodyError) as cm:
            _decode_at(decode_stored_file_body, data)

        self.assertEqual(cm.exception.expected_length, 10)
        self.assertEqual(cm.exception.actual_length, 7)

    def test_invalid_utf8_name(self):
        with self.assertRaises(InvalidUtf8Error):
            _decode_at(decode_stored_file_body, stored_file_block('', b'', raw_name=b'\xc3\x28'))


class RarFileBodyTest(unittest.TestCase):
    def test_decode(self):
        block = _decode_at(decode_rar_file_body, rar_file_block('group-release.part01.rar'))

        self.assertIsInstance(block, RarFileBlock)
        self.assertEqual(block.file_name, 'group-release.part01.rar')
        self.assertEqual(block.trailing_data_size, 0)

    def test_flags(self):
        block = _decode_at(decode_rar_file_body, rar_file_block('a.rar', flags=0x0003))

        self.assertTrue(block.recovery_blocks_removed)
        self.assertTrue(block.paths_saved)

        block = _decode_at(decode_rar_file_body, rar_file_block('a.rar', flags=0x0000))

        self.assertFalse(block.recovery_blocks_removed)
        self.assertFalse(block.paths_saved)

    def test_bad_crc(self):
        with self.assertRaises(InvalidChecksumError) as cm:
            _decode_at(decode_rar_file_body, rar_file_block('a.rar', crc=0x7172))

        self.assertEqual(cm.exception.expected, 0x7171)
        self.assertEqual(cm.exception.actual, 0x7172)

    def test_name_length_missing(self):
        data = block_header(0x71, 8) + b'\x05'

        with self.assertRaises(TruncatedBodyError):
            _decode_at(decode_rar_file_body, data)


if __name__ == '__main__':
    unittest.main()
