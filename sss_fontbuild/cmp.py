# Sega CMP run-length compression, as used for the font in SYSTEM.DAT.
#
# Header: one big-endian 32-bit word.
#   bits 31-30  algorithm (0 = run-length)
#   bits 29-28  unit size (0 = byte, 1 = word, 2 = long)
#   bits 27-0   uncompressed length in bytes
#
# Body: a series of blocks, each starting with a control byte.
#   0x80 set    run: (control & 0x7F) + 2 copies of the single unit that follows
#   0x80 clear  literal: control + 1 units copied as-is
import enum
import struct

from .errors import CompressionError

ALGORITHM_RUNLENGTH = 0
HEADER_SIZE = 4
MAX_LENGTH = (1 << 28) - 1
MAX_LITERAL = 0x80
MAX_RUN = 0x81


class Size(enum.Enum):
    BYTE = (0, 1)
    WORD = (1, 2)
    LONG = (2, 4)

    def __init__(self, code, width):
        self.code = code
        self.width = width

    @classmethod
    def from_code(cls, code):
        for size in cls:
            if size.code == code:
                return size
        raise CompressionError('Invalid unit size in CMP header (%d)' % code)


def create_header(length, size):
    if length < 0 or length > MAX_LENGTH:
        raise CompressionError(
            'Data is too large to compress (%d bytes, max %d)' % (length, MAX_LENGTH))
    return struct.pack('>I', (ALGORITHM_RUNLENGTH << 30) | (size.code << 28) | length)


def parse_header(header):
    if len(header) < HEADER_SIZE:
        raise CompressionError('CMP header is truncated (%d bytes)' % len(header))
    word, = struct.unpack_from('>I', header, 0)
    algorithm = word >> 30
    if algorithm != ALGORITHM_RUNLENGTH:
        raise CompressionError('Unsupported CMP algorithm %d' % algorithm)
    return Size.from_code((word >> 28) & 3), word & MAX_LENGTH


def compress(data, size):
    width = size.width
    if len(data) % width != 0:
        raise CompressionError(
            'Data length %d is not a multiple of the unit size (%d)' % (len(data), width))
    if len(data) > MAX_LENGTH:
        raise CompressionError(
            'Data is too large to compress (%d bytes, max %d)' % (len(data), MAX_LENGTH))

    units = [bytes(data[i:i+width]) for i in range(0, len(data), width)]
    out = bytearray()
    literal = []

    def flush_literal():
        if literal:
            out.append(len(literal) - 1)
            out.extend(b''.join(literal))
            del literal[:]

    idx = 0
    while idx < len(units):
        run = 1
        while (idx + run < len(units) and run < MAX_RUN
               and units[idx + run] == units[idx]):
            run += 1
        if run >= 2:
            flush_literal()
            out.append(0x80 | (run - 2))
            out.extend(units[idx])
            idx += run
        else:
            literal.append(units[idx])
            idx += 1
            if len(literal) == MAX_LITERAL:
                flush_literal()
    flush_literal()

    return bytes(out)


def compress_with_header(data, size):
    body = compress(data, size)
    return create_header(len(data), size), body


def decompress_prefix(data, size, length):
    """Decode until `length` bytes have been produced.

    Returns the decoded bytes and the number of input bytes consumed, so that
    anything stored after the compressed stream can be located.
    """
    width = size.width
    out = bytearray()
    idx = 0
    while len(out) < length:
        if idx >= len(data):
            raise CompressionError(
                'Compressed stream ended early (%d of %d bytes decoded)' % (len(out), length))
        control = data[idx]
        idx += 1
        if control & 0x80:
            unit = data[idx:idx+width]
            if len(unit) != width:
                raise CompressionError('Truncated run at offset %d' % (idx - 1))
            idx += width
            out.extend(unit * ((control & 0x7F) + 2))
        else:
            count = (control + 1) * width
            chunk = data[idx:idx+count]
            if len(chunk) != count:
                raise CompressionError('Truncated literal at offset %d' % (idx - 1))
            idx += count
            out.extend(chunk)

    if len(out) != length:
        raise CompressionError(
            'Compressed stream overruns its length (%d bytes decoded, expected %d)' % (
                len(out), length))
    return bytes(out), idx


def decompress(data, size, length):
    return decompress_prefix(data, size, length)[0]


def decompress_with_header(data):
    size, length = parse_header(data)
    out, used = decompress_prefix(data[HEADER_SIZE:], size, length)
    return out, HEADER_SIZE + used
