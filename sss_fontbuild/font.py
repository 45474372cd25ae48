import glob
import os
import re
import struct
from collections import namedtuple

from . import cmp
from . import sysdat
from . import tiles
from .consts import GLYPH_BYTES
from .errors import CodepointParseError, FontCreationError, FormatError

Glyph = namedtuple('Glyph', ['codepoint', 'data', 'source'])

CODEPOINT_RE = re.compile(r'(\d+)\.png$')


def list_tiles(input_dir):
    if not os.path.isdir(input_dir):
        raise FontCreationError('Directory does not exist: %s' % input_dir)
    # Lexicographic, so 10.png comes before 9.png
    return sorted(glob.glob(os.path.join(glob.escape(str(input_dir)), '*.png')))


def parse_codepoint_from_filename(filename):
    match = CODEPOINT_RE.search(os.path.basename(str(filename)))
    if match is None:
        raise CodepointParseError('Unable to parse codepoint from filename: %s' % filename)
    codepoint = int(match.group(1))
    if codepoint > 0xFF:
        raise CodepointParseError(
            'Codepoint %d in filename %s is out of range (0-255)' % (codepoint, filename))
    return codepoint


def create_glyphs(input_dir, sort=False, verbose=False):
    glyphs = []
    for path in list_tiles(input_dir):
        codepoint = parse_codepoint_from_filename(path)
        tile = tiles.decode_png(path)
        try:
            data = tiles.encode_tile(tile)
        except FormatError as e:
            raise FormatError('Unable to parse image data for file %s!\n%s' % (path, e))
        glyphs.append(Glyph(codepoint, data, path))
        if verbose:
            print('  %3d  %s' % (codepoint, path))

    if sort:
        glyphs.sort(key=lambda glyph: glyph.codepoint)
    return glyphs


def build_raw(glyphs, trailing=b''):
    # The game's own codepoint table stays in place, so only the tiles go in
    return b''.join(glyph.data for glyph in glyphs) + bytes(trailing)


def build_standalone(glyphs, trailing=b''):
    header_len = 2 + 2 * len(glyphs)
    if header_len > 0xFFFF:
        raise FontCreationError('Too many glyphs for a font header (%d)' % len(glyphs))
    out = bytearray(struct.pack('>H', header_len))
    for glyph in glyphs:
        out.extend(struct.pack('>H', glyph.codepoint))
    out.extend(build_raw(glyphs, trailing))
    return bytes(out)


def read_font(data):
    """Split a standalone font into glyphs and whatever follows them."""
    if len(data) < 2:
        raise FormatError('Font data is truncated (%d bytes)' % len(data))
    header_len, = struct.unpack_from('>H', data, 0)
    if header_len < 2 or header_len % 2 != 0 or header_len > len(data):
        raise FormatError('Invalid font header length %d' % header_len)

    count = (header_len - 2) // 2
    codepoints = struct.unpack_from('>%dH' % count, data, 2)
    end = header_len + count * GLYPH_BYTES
    if end > len(data):
        raise FormatError('Font data is truncated (%d glyphs need %d bytes, got %d)' % (
            count, end, len(data)))

    glyphs = []
    for i, codepoint in enumerate(codepoints):
        offset = header_len + i * GLYPH_BYTES
        glyphs.append(Glyph(codepoint, bytes(data[offset:offset+GLYPH_BYTES]), None))
    return glyphs, bytes(data[end:])


def split_raw(data):
    """Split headerless font data into glyphs numbered by position.

    Trailing all-zero glyphs are padding and are dropped.
    """
    blocks = [bytes(data[i:i+GLYPH_BYTES]) for i in range(0, len(data), GLYPH_BYTES)]
    if blocks and len(blocks[-1]) != GLYPH_BYTES:
        raise FormatError('Font data length %d is not a multiple of %d' % (len(data), GLYPH_BYTES))
    while blocks and not any(blocks[-1]):
        blocks.pop()
    return [Glyph(i, block, None) for i, block in enumerate(blocks)]


def load_glyphs(path, system_dat=False, compressed=False):
    with open(path, 'rb') as fp:
        data = fp.read()

    if system_dat:
        game = sysdat.detect_game(len(data))
        return split_raw(sysdat.extract_font_data(data, game))

    if compressed:
        data = cmp.decompress_with_header(data)[0]
    return read_font(data)[0]
