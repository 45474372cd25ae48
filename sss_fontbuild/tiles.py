import enum
import zlib
from collections import namedtuple

import png

from .consts import (
    BITS_DARK_BLUE, BITS_TRANSPARENT, GLYPH_BYTES, GLYPH_HEIGHT, GLYPH_WIDTH,
    GLYPH_WIDTHS, PALETTE)
from .errors import FormatError

# Padding used to widen halfwidth tiles
FILLER = BITS_TRANSPARENT


def classify_rgb(pixel):
    return PALETTE.get(tuple(pixel), BITS_TRANSPARENT)


def classify_grey(value):
    # Black is ink, anything else is background
    return BITS_DARK_BLUE if value == 0 else BITS_TRANSPARENT


class ColorMode(enum.Enum):
    RGB = 'rgb'
    GREY = 'grey'

    def classify(self, pixel):
        if self is ColorMode.RGB:
            return classify_rgb(pixel)
        return classify_grey(pixel)


# rows holds one list per scanline: RGB triplets in RGB mode, plain
# greyscale or palette index values in GREY mode.
Tile = namedtuple('Tile', ['mode', 'width', 'rows'])


def chunks(seq, n):
    return [seq[i:i+n] for i in range(0, len(seq), n)]


def reverse_chunks(seq, n):
    return [x for chunk in reversed(chunks(seq, n)) for x in chunk]


def reverse_chunks_each(seq, n):
    return [x for chunk in chunks(seq, n) for x in reversed(chunk)]


def flip_rows(bits):
    # A row of 32 bits is 16 pixels; reverse the pixels, keeping each pair intact
    return [bit
            for row in chunks(bits, GLYPH_WIDTH * 2)
            for pair in reversed(chunks(row, 2))
            for bit in pair]


def collapse_bits(bits):
    if len(bits) != 8:
        raise FormatError('Input must be 8 bits long (%d elements provided)' % len(bits))
    result = 0
    for i, bit in enumerate(bits):
        # Note the inversion: a 0 sets the bit, a 1 clears it
        if bit == 0:
            result |= 1 << i
        elif bit != 1:
            raise FormatError('Bits must be either 0 or 1 (value was %r)' % (bit,))
    return result


def expand_bits(byte):
    return [0 if byte >> i & 1 else 1 for i in range(8)]


def decode_png(path):
    reader = png.Reader(filename=str(path))
    try:
        width, height, pixels, info = reader.read()
        pixels = [list(row) for row in pixels]
    except (png.Error, zlib.error) as e:
        raise FormatError('Unable to decode %s: %s' % (path, e))

    if height != GLYPH_HEIGHT or width not in GLYPH_WIDTHS:
        raise FormatError('%s: Incorrect tile size %dx%d (expected 8x16 or 16x16)' % (
            path, width, height))

    planes = info['planes']
    if 'palette' in info or info['greyscale']:
        # Indexed and greyscale tiles only distinguish ink from background;
        # any alpha channel is dropped
        rows = [row[::planes] for row in pixels]
        return Tile(ColorMode.GREY, width, rows)
    if planes in (3, 4) and info['bitdepth'] == 8:
        # In RGBA every fourth value is the alpha, which is dropped
        rows = [[tuple(row[i:i+3]) for i in range(0, len(row), planes)]
                for row in pixels]
        return Tile(ColorMode.RGB, width, rows)

    raise FormatError('%s: Invalid colour format (%d planes, %d-bit) - only 8-bit RGB, '
                      'greyscale or indexed tiles are supported' % (
                          path, planes, info['bitdepth']))


def encode_tile(tile):
    mode, width, rows = tile
    if len(rows) != GLYPH_HEIGHT or width not in GLYPH_WIDTHS:
        raise FormatError('Incorrect tile size %dx%d (expected 8x16 or 16x16)' % (
            width, len(rows)))

    bits = []
    for row in rows:
        if len(row) != width:
            raise FormatError('Row has %d pixels, expected %d' % (len(row), width))
        for pixel in row:
            bits.extend(mode.classify(pixel))
        # Halfwidth tiles are padded out to a full 16x16 tile
        for i in range(GLYPH_WIDTH - width):
            bits.extend(FILLER)

    if mode is ColorMode.RGB:
        # Flip each quarter of the image
        bits = reverse_chunks(bits, 128)
    # Flip the image vertically
    bits = reverse_chunks(bits, GLYPH_WIDTH * 2)
    # Flip each line horizontally
    bits = flip_rows(bits)

    output = [collapse_bits(group) for group in chunks(bits, 8)]

    # The order of pixels in a PNG row is the opposite of what Lunar expects.
    # Bytes are reversed per source row width even for padded halfwidth
    # tiles, so pixel (0, 0) lands in byte 8 for 8x16 but byte 0 for 16x16.
    output = bytes(reverse_chunks_each(output, width))

    assert len(output) == GLYPH_BYTES
    return output


def decode_glyph(data, mode=ColorMode.RGB, width=GLYPH_WIDTH):
    """Turn 64 bytes of font data back into rows of 2-bit colour codes.

    This undoes encode_tile for a tile of the given mode and source width.
    Halfwidth glyphs are cropped back to 8 pixels.
    """
    if len(data) != GLYPH_BYTES:
        raise FormatError('Glyph data must be %d bytes (got %d)' % (GLYPH_BYTES, len(data)))

    data = reverse_chunks_each(list(data), width)
    bits = [bit for byte in data for bit in expand_bits(byte)]
    bits = flip_rows(bits)
    bits = reverse_chunks(bits, GLYPH_WIDTH * 2)
    if mode is ColorMode.RGB:
        bits = reverse_chunks(bits, 128)

    pixels = [tuple(pair) for pair in chunks(bits, 2)]
    return [row[:width] for row in chunks(pixels, GLYPH_WIDTH)]
