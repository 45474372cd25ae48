import struct
import zlib

import png
import pytest

GREY = (217, 217, 217)
DARK_BLUE = (0, 16, 64)
LIGHT_BLUE = (128, 128, 176)
WHITE = (255, 255, 255)


def write_rgb_png(path, rows, alpha=False):
    if alpha:
        flat = [[v for pixel in row for v in tuple(pixel) + (255,)] for row in rows]
    else:
        flat = [[v for pixel in row for v in pixel] for row in rows]
    w = png.Writer(len(rows[0]), len(rows), greyscale=False, alpha=alpha, bitdepth=8)
    with open(str(path), 'wb') as f:
        w.write(f, flat)


def write_grey_png(path, rows):
    w = png.Writer(len(rows[0]), len(rows), greyscale=True, bitdepth=8)
    with open(str(path), 'wb') as f:
        w.write(f, rows)


def write_corrupt_png(path):
    def chunk(tag, data):
        return (struct.pack('>I', len(data)) + tag + data
                + struct.pack('>I', zlib.crc32(tag + data) & 0xFFFFFFFF))
    with open(str(path), 'wb') as f:
        f.write(b'\x89PNG\r\n\x1a\n')
        f.write(chunk(b'IHDR', struct.pack('>IIBBBBB', 16, 16, 8, 2, 0, 0, 0)))
        f.write(chunk(b'IDAT', b'\x78\x9cgarbage-not-zlib'))
        f.write(chunk(b'IEND', b''))


def solid(color, width=16, height=16):
    return [[color] * width for y in range(height)]


@pytest.fixture
def tile_dir(tmp_path):
    d = tmp_path / 'tiles'
    d.mkdir()
    return d
