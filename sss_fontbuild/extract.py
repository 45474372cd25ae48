import argparse
import os
import sys

import png

from . import font
from . import tiles
from .consts import EXPORT_COLORS
from .errors import FontCreationError


def write_glyph_png(path, rows):
    image_rows = [[value for code in row for value in EXPORT_COLORS[code]] for row in rows]
    w = png.Writer(len(rows[0]), len(rows), greyscale=False, bitdepth=8)
    with open(path, 'wb') as f:
        w.write(f, image_rows)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='sss-fontextract',
        description='Dump the glyphs of a Lunar font to <codepoint>.png tiles')
    parser.add_argument('source', help='Font file or SYSTEM.DAT to read')
    parser.add_argument('output', help='Directory to write tiles to')
    parser.add_argument('-s', '--system-dat', action='store_true',
                        help="Read the font out of the game's SYSTEM.DAT")
    parser.add_argument('-c', '--compressed', action='store_true',
                        help="The font file is compressed with Sega's CMP")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        os.mkdir(args.output)
    except FileExistsError:
        if not os.path.isdir(args.output):
            print('Error: destination is not a directory')
            sys.exit(1)
    except OSError as e:
        print('Error: %s' % e)
        sys.exit(1)

    try:
        glyphs = font.load_glyphs(args.source, args.system_dat, args.compressed)
        for glyph in glyphs:
            outpng = os.path.join(args.output, '%d.png' % glyph.codepoint)
            write_glyph_png(outpng, tiles.decode_glyph(glyph.data))
    except (FontCreationError, OSError) as e:
        print('Error: %s' % e)
        sys.exit(1)

    print('Wrote %d tiles to %s' % (len(glyphs), args.output))


if __name__ == '__main__':
    main()
