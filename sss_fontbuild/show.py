# This script prints out all the glyphs from the specified font file to the
# terminal with block drawing. You'll probably want to pipe it into less.
import argparse
import sys

from . import font
from . import tiles
from .consts import BITS_DARK_BLUE, BITS_GREY, BITS_LIGHT_BLUE, BITS_TRANSPARENT
from .errors import FontCreationError

SHADES = {
    BITS_TRANSPARENT: '  ',
    BITS_GREY:        '░░',
    BITS_LIGHT_BLUE:  '▒▒',
    BITS_DARK_BLUE:   '██',
}


def render_glyph(glyph):
    rows = tiles.decode_glyph(glyph.data)
    width = len(rows[0])
    lines = ['%d (0x%02X)' % (glyph.codepoint, glyph.codepoint)]
    lines.append('┌' + ('─' * width * 2) + '┐')
    for row in rows:
        lines.append('│' + ''.join(SHADES[code] for code in row) + '│')
    lines.append('└' + ('─' * width * 2) + '┘')
    return '\n'.join(lines)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='sss-fontprint', description='Print the glyphs of a Lunar font')
    parser.add_argument('source', help='Font file or SYSTEM.DAT to read')
    parser.add_argument('-s', '--system-dat', action='store_true',
                        help="Read the font out of the game's SYSTEM.DAT")
    parser.add_argument('-c', '--compressed', action='store_true',
                        help="The font file is compressed with Sega's CMP")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        for glyph in font.load_glyphs(args.source, args.system_dat, args.compressed):
            print(render_glyph(glyph))
    except BrokenPipeError:
        pass
    except (FontCreationError, OSError) as e:
        print('Error: %s' % e)
        sys.exit(1)


if __name__ == '__main__':
    main()
