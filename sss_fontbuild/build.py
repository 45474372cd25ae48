import argparse
import os
import sys

from . import cmp
from . import font
from . import output
from . import sysdat
from .errors import FontCreationError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='sss-fontbuild',
        description='Build a Lunar font from a directory of <codepoint>.png tiles')
    parser.add_argument('input', help='Path to tiles to insert')
    parser.add_argument('target', help='Font file to write to')
    parser.add_argument('-i', '--insert', action='store_true',
                        help="Insert font into the game's SYSTEM.DAT")
    parser.add_argument('-a', '--append',
                        help='Append extra data to the end of the file')
    parser.add_argument('-c', '--compress', action='store_true',
                        help="Compress the generated data using Sega's CMP")
    parser.add_argument('--sort', action='store_true',
                        help='Order glyphs by codepoint instead of by file name')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print each glyph as it is added')
    return parser.parse_args(argv)


def read_append_data(args):
    if not args.append:
        return b''
    with open(args.append, 'rb') as fp:
        return fp.read()


def create_glyphs(args):
    return font.create_glyphs(args.input, sort=args.sort, verbose=args.verbose)


def main_create(args):
    append_data = read_append_data(args)
    glyphs = create_glyphs(args)

    if args.compress:
        header, body = cmp.compress_with_header(
            font.build_standalone(glyphs), cmp.Size.BYTE)
        data = header + body + append_data
    else:
        data = font.build_standalone(glyphs, append_data)

    output.write_file(args.target, data)
    print('Wrote %d glyphs to %s (%d bytes)' % (len(glyphs), args.target, len(data)))


def main_insert(args):
    # Refuse unknown files before doing any work
    game = sysdat.detect_game(os.path.getsize(args.target))
    print('Found %s SYSTEM.DAT' % game.name)

    append_data = read_append_data(args)
    glyphs = create_glyphs(args)

    with open(args.target, 'rb') as fp:
        system_dat = fp.read()

    altered_data = sysdat.insert_data_into_file(
        font.build_raw(glyphs, append_data), system_dat, game)

    output.write_file(args.target, altered_data)
    print('Inserted %d glyphs into %s' % (len(glyphs), args.target))


def main(argv=None):
    args = parse_args(argv)
    try:
        if args.insert:
            main_insert(args)
        else:
            main_create(args)
    except (FontCreationError, OSError) as e:
        print('Error: %s' % e)
        sys.exit(1)


if __name__ == '__main__':
    main()
