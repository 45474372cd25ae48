import os
import stat

import pytest

from sss_fontbuild import build, extract, font, show, sysdat, tiles
from sss_fontbuild.consts import Game

from .conftest import (
    DARK_BLUE, GREY, LIGHT_BLUE, WHITE, solid, write_corrupt_png, write_rgb_png)


@pytest.fixture
def tiles_written(tile_dir):
    rows = solid(WHITE)
    rows[0][0] = DARK_BLUE
    write_rgb_png(tile_dir / '65.png', rows)
    write_rgb_png(tile_dir / '66.png', solid(GREY))
    return tile_dir


def test_build_standalone(tiles_written, tmp_path, capsys):
    target = tmp_path / 'font.bin'
    append = tmp_path / 'extra.bin'
    append.write_bytes(b'EXTRA')

    build.main([str(tiles_written), str(target), '-a', str(append)])

    data = target.read_bytes()
    assert data == (b'\x00\x06\x00\x41\x00\x42' + b'\xc0' + bytes(63)
                    + b'\x55' * 64 + b'EXTRA')
    assert 'Wrote 2 glyphs' in capsys.readouterr().out


def test_build_compressed(tiles_written, tmp_path):
    target = tmp_path / 'font.bin'
    build.main([str(tiles_written), str(target), '--compress'])

    glyphs = font.load_glyphs(str(target), compressed=True)
    assert [g.codepoint for g in glyphs] == [65, 66]


def test_build_insert(tiles_written, tmp_path):
    game = Game.SSSC
    target = tmp_path / 'SYSTEM.DAT'
    original = bytes(i & 0xFF for i in range(game.system_dat_size))
    target.write_bytes(original)

    build.main(['-i', str(tiles_written), str(target)])

    data = target.read_bytes()
    assert len(data) == game.system_dat_size
    assert data[:game.font_start_address] == original[:game.font_start_address]
    assert data[game.font_end_address:] == original[game.font_end_address:]
    font_data = sysdat.extract_font_data(data, game)
    assert font_data[:128] == b'\xc0' + bytes(63) + b'\x55' * 64
    assert sorted(os.listdir(str(tmp_path))) == ['SYSTEM.DAT', 'tiles']


def test_build_insert_unknown_container(tiles_written, tmp_path, capsys):
    target = tmp_path / 'SYSTEM.DAT'
    target.write_bytes(bytes(1000))

    with pytest.raises(SystemExit) as excinfo:
        build.main(['--insert', str(tiles_written), str(target)])
    assert excinfo.value.code == 1
    assert target.read_bytes() == bytes(1000)
    assert "Couldn't recognize" in capsys.readouterr().out


def test_build_bad_tile_leaves_no_output(tile_dir, tmp_path, capsys):
    write_rgb_png(tile_dir / '65.png', solid(GREY, width=16, height=8))
    target = tmp_path / 'font.bin'

    with pytest.raises(SystemExit) as excinfo:
        build.main([str(tile_dir), str(target)])
    assert excinfo.value.code == 1
    assert not target.exists()
    assert sorted(os.listdir(str(tmp_path))) == ['tiles']
    assert 'Incorrect tile size 16x8' in capsys.readouterr().out


def test_extract_round_trip(tiles_written, tmp_path):
    target = tmp_path / 'font.bin'
    build.main([str(tiles_written), str(target)])
    out_dir = tmp_path / 'out'

    extract.main([str(target), str(out_dir)])

    assert sorted(os.listdir(str(out_dir))) == ['65.png', '66.png']
    rebuilt = tmp_path / 'rebuilt.bin'
    build.main([str(out_dir), str(rebuilt)])
    assert rebuilt.read_bytes() == target.read_bytes()


def test_extract_system_dat(tiles_written, tmp_path):
    game = Game.SSS
    target = tmp_path / 'SYSTEM.DAT'
    target.write_bytes(bytes(game.system_dat_size))
    build.main(['-i', str(tiles_written), str(target)])
    out_dir = tmp_path / 'out'

    extract.main(['-s', str(target), str(out_dir)])

    assert sorted(os.listdir(str(out_dir))) == ['0.png', '1.png']
    tile = tiles.decode_png(out_dir / '1.png')
    assert tile.rows == solid(GREY)


def test_show(tmp_path, capsys):
    rows = solid(WHITE)
    rows[0][0] = DARK_BLUE
    rows[15][15] = LIGHT_BLUE
    glyph = font.Glyph(65, tiles.encode_tile(tiles.Tile(tiles.ColorMode.RGB, 16, rows)), None)
    target = tmp_path / 'font.bin'
    target.write_bytes(font.build_standalone([glyph]))

    show.main([str(target)])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == '65 (0x41)'
    assert lines[2] == '│██' + '  ' * 15 + '│'
    assert lines[17] == '│' + '  ' * 15 + '▒▒│'


def test_build_insert_keeps_file_mode(tiles_written, tmp_path):
    target = tmp_path / 'SYSTEM.DAT'
    target.write_bytes(bytes(Game.SSS.system_dat_size))
    os.chmod(str(target), 0o644)

    build.main(['-i', str(tiles_written), str(target)])

    assert stat.S_IMODE(os.stat(str(target)).st_mode) == 0o644


def test_build_new_file_is_not_owner_only(tiles_written, tmp_path):
    umask = os.umask(0o022)
    try:
        target = tmp_path / 'font.bin'
        build.main([str(tiles_written), str(target)])
    finally:
        os.umask(umask)
    assert stat.S_IMODE(os.stat(str(target)).st_mode) == 0o644


def test_build_corrupt_tile(tile_dir, tmp_path, capsys):
    write_corrupt_png(tile_dir / '65.png')
    target = tmp_path / 'font.bin'

    with pytest.raises(SystemExit) as excinfo:
        build.main([str(tile_dir), str(target)])
    assert excinfo.value.code == 1
    assert not target.exists()
    out = capsys.readouterr().out
    assert out.startswith('Error: ')
    assert '65.png' in out


def test_build_verbose(tiles_written, tmp_path, capsys):
    build.main(['-v', str(tiles_written), str(tmp_path / 'font.bin')])
    out = capsys.readouterr().out
    assert ' 65  ' in out
    assert '66.png' in out
