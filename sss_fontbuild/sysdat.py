from . import cmp
from .consts import Game
from .errors import FontTooLargeError, ProfileMismatchError


def detect_game(size):
    game = Game.from_size(size)
    if game is None:
        raise ProfileMismatchError(size, [g.system_dat_size for g in Game])
    return game


def insert_data_into_file(data, system_dat, game):
    if len(system_dat) != game.system_dat_size:
        raise ProfileMismatchError(len(system_dat), [game.system_dat_size])

    # Uncompressed size should match the original
    if len(data) > game.font_len_uncompressed:
        raise FontTooLargeError('Requested font', len(data), game.font_len_uncompressed)
    data = bytes(data) + bytes(game.font_len_uncompressed - len(data))

    compressed = cmp.compress(data, cmp.Size.BYTE)
    # Compressed size also has to match the original, and almost certainly needs padding
    if len(compressed) > game.font_len_compressed:
        raise FontTooLargeError('Compressed font', len(compressed), game.font_len_compressed)
    compressed += bytes(game.font_len_compressed - len(compressed))

    new_data = (bytes(system_dat[:game.font_start_address])
                + compressed
                + bytes(system_dat[game.font_end_address:]))
    assert len(new_data) == game.system_dat_size
    return new_data


def extract_font_data(system_dat, game):
    if len(system_dat) != game.system_dat_size:
        raise ProfileMismatchError(len(system_dat), [game.system_dat_size])
    region = system_dat[game.font_start_address:game.font_end_address]
    return cmp.decompress(region, cmp.Size.BYTE, game.font_len_uncompressed)
