import enum

# Each pixel is two bits; there are four pixels in each byte.
# These are the bit pairs for each colour, in the order they're packed.
BITS_TRANSPARENT = (1, 1)
BITS_GREY        = (0, 1)
BITS_DARK_BLUE   = (0, 0)
BITS_LIGHT_BLUE  = (1, 0)

# Exact RGB values used by the game's font tiles. Anything not listed here is
# treated as transparent.
PALETTE = {
    (217, 217, 217): BITS_GREY,
    (216, 216, 216): BITS_GREY,
    (0, 16, 64):     BITS_DARK_BLUE,
    (128, 128, 176): BITS_LIGHT_BLUE,
}

# Colours written out when turning font data back into images
EXPORT_COLORS = {
    BITS_GREY:        (217, 217, 217),
    BITS_DARK_BLUE:   (0, 16, 64),
    BITS_LIGHT_BLUE:  (128, 128, 176),
    BITS_TRANSPARENT: (255, 255, 255),
}

GLYPH_HEIGHT = 16
GLYPH_WIDTH = 16
GLYPH_WIDTHS = (8, 16)
# 256 pixels per 16x16 glyph, with four pixels per byte
GLYPH_BYTES = GLYPH_WIDTH * GLYPH_HEIGHT * 2 // 8


class Game(enum.Enum):
    # system_dat_size, font_start_address, font_len_uncompressed,
    # font_len_compressed
    SSS  = (0x4B000, 0x19A28, 0x8000, 0x4000)
    SSSC = (0x55000, 0x1D4E0, 0x8000, 0x4800)

    def __init__(self, system_dat_size, font_start_address,
                 font_len_uncompressed, font_len_compressed):
        self.system_dat_size = system_dat_size
        self.font_start_address = font_start_address
        self.font_len_uncompressed = font_len_uncompressed
        self.font_len_compressed = font_len_compressed

    @property
    def font_end_address(self):
        return self.font_start_address + self.font_len_compressed

    @classmethod
    def from_size(cls, size):
        for game in cls:
            if game.system_dat_size == size:
                return game
        return None
