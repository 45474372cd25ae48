class FontCreationError(Exception):
    pass


class FormatError(FontCreationError):
    pass


class CodepointParseError(FontCreationError):
    pass


class ProfileMismatchError(FontCreationError):
    def __init__(self, actual_size, expected_sizes):
        self.actual_size = actual_size
        self.expected_sizes = tuple(expected_sizes)
        super().__init__(
            "Couldn't recognize provided SYSTEM.DAT file! Provided size, %d, "
            "doesn't match known files (%s)." % (
                actual_size, ', '.join(str(s) for s in self.expected_sizes)))


class FontTooLargeError(FontCreationError):
    def __init__(self, what, size, max_size):
        self.size = size
        self.max_size = max_size
        super().__init__(
            '%s is too large for SYSTEM.DAT (provided size %d, max size %d)' % (
                what, size, max_size))


class CompressionError(FontCreationError):
    pass
