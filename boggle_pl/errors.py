class BoggleError(ValueError):
    """Base class for errors raised on invalid game input."""


class InvalidDiceConfiguration(BoggleError):
    """Die set size does not match the requested board."""


class InvalidDie(BoggleError):
    """A die does not carry the expected number of faces."""


class InvalidBoard(BoggleError):
    """Board is empty, has an empty row, or has rows of different lengths."""


class DictionaryUnavailable(BoggleError):
    """Neither a cached trie nor a usable word list could be loaded."""
