class HuffmanError(Exception):
    """Base class for errors raised by huffcoder."""


class CorruptDataError(HuffmanError, ValueError):
    """The artifact does not follow the trie / length / payload layout."""


class InvalidInputError(HuffmanError, ValueError):
    """The input cannot be framed into an artifact."""
