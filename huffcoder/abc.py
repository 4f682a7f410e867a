from abc import ABC, abstractmethod
from typing import TypeAlias


ALPHABET_SIZE = 256  # extended ASCII / 8-bit bytes
SYMBOL_BITS = 8
LENGTH_BITS = 32
MAX_INPUT_LENGTH = (1 << LENGTH_BITS) - 1

# Type alias for the symbol -> occurrence count table
FreqTableType: TypeAlias = list[int]
# Type alias for the symbol -> "0"/"1" code table (None if the symbol is unused)
CodeTableType: TypeAlias = list[str | None]


class Compressor(ABC):
    @abstractmethod
    def encode(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    def decode(self, encoded: bytes) -> bytes:
        pass
