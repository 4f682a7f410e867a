from huffcoder.errors import CorruptDataError, HuffmanError, InvalidInputError
from huffcoder.huffman import CompressionStats, Huffman, compress, expand

__all__ = [
    "CompressionStats",
    "CorruptDataError",
    "Huffman",
    "HuffmanError",
    "InvalidInputError",
    "compress",
    "expand",
]
