from dataclasses import dataclass

import tqdm  # noqa

from huffcoder.abc import (
    LENGTH_BITS,
    MAX_INPUT_LENGTH,
    CodeTableType,
    Compressor,
    FreqTableType,
)
from huffcoder.bitio import BitReader, BitWriter
from huffcoder.errors import CorruptDataError, InvalidInputError
from huffcoder.trie import (
    Internal,
    Leaf,
    build_code,
    build_frequency_table,
    build_trie,
    read_trie,
    write_trie,
)


def ch(x: int) -> str:
    if 32 <= x < 127:
        return chr(x)
    elif x == ord("\n"):
        return "\\n"
    return "<?>"


@dataclass
class CompressionStats:
    input_bytes: int
    output_bytes: int
    trie_bits: int
    payload_bits: int

    @property
    def ratio(self) -> float:
        if self.output_bytes == 0:
            return 0.0
        return self.input_bytes / self.output_bytes


class Huffman(Compressor):
    """Static Huffman coder over the 8-bit byte alphabet.

    Artifact layout, MSB-first and zero padded to a whole byte:

      1. the trie in pre-order: ``0 <left> <right>`` for internal nodes,
         ``1 <8-bit symbol>`` for leaves
      2. the original length as a 32-bit unsigned integer
      3. the code of every input byte, in order
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def _check_input(self, data: bytes) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidInputError(
                f"Expected a bytes-like object, got {type(data).__name__}"
            )
        data = bytes(data)
        if len(data) > MAX_INPUT_LENGTH:
            raise InvalidInputError(
                f"Input of {len(data)} bytes exceeds the {LENGTH_BITS}-bit length field"  # noqa
            )
        return data

    def _build(
        self, data: bytes
    ) -> tuple[FreqTableType, Internal | Leaf, CodeTableType]:
        F = build_frequency_table(data)
        root = build_trie(F)
        st = build_code(root)

        if self.verbose:
            A = [s for s in range(len(F)) if F[s] > 0]
            print("Alphabet:", A)
            print("Data length:", len(data))
            print("PMF:", [F[s] for s in A])
            for s in A:
                print(f"  {s:3d} '{ch(s)}' freq={F[s]} code={st[s]}")

        return F, root, st

    def _encode(self, data: bytes) -> tuple[BitWriter, int]:
        data = self._check_input(data)
        _, root, st = self._build(data)

        out = BitWriter()
        write_trie(root, out)
        trie_bits = len(out)

        out.write_bits(len(data), LENGTH_BITS)

        for s in tqdm.tqdm(data, desc="Encoding", disable=not self.verbose):
            code = st[s]
            assert code, f"No code for symbol {s}"
            out.write_code(code)

        return out, trie_bits

    def encode(self, data: bytes) -> bytes:
        out, _ = self._encode(data)
        return out.flush()

    def decode(self, encoded: bytes) -> bytes:
        decoded = bytearray()
        reader = BitReader(encoded)

        root = read_trie(reader)
        length = reader.read_bits(LENGTH_BITS)

        if self.verbose:
            print(f"Decoding {length} symbols from {len(encoded)} bytes")

        if length > 0 and isinstance(root, Leaf):
            raise CorruptDataError(
                f"Trie is a single leaf but {length} symbols are declared"
            )

        for _ in tqdm.tqdm(range(length), desc="Decoding", disable=not self.verbose):  # noqa
            x = root
            while isinstance(x, Internal):
                x = x.right if reader.read_bit() else x.left
            decoded.append(x.symbol)

        # Whatever is left must be the zero padding of the final byte.
        rest = reader.bits_remaining
        if rest >= 8:
            raise CorruptDataError(f"{rest} trailing bits after {length} symbols")  # noqa
        if rest > 0 and reader.read_bits(rest) != 0:
            raise CorruptDataError("Non-zero padding bits after payload")

        return bytes(decoded)

    def code_table(self, data: bytes) -> dict[int, str]:
        F, _, st = self._build(self._check_input(data))
        # Sentinel leaves get codes too; report only symbols that occur.
        return {s: st[s] for s in range(len(F)) if F[s] > 0}

    def stats(self, data: bytes) -> CompressionStats:
        out, trie_bits = self._encode(data)
        return CompressionStats(
            input_bytes=len(data),
            output_bytes=len(out.flush()),
            trie_bits=trie_bits,
            payload_bits=len(out) - trie_bits - LENGTH_BITS,
        )


def compress(data: bytes) -> bytes:
    return Huffman().encode(data)


def expand(encoded: bytes) -> bytes:
    return Huffman().decode(encoded)
