import heapq
from dataclasses import dataclass
from typing import TypeAlias

from huffcoder.abc import ALPHABET_SIZE, SYMBOL_BITS, CodeTableType, FreqTableType
from huffcoder.bitio import BitReader, BitWriter
from huffcoder.errors import CorruptDataError

# No trie over 256 symbols has more than 255 levels of internal nodes.
MAX_DEPTH = ALPHABET_SIZE - 1


@dataclass(frozen=True)
class Leaf:
    symbol: int
    freq: int = 0


@dataclass(frozen=True)
class Internal:
    left: "Node"
    right: "Node"
    freq: int = 0


Node: TypeAlias = Leaf | Internal


def build_frequency_table(data: bytes) -> FreqTableType:
    F: FreqTableType = [0] * ALPHABET_SIZE
    for s in data:
        F[s] += 1
    return F


def build_trie(F: FreqTableType) -> Node:
    """Build the Huffman trie for the frequency table `F`.

    Equal frequencies are popped in insertion order: leaves are inserted in
    ascending symbol order, merged nodes after them in creation order. The
    first node popped becomes the left child.

    If fewer than two symbols occur, zero-frequency leaves for symbol 0 or 1
    are added so that the root is always an internal node and every code has
    at least one bit.
    """
    assert len(F) == ALPHABET_SIZE, f"Frequency table must have {ALPHABET_SIZE} entries, got {len(F)}"  # noqa
    if any(f < 0 for f in F):
        raise ValueError("Negative frequency in table")

    heap: list[tuple[int, int, Node]] = []
    seq = 0
    for s, f in enumerate(F):
        if f > 0:
            heap.append((f, seq, Leaf(s, f)))
            seq += 1

    # Sentinels sort before every real symbol (freq 0), keeping the heap valid.
    present = {node.symbol for _, _, node in heap}
    for s in (0, 1):
        if len(heap) >= 2:
            break
        if s not in present:
            heap.append((0, s - 2, Leaf(s, 0)))
    heapq.heapify(heap)

    while len(heap) > 1:
        f1, _, left = heapq.heappop(heap)
        f2, _, right = heapq.heappop(heap)
        heapq.heappush(heap, (f1 + f2, seq, Internal(left, right, f1 + f2)))
        seq += 1

    return heap[0][2]


def build_code(root: Node) -> CodeTableType:
    st: CodeTableType = [None] * ALPHABET_SIZE

    def walk(x: Node, code: str) -> None:
        if isinstance(x, Leaf):
            st[x.symbol] = code or "0"
        else:
            walk(x.left, code + "0")
            walk(x.right, code + "1")

    walk(root, "")
    return st


def write_trie(x: Node, writer: BitWriter) -> None:
    if isinstance(x, Leaf):
        writer.write_bit(1)
        writer.write_bits(x.symbol, SYMBOL_BITS)
        return

    writer.write_bit(0)
    write_trie(x.left, writer)
    write_trie(x.right, writer)


def read_trie(reader: BitReader) -> Node:
    seen: set[int] = set()

    def read(depth: int) -> Node:
        if reader.read_bit():
            s = reader.read_bits(SYMBOL_BITS)
            if s in seen:
                raise CorruptDataError(f"Symbol {s} appears twice in trie")
            seen.add(s)
            return Leaf(s)

        if depth >= MAX_DEPTH:
            raise CorruptDataError(f"Trie deeper than {MAX_DEPTH} levels")
        left = read(depth + 1)
        right = read(depth + 1)
        return Internal(left, right, left.freq + right.freq)

    return read(0)
