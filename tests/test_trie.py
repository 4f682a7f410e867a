import itertools

import pytest  # noqa

from huffcoder.abc import ALPHABET_SIZE
from huffcoder.bitio import BitReader, BitWriter
from huffcoder.errors import CorruptDataError
from huffcoder.trie import (
    MAX_DEPTH,
    Internal,
    Leaf,
    build_code,
    build_frequency_table,
    build_trie,
    read_trie,
    write_trie,
)


def leaves(x) -> list[Leaf]:
    if isinstance(x, Leaf):
        return [x]
    return leaves(x.left) + leaves(x.right)


def test_frequency_table():
    F = build_frequency_table(b"ABRACADABRA")
    assert len(F) == ALPHABET_SIZE
    assert sum(F) == 11
    assert F[ord("A")] == 5
    assert F[ord("B")] == 2
    assert F[ord("R")] == 2
    assert F[ord("C")] == 1
    assert F[ord("D")] == 1


def test_frequency_table_empty():
    assert build_frequency_table(b"") == [0] * ALPHABET_SIZE


def test_trie_frequencies_sum():
    root = build_trie(build_frequency_table(b"ABRACADABRA"))
    assert isinstance(root, Internal)
    assert root.freq == 11
    assert sorted(x.symbol for x in leaves(root)) == sorted(b"ABCDR")


def test_abracadabra_codes():
    st = build_code(build_trie(build_frequency_table(b"ABRACADABRA")))
    assert st[ord("A")] == "0"
    assert st[ord("C")] == "100"
    assert st[ord("D")] == "101"
    assert st[ord("B")] == "110"
    assert st[ord("R")] == "111"
    assert len(st[ord("A")]) < len(st[ord("C")])
    assert len(st[ord("A")]) < len(st[ord("D")])
    assert sum(c is not None for c in st) == 5


@pytest.mark.parametrize(
    "data",
    [
        b"ab",
        b"ABRACADABRA",
        b"aaaabbbccd",
        bytes(range(256)),
        b"".join(bytes([i]) * (i + 1) for i in range(40)),
    ],
)
def test_prefix_free(data: bytes):
    st = build_code(build_trie(build_frequency_table(data)))
    codes = [c for c in st if c is not None]
    assert len(codes) == len(set(data))
    for a, b in itertools.permutations(codes, 2):
        assert not b.startswith(a), f"{a} is a prefix of {b}"


def test_fibonacci_frequencies_are_deep():
    F = [0] * ALPHABET_SIZE
    a, b = 1, 1
    for s in range(20):
        F[s] = a
        a, b = b, a + b
    st = build_code(build_trie(F))
    assert max(len(c) for c in st if c is not None) == 19


@pytest.mark.parametrize("symbol", [0, 1, 0x41, 255])
def test_single_symbol(symbol: int):
    F = [0] * ALPHABET_SIZE
    F[symbol] = 1000
    root = build_trie(F)
    assert isinstance(root, Internal)
    assert len(leaves(root)) == 2

    st = build_code(root)
    assert len(st[symbol]) == 1


def test_all_zero_table():
    root = build_trie([0] * ALPHABET_SIZE)
    assert root == Internal(Leaf(0, 0), Leaf(1, 0), 0)


def test_build_trie_rejects_negative():
    F = [0] * ALPHABET_SIZE
    F[3] = -1
    with pytest.raises(ValueError):
        build_trie(F)


def test_leaf_root_code():
    assert build_code(Leaf(7))[7] == "0"


def test_write_trie_bits():
    root = Internal(Leaf(0x41), Internal(Leaf(0x42), Leaf(0x43)))
    w = BitWriter()
    write_trie(root, w)
    # 0 1 01000001 0 1 01000010 1 01000011
    assert len(w) == 29
    assert w.flush() == bytes([0b01010000, 0b01010100, 0b00101010, 0b00011000])


def test_read_trie_restores_shape():
    root = build_trie(build_frequency_table(b"mississippi river"))
    w = BitWriter()
    write_trie(root, w)
    n = len(w)
    w.write_bits(0b1011, 4)

    r = BitReader(w.flush())
    got = read_trie(r)
    assert r.pos == n
    assert r.read_bits(4) == 0b1011
    assert build_code(got) == build_code(root)
    assert [x.symbol for x in leaves(got)] == [x.symbol for x in leaves(root)]


def test_read_trie_truncated():
    root = build_trie(build_frequency_table(b"ABRACADABRA"))
    w = BitWriter()
    write_trie(root, w)
    data = w.flush()
    with pytest.raises(CorruptDataError):
        read_trie(BitReader(data[:-2]))


def test_read_trie_empty():
    with pytest.raises(CorruptDataError):
        read_trie(BitReader(b""))


def test_read_trie_too_deep():
    w = BitWriter()
    for _ in range(MAX_DEPTH + 1):
        w.write_bit(0)
    with pytest.raises(CorruptDataError, match="deeper"):
        read_trie(BitReader(w.flush()))


def test_read_trie_max_depth_is_accepted():
    # A caterpillar trie over all 256 symbols.
    root = Leaf(255)
    for s in range(254, -1, -1):
        root = Internal(Leaf(s), root)
    w = BitWriter()
    write_trie(root, w)
    got = read_trie(BitReader(w.flush()))
    assert len(leaves(got)) == ALPHABET_SIZE


def test_read_trie_duplicate_symbol():
    w = BitWriter()
    write_trie(Internal(Leaf(9), Leaf(9)), w)
    with pytest.raises(CorruptDataError, match="twice"):
        read_trie(BitReader(w.flush()))
