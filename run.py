import fire  # noqa

from huffcoder import Huffman


def _read(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _write(path: str, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)


def compress(in_file: str, out_file: str, verbose: bool = False):
    _write(out_file, Huffman(verbose=verbose).encode(_read(in_file)))


def expand(in_file: str, out_file: str, verbose: bool = False):
    _write(out_file, Huffman(verbose=verbose).decode(_read(in_file)))


def check(in_file: str, verbose: bool = False):
    data = _read(in_file)

    comp = Huffman(verbose=verbose)
    encoded: bytes = comp.encode(data)
    decoded: bytes = comp.decode(encoded)

    if data == decoded:
        stats = comp.stats(data)
        print("Data successfully encoded and decoded!")
        print("Alphabet size:", len(comp.code_table(data)))
        print("Data length: ", len(data), "symbols")
        print(f"Trie: {stats.trie_bits} bits, payload: {stats.payload_bits} bits")  # noqa
        print(f"Encoded length: {len(encoded)} bytes")
        if len(data) > 0:
            print(f"Compression rate: {stats.ratio:.2f}x")
    else:
        print("Error: decoded data does not match original!")
        print(f"Original data: {len(data)} {data[:20]!r}...")
        print(f"Decoded data:  {len(decoded)} {decoded[:20]!r}...")
        raise RuntimeError(
            f"Decoded data does not match original! {data!r} != {decoded!r}"
        )


if __name__ == "__main__":
    fire.Fire({"compress": compress, "expand": expand, "check": check})
