from huffcoder.errors import CorruptDataError


class BitWriter(object):
    """Appends bits MSB-first into a growing byte buffer."""

    def __init__(self) -> None:
        self.buffer = bytearray()
        self.acc = 0  # pending bits of the current partial byte
        self.nacc = 0  # number of pending bits (0-7)

    def __len__(self) -> int:
        return len(self.buffer) * 8 + self.nacc

    def write_bit(self, bit: bool | int) -> None:
        self.acc = (self.acc << 1) | (1 if bit else 0)
        self.nacc += 1
        if self.nacc == 8:
            self.buffer.append(self.acc)
            self.acc = 0
            self.nacc = 0

    def write_bits(self, value: int, nbits: int) -> None:
        if nbits < 0:
            raise ValueError(f"Invalid bit width: {nbits}")
        if not 0 <= value < (1 << nbits):
            raise ValueError(f"Value {value} does not fit in {nbits} bits")
        for i in range(nbits - 1, -1, -1):
            self.write_bit((value >> i) & 1)

    def write_code(self, code: str) -> None:
        for c in code:
            if c == "0":
                self.write_bit(0)
            elif c == "1":
                self.write_bit(1)
            else:
                raise ValueError(f"Illegal code character: {c!r} in {code!r}")

    def flush(self) -> bytes:
        """Pad the last partial byte with zeros and return all bytes written.

        The writer stays usable; the padding is not recorded, so writing more
        bits after a flush continues from the unpadded position.
        """
        out = bytearray(self.buffer)
        if self.nacc > 0:
            out.append(self.acc << (8 - self.nacc))
        return bytes(out)


class BitReader(object):
    """Reads bits MSB-first from a byte sequence."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.pos = 0  # absolute bit position

    @property
    def bits_remaining(self) -> int:
        return len(self.data) * 8 - self.pos

    def read_bit(self) -> int:
        if self.pos >= len(self.data) * 8:
            raise CorruptDataError(
                f"Unexpected end of data at bit {self.pos} ({len(self.data)} bytes)"  # noqa
            )
        byte = self.data[self.pos >> 3]
        bit = (byte >> (7 - (self.pos & 7))) & 1
        self.pos += 1
        return bit

    def read_bits(self, nbits: int) -> int:
        if nbits < 0:
            raise ValueError(f"Invalid bit width: {nbits}")
        if nbits > self.bits_remaining:
            raise CorruptDataError(
                f"Need {nbits} bits at bit {self.pos}, only {self.bits_remaining} left"  # noqa
            )
        value = 0
        for _ in range(nbits):
            value = (value << 1) | self.read_bit()
        return value
