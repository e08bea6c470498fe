# filename: bitstream.py

"""MSB-first bit reader and writer over in-memory byte buffers."""


class BitReader:
    """Reads bits from a byte buffer, bit 7 of each byte first.

    Every read returns ``None`` once the buffer is exhausted so callers
    can decide whether running out of bits is an error.
    """

    def __init__(self, data):
        self.data = bytes(data)
        self.ix = 0

    @property
    def position(self):
        return self.ix

    @property
    def bits_remaining(self):
        return len(self.data) * 8 - self.ix

    def read_bit(self):
        byte_ix = self.ix >> 3
        if byte_ix >= len(self.data):
            return None
        bit = (self.data[byte_ix] >> (7 - (self.ix & 7))) & 1
        self.ix += 1
        return bit

    def read_bits(self, n):
        if not 0 <= n <= 8:
            raise ValueError(f"read_bits: can read at most 8 bits, got {n}")
        value = 0
        for _ in range(n):
            bit = self.read_bit()
            if bit is None:
                return None
            value = (value << 1) | bit
        return value

    def read_u32_be(self):
        value = 0
        for _ in range(4):
            byte = self.read_bits(8)
            if byte is None:
                return None
            value = (value << 8) | byte
        return value


class BitWriter:
    """Accumulates bits into a growing bytearray, bit 7 of each byte first.

    The last byte is zero-padded. ``dump`` hands the buffer over and
    closes the writer.
    """

    def __init__(self, size_hint=0):
        # capacity reserved up front; trimmed to the written length on dump
        self.buf = bytearray(size_hint)
        self.ix = 0
        self.closed = False

    @property
    def bit_length(self):
        return self.ix

    def write_bit(self, bit):
        if self.closed:
            raise RuntimeError("write_bit: writer already dumped")
        if self.ix >= len(self.buf) * 8:
            self.buf.append(0)
        byte_ix = self.ix >> 3
        mask = 1 << (7 - (self.ix & 7))
        if bit:
            self.buf[byte_ix] |= mask
        else:
            self.buf[byte_ix] &= ~mask & 0xFF
        self.ix += 1

    def write_bits(self, n, value):
        if not 0 <= n <= 8:
            raise ValueError(f"write_bits: can write at most 8 bits, got {n}")
        for offset in range(n - 1, -1, -1):
            self.write_bit((value >> offset) & 1)

    def write_u32_be(self, value):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"write_u32_be: {value} does not fit in 32 bits")
        for b in value.to_bytes(4, "big"):
            self.write_bits(8, b)

    def dump(self):
        if self.closed:
            raise RuntimeError("dump: writer already dumped")
        self.closed = True
        n_bytes = (self.ix + 7) >> 3
        out = bytes(self.buf[:n_bytes])
        self.buf = bytearray()
        return out
