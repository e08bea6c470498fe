# filename: huffman_core.py

import heapq
import itertools
import logging

from errors import CorruptStreamError

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 256
# deepest possible leaf in a full binary tree over 256 byte values
MAX_TRIE_DEPTH = ALPHABET_SIZE - 1


class HuffmanNode:
    def __init__(self, byte, freq, left=None, right=None):
        self.byte = byte
        self.freq = freq
        self.left = left
        self.right = right

    def __lt__(self, other):
        return self.freq < other.freq

    @property
    def is_leaf(self):
        return self.left is None

    @classmethod
    def merge(cls, left, right):
        return cls(None, left.freq + right.freq, left, right)

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(byte={self.byte}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq}, left={self.left!r}, right={self.right!r})"


def count_frequencies(data):
    counts = [0] * ALPHABET_SIZE
    for b in data:
        counts[b] += 1
    return counts


def build_trie(table):
    """Merge the two lightest nodes until a single tree remains.

    Equal frequencies are ordered by insertion so heapq never has to
    compare two nodes directly. An all-zero table yields a placeholder
    leaf for byte 0.
    """
    order = itertools.count()
    priority_queue = [(freq, next(order), HuffmanNode(b, freq))
                      for b, freq in enumerate(table) if freq > 0]
    heapq.heapify(priority_queue)

    while len(priority_queue) > 1:
        _, _, left = heapq.heappop(priority_queue)
        _, _, right = heapq.heappop(priority_queue)
        merged = HuffmanNode.merge(left, right)
        heapq.heappush(priority_queue, (merged.freq, next(order), merged))

    if not priority_queue:
        return HuffmanNode(0, 0)
    return priority_queue[0][2]


# Pre-order layout: internal node -> '0' then left and right subtrees,
# leaf -> '1' followed by the 8 bits of its byte.
def write_trie(writer, node):
    if node.is_leaf:
        logger.debug("write_trie: writing leaf %d", node.byte)
        writer.write_bit(1)
        writer.write_bits(8, node.byte)
    else:
        logger.debug("write_trie: writing internal node")
        writer.write_bit(0)
        write_trie(writer, node.left)
        write_trie(writer, node.right)


def read_trie(reader, depth=0):
    if depth > MAX_TRIE_DEPTH:
        raise CorruptStreamError("trie", f"tree deeper than {MAX_TRIE_DEPTH} levels")
    kind = reader.read_bit()
    if kind is None:
        raise CorruptStreamError("trie", "stream ended while reading node type")
    if kind:
        byte = reader.read_bits(8)
        if byte is None:
            raise CorruptStreamError("trie", "stream ended while reading leaf byte")
        logger.debug("read_trie: reading leaf %d", byte)
        return HuffmanNode(byte, 0)
    logger.debug("read_trie: reading internal node")
    left = read_trie(reader, depth + 1)
    right = read_trie(reader, depth + 1)
    return HuffmanNode.merge(left, right)


def build_code_table(trie):
    table = [None] * ALPHABET_SIZE

    def walk(node, path):
        if node.is_leaf:
            table[node.byte] = path
            return
        walk(node.left, path + (0,))
        walk(node.right, path + (1,))

    walk(trie, ())
    return table


def write_payload(writer, data, codes):
    if len(data) > 0xFFFFFFFF:
        raise ValueError(f"write_payload: {len(data)} bytes exceeds the 32-bit length field")
    writer.write_u32_be(len(data))
    logger.debug("write_payload: writing size of data: %d", len(data))
    trace = logger.isEnabledFor(logging.DEBUG)
    for b in data:
        code = codes[b]
        if code is None:
            raise LookupError(f"write_payload: no code for byte {b}")
        if trace:
            logger.debug("write_payload: writing byte %d using code %s", b, code)
        for bit in code:
            writer.write_bit(bit)


def read_payload(reader, trie):
    size = reader.read_u32_be()
    if size is None:
        raise CorruptStreamError("length", "stream ended while reading size of data")
    logger.debug("read_payload: reading size of data: %d", size)

    if trie.is_leaf:
        return bytes([trie.byte]) * size

    out = bytearray()
    for _ in range(size):
        node = trie
        while not node.is_leaf:
            bit = reader.read_bit()
            if bit is None:
                raise CorruptStreamError(
                    "payload", f"unexpected end of data after {len(out)} of {size} bytes")
            node = node.right if bit else node.left
        out.append(node.byte)
    return bytes(out)


class HuffmanLogic:
    """The individual compression steps, grouped for the service layer."""

    def count_frequencies(self, data):
        return count_frequencies(data)

    def build_tree(self, data):
        return build_trie(self.count_frequencies(data))

    def generate_codes(self, node):
        return build_code_table(node)

    def write_tree(self, writer, node):
        write_trie(writer, node)

    def read_tree(self, reader):
        return read_trie(reader)

    def encode(self, writer, data, codes):
        write_payload(writer, data, codes)

    def decode(self, reader, node):
        return read_payload(reader, node)
