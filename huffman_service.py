# filename: huffman_service.py

import logging

from bitstream import BitReader, BitWriter
from huffman_core import HuffmanLogic

logger = logging.getLogger(__name__)


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def compress(self, data):
        data = bytes(data)
        tree = self.logic.build_tree(data)
        codes = self.logic.generate_codes(tree)

        # trie + length field + roughly one byte per input byte
        writer = BitWriter(size_hint=len(data) + 325)
        self.logic.write_tree(writer, tree)
        self.logic.encode(writer, data, codes)
        out = writer.dump()
        logger.debug("compress: %d bytes -> %d bytes", len(data), len(out))
        return out

    def extract(self, data):
        reader = BitReader(data)
        tree = self.logic.read_tree(reader)
        out = self.logic.decode(reader, tree)
        logger.debug("extract: %d bytes -> %d bytes", len(reader.data), len(out))
        return out

    decompress = extract


_service = HuffmanService()


def compress(data):
    return _service.compress(data)


def extract(data):
    return _service.extract(data)
