# filename: errors.py


class HuffmanError(Exception):
    """Base class for errors raised by the huffpack modules."""


class CorruptStreamError(HuffmanError, ValueError):
    """The compressed stream ended before a complete trie, length or payload."""

    def __init__(self, stage, message):
        super().__init__(f"{stage}: {message}")
        self.stage = stage


class UsageError(HuffmanError):
    pass
