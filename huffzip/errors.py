class HuffmanError(Exception):
    """Base class for every failure raised by the Huffman codec."""


class MalformedContainerError(HuffmanError, ValueError):
    """The container header is missing, truncated or inconsistent."""


class StreamExhaustedError(HuffmanError, EOFError):
    """The bitstream ended before the declared number of bytes was decoded."""


class InvalidTreeDescentError(HuffmanError, ValueError):
    """A bit in the stream leads to a child that does not exist in the tree."""


class CodeLengthError(HuffmanError, ValueError):
    """A code is too long for the 1-byte length field of the header."""
