from .compression import Compressor
from .errors import (
    CodeLengthError,
    HuffmanError,
    InvalidTreeDescentError,
    MalformedContainerError,
    StreamExhaustedError,
)

__version__ = "1.0.0"


def compress(data: bytes) -> bytes:
    return Compressor().compress(data)


def decompress(container: bytes) -> bytes:
    return Compressor().decompress(container)
