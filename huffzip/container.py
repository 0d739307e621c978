"""
The HUF1 container: a self-describing header followed by the packed bitstream.

Layout (big-endian):

    magic            4 bytes   b"HUF1"
    original length  8 bytes   unsigned
    symbol count     2 bytes   unsigned
    per symbol:
        symbol       1 byte
        code length  1 byte    unsigned, 1..255
        code bits    ceil(code length / 8) bytes, MSB first, zero-padded
    bitstream        the codes of every input byte in order, MSB first,
                     zero-padded to a byte boundary

An empty input is stored as the 14-byte header alone.
"""

import io
import struct
from typing import List, NamedTuple, Tuple

from bitarray import bitarray

from .bitio import BitReader, BitWriter
from .errors import MalformedContainerError
from .huffman import MAX_CODE_LENGTH, HuffmanCompressor

MAGIC = b"HUF1"
_COUNTS = struct.Struct(">QH")
HEADER_SIZE = len(MAGIC) + _COUNTS.size
MAX_SYMBOLS = 256


class ContainerHeader(NamedTuple):
    original_length: int
    entries: List[Tuple[int, bitarray]]


def _read_exact(source, size: int, what: str) -> bytes:
    data = source.read(size)
    if len(data) != size:
        raise MalformedContainerError(
            f"Truncated container: expected {size} bytes of {what}, got {len(data)}"
        )
    return data


def write_header(sink, original_length: int, codes) -> int:
    """
    Writes the container header and returns its size in bytes.
    """
    header = bytearray(MAGIC)
    header += _COUNTS.pack(original_length, len(codes))
    for symbol, code in codes.items():
        if not 1 <= len(code) <= MAX_CODE_LENGTH:
            raise ValueError(f"Code length {len(code)} for symbol {symbol} is out of range")
        header.append(symbol)
        header.append(len(code))
        header += code.tobytes()
    sink.write(header)
    return len(header)


def read_header(source) -> ContainerHeader:
    """
    Reads and validates a container header without touching the bitstream.

    Raises:
    MalformedContainerError: On a wrong magic, a truncated header or
        an impossible symbol table.
    """
    magic = source.read(len(MAGIC))
    if magic != MAGIC:
        raise MalformedContainerError(f"Not a HUF1 container (magic {magic!r})")

    original_length, symbol_count = _COUNTS.unpack(_read_exact(source, _COUNTS.size, "header"))
    if symbol_count > MAX_SYMBOLS:
        raise MalformedContainerError(f"Symbol count {symbol_count} exceeds {MAX_SYMBOLS}")
    if original_length and not symbol_count:
        raise MalformedContainerError(
            f"Container declares {original_length} bytes but no symbols"
        )

    entries = []
    seen = set()
    for index in range(symbol_count):
        symbol, length = _read_exact(source, 2, f"symbol entry {index}")
        if symbol in seen:
            raise MalformedContainerError(f"Symbol {symbol} appears twice in the header")
        if length == 0:
            raise MalformedContainerError(f"Symbol {symbol} has a zero code length")
        seen.add(symbol)

        code = bitarray(endian="big")
        code.frombytes(_read_exact(source, (length + 7) // 8, f"code bits for symbol {symbol}"))
        del code[length:]
        entries.append((symbol, code))

    return ContainerHeader(original_length, entries)


def compress_stream(data: bytes, sink, verbose: bool = False) -> int:
    """
    Compresses data into a container written to a binary sink.

    Returns:
    int: Number of bytes written to the sink.
    """
    logic = HuffmanCompressor()
    freq = logic.build_frequency_table(data)

    if not freq:
        return write_header(sink, 0, {})

    tree = logic.build_tree(freq)
    codes = logic.build_code_map(tree)
    if verbose:
        lengths = {symbol: len(code) for symbol, code in codes.items()}
        print(f"[DEBUG] {len(freq)} distinct symbols, code lengths: {lengths}")

    header_size = write_header(sink, len(data), codes)

    payload = bitarray(endian="big")
    payload.encode(codes, data)
    with BitWriter(sink) as writer:
        writer.write_bits(payload)

    if verbose:
        print(f"[DEBUG] Header {header_size} bytes, payload {len(payload)} bits "
              f"({writer.bytes_written} bytes)")
    return header_size + writer.bytes_written


def decompress_stream(source, sink, verbose: bool = False) -> int:
    """
    Decodes a container read from a binary source into a binary sink.

    The header is validated completely before the first bitstream byte is
    read. Decoded bytes are collected in memory and written to the sink only
    once all of them are decoded, so a failed call writes nothing.

    Returns:
    int: Number of bytes decoded.
    """
    header = read_header(source)
    if verbose:
        print(f"[DEBUG] Header declares {header.original_length} bytes, "
              f"{len(header.entries)} symbols")
    if header.original_length == 0:
        return 0

    logic = HuffmanCompressor()
    root = logic.rebuild_tree(header.entries)
    reader = BitReader(source)

    out = bytearray()
    for _ in range(header.original_length):
        out.append(logic.decode_symbol(root, reader))
    sink.write(out)

    if verbose:
        print(f"[DEBUG] Decoded {len(out)} bytes from {reader.bytes_read} bitstream bytes")
    return len(out)


def compress_bytes(data: bytes, verbose: bool = False) -> bytes:
    sink = io.BytesIO()
    compress_stream(data, sink, verbose=verbose)
    return sink.getvalue()


def decompress_bytes(container: bytes, verbose: bool = False) -> bytes:
    sink = io.BytesIO()
    decompress_stream(io.BytesIO(container), sink, verbose=verbose)
    return sink.getvalue()
