from bitarray import bitarray

from .errors import StreamExhaustedError


class BitWriter:
    """
    Buffers bits into bytes and writes them to a binary sink, most
    significant bit first. A full byte is written as soon as it is
    complete; the last partial byte is zero-padded on flush.
    """

    def __init__(self, sink):
        self.sink = sink
        self.buffer = bitarray(endian="big")
        self.bytes_written = 0

    def write_bit(self, bit: int) -> None:
        """
        Appends a single bit (any truthy value counts as 1).
        """
        self.buffer.append(1 if bit else 0)
        if len(self.buffer) == 8:
            self._emit(self.buffer.tobytes())
            self.buffer.clear()

    def write_bits(self, bits) -> None:
        """
        Appends a sequence of bits, e.g. a code.

        Parameters:
        bits (bitarray | str | iterable of int): The bits to write, in order.
        """
        self.buffer.extend(bits)
        full = len(self.buffer) - len(self.buffer) % 8
        if full:
            self._emit(self.buffer[:full].tobytes())
            del self.buffer[:full]

    def flush(self) -> None:
        # nothing buffered means nothing to pad
        if not self.buffer:
            return
        self.buffer.fill()
        self._emit(self.buffer.tobytes())
        self.buffer.clear()

    def close(self) -> None:
        try:
            self.flush()
        finally:
            self.sink.close()

    def _emit(self, data: bytes) -> None:
        self.sink.write(data)
        self.bytes_written += len(data)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.flush()


class BitReader:
    """
    Reads single bits from a binary source, most significant bit first.
    A new byte is pulled from the source only when the buffered one is used up.
    """

    def __init__(self, source):
        self.source = source
        self.buffer = bitarray(endian="big")
        self.bytes_read = 0

    def read_bit(self) -> int:
        """
        Returns the next bit (0 or 1).

        Raises:
        StreamExhaustedError: If the source has no more bytes.
        """
        if not self.buffer:
            byte = self.source.read(1)
            if not byte:
                raise StreamExhaustedError(
                    f"Bitstream ended after {self.bytes_read} bytes"
                )
            self.buffer.frombytes(byte)
            self.bytes_read += 1
        return self.buffer.pop(0)

    def close(self) -> None:
        self.source.close()
