import os
import tempfile

from .container import compress_bytes, decompress_bytes


class Compressor:
        # Compression block: turns raw bytes into a HUF1 container and back.
        # The byte-buffer methods never touch the file system; the *_file
        # methods add the read/write glue and keep the output all-or-nothing.
        def __init__(self, verbose=False, atomic_writes=True):
            """
            Initializes the Compressor.

            Parameters:
            verbose (bool): Print [DEBUG] diagnostics while coding.
            atomic_writes (bool): Write file output to a temporary file and
                move it into place only on success.
            """
            self.verbose = verbose
            self.atomic_writes = atomic_writes

        @classmethod
        def from_config(cls, config):
            """
            Builds a Compressor from the 'compression' section of a loaded config.
            """
            section = config.get("compression") or {}
            return cls(
                verbose=bool(section.get("verbose", False)),
                atomic_writes=bool(section.get("atomic_writes", True)),
            )

        def compress(self, data: bytes) -> bytes:
            """
            Compresses the given bytes with Huffman coding.

            Parameters:
            data (bytes): The bytes to compress, possibly empty.

            Returns:
            bytes: The HUF1 container.
            """
            return compress_bytes(self._as_bytes(data, "data"), verbose=self.verbose)

        def decompress(self, container: bytes) -> bytes:
            """
            Decompresses a HUF1 container back to the original bytes.

            Parameters:
            container (bytes): The container produced by compress().

            Returns:
            bytes: The original bytes.
            """
            return decompress_bytes(self._as_bytes(container, "container"), verbose=self.verbose)

        def compress_file(self, src, dst) -> int:
            """
            Compresses the file at src into dst and returns the size written.
            """
            return self._transform_file(src, dst, self.compress)

        def decompress_file(self, src, dst) -> int:
            """
            Decompresses the file at src into dst and returns the size written.
            """
            return self._transform_file(src, dst, self.decompress)

        def _transform_file(self, src, dst, transform) -> int:
            with open(src, "rb") as f:
                data = f.read()
            # the whole result is built in memory before dst is opened
            output = transform(data)

            if not self.atomic_writes:
                with open(dst, "wb") as f:
                    f.write(output)
                return len(output)

            directory = os.path.dirname(os.path.abspath(dst))
            fd, tmp_path = tempfile.mkstemp(prefix=".huffzip-", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(output)
                os.chmod(tmp_path, self._output_mode(dst))
                os.replace(tmp_path, dst)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
            if self.verbose:
                print(f"[DEBUG] Wrote {len(output)} bytes to {dst}")
            return len(output)

        @staticmethod
        def _output_mode(dst) -> int:
            # mkstemp creates 0600 files; keep the mode open(dst, "wb") would give
            try:
                return os.stat(dst).st_mode & 0o7777
            except FileNotFoundError:
                umask = os.umask(0)
                os.umask(umask)
                return 0o666 & ~umask

        @staticmethod
        def _as_bytes(value, name) -> bytes:
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise TypeError(f"Input {name} must be bytes-like, got {type(value).__name__}.")
            return bytes(value)
