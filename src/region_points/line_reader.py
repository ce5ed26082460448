"""Line-by-line reading of binary streams through one reusable buffer."""

import errno

from typing import BinaryIO, Optional

from .errors import LineStateError


class LineReader:
    """Read a binary stream one line at a time.

    After construction the reader holds no line; call `read_next_line` to load
    one. Lines are copied into a single internal buffer that only grows when a
    line is longer than any line seen before, so reading a file does not
    allocate a new buffer per line.

    The view returned by `current_line` borrows that buffer and is released on
    the next call to `read_next_line`. Touching it afterwards raises
    `ValueError` rather than exposing the bytes of a later line. Slices taken
    from the view keep the bytes of their own line: if any are still alive at
    the next read, the reader moves on to a fresh buffer. Copy with
    `bytes(view)` if the line has to outlive the read.

    **Arguments:**

    - `stream`: Binary file object providing `readinto` (e.g. the result of
        `open(path, "rb")`, `gzip.open(path)` or `io.BytesIO`).
    - `chunk_size`: Number of bytes requested from `stream` per read.
    """

    def __init__(self, stream: BinaryIO, chunk_size: int = 65536):
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self._stream = stream

        self._chunk = bytearray(chunk_size)
        self._chunk_view = memoryview(self._chunk)
        self._chunk_start = 0
        self._chunk_end = 0

        self._line = bytearray()
        self._line_size: Optional[int] = None
        self._view: Optional[memoryview] = None

        self._lines_read = 0
        self._eof = False

    def read_next_line(self) -> bool:
        """Read the next line into the internal buffer.

        A last line without a trailing newline still counts as a line.

        **Returns:**

        - `True` if a line was read, `False` once the stream is exhausted.

        **Raises:**

        - `OSError`: If reading from the stream fails, including a compressed
            stream that ends early. Not retried. No line is available afterwards.
        """
        self._release_view()
        self._line_size = None
        self._detach_exported_buffer()

        size = 0
        while True:
            if self._chunk_start == self._chunk_end and not self._fill_chunk():
                break
            newline = self._chunk.find(b"\n", self._chunk_start, self._chunk_end)
            stop = self._chunk_end if newline < 0 else newline + 1
            size = self._append(size, stop)
            if newline >= 0:
                break

        if size == 0:
            return False

        self._line_size = size
        self._lines_read += 1
        return True

    def current_line(self) -> memoryview:
        """Read-only view of the last line read, newline included if present."""
        if self._line_size is None:
            raise LineStateError("LineReader: no line data available")
        if self._view is None:
            self._view = memoryview(self._line).toreadonly()[: self._line_size]
        return self._view

    def current_line_number(self) -> int:
        """Zero-based index of the last line successfully read."""
        if self._lines_read == 0:
            raise LineStateError("LineReader: no line has been read")
        return self._lines_read - 1

    @property
    def lines_read(self) -> int:
        """Number of lines successfully read so far."""
        return self._lines_read

    def eof(self) -> bool:
        """Whether a read has reached the end of the stream."""
        return self._eof

    def _fill_chunk(self) -> bool:
        if self._eof:
            return False
        try:
            n = self._stream.readinto(self._chunk)
        except EOFError as e:
            # truncated compressed input, e.g. a gzip stream without its end marker
            raise OSError(errno.EIO, f"LineReader: {e}") from e
        if n is None:
            raise BlockingIOError(errno.EAGAIN, "LineReader: stream has no data available")
        self._chunk_start = 0
        self._chunk_end = n
        if n == 0:
            self._eof = True
            return False
        return True

    def _append(self, size: int, stop: int) -> int:
        needed = size + (stop - self._chunk_start)
        capacity = len(self._line)
        if needed > capacity:
            self._line += bytes(max(needed, 2 * capacity) - capacity)
        self._line[size:needed] = self._chunk_view[self._chunk_start : stop]
        self._chunk_start = stop
        return needed

    def _detach_exported_buffer(self):
        # a zero-net resize fails while views sliced from an earlier line are alive
        try:
            self._line.append(0)
        except BufferError:
            # give the buffer to those views and continue with a fresh one
            self._line = bytearray(len(self._line))
        else:
            del self._line[-1]

    def _release_view(self):
        if self._view is not None:
            self._view.release()
            self._view = None
