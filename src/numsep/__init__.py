"""
Streaming thousands-separator insertion for numbers embedded in byte streams.

Numbers found in arbitrary text are regrouped with a comma every three
integer digits while every other byte is copied through verbatim. Input may
arrive in chunks of any size; the formatter carries an unterminated number
across chunk boundaries and only commits it once a boundary confirms it.
"""

import os
import time
from dataclasses import dataclass
from typing import IO
from typing import Any
from typing import Final

from ._log import configure_logging
from ._log import get_logger
from ._scanner import NUMERIC_STATES
from ._scanner import ParseClass
from ._scanner import ScanError
from ._scanner import ScanEvent
from ._scanner import Scanner
from ._scanner import ScanState

__version__ = "0.1.0"

type ByteSink = IO[bytes]
type ByteSource = IO[bytes]

logger = get_logger(__name__)

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "NUMSEP_PROFILE" in os.environ

DEFAULT_BUFFER_SIZE: Final = 32 * 1024

_SEPARATOR: Final = b","
_GROUP: Final = 3
_COMPLETE_NUMBER_STATES: Final = NUMERIC_STATES - {
    ScanState.AFTER_NEGATIVE_SIGN
}


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during formatting."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        """Records a function call with timing and byte count."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, nbytes: int = 0):
            self.func_name = func_name
            self.nbytes = nbytes
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.nbytes)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, nbytes: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class SinkError(OSError):
    """
    Reports a sink that accepted only part of a drained buffer.

    The unwritten remainder stays in the formatter's output buffer so the
    caller can retry the drain or give up.
    """

    def __init__(self, written: int, pending: int) -> None:
        self.written = written
        self.pending = pending
        super().__init__(
            f"short write: {written} of {written + pending} bytes accepted"
        )


@dataclass(frozen=True)
class FormatConfig:
    """
    Configures stream formatting with immutable settings.

    ``delimiters`` makes brackets and quotes act as token boundaries in
    addition to whitespace, so ``(12345)`` becomes ``(12,345)``.
    ``buffer_size`` is the read size used by ``Encoder``.
    """

    delimiters: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        if not isinstance(self.delimiters, bool):
            raise TypeError("delimiters must be a boolean")
        if isinstance(self.buffer_size, bool) or not isinstance(
            self.buffer_size, int
        ):
            raise TypeError("buffer_size must be an integer")
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")


def append_grouped(dst: bytearray, number: bytes) -> bytearray:
    """
    Appends ``number`` to ``dst`` with its integer part grouped by threes.

    ``number`` must already be a valid signed decimal (optional ``-``, digits,
    optional ``.`` and digits). The sign and the fractional part are copied
    unchanged; a four digit or longer integer part gets a comma before every
    group of three counted back from the decimal point.
    """
    sign = 1 if number[:1] == b"-" else 0
    point = number.find(b".")
    if point == -1:
        point = len(number)

    n = point - sign
    if n <= _GROUP:
        dst += number
        return dst

    lead = sign + (n % _GROUP or _GROUP)
    dst += number[:lead]
    for i in range(lead, point, _GROUP):
        dst += _SEPARATOR
        dst += number[i : i + _GROUP]
    dst += number[point:]
    return dst


def group_digits(number: bytes) -> bytes:
    """Returns ``number`` with its integer part grouped by threes."""
    return bytes(append_grouped(bytearray(), number))


def is_number(b: bytes) -> bool:
    """
    Reports whether ``b`` is one complete numeric token.

    Uses the same classification as the stream formatter, so ``"0123"``,
    ``"-"`` and ``"1.2.3"`` are rejected while ``"12."`` is accepted.
    """
    scanner = Scanner()
    for c in b:
        if scanner.step(c) not in (ScanEvent.BEGIN_NUM, ScanEvent.CONTINUE):
            return False
    return scanner.state in _COMPLETE_NUMBER_STATES


def format_number(s: str) -> str:
    """Adds thousands separators to ``s``, which must be a number."""
    b = s.encode("utf-8")
    if not is_number(b):
        raise ValueError(f"numsep: cannot format string: {s!r}")
    return group_digits(b).decode("ascii")


def append_format(dst: bytearray, b: bytes) -> bytearray:
    """
    Appends the grouped form of ``b`` to ``dst``.

    When ``b`` is not a number ``dst`` is returned untouched.
    """
    if not is_number(b):
        return dst
    return append_grouped(dst, b)


def format_int(value: int) -> str:
    """Formats an integer with thousands separators."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"value must be an int, not {type(value).__name__}"
        raise TypeError(msg)
    return group_digits(str(value).encode("ascii")).decode("ascii")


def format_float(value: float, precision: int | None = None) -> str:
    """
    Formats a float with thousands separators in its integer part.

    Without ``precision`` the shortest round-tripping representation is
    used, otherwise fixed-point notation with that many decimals. Exponent
    notation, ``inf`` and ``nan`` are returned as produced.
    """
    if precision is None:
        text = repr(float(value))
    else:
        text = f"{value:.{precision}f}"
    b = text.encode("ascii")
    if not is_number(b):
        return text
    return group_digits(b).decode("ascii")


class StreamFormatter:
    """
    Incremental number grouping over an arbitrarily chunked byte stream.

    ``write`` classifies each byte exactly once. Resolved text is appended to
    the output buffer; a number that may still continue is held in the carry
    buffer until the next boundary, ``flush`` or ``reset``. Output is drained
    with ``drain_into`` or ``read``.

    An instance serves one logical stream and is not safe for concurrent
    use. Dropping it without ``flush`` loses any carried trailing number.
    """

    def __init__(self, config: FormatConfig | None = None) -> None:
        self.config = config if config is not None else FormatConfig()
        self._scanner = Scanner(delimiters=self.config.delimiters)
        self._buf = bytearray()
        self._carry = bytearray()
        self._scratch = bytearray()

    @property
    def output(self) -> bytes:
        """Formatted bytes waiting to be drained."""
        return bytes(self._buf)

    @property
    def carry(self) -> bytes:
        """Bytes of a number whose end has not been observed yet."""
        return bytes(self._carry)

    def reset(self) -> None:
        """Discards all buffered content and resets the scanner."""
        self._buf.clear()
        self._carry.clear()
        self._scratch.clear()
        self._scanner.reset()

    def write(self, chunk: bytes) -> int:
        """
        Formats numbers in ``chunk`` into the output buffer.

        Returns ``len(chunk)``. If the scanner fails, bytes before the
        failing offset are committed to the output buffer, the carry is
        discarded and ``ScanError`` is raised; the same bytes must not be
        written again.
        """
        if not chunk:
            return 0

        with ProfileContext("write", len(chunk)):
            scanner = self._scanner
            start = len(self._carry)
            data: bytes | bytearray
            if start:
                self._carry += chunk
                data = self._carry
            elif isinstance(chunk, bytes | bytearray):
                data = chunk
            else:
                data = bytes(chunk)

            last_write = 0
            for i in range(start, len(data)):
                event = scanner.step(data[i])
                if event is ScanEvent.BEGIN_NUM:
                    self._buf += data[last_write:i]
                    last_write = i
                elif event is ScanEvent.END_NUM:
                    self._buf += self._group(data[last_write:i])
                    last_write = i
                elif event is ScanEvent.ERROR:
                    self._buf += data[last_write:i]
                    self._carry.clear()
                    err = scanner.err
                    if err is None:
                        err = ScanError("scanner error", scanner.bytes_consumed)
                    logger.debug("scan failed: %s", err)
                    raise err

            tail = data[last_write:]
            if scanner.parse_class is ParseClass.NUM:
                self._carry[:] = tail
            else:
                self._buf += tail
                self._carry.clear()

        return len(chunk)

    def flush(self) -> None:
        """
        Terminates a carried number as if the stream ended here.

        The scanner is reset afterwards, so bytes written later start a new
        token even if they continue the same digits.
        """
        if not self._carry:
            return

        with ProfileContext("flush", len(self._carry)):
            if self._scanner.parse_class is ParseClass.NUM:
                self._buf += self._group(self._carry)
            else:
                self._buf += self._carry
            logger.debug("flushed %d carried bytes", len(self._carry))
            self._carry.clear()
            self._scanner.reset()

    def drain_into(self, sink: ByteSink, *, flush: bool = True) -> int:
        """
        Moves the output buffer into ``sink`` and returns the byte count.

        A carried number is flushed first unless ``flush`` is false. If the
        sink raises, the buffer is left intact; if it accepts only part of
        the data, the accepted prefix is dropped and ``SinkError`` is raised.
        Sinks whose ``write`` returns ``None`` are assumed to take everything.
        """
        if flush:
            self.flush()
        if not self._buf:
            return 0

        data = bytes(self._buf)
        written = sink.write(data)
        if written is None:
            written = len(data)
        if written < len(data):
            del self._buf[:written]
            raise SinkError(written, len(self._buf))

        self._buf.clear()
        return written

    def read(self, size: int | None = -1) -> bytes:
        """
        Flushes, then removes and returns up to ``size`` output bytes.

        A negative or ``None`` size returns everything pending.
        """
        self.flush()
        if size is None or size < 0 or size >= len(self._buf):
            data = bytes(self._buf)
            self._buf.clear()
            return data

        data = bytes(self._buf[:size])
        del self._buf[:size]
        return data

    def _group(self, number: bytes | bytearray) -> bytearray:
        """Groups ``number`` into the reusable scratch buffer."""
        with ProfileContext("group", len(number)):
            self._scratch.clear()
            return append_grouped(self._scratch, number)


class Encoder:
    """
    Pumps a byte source through a StreamFormatter into a sink.

    Output is drained after every read without flushing, so a number split
    across two reads is still grouped as one. The first failure is latched:
    later ``encode`` calls raise it again without touching the source.

    A source that keeps returning ``None`` keeps ``encode`` polling; each
    retry yields the processor but there is no timeout.
    """

    def __init__(self, sink: ByteSink, config: FormatConfig | None = None):
        self.sink = sink
        self.config = config if config is not None else FormatConfig()
        self.formatter = StreamFormatter(self.config)
        self._err: Exception | None = None

    def encode(self, source: ByteSource) -> None:
        """
        Formats ``source`` until end of stream and writes it to the sink.

        A read returning ``None`` means no data is available yet and is
        retried; an empty read ends the stream.
        """
        if self._err is not None:
            raise self._err

        total = 0
        try:
            while True:
                chunk = source.read(self.config.buffer_size)
                if chunk is None:
                    time.sleep(0)
                    continue
                if not chunk:
                    break
                total += self.formatter.write(chunk)
                self.formatter.drain_into(self.sink, flush=False)
            self.formatter.drain_into(self.sink)
        except Exception as e:
            self._err = e
            raise

        logger.debug("encoded %d bytes", total)


def format_bytes(data: bytes, **kwargs: Any) -> bytes:
    """
    Formats a complete buffer in one call.

    Keyword arguments build the ``FormatConfig``.
    """
    formatter = StreamFormatter(FormatConfig(**kwargs))
    formatter.write(data)
    return formatter.read()


def format_text(text: str, **kwargs: Any) -> str:
    """Formats a complete string, treating it as UTF-8."""
    if not isinstance(text, str):
        raise TypeError(f"text must be str, not {type(text).__name__}")

    return format_bytes(text.encode("utf-8"), **kwargs).decode("utf-8")


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "Encoder",
    "FormatConfig",
    "HotPathStats",
    "ParseClass",
    "ScanError",
    "ScanEvent",
    "ScanState",
    "Scanner",
    "SinkError",
    "StreamFormatter",
    "append_format",
    "append_grouped",
    "clear_hot_path_stats",
    "configure_logging",
    "format_bytes",
    "format_float",
    "format_int",
    "format_number",
    "format_text",
    "get_hot_path_stats",
    "get_logger",
    "group_digits",
    "is_number",
]
