"""Byte classification state machine for numeric token detection."""

from __future__ import annotations

from enum import Enum
from typing import Final


class ScanState(Enum):
    """
    States of the number recognition machine.

    Exactly one is active at a time; ``Scanner.step`` maps
    (state, byte) to (state, event).
    """

    BEGIN_VALUE = "begin_value"
    IN_PLAIN_VALUE = "in_plain_value"
    AFTER_NEGATIVE_SIGN = "after_negative_sign"
    IN_INTEGER_PART = "in_integer_part"
    AFTER_LEADING_ZERO = "after_leading_zero"
    AFTER_DECIMAL_POINT = "after_decimal_point"
    IN_FRACTIONAL_DIGITS = "in_fractional_digits"
    ERROR = "error"


class ParseClass(Enum):
    """Kind of token currently open, orthogonal to ScanState."""

    UNDETERMINED = "undetermined"
    VALUE = "value"
    NUM = "num"
    RESOLVED = "resolved"


class ScanEvent(Enum):
    """Classification emitted for every byte fed to the scanner."""

    CONTINUE = "continue"
    BEGIN_VALUE = "begin_value"
    END_VALUE = "end_value"
    BEGIN_NUM = "begin_num"
    END_NUM = "end_num"
    NOT_NUM = "not_num"
    SKIP_SPACE = "skip_space"
    ERROR = "error"


class ScanError(ValueError):
    """
    Reports an unrecoverable scanner transition at a stream byte offset.

    The scanner latches the error until reset, so the same instance is
    returned for every byte that follows.
    """

    def __init__(self, msg: str, pos: int = 0, byte: int | None = None) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.pos = pos
        self.byte = byte

        super().__init__(f"{msg} at byte {pos}")


_SPACE: Final = frozenset(b" \t\r\n")
_OPENERS: Final = frozenset(b"([{\"'")
_CLOSERS: Final = frozenset(b")]}\"'")
_DIGITS: Final = frozenset(b"0123456789")
_NONZERO: Final = frozenset(b"123456789")
_CONTROL_LIMIT: Final = 0x20

_ZERO: Final = ord("0")
_MINUS: Final = ord("-")
_POINT: Final = ord(".")

# States in which the open token is (still) a candidate number.
NUMERIC_STATES: Final = frozenset(
    {
        ScanState.AFTER_NEGATIVE_SIGN,
        ScanState.IN_INTEGER_PART,
        ScanState.AFTER_LEADING_ZERO,
        ScanState.AFTER_DECIMAL_POINT,
        ScanState.IN_FRACTIONAL_DIGITS,
    }
)


class Scanner:
    """
    Classifies a byte stream one byte at a time.

    Knows nothing about buffering: callers feed bytes in order and act on
    the returned events. With ``delimiters`` enabled, opening brackets and
    quotes are skipped like whitespace before a token and closing ones
    terminate a number.
    """

    def __init__(self, delimiters: bool = False) -> None:
        self.delimiters = delimiters
        self.state = ScanState.BEGIN_VALUE
        self.parse_class = ParseClass.UNDETERMINED
        self.bytes_consumed = 0
        self.err: ScanError | None = None

    def reset(self) -> None:
        """Returns the scanner to its post-construction state."""
        self.state = ScanState.BEGIN_VALUE
        self.parse_class = ParseClass.UNDETERMINED
        self.bytes_consumed = 0
        self.err = None

    def is_boundary(self, c: int) -> bool:
        """Reports whether ``c`` terminates a numeric token."""
        return c in _SPACE or (self.delimiters and c in _CLOSERS)

    def step(self, c: int) -> ScanEvent:
        """Consumes one byte and returns its classification."""
        pos = self.bytes_consumed
        self.bytes_consumed += 1
        state = self.state

        if state is ScanState.BEGIN_VALUE:
            return self._begin_value(c)
        elif state is ScanState.IN_PLAIN_VALUE:
            if c in _SPACE:
                return self._end_token(c, pos)
            return ScanEvent.CONTINUE
        elif state is ScanState.AFTER_NEGATIVE_SIGN:
            if c == _ZERO:
                self.state = ScanState.AFTER_LEADING_ZERO
                return ScanEvent.CONTINUE
            if c in _NONZERO:
                self.state = ScanState.IN_INTEGER_PART
                return ScanEvent.CONTINUE
            if self.is_boundary(c):
                # A lone minus sign is ordinary text.
                self.parse_class = ParseClass.VALUE
            return self._end_token(c, pos)
        elif state is ScanState.IN_INTEGER_PART:
            if c in _DIGITS:
                return ScanEvent.CONTINUE
            return self._after_integer(c, pos)
        elif state is ScanState.AFTER_LEADING_ZERO:
            return self._after_integer(c, pos)
        elif state in (
            ScanState.AFTER_DECIMAL_POINT,
            ScanState.IN_FRACTIONAL_DIGITS,
        ):
            if c in _DIGITS:
                self.state = ScanState.IN_FRACTIONAL_DIGITS
                return ScanEvent.CONTINUE
            return self._end_token(c, pos)
        else:
            return ScanEvent.ERROR

    def _begin_value(self, c: int) -> ScanEvent:
        if (
            c < _CONTROL_LIMIT
            or c in _SPACE
            or (self.delimiters and c in _OPENERS)
        ):
            self.parse_class = ParseClass.UNDETERMINED
            return ScanEvent.SKIP_SPACE

        if c in _NONZERO:
            self.state = ScanState.IN_INTEGER_PART
        elif c == _ZERO:
            self.state = ScanState.AFTER_LEADING_ZERO
        elif c == _MINUS:
            self.state = ScanState.AFTER_NEGATIVE_SIGN
        else:
            self.state = ScanState.IN_PLAIN_VALUE
            self.parse_class = ParseClass.VALUE
            return ScanEvent.BEGIN_VALUE

        self.parse_class = ParseClass.NUM
        return ScanEvent.BEGIN_NUM

    def _after_integer(self, c: int, pos: int) -> ScanEvent:
        if c == _POINT:
            self.state = ScanState.AFTER_DECIMAL_POINT
            return ScanEvent.CONTINUE
        return self._end_token(c, pos)

    def _end_token(self, c: int, pos: int) -> ScanEvent:
        """Resolves the open token on a non-continuation byte."""
        if self.parse_class is ParseClass.NUM:
            if self.is_boundary(c):
                self.state = ScanState.BEGIN_VALUE
                self.parse_class = ParseClass.RESOLVED
                return ScanEvent.END_NUM
            self.state = ScanState.IN_PLAIN_VALUE
            self.parse_class = ParseClass.VALUE
            return ScanEvent.NOT_NUM
        if self.parse_class is ParseClass.VALUE:
            self.state = ScanState.BEGIN_VALUE
            self.parse_class = ParseClass.RESOLVED
            return ScanEvent.END_VALUE
        return self._error(c, pos, "invalid parse state")

    def _error(self, c: int, pos: int, context: str) -> ScanEvent:
        self.state = ScanState.ERROR
        self.err = ScanError(context, pos, c)
        return ScanEvent.ERROR
