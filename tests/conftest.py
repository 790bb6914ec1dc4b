"""
Pytest configuration and shared fixtures for numsep tests.

Provides immutable formatting cases shared by the grouping, stream and
encoder tests.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

import pytest


@dataclass(frozen=True)
class FormatTestCase:
    """
    Immutable container for a formatting test case.

    Holds the raw input and the exact expected output.
    """

    description: str
    input_data: str
    expected_output: str


BENCHMARK_RESULT_INPUT = """
BenchmarkGOROOT-4                 	30000000	        43.2 ns/op	      12 B/op	       0 allocs/op
BenchmarkCorpus_IndexFiles-4      	       5	 332273086 ns/op	174468006 B/op	  780752 allocs/op
BenchmarkCorpus_FindFiles-4       	       5	 319671269 ns/op	167605459 B/op	  680913 allocs/op
BenchmarkCorpus_FindName-4        	       5	 266548976 ns/op	95192496 B/op	  468363 allocs/op
BenchmarkCorpusUpdate_IndexFiles-4	      10	 122262840 ns/op	43831176 B/op	  380475 allocs/op
BenchmarkCorpusUpdate_FindFiles-4 	     100	  10244592 ns/op	 4599907 B/op	   47871 allocs/op
BenchmarkCorpusUpdate_FindName-4  	     200	   8176888 ns/op	 3329827 B/op	   42150 allocs/op
"""

BENCHMARK_RESULT_OUTPUT = """
BenchmarkGOROOT-4                 	30,000,000	        43.2 ns/op	      12 B/op	       0 allocs/op
BenchmarkCorpus_IndexFiles-4      	       5	 332,273,086 ns/op	174,468,006 B/op	  780,752 allocs/op
BenchmarkCorpus_FindFiles-4       	       5	 319,671,269 ns/op	167,605,459 B/op	  680,913 allocs/op
BenchmarkCorpus_FindName-4        	       5	 266,548,976 ns/op	95,192,496 B/op	  468,363 allocs/op
BenchmarkCorpusUpdate_IndexFiles-4	      10	 122,262,840 ns/op	43,831,176 B/op	  380,475 allocs/op
BenchmarkCorpusUpdate_FindFiles-4 	     100	  10,244,592 ns/op	 4,599,907 B/op	   47,871 allocs/op
BenchmarkCorpusUpdate_FindName-4  	     200	   8,176,888 ns/op	 3,329,827 B/op	   42,150 allocs/op
"""


@pytest.fixture
def stream_cases() -> list[FormatTestCase]:
    """
    Provides mixed text whose numbers must be regrouped.

    Covers disqualified numbers, fractions, negatives, trailing numbers
    without a boundary and tab-separated benchmark output.
    """
    return [
        FormatTestCase(
            "mixed words and numbers",
            "a 123.0 x 1234 abc 12345 12345.a0 a 1234567.1234 abc",
            "a 123.0 x 1,234 abc 12,345 12345.a0 a 1,234,567.1234 abc",
        ),
        FormatTestCase(
            "nine digit number before a word",
            "a 123.0 x 1234 abc 12345 12345.a0 a 1234567.1234 317659251 abc",
            "a 123.0 x 1,234 abc 12,345 12345.a0 a 1,234,567.1234 "
            "317,659,251 abc",
        ),
        FormatTestCase(
            "number at end of stream",
            "a 123.0 x 1234 abc 12345 12345.a0 a 1234567.1234",
            "a 123.0 x 1,234 abc 12,345 12345.a0 a 1,234,567.1234",
        ),
        FormatTestCase(
            "negative numbers",
            "-1234567.1234 -12 -0.5 -1000",
            "-1,234,567.1234 -12 -0.5 -1,000",
        ),
        FormatTestCase(
            "lone signs and leading zeros",
            "- -- -a 0123 00 0.1234 01234.5",
            "- -- -a 0123 00 0.1234 01234.5",
        ),
        FormatTestCase(
            "trailing decimal point",
            "costs 1234. total",
            "costs 1,234. total",
        ),
        FormatTestCase(
            "letters glued to digits",
            "v12345 12345v 1234-5678 1.2.3 12345,678",
            "v12345 12345v 1234-5678 1.2.3 12345,678",
        ),
        FormatTestCase(
            "whitespace variety",
            "\t1234\r\n5678\n\n  999999 ",
            "\t1,234\r\n5,678\n\n  999,999 ",
        ),
        FormatTestCase(
            "benchmark output",
            BENCHMARK_RESULT_INPUT,
            BENCHMARK_RESULT_OUTPUT,
        ),
    ]


@pytest.fixture
def number_free_cases() -> list[str]:
    """Provides text that contains no numeric tokens at all."""
    return [
        "",
        "hello world",
        "  leading and trailing  ",
        "1,234 is already grouped",
        "x1234 y-5678 z0.1",
        "tabs\tand\nnewlines\r\n",
        "café über 12abc",
    ]


@pytest.fixture
def enable_debug_logging(
    caplog: pytest.LogCaptureFixture,
) -> Iterator[pytest.LogCaptureFixture]:
    """Captures DEBUG records from the numsep logger."""
    with caplog.at_level("DEBUG", logger="numsep"):
        yield caplog


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undoes handlers and levels installed by the CLI during a test."""
    logger = logging.getLogger("numsep")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
