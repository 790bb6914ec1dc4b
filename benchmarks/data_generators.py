"""
Test data generators for formatting benchmarks.

Creates text shaped like the output numsep is usually fed:
- Benchmark result tables with large counters
- Log lines mixing words, identifiers and numbers
- Number-free prose
"""

import random
import string

_NUMBER_PROBABILITY = 0.4
_FRACTION_PROBABILITY = 0.3


def generate_test_data(data_type: str) -> bytes:
    """Generates benchmark text based on specified type."""
    generators = {
        "benchmark_table": _generate_benchmark_table,
        "log_lines": _generate_log_lines,
        "prose": _generate_prose,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]().encode("utf-8")


def _random_word(length: int) -> str:
    return "".join(random.choices(string.ascii_lowercase, k=length))


def _generate_benchmark_table() -> str:
    """Generates go-test style benchmark rows (~40KB)."""
    rows = []
    for i in range(500):
        rows.append(
            f"Benchmark{_random_word(12).title()}-{i % 16}\t"
            f"{random.randint(1, 10**8)}\t"
            f"{random.uniform(1, 10**6):.1f} ns/op\t"
            f"{random.randint(0, 10**9)} B/op\t"
            f"{random.randint(0, 10**6)} allocs/op"
        )
    return "\n".join(rows) + "\n"


def _generate_log_lines() -> str:
    """Generates log lines where numbers and near-numbers interleave."""
    lines = []
    for _ in range(1000):
        words = []
        for _ in range(random.randint(4, 12)):
            if random.random() < _NUMBER_PROBABILITY:
                value = str(random.randint(-(10**9), 10**9))
                if random.random() < _FRACTION_PROBABILITY:
                    value += f".{random.randint(0, 9999)}"
                words.append(value)
            else:
                words.append(
                    random.choice(
                        [
                            _random_word(random.randint(2, 9)),
                            f"id{random.randint(1000, 99999)}",
                            f"{random.randint(1000, 99999)}ms",
                        ]
                    )
                )
        lines.append(" ".join(words))
    return "\n".join(lines) + "\n"


def _generate_prose() -> str:
    """Generates text without any numeric tokens."""
    return " ".join(_random_word(random.randint(1, 10)) for _ in range(8000))
