"""Decode throughput across input kinds.

Decodes a generated document from str, bytes, and text/binary streams to
show the cost of the UTF-8 path in the rune source.

Run:
    python -m benchmarks.benchmark_decode

"""

from __future__ import annotations

import io
import statistics
import sys
import timeit
from collections.abc import Callable

from streamini import Values, read_ini


def make_document(sections: int = 200) -> str:
    """Build a document exercising every value form."""
    parts = []
    for n in range(sections):
        parts.append(
            f'[section "name {n}"]\n'
            f"plain = value {n} ; comment\n"
            f'quoted = "tab\\there \\u00e9 {n}"\n'
            f"raw = `C:\\path\\{n}`\n"
            "flag\n"
        )
    return "".join(parts)


def bench(label: str, fn: Callable[[], object], number: int = 5, repeat: int = 5) -> float:
    times = timeit.repeat(fn, number=number, repeat=repeat)
    best = min(times) / number
    spread = statistics.stdev(times) / number if len(times) > 1 else 0.0
    print(f"  {label:<16} {best * 1000:8.2f} ms  (±{spread * 1000:.2f})")
    return best


def main() -> None:
    """Run the benchmark and print results."""
    print("streamini decode benchmark")
    print("=" * 60)
    print(f"Python {sys.version.split()[0]}")

    text = make_document()
    data = text.encode()
    print(f"Document: {len(text):,} characters, {len(data):,} bytes\n")

    bench("str", lambda: read_ini(text))
    bench("bytes", lambda: read_ini(data))
    bench("text stream", lambda: read_ini(io.StringIO(text)))  # type: ignore[arg-type]
    bench("binary stream", lambda: read_ini(io.BytesIO(data)))  # type: ignore[arg-type]

    values = read_ini(text, Values())
    print(f"\n{len(values)} keys decoded")


if __name__ == "__main__":
    main()
