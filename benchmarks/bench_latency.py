"""Benchmark: grammarkit parse latency (p50/p95/mean).

Measures per-call latency for parsing a flat expression and a deeply
parenthesized one with the built-in ``standard`` grammar.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from grammarkit import create_parser
from grammarkit.grammars import standard

_WARMUP: int = 50
_ITERATIONS: int = 1_000

_FLAT_EXPRESSION = "1 + 2 * 3 - 4 / 5 % 6"

_NESTED_EXPRESSION = "((((((1 + 2) * 3) - 4) / 5) + 6) * 7)"


def _measure(operation: str, expression: str) -> dict[str, object]:
    parser = create_parser(standard())
    for _ in range(_WARMUP):
        parser.parse(expression)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        parser.parse(expression)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_parse_latency() -> dict[str, object]:
    """Benchmark parse latency on a flat arithmetic expression.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    return _measure("grammarkit_parse_latency_flat", _FLAT_EXPRESSION)


def bench_nested_parse_latency() -> dict[str, object]:
    """Benchmark parse latency on a six-deep parenthesized expression."""
    return _measure("grammarkit_parse_latency_nested", _NESTED_EXPRESSION)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_parse_latency, "latency_baseline.json"),
        (bench_nested_parse_latency, "nested_latency_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
