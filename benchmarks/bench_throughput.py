"""Benchmark: grammarkit parse and evaluation throughput.

Measures how many parse operations and evaluations of a pre-compiled
expression can complete per second using the public ``create_parser``
API and the built-in ``standard`` grammar.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from grammarkit import create_parser
from grammarkit.grammars import standard

_ITERATIONS: int = 2_000
_EVAL_ITERATIONS: int = 20_000

_SAMPLE_EXPRESSION = "price * quantity - discount >= 100 && (name ++ '!') == greeting"

_SAMPLE_SCHEMA = {
    "price": "number",
    "quantity": "number",
    "discount": "number",
    "name": "string",
    "greeting": "string",
}

_SAMPLE_DATA = {
    "price": 12.5,
    "quantity": 10,
    "discount": 5,
    "name": "hello",
    "greeting": "hello!",
}


def _summarize(operation: str, iterations: int, total: float) -> dict[str, object]:
    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_parse_throughput() -> dict[str, object]:
    """Benchmark expression parsing throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    parser = create_parser(standard())

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        parser.parse(_SAMPLE_EXPRESSION, _SAMPLE_SCHEMA)
    total = time.perf_counter() - start
    return _summarize("grammarkit_parse_throughput", _ITERATIONS, total)


def bench_eval_throughput() -> dict[str, object]:
    """Benchmark evaluation of a compiled expression, including validation.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    evaluator = create_parser(standard()).compile(_SAMPLE_EXPRESSION, _SAMPLE_SCHEMA)

    start = time.perf_counter()
    for _ in range(_EVAL_ITERATIONS):
        evaluator(_SAMPLE_DATA)
    total = time.perf_counter() - start
    return _summarize("grammarkit_eval_throughput", _EVAL_ITERATIONS, total)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_parse_throughput, "parse_throughput_baseline.json"),
        (bench_eval_throughput, "eval_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
