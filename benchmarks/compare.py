"""Render saved grammarkit benchmark results as a table."""
from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

_RESULT_FILES = [
    "parse_throughput_baseline.json",
    "eval_throughput_baseline.json",
    "latency_baseline.json",
    "nested_latency_baseline.json",
    "memory_baseline.json",
]


def _load(path: Path) -> dict[str, object] | None:
    if not path.exists():
        return None
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)  # type: ignore[return-value]


def _cell(value: object, fmt: str) -> str:
    number = float(value or 0)  # type: ignore[arg-type]
    return fmt.format(number) if number > 0 else "n/a"


def build_table(results_dir: Path) -> Table:
    """Return a table with one row per result file found in ``results_dir``."""
    table = Table(title="grammarkit benchmark results")
    table.add_column("Operation")
    table.add_column("Ops/sec", justify="right")
    table.add_column("Avg latency", justify="right")
    table.add_column("p95", justify="right")
    table.add_column("Peak mem", justify="right")

    for fname in _RESULT_FILES:
        data = _load(results_dir / fname)
        if data is None:
            table.add_row(f"[dim]{fname} (not run)[/dim]", "", "", "", "")
            continue
        table.add_row(
            str(data.get("operation", fname)),
            _cell(data.get("ops_per_second"), "{:,.0f}"),
            _cell(data.get("avg_latency_ms"), "{:.3f}ms"),
            _cell(data.get("p95_ms"), "{:.3f}ms"),
            _cell(data.get("peak_memory_kb"), "{:,.0f}KB"),
        )
    return table


def main() -> None:
    console = Console()
    console.print(build_table(Path(__file__).parent / "results"))
    console.print("Run the benchmarks with:")
    for script in ("bench_throughput.py", "bench_latency.py", "bench_memory.py"):
        console.print(f"  python benchmarks/{script}")


if __name__ == "__main__":
    main()
