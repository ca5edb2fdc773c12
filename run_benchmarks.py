"""Run benchmark suite for SearchTree.

This script provides a convenient interface for running the
pytest-benchmark tests and generating reports.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path


def run_benchmarks(
    format: str = "terminal",
    compare: bool = False,
    save: bool = True,
    select: str = "",
) -> int:
    """Run the benchmark suite.

    Args:
        format: Output format ('terminal', 'markdown', 'json')
        compare: Compare against previous benchmark
        save: Save results for future comparison
        select: Optional ``-k`` expression to pick benchmarks

    Returns:
        Exit code (0 for success)
    """
    cmd = [
        sys.executable,
        "-m",
        "pytest",
        "test_search_tree.py::TestSearchPerformance",
        "--benchmark-only",
        "-v",
    ]

    if select:
        cmd.extend(["-k", select])

    if format in ("json", "markdown"):
        cmd.append("--benchmark-json=benchmark_results.json")

    if compare:
        cmd.append("--benchmark-compare")

    if save:
        cmd.append("--benchmark-autosave")

    print("\nRunning benchmarks...")
    print(f"Command: {' '.join(cmd)}\n")

    result = subprocess.run(cmd, cwd=Path(__file__).parent)

    return result.returncode


def generate_markdown_report() -> None:
    """Generate a markdown report from benchmark results."""
    results_path = Path(__file__).parent / "benchmark_results.json"

    if not results_path.exists():
        print("No benchmark results found. Run with --format=json first.", file=sys.stderr)
        return

    with open(results_path) as f:
        data = json.load(f)

    md = ["# SearchTree Benchmark Results\n"]
    md.append(f"**Machine**: {data.get('machine_info', {}).get('node', 'Unknown')}")
    md.append(f"**Python**: {data.get('machine_info', {}).get('python_version', 'Unknown')}\n")

    md.append("## Benchmark Results\n")
    md.append("| Test | Min (ms) | Max (ms) | Mean (ms) | StdDev | Rounds |")
    md.append("|------|----------|----------|-----------|--------|--------|")

    for benchmark in data.get("benchmarks", []):
        name = benchmark["name"].replace("test_", "")
        stats = benchmark["stats"]

        md.append(
            f"| {name} | "
            f"{stats['min']*1000:.2f} | "
            f"{stats['max']*1000:.2f} | "
            f"{stats['mean']*1000:.2f} | "
            f"{stats['stddev']*1000:.4f} | "
            f"{stats['rounds']} |"
        )

    report = "\n".join(md)
    print(report)

    output_path = Path(__file__).parent / "BENCHMARK_RESULTS.md"
    output_path.write_text(report)
    print(f"\nReport saved to: {output_path}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run SearchTree benchmarks",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--format",
        choices=["terminal", "json", "markdown"],
        default="terminal",
        help="Output format"
    )

    parser.add_argument(
        "--compare",
        action="store_true",
        help="Compare against previous benchmark results"
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Don't save results for future comparison"
    )

    parser.add_argument(
        "-k",
        dest="select",
        default="",
        help="Only run benchmarks matching this pytest -k expression"
    )

    parser.add_argument(
        "--generate-report",
        action="store_true",
        help="Generate markdown report from existing JSON results"
    )

    args = parser.parse_args()

    if args.generate_report:
        generate_markdown_report()
        return 0

    exit_code = run_benchmarks(
        format=args.format,
        compare=args.compare,
        save=not args.no_save,
        select=args.select,
    )

    if args.format == "markdown" and exit_code == 0:
        print("\nGenerating markdown report...")
        generate_markdown_report()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
