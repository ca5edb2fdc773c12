#!/usr/bin/env python3
"""Profile SearchTree building and searching over a synthetic vocabulary.

Usage
-----
  python profile_search_tree.py                    # profile build (default)
  python profile_search_tree.py --mode search      # profile wildcard search (~10 s)
  python profile_search_tree.py --mode both        # build then search
  python profile_search_tree.py --mode search --frozen   # search a frozen snapshot
  python profile_search_tree.py --words 50000 --pattern "ab*h"
"""

import argparse
import cProfile
import pstats
import random
import string
import time

from query import parse
from search_tree import SearchTree


def build_vocabulary(n: int, seed: int = 99, alphabet_size: int = 8,
                     max_len: int = 12) -> list[str]:
    """Return *n* random words over the first *alphabet_size* letters."""
    rng = random.Random(seed)
    alphabet = string.ascii_lowercase[:alphabet_size]
    return ["".join(rng.choice(alphabet) for _ in range(rng.randint(1, max_len)))
            for _ in range(n)]


def _print_profile_stats(profiler: cProfile.Profile, top: int = 30) -> None:
    stats = pstats.Stats(profiler)
    stats.strip_dirs()

    print("\n" + "=" * 80)
    print("PROFILING RESULTS (sorted by cumulative time)")
    print("=" * 80 + "\n")
    stats.sort_stats("cumulative")
    stats.print_stats(top)

    print("\n" + "=" * 80)
    print("PROFILING RESULTS (sorted by total time)")
    print("=" * 80 + "\n")
    stats.sort_stats("tottime")
    stats.print_stats(top)


def build_tree(words: list[str]) -> SearchTree:
    tree = SearchTree(lambda w: w)
    for w in words:
        tree.add(w)
    return tree


def profile_build(words: list[str]) -> SearchTree:
    print(f"\nProfiling build of {len(words):,} words...")
    profiler = cProfile.Profile()
    t0 = time.perf_counter()
    profiler.enable()
    tree = build_tree(words)
    profiler.disable()
    print(f"  Built {len(tree):,} entries in {time.perf_counter() - t0:.3f}s")
    _print_profile_stats(profiler)
    return tree


def profile_search(tree, pattern: str, duration: float = 10.0) -> None:
    query = parse(pattern)
    print(f"\nProfiling search {query!r} for {duration:.0f}s...")

    profiler = cProfile.Profile()
    n_iters = 0
    n_results = 0
    wall_start = time.perf_counter()
    profiler.enable()
    while time.perf_counter() - wall_start < duration:
        n_results = len(tree.search(query))
        n_iters += 1
    profiler.disable()
    wall_elapsed = time.perf_counter() - wall_start

    rate = n_iters / wall_elapsed
    print(f"  {n_results:,} results per search")
    print(f"  Wall time: {wall_elapsed:.3f}s  "
          f"({rate:,.1f} searches/s,  {1e3 / rate:.2f} ms/search)")
    _print_profile_stats(profiler)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Profile SearchTree")
    parser.add_argument(
        "--mode",
        choices=["build", "search", "both"],
        default="build",
        help="What to profile (default: build)",
    )
    parser.add_argument(
        "--words",
        type=int,
        default=100_000,
        metavar="N",
        help="Number of random words to index (default: 100000)",
    )
    parser.add_argument(
        "--pattern",
        default="ab?*h",
        help="Glob pattern searched in search mode (default: 'ab?*h')",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=10.0,
        metavar="SECS",
        help="How many seconds to run search profiling (default: 10)",
    )
    parser.add_argument(
        "--frozen",
        action="store_true",
        default=False,
        help="Search a frozen LOUDS snapshot instead of the mutable tree",
    )
    args = parser.parse_args()

    words = build_vocabulary(args.words)

    if args.mode in ("build", "both"):
        tree = profile_build(words)
    else:
        print("\nBuilding SearchTree (unprofiled)...")
        t0 = time.perf_counter()
        tree = build_tree(words)
        print(f"  Built in {time.perf_counter() - t0:.3f}s")

    if args.mode in ("search", "both"):
        target = tree
        if args.frozen:
            t0 = time.perf_counter()
            target = tree.freeze()
            print(f"  Frozen in {time.perf_counter() - t0:.3f}s: {target!r}")
        profile_search(target, args.pattern, duration=args.duration)
