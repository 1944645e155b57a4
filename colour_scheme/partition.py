# colour_scheme/partition.py
from __future__ import annotations

"""
Column-strip partitioning and the fork/join runner shared by the remapper
and the extractor.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, TypeVar

from .core_types import ColumnRange

T = TypeVar("T")


def default_workers() -> int:
    """Detected hardware concurrency, at least 1."""
    return max(1, os.cpu_count() or 1)


def resolve_workers(workers: Optional[int]) -> int:
    """None means default_workers(); anything below 1 is rejected."""
    if workers is None:
        return default_workers()
    n = int(workers)
    if n < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    return n


def split_columns(min_x: int, max_x: int, workers: Optional[int] = None) -> List[ColumnRange]:
    """
    Partition [min_x, max_x) into exactly `workers` contiguous [start, end) spans.

    Every span is (max_x - min_x) // workers wide except the last, which runs
    to max_x. With fewer columns than workers the leading spans are empty.
    """
    n = resolve_workers(workers)
    width = max(0, int(max_x) - int(min_x))
    step = width // n
    spans: List[ColumnRange] = []
    for i in range(n):
        start = min_x + i * step
        end = max_x if i == n - 1 else start + step
        spans.append((start, end))
    return spans


def run_column_strips(
    task: Callable[[int, int], T], spans: List[ColumnRange], workers: int
) -> List[Optional[T]]:
    """
    Run task(start, end) for each span on its own thread and wait for all.

    Results come back in span order. Empty spans are not submitted and yield
    None. A worker exception is re-raised here after the pool shuts down.
    """
    results: List[Optional[T]] = [None] * len(spans)
    if workers <= 1:
        for i, (s, e) in enumerate(spans):
            if s < e:
                results[i] = task(s, e)
        return results

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {
            i: pool.submit(task, s, e) for i, (s, e) in enumerate(spans) if s < e
        }
        for i, fut in futures.items():
            results[i] = fut.result()
    return results


__all__ = ["default_workers", "resolve_workers", "split_columns", "run_column_strips"]
