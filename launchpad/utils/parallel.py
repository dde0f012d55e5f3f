"""
Parallel — Bounded thread-pool fan-out for per-file reads

List operations read and parse many small files. Reads are I/O-bound,
so a thread pool is enough (the GIL is released during file I/O).
Writes never go through here: the vault has a single writer.

Usage:
    summaries = map_parallel(summarize, files, workers=config.parallel.io_workers)
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def map_parallel(fn: Callable[[T], R], items: Iterable[T], workers: int = 4) -> List[R]:
    """
    Apply fn to every item, returning results in input order.

    Runs sequentially when workers <= 1 or there is at most one item.
    Exceptions raised by fn propagate; callers that must tolerate
    per-item failures handle them inside fn.
    """
    items = list(items)
    if workers <= 1 or len(items) < 2:
        return [fn(item) for item in items]

    with ThreadPoolExecutor(
        max_workers=min(workers, len(items)),
        thread_name_prefix="launchpad-io-"
    ) as executor:
        return list(executor.map(fn, items))
