from __future__ import annotations
from typing import Iterable, List, Sequence
import numpy as np

from .errors import BruteForceLimitExceeded, EmptyInput
from .range_map import Interval, RangeMap, check_interval, normalize_intervals, total_length

# -----------------------------
# Interval propagation
# -----------------------------
def map_stage(intervals: Iterable[Interval], stage: RangeMap, coalesce: bool = True) -> List[Interval]:
    """Push an interval set through one stage; coalesce the result if asked."""
    out = stage.project_intervals(intervals)
    if coalesce:
        return normalize_intervals(out)
    return out

# -----------------------------
# Scalar lookup (vectorised)
# -----------------------------
def lookup_values(values, stage: RangeMap) -> np.ndarray:
    """Map every value through `stage`, first matching rule wins."""
    x = np.asarray(values, dtype=np.uint64)
    out = x.copy()
    done = np.zeros(x.shape, dtype=bool)
    for rule in stage.rules:
        src = np.uint64(rule.source_start)
        last = np.uint64(rule.source_end - 1)
        hit = ~done & (x >= src) & (x <= last)
        if not hit.any():
            continue
        out[hit] = x[hit] - src + np.uint64(rule.destination_start)
        done |= hit
    return out

# -----------------------------
# Per-element reference
# -----------------------------
def brute_force_min(
    stages: Sequence[RangeMap],
    intervals: Sequence[Interval],
    chunk_size: int = 1_000_000,
    max_values: int = 50_000_000,
) -> int:
    """Enumerate every value of `intervals`, map it through all stages and
    return the smallest result. Only usable for small inputs."""
    if not intervals:
        raise EmptyInput("no seed values to evaluate")
    n = total_length(intervals)
    if n > max_values:
        raise BruteForceLimitExceeded(
            f"{n} values to enumerate exceeds max_values={max_values}"
        )
    chunk_size = max(1, int(chunk_size))
    best = None
    for interval in intervals:
        s, e = check_interval(interval)
        cur = s
        while cur < e:
            stop = min(e, cur + chunk_size)
            x = np.arange(stop - cur, dtype=np.uint64) + np.uint64(cur)
            for stage in stages:
                x = lookup_values(x, stage)
            m = int(x.min())
            if best is None or m < best:
                best = m
            cur = stop
    return best
