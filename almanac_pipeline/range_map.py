from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .errors import MalformedInterval, MalformedRule

# Half-open [start, end)
Interval = Tuple[int, int]
SeedRange = Tuple[int, int]

U64_LIMIT = 2 ** 64

def check_interval(interval: Interval) -> Interval:
    s, e = interval
    if not (0 <= s < e <= U64_LIMIT):
        raise MalformedInterval(f"invalid interval [{s}, {e})")
    return s, e

def seed_ranges_to_intervals(seed_ranges: Iterable[SeedRange]) -> List[Interval]:
    """Turn (start, length) pairs into half-open intervals."""
    out = []
    for start, length in seed_ranges:
        if length <= 0:
            raise MalformedInterval(f"seed range starting at {start} has length {length}")
        out.append(check_interval((start, start + length)))
    return out

def normalize_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Sort and merge overlapping or touching intervals."""
    xs = sorted(intervals)
    if not xs:
        return []
    merged = []
    cs, ce = xs[0]
    for s, e in xs[1:]:
        if s <= ce:
            ce = max(ce, e)
        else:
            merged.append((cs, ce))
            cs, ce = s, e
    merged.append((cs, ce))
    return merged

def total_length(intervals: Iterable[Interval]) -> int:
    return sum(e - s for s, e in intervals)

@dataclass(frozen=True)
class Rule:
    """Maps [source_start, source_start+length) onto [destination_start, destination_start+length)."""
    destination_start: int
    source_start: int
    length: int

    def __post_init__(self):
        if min(self.destination_start, self.source_start, self.length) < 0:
            raise MalformedRule(f"negative field in {self}")
        if self.length == 0:
            raise MalformedRule(f"zero-length rule {self}")
        if self.source_end > U64_LIMIT or self.destination_start + self.length > U64_LIMIT:
            raise MalformedRule(f"rule {self} overflows u64")

    @property
    def source_end(self) -> int:
        return self.source_start + self.length

    @property
    def offset(self) -> int:
        return self.destination_start - self.source_start

    def apply(self, value: int) -> Optional[int]:
        if value < self.source_start or value >= self.source_end:
            return None
        return value + self.offset

@dataclass(frozen=True)
class RangeMap:
    """One almanac stage: a list of rules, unmatched values pass through.

    Rules are expected to have disjoint source ranges. When they do not, the
    first rule in list order wins for every value it covers.
    """
    rules: Tuple[Rule, ...] = field(default_factory=tuple)
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))

    @staticmethod
    def from_triples(triples: Iterable[Tuple[int, int, int]], name: str = "") -> "RangeMap":
        return RangeMap(tuple(Rule(d, s, n) for (d, s, n) in triples), name=name)

    def __len__(self) -> int:
        return len(self.rules)

    def lookup(self, value: int) -> int:
        for rule in self.rules:
            mapped = rule.apply(value)
            if mapped is not None:
                return mapped
        return value

    def project_intervals(self, intervals: Iterable[Interval]) -> List[Interval]:
        """Map intervals defined on the source domain to the destination domain.

        Each input interval is cut only at rule boundaries: the piece covered by
        a rule is shifted and emitted, the residues on either side are tried
        against the remaining rules, and whatever no rule claims is emitted
        unchanged. Output is unsorted and may contain overlapping intervals.
        """
        res = []
        for interval in intervals:
            pending = [check_interval(interval)]
            for rule in self.rules:
                rs, re_, off = rule.source_start, rule.source_end, rule.offset
                unmatched = []
                for (s, e) in pending:
                    lo = max(s, rs)
                    hi = min(e, re_)
                    if lo >= hi:
                        unmatched.append((s, e))
                        continue
                    res.append((lo + off, hi + off))
                    if s < lo:
                        unmatched.append((s, lo))
                    if hi < e:
                        unmatched.append((hi, e))
                pending = unmatched
                if not pending:
                    break
            # passthrough
            res.extend(pending)
        return res
