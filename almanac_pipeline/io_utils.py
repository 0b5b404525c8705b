from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union
import json
from pathlib import Path

from .errors import InvalidAlmanac
from .range_map import Interval, SeedRange

Triple = Tuple[int, int, int]

@dataclass
class Almanac:
    seeds: List[int]
    # (stage name, rule rows) in file order; name is the header minus " map:"
    stages: List[Tuple[str, List[Triple]]] = field(default_factory=list)

    @property
    def stage_names(self) -> List[str]:
        return [name for name, _ in self.stages]

    @property
    def stage_rules(self) -> List[List[Triple]]:
        return [rows for _, rows in self.stages]

def _parse_ints(line: str, what: str) -> List[int]:
    try:
        return [int(tok) for tok in line.split()]
    except ValueError:
        raise InvalidAlmanac(f"non-integer field in {what}: {line!r}") from None

def _parse_rule_row(line: str) -> Triple:
    parts = _parse_ints(line, "rule row")
    if len(parts) != 3:
        raise InvalidAlmanac(f"rule row needs 3 integers: {line!r}")
    return parts[0], parts[1], parts[2]

def _stage_name(header: str) -> str:
    return header[: -len(" map:")] if header.endswith(" map:") else header.rstrip(":")

def parse_almanac_lines(lines: Sequence[str], stage_headers: Optional[Sequence[str]] = None) -> Almanac:
    """Parse almanac text (already split into lines).

    If `stage_headers` is given the map headers must appear exactly in that
    order; otherwise any `<name> map:` header is accepted.
    """
    it: Iterator[str] = iter([ln.rstrip() for ln in lines])

    first = next(it, None)
    if first is None or not first.startswith("seeds:"):
        raise InvalidAlmanac(f"expected 'seeds:' line, got {first!r}")
    seeds = _parse_ints(first[len("seeds:"):], "seeds line")

    sep = next(it, None)
    if sep is not None and sep != "":
        raise InvalidAlmanac(f"expected blank line after seeds, got {sep!r}")

    stages: List[Tuple[str, List[Triple]]] = []
    header = None
    rows: List[Triple] = []
    for ln in it:
        if header is None:
            if not ln:
                continue  # tolerate extra blank lines between blocks
            if not ln.endswith("map:"):
                raise InvalidAlmanac(f"expected map header, got {ln!r}")
            header, rows = ln, []
            continue
        if not ln:
            stages.append((header, rows))
            header = None
            continue
        rows.append(_parse_rule_row(ln))
    if header is not None:
        stages.append((header, rows))

    if stage_headers is not None:
        found = [h for h, _ in stages]
        if found != list(stage_headers):
            raise InvalidAlmanac(f"map headers {found} do not match expected {list(stage_headers)}")

    return Almanac(seeds=seeds, stages=[(_stage_name(h), r) for h, r in stages])

def load_almanac(path: Union[str, Path], stage_headers: Optional[Sequence[str]] = None) -> Almanac:
    p = Path(path)
    return parse_almanac_lines(p.read_text(encoding="utf-8").splitlines(), stage_headers)

def seeds_as_values(seeds: Sequence[int]) -> List[SeedRange]:
    return [(v, 1) for v in seeds]

def seeds_as_ranges(seeds: Sequence[int]) -> List[SeedRange]:
    if len(seeds) % 2:
        raise InvalidAlmanac(f"seed ranges need an even number of values, got {len(seeds)}")
    return [(seeds[i], seeds[i + 1]) for i in range(0, len(seeds), 2)]

def save_intervals_json(spans: List[Interval], path: Union[str, Path]):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([[int(a), int(b)] for (a, b) in spans], f, ensure_ascii=False, indent=2)

def save_summary_json(summary: Dict[str, Any], path: Union[str, Path]):
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
