from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import numpy as np

from .config import PipelineConfig
from .errors import EmptyInput, EmptyStageList
from .range_map import Interval, RangeMap, SeedRange, normalize_intervals, seed_ranges_to_intervals
from .steps import brute_force_min, lookup_values, map_stage

@dataclass
class PipelineResult:
    seed_intervals: List[Interval]
    final_intervals: List[Interval]
    minimum: int
    # interval set after each stage, keyed by stage name (empty when memory_lean)
    stage_trace: Dict[str, List[Interval]] = field(default_factory=dict)

class AlmanacPipeline:
    def __init__(self, stages: Sequence[RangeMap], config: Optional[PipelineConfig] = None):
        self.stages: Tuple[RangeMap, ...] = tuple(stages)
        self.cfg = config or PipelineConfig()

    def __len__(self) -> int:
        return len(self.stages)

    def stage_names(self) -> List[str]:
        return [st.name or f"stage-{i}" for i, st in enumerate(self.stages)]

    def run(self, seed_ranges: Iterable[SeedRange]) -> int:
        """Minimum final value over all (start, length) seed ranges."""
        seeds = seed_ranges_to_intervals(seed_ranges)
        if not seeds:
            raise EmptyInput("no seed ranges given")
        if self.cfg.method == "brute":
            b = self.cfg.brute
            return brute_force_min(self.stages, seeds, b.chunk_size, b.max_values)
        return self._fold(seeds).minimum

    def run_detailed(self, seed_ranges: Iterable[SeedRange]) -> PipelineResult:
        """Interval fold with intermediate results; ignores `cfg.method`."""
        seeds = seed_ranges_to_intervals(seed_ranges)
        if not seeds:
            raise EmptyInput("no seed ranges given")
        return self._fold(seeds)

    def _fold(self, seeds: List[Interval]) -> PipelineResult:
        cfg = self.cfg
        trace: Dict[str, List[Interval]] = {}
        if not cfg.memory_lean:
            trace["seeds"] = normalize_intervals(seeds)

        current = seeds
        for i, (name, stage) in enumerate(zip(self.stage_names(), self.stages)):
            current = map_stage(current, stage, coalesce=cfg.coalesce)
            if not cfg.memory_lean:
                # "seeds" and repeated stage names get the stage index appended
                key = name if name not in trace else f"{name}#{i}"
                trace[key] = list(current)

        return PipelineResult(
            seed_intervals=seeds,
            final_intervals=current,
            minimum=min(s for s, _ in current),
            stage_trace=trace,
        )

    def lookup(self, value: int) -> int:
        for stage in self.stages:
            value = stage.lookup(value)
        return value

    def lookup_many(self, values) -> np.ndarray:
        x = np.asarray(values, dtype=np.uint64)
        for stage in self.stages:
            x = lookup_values(x, stage)
        return x

def build_pipeline(
    stages: Sequence[Iterable[Tuple[int, int, int]]],
    names: Optional[Sequence[str]] = None,
    config: Optional[PipelineConfig] = None,
    require_stages: bool = False,
) -> AlmanacPipeline:
    """Build a pipeline from ordered lists of (destination, source, length) triples."""
    cfg = config or PipelineConfig()
    if not stages and (require_stages or cfg.require_stages):
        raise EmptyStageList("pipeline needs at least one stage")
    if names is not None and len(names) != len(stages):
        raise ValueError(f"{len(names)} names given for {len(stages)} stages")
    maps = [
        RangeMap.from_triples(rows, name=names[i] if names is not None else "")
        for i, rows in enumerate(stages)
    ]
    return AlmanacPipeline(maps, cfg)
