from dataclasses import dataclass, field
from typing import List, Literal
import yaml

DEFAULT_STAGE_HEADERS = [
    "seed-to-soil map:",
    "soil-to-fertilizer map:",
    "fertilizer-to-water map:",
    "water-to-light map:",
    "light-to-temperature map:",
    "temperature-to-humidity map:",
    "humidity-to-location map:",
]

@dataclass
class BruteForceParams:
    chunk_size: int = 1_000_000      # values mapped per numpy batch
    max_values: int = 50_000_000     # refuse to enumerate more than this

@dataclass
class PipelineConfig:
    method: Literal["intervals", "brute"] = "intervals"
    coalesce: bool = True            # merge overlapping/touching intervals after each stage
    memory_lean: bool = True         # do not keep per-stage interval sets
    require_stages: bool = False     # reject an empty stage list
    stage_headers: List[str] = field(default_factory=lambda: list(DEFAULT_STAGE_HEADERS))
    brute: BruteForceParams = field(default_factory=BruteForceParams)

    def __post_init__(self):
        if self.method not in ("intervals", "brute"):
            raise ValueError(f"unknown method {self.method!r}")

def load_config_yaml(path: str) -> PipelineConfig:
    """Load config from a YAML file into PipelineConfig dataclasses."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(data).__name__}")

    def merge_dataclass(dc_cls, values, section):
        obj = dc_cls()
        if values is not None and not isinstance(values, dict):
            raise ValueError(f"config section {section!r} in {path} must be a mapping")
        for k, v in (values or {}).items():
            if hasattr(obj, k):
                setattr(obj, k, v)
        return obj

    brute_cfg = merge_dataclass(BruteForceParams, data.get("brute"), "brute")

    cfg = PipelineConfig(
        method=data.get("method", "intervals"),
        coalesce=data.get("coalesce", True),
        memory_lean=data.get("memory_lean", True),
        require_stages=data.get("require_stages", False),
        stage_headers=list(data.get("stage_headers") or DEFAULT_STAGE_HEADERS),
        brute=brute_cfg,
    )
    return cfg
