from .errors import (
    PipelineError, MalformedRule, MalformedInterval, EmptyInput, EmptyStageList,
    BruteForceLimitExceeded, InvalidAlmanac
)
from .config import BruteForceParams, PipelineConfig, DEFAULT_STAGE_HEADERS, load_config_yaml
from .range_map import (
    Interval, SeedRange, Rule, RangeMap, check_interval, normalize_intervals,
    seed_ranges_to_intervals, total_length
)
from .steps import map_stage, lookup_values, brute_force_min
from .pipeline import AlmanacPipeline, PipelineResult, build_pipeline
from .plotting import plot_stage_trace
from .io_utils import (
    Almanac, parse_almanac_lines, load_almanac, seeds_as_values, seeds_as_ranges,
    save_intervals_json, save_summary_json
)
