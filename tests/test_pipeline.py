"""
Tests for the stage pipeline on the canonical almanac example.
"""

import pytest

from almanac_pipeline.config import BruteForceParams, PipelineConfig
from almanac_pipeline.errors import (
    BruteForceLimitExceeded, EmptyInput, EmptyStageList, MalformedInterval, MalformedRule,
)
from almanac_pipeline.io_utils import parse_almanac_lines, seeds_as_ranges, seeds_as_values
from almanac_pipeline.pipeline import AlmanacPipeline, build_pipeline


@pytest.fixture
def almanac(example_lines):
    return parse_almanac_lines(example_lines)


@pytest.fixture
def pipe(almanac):
    return build_pipeline(almanac.stage_rules, almanac.stage_names)


def test_part1_seed_values(pipe, almanac):
    assert pipe.run(seeds_as_values(almanac.seeds)) == 35


def test_part2_seed_ranges(pipe, almanac):
    assert pipe.run(seeds_as_ranges(almanac.seeds)) == 46


def test_scalar_lookup_per_seed(pipe):
    assert [pipe.lookup(s) for s in (79, 14, 55, 13)] == [82, 43, 86, 35]
    assert pipe.lookup_many([79, 14, 55, 13]).tolist() == [82, 43, 86, 35]


def test_single_value_runs_match_scalar_lookup(pipe):
    for seed in range(0, 120):
        assert pipe.run([(seed, 1)]) == pipe.lookup(seed)


def test_run_detailed_keeps_trace_when_not_memory_lean(almanac):
    cfg = PipelineConfig(memory_lean=False)
    pipe = build_pipeline(almanac.stage_rules, almanac.stage_names, config=cfg)
    res = pipe.run_detailed(seeds_as_ranges(almanac.seeds))
    assert res.minimum == 46
    assert list(res.stage_trace) == ["seeds"] + almanac.stage_names
    assert res.stage_trace["seeds"] == [(55, 68), (79, 93)]
    assert res.stage_trace["seed-to-soil"] == [(57, 70), (81, 95)]
    assert res.stage_trace["humidity-to-location"] == res.final_intervals
    assert min(s for s, _ in res.final_intervals) == 46


def test_trace_keeps_stages_with_repeated_names():
    text = "seeds: 0 10\n\na map:\n100 0 10\n\na map:\n200 100 10\n\nseeds map:\n1 0 1\n"
    almanac = parse_almanac_lines(text.splitlines())
    pipe = build_pipeline(almanac.stage_rules, almanac.stage_names, config=PipelineConfig(memory_lean=False))
    res = pipe.run_detailed(seeds_as_ranges(almanac.seeds))
    assert list(res.stage_trace) == ["seeds", "a", "a#1", "seeds#2"]
    assert res.stage_trace["seeds"] == [(0, 10)]
    assert res.stage_trace["a"] == [(100, 110)]
    assert res.stage_trace["a#1"] == [(200, 210)]
    assert res.stage_trace["seeds#2"] == [(200, 210)]
    assert len(res.stage_trace) == len(pipe) + 1


def test_run_detailed_ignores_brute_method(almanac):
    pipe = build_pipeline(almanac.stage_rules, config=PipelineConfig(method="brute", memory_lean=False))
    res = pipe.run_detailed(seeds_as_ranges(almanac.seeds))
    assert res.minimum == 46
    assert len(res.stage_trace) == 8


def test_run_detailed_memory_lean_drops_trace(pipe, almanac):
    res = pipe.run_detailed(seeds_as_ranges(almanac.seeds))
    assert res.stage_trace == {}
    assert res.seed_intervals == [(79, 93), (55, 68)]


def test_without_coalesce_same_answer(almanac):
    pipe = build_pipeline(almanac.stage_rules, config=PipelineConfig(coalesce=False))
    assert pipe.run(seeds_as_ranges(almanac.seeds)) == 46


def test_brute_method_same_answer(almanac):
    pipe = build_pipeline(almanac.stage_rules, config=PipelineConfig(method="brute"))
    assert pipe.run(seeds_as_ranges(almanac.seeds)) == 46
    assert pipe.run(seeds_as_values(almanac.seeds)) == 35


def test_brute_method_limit(almanac):
    cfg = PipelineConfig(method="brute", brute=BruteForceParams(max_values=10))
    pipe = build_pipeline(almanac.stage_rules, config=cfg)
    with pytest.raises(BruteForceLimitExceeded):
        pipe.run(seeds_as_ranges(almanac.seeds))


def test_huge_range_is_handled_by_intervals(almanac):
    pipe = build_pipeline(almanac.stage_rules)
    # every value below 2**40; brute force could not enumerate this
    assert pipe.run([(0, 2 ** 40)]) == 0


def test_zero_stages_is_identity():
    pipe = build_pipeline([])
    assert len(pipe) == 0
    assert pipe.run([(5, 3), (9, 1)]) == 5
    assert pipe.lookup(17) == 17


def test_require_stages():
    with pytest.raises(EmptyStageList):
        build_pipeline([], require_stages=True)
    with pytest.raises(EmptyStageList):
        build_pipeline([], config=PipelineConfig(require_stages=True))


def test_empty_seeds_rejected(pipe):
    with pytest.raises(EmptyInput):
        pipe.run([])
    with pytest.raises(EmptyInput):
        pipe.run_detailed([])


def test_zero_length_seed_rejected(pipe):
    with pytest.raises(MalformedInterval):
        pipe.run([(5, 0)])


def test_malformed_rule_rejected():
    with pytest.raises(MalformedRule):
        build_pipeline([[(1, 2, 0)]])


def test_names_must_match_stage_count():
    with pytest.raises(ValueError):
        build_pipeline([[(1, 2, 3)]], names=["a", "b"])


def test_unnamed_stages_get_positional_names():
    pipe = AlmanacPipeline([], PipelineConfig())
    assert pipe.stage_names() == []
    pipe = build_pipeline([[(1, 2, 3)], []])
    assert pipe.stage_names() == ["stage-0", "stage-1"]
