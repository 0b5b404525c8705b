#!/usr/bin/env python3
import argparse, logging, sys
from pathlib import Path
import yaml

from almanac_pipeline import (
    PipelineConfig, PipelineError, load_config_yaml, build_pipeline, plot_stage_trace,
    load_almanac, seeds_as_values, seeds_as_ranges, save_intervals_json, save_summary_json
)

logger = logging.getLogger(__name__)

def build_argparser():
    ap = argparse.ArgumentParser(description="Almanac seed-to-location pipeline")
    ap.add_argument("almanac", type=str, help="Almanac text file (seeds line + map blocks)")
    ap.add_argument("--config", type=str, default="", help="YAML config file (optional)")
    ap.add_argument("--method", choices=["intervals", "brute"], default=None, help="Override evaluation method")
    ap.add_argument("--part", choices=["1", "2", "both"], default="both", help="Which answer(s) to compute")
    ap.add_argument("--output-dir", type=str, default="outputs", help="Directory to store results")
    ap.add_argument("--no-coalesce", action="store_true", help="Keep overlapping intervals between stages")
    ap.add_argument("--memory-lean", action="store_true", help="Do not keep per-stage interval sets")
    ap.add_argument("--no-memory-lean", action="store_true", help="Keep per-stage interval sets")
    ap.add_argument("--plot", action="store_true", help="Show stage trace plot interactively")
    ap.add_argument("--save-plots", action="store_true", help="Save stage trace plot as PNG in output-dir")
    ap.add_argument("--write-intervals", action="store_true", help="Save final part 2 intervals as JSON")
    ap.add_argument("--verbose", action="store_true", help="Log progress")
    return ap

def main(argv=None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    out_dir = Path(args.output_dir); out_dir.mkdir(parents=True, exist_ok=True)

    try:
        if args.config:
            cfg = load_config_yaml(args.config)
        else:
            cfg = PipelineConfig()

        if args.method:
            cfg.method = args.method
        if args.no_coalesce:
            cfg.coalesce = False
        if args.memory_lean:
            cfg.memory_lean = True
        if args.no_memory_lean or args.plot or args.save_plots:
            cfg.memory_lean = False

        almanac = load_almanac(args.almanac, cfg.stage_headers)
        pipe = build_pipeline(almanac.stage_rules, almanac.stage_names, config=cfg)
        logger.info("loaded %d seeds, %d stages", len(almanac.seeds), len(pipe))

        summary = {"stages": len(pipe), "seeds": len(almanac.seeds), "method": cfg.method}

        if args.part in ("1", "both"):
            part1 = pipe.run(seeds_as_values(almanac.seeds))
            print(f"Part 1: {part1}")
            summary["part1"] = part1

        if args.part in ("2", "both"):
            ranges = seeds_as_ranges(almanac.seeds)
            if cfg.method == "brute":
                part2 = pipe.run(ranges)
                res = None
            else:
                res = pipe.run_detailed(ranges)
                part2 = res.minimum
                summary["final_intervals"] = len(res.final_intervals)
            print(f"Part 2: {part2}")
            summary["part2"] = part2

            if res is None and (args.write_intervals or args.save_plots or args.plot):
                logger.warning("--method brute keeps no intervals; skipping interval output and plots")

            if res is not None and args.write_intervals:
                save_intervals_json(res.final_intervals, out_dir / "final_intervals.json")

            if res is not None and (args.save_plots or args.plot):
                plot_stage_trace(
                    res.stage_trace,
                    title="Seed ranges through almanac stages",
                    show=args.plot,
                    save_path=str(out_dir / "plot_stage_trace.png") if args.save_plots else None,
                )
    except (PipelineError, ValueError, OSError, yaml.YAMLError) as e:
        logger.error("%s", e)
        return 1

    save_summary_json(summary, out_dir / "summary.json")
    logger.info("summary written to %s", out_dir / "summary.json")
    return 0

if __name__ == "__main__":
    sys.exit(main())
