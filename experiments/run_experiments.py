"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
sweeps every parameter combination on a thread pool, and reports the result
table (stdout, optional CSV, optional plot). The script is intentionally
lightweight so we can tweak scenarios or plug in other analysis pipelines.
"""

from __future__ import annotations
import argparse, logging, os, sys
from typing import Dict, List, Optional
import pandas as pd
try:
    # When executed as a module: python -m experiments.run_experiments
    from .config import load_cfg, apply_overrides, sweep_params  # type: ignore
    from .report import print_table, write_csv, plot_results  # type: ignore
    from .scenarios import SCENARIOS  # type: ignore
except ImportError:  # pragma: no cover
    # When run as a script in VSCode/terminal
    ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if ROOT not in sys.path:
        sys.path.insert(0, ROOT)
    from experiments.config import load_cfg, apply_overrides, sweep_params  # type: ignore
    from experiments.report import print_table, write_csv, plot_results  # type: ignore
    from experiments.scenarios import SCENARIOS  # type: ignore

from warehouse_sim.errors import ConfigError
from warehouse_sim.sweep import sweep

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Warehouse intake parameter sweep")
    parser.add_argument("--config", default=None,
                        help="YAML config (default: the packaged experiments/baseline.yaml)")
    parser.add_argument("--scenario", action="append", dest="scenarios",
                        help="Scenario name to run; repeatable (default: all)")
    parser.add_argument("--threads", type=int, default=None, help="Worker threads for the sweep")
    parser.add_argument("--seed", type=int, default=None, help="Base seed (overrides sim.seed)")
    parser.add_argument("--csv", default=None, help="Write all scenario rows to this CSV file")
    parser.add_argument("--plot", nargs=2, metavar=("X", "Y"), default=None,
                        help="Plot column Y against column X for each scenario")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser

def select_scenarios(names: Optional[List[str]]) -> List[Dict]:
    if not names:
        return list(SCENARIOS)
    index = {s["name"]: s for s in SCENARIOS}
    unknown = [n for n in names if n not in index]
    if unknown:
        raise ConfigError(f"Unknown scenario(s): {', '.join(unknown)}; known: {', '.join(index)}")
    return [index[n] for n in names]

def run_scenario(cfg: Dict, sc: Dict, threads: Optional[int], seed: Optional[int]) -> pd.DataFrame:
    """Sweep one scenario and return its result table."""
    sc_cfg = apply_overrides(cfg, sc["overrides"])
    params = sweep_params(sc_cfg)
    return sweep(**params, max_workers=threads, seed=seed)

def summarize(name: str, df: pd.DataFrame):
    """Headline KPIs across all runs of one scenario."""
    print(f"Scenario: {name} (runs={len(df)})")
    if df.empty:
        print("-")
        return
    print(f"  Worker utilization: {df['worker_util'].mean() * 100.0:.1f}% "
          f"(min {df['worker_util'].min() * 100.0:.1f}%, max {df['worker_util'].max() * 100.0:.1f}%)")
    print(f"  Rejected/run: groceries {df['rejects_g'].mean():.1f}, frozen {df['rejects_f'].mean():.1f}")
    print(f"  Finished/run: groceries {df['finished_g'].mean():.1f}, frozen {df['finished_f'].mean():.1f}")
    print(f"  Avg wait: groceries {df['avg_wait_g'].mean():.3f}, frozen {df['avg_wait_f'].mean():.3f}")
    print(f"  Full rate: groceries {df['full_rate_g'].mean() * 100.0:.1f}%, frozen {df['full_rate_f'].mean() * 100.0:.1f}%")
    print(f"  Empty rate: groceries {df['empty_rate_g'].mean() * 100.0:.1f}%, frozen {df['empty_rate_f'].mean() * 100.0:.1f}%")
    print("-")

def main(argv: Optional[List[str]] = None) -> int:
    """Entry point: drive the selected scenarios and report their tables."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s: %(message)s")
    try:
        cfg = load_cfg(args.config)
        exp_cfg = cfg.get("experiments", {}) or {}
        threads = args.threads if args.threads is not None else exp_cfg.get("threads")
        seed = args.seed if args.seed is not None else cfg.get("sim", {}).get("seed")
        # relative output paths resolve against the working directory
        out_dir = os.path.abspath(exp_cfg.get("output_dir") or os.path.join("experiments", "output"))
        plot_cfg = exp_cfg.get("plot") or {}
        plot_cols = args.plot or ((plot_cfg["x"], plot_cfg["y"]) if "x" in plot_cfg and "y" in plot_cfg else None)
        tables = []
        for sc in select_scenarios(args.scenarios):
            df = run_scenario(cfg, sc, threads, seed)
            print_table(df, title=f"== {sc['name']}")
            summarize(sc["name"], df)
            if plot_cols:
                x, y = plot_cols
                path = plot_results(df, x, y, os.path.join(out_dir, f"{sc['name']}_{y}_vs_{x}.png"),
                                    title=f"{sc['name']}: {y} vs {x}")
                if path:
                    print(f"  Plot saved to: {path}")
                else:
                    logger.warning("matplotlib unavailable; skipped plot for %s", sc["name"])
            tables.append(df.assign(scenario=sc["name"]))
    except ConfigError as e:
        print(f"config error: {e}", file=sys.stderr)
        return 2
    if args.csv and tables:
        combined = pd.concat(tables, ignore_index=True)
        combined = combined[["scenario"] + [c for c in combined.columns if c != "scenario"]]
        print(f"\nAll scenario rows written to: {write_csv(combined, args.csv)}")
    return 0

def cli():
    sys.exit(main())

if __name__ == "__main__":
    cli()
