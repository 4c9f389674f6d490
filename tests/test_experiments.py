"""Tests for the experiment harness: config, scenarios, reporting and the CLI."""

from __future__ import annotations

from importlib import resources

import pandas as pd
import pytest
import yaml

from experiments.config import apply_overrides, load_cfg, parse_range, parse_value, sweep_params
from experiments.report import plot_results, write_csv
from experiments.run_experiments import main, select_scenarios
from experiments.scenarios import SCENARIOS
from warehouse_sim.errors import ConfigError
from warehouse_sim.metrics import COLUMNS
from warehouse_sim.sweep import sweep


SMALL_CFG = {
    "sim": {"seed": 3},
    "warehouse": {
        "lam_g": 1.0, "lam_f": 1.0, "p_g": 0.5, "p_f": 0.5,
        "Q_g": 5, "Q_f": 5, "n": "1:2", "duration": 20,
    },
}


class TestConfig:

    @pytest.mark.parametrize("text, expected", [
        ("1:4", [1, 2, 3, 4]),
        ("10:10:30", [10, 20, 30]),
        ("1000:1000:5000", [1000, 2000, 3000, 4000, 5000]),
        ("0.5:0.5:2", [0.5, 1.0, 1.5, 2.0]),
        ("3:3", [3]),
        ("5:1", []),
    ])
    def test_parse_range(self, text, expected):
        assert parse_range(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["a:b", "1:0:3", "1:-1:3", "1:2:3:4"])
    def test_parse_range_errors(self, text):
        with pytest.raises(ConfigError):
            parse_range(text)

    def test_parse_value_passthrough(self):
        assert parse_value(7) == 7
        assert parse_value([1, 2]) == [1, 2]
        assert parse_value("2:3") == [2, 3]

    def test_apply_overrides_is_recursive_and_pure(self):
        base = {"warehouse": {"n": 1, "Q_g": 10}, "sim": {"seed": 1}}
        new = apply_overrides(base, {"warehouse": {"n": "1:3"}})
        assert new["warehouse"] == {"n": "1:3", "Q_g": 10}
        assert new["sim"] == {"seed": 1}
        assert base["warehouse"]["n"] == 1

    def test_sweep_params(self):
        params = sweep_params(SMALL_CFG)
        assert params["n"] == [1, 2]
        assert params["lam_g"] == 1.0

    def test_sweep_params_missing_keys(self):
        with pytest.raises(ConfigError, match="duration"):
            sweep_params({"warehouse": {k: v for k, v in SMALL_CFG["warehouse"].items() if k != "duration"}})
        with pytest.raises(ConfigError):
            sweep_params({})

    def test_baseline_config_loads(self):
        cfg = load_cfg()
        params = sweep_params(cfg)
        assert params["n"] == [1, 2, 3, 4]
        assert cfg["sim"]["seed"] == 42

    def test_baseline_ships_with_the_package(self):
        packaged = resources.files("experiments").joinpath("baseline.yaml")
        assert packaged.is_file()
        assert load_cfg() == yaml.safe_load(packaged.read_text(encoding="utf-8"))

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read config"):
            load_cfg(str(tmp_path / "absent.yaml"))

    def test_malformed_config_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("warehouse: [1, 2\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_cfg(str(path))
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_cfg(str(path))

    def test_every_scenario_expands(self):
        base = load_cfg()
        for sc in SCENARIOS:
            params = sweep_params(apply_overrides(base, sc["overrides"]))
            assert set(params) == {"lam_g", "lam_f", "p_g", "p_f", "Q_g", "Q_f", "n", "duration"}

    def test_select_scenarios(self):
        assert select_scenarios(None) == SCENARIOS
        assert [s["name"] for s in select_scenarios(["staffing"])] == ["staffing"]
        with pytest.raises(ConfigError):
            select_scenarios(["nope"])


class TestReport:

    def test_write_csv_keeps_columns(self, tmp_path):
        df = sweep(1, 1, 0.5, 0.5, 5, 5, [1, 2], 10, seed=0)
        path = write_csv(df, str(tmp_path / "out" / "rows.csv"))
        back = pd.read_csv(path)
        assert list(back.columns) == COLUMNS
        assert len(back) == 2

    def test_plot_results(self, tmp_path):
        df = sweep(1, 1, 0.5, 0.5, [3, 6], 5, [1, 2], 10, seed=0)
        out = plot_results(df, "Q_g", "full_rate_g", str(tmp_path / "plot.png"))
        assert out is not None
        assert (tmp_path / "plot.png").exists()

    def test_plot_unknown_column(self, tmp_path):
        df = sweep(1, 1, 0.5, 0.5, 5, 5, 1, 10, seed=0)
        with pytest.raises(KeyError):
            plot_results(df, "n", "profit", str(tmp_path / "plot.png"))


class TestCli:

    def test_main_runs_baseline_and_writes_csv(self, tmp_path, capsys):
        cfg_path = tmp_path / "cfg.yaml"
        cfg_path.write_text(yaml.safe_dump(SMALL_CFG, allow_unicode=True))
        csv_path = tmp_path / "rows.csv"

        code = main(["--config", str(cfg_path), "--scenario", "baseline",
                     "--threads", "2", "--csv", str(csv_path)])

        assert code == 0
        rows = pd.read_csv(csv_path)
        assert list(rows.columns) == ["scenario"] + COLUMNS
        assert len(rows) == 2
        assert set(rows["scenario"]) == {"baseline"}
        assert "Scenario: baseline (runs=2)" in capsys.readouterr().out

    def test_main_reports_config_errors(self, tmp_path, capsys):
        cfg_path = tmp_path / "cfg.yaml"
        bad = apply_overrides(SMALL_CFG, {"warehouse": {"Q_g": 2.5}})
        cfg_path.write_text(yaml.safe_dump(bad))

        assert main(["--config", str(cfg_path), "--scenario", "baseline"]) == 2
        assert "config error" in capsys.readouterr().err

    def test_main_missing_config_exits_2(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "absent.yaml"), "--scenario", "baseline"]) == 2
        assert "cannot read config" in capsys.readouterr().err

    def test_main_plots_relative_to_working_directory(self, tmp_path, monkeypatch):
        cfg = apply_overrides(SMALL_CFG, {"experiments": {"output_dir": "plots", "plot": {"x": "n", "y": "worker_util"}}})
        cfg_path = tmp_path / "cfg.yaml"
        cfg_path.write_text(yaml.safe_dump(cfg))
        workdir = tmp_path / "work"
        workdir.mkdir()
        monkeypatch.chdir(workdir)

        assert main(["--config", str(cfg_path), "--scenario", "baseline"]) == 0
        assert (workdir / "plots" / "baseline_worker_util_vs_n.png").exists()

    def test_main_unknown_scenario(self, tmp_path):
        cfg_path = tmp_path / "cfg.yaml"
        cfg_path.write_text(yaml.safe_dump(SMALL_CFG))
        assert main(["--config", str(cfg_path), "--scenario", "nope"]) == 2
