"""Tests for the training CLI: config precedence and dispatch."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from intruder_rl.experiments.train import main


def _run(argv: list[str], capsys: pytest.CaptureFixture[str]) -> dict:
    main(argv)
    return json.loads(capsys.readouterr().out)


class TestTrainCli:
    def test_prints_summary_and_writes_artifacts(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        summary = _run(
            [
                "--ticks", "20",
                "--seed", "2",
                "--width", "6",
                "--height", "5",
                "--out-dir", str(tmp_path),
            ],
            capsys,
        )
        assert summary["run_id"] == "learned_seed2"
        assert summary["ticks"] == 20
        assert sum(summary["outcome_counts"].values()) == 20
        assert (tmp_path / "summary.json").exists()
        assert (tmp_path / "logs" / "tick_log.parquet").exists()

    def test_cli_overrides_config_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps(
                {
                    "ticks": 15,
                    "mode": "baseline",
                    "world": {"width": 6, "height": 6, "density": 0.2},
                    "reward": {"collide": -50.0},
                }
            )
        )
        out_dir = tmp_path / "run"
        summary = _run(
            ["--config", str(config_path), "--width", "7", "--out-dir", str(out_dir)], capsys
        )
        assert summary["ticks"] == 15
        assert summary["mode"] == "baseline"
        assert summary["table_size"] == 0

        written = json.loads((out_dir / "summary.json").read_text())
        assert written["config"]["world"]["width"] == 7
        assert written["config"]["world"]["height"] == 6
        assert written["config"]["reward"]["collide"] == -50.0

    def test_missing_config_file_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "missing.json")])

    def test_invalid_density_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--density", "1.5", "--out-dir", str(tmp_path)])

    def test_render_flag_dispatches_renderers(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with (
            patch("intruder_rl.experiments.train.render_board") as mock_board,
            patch("intruder_rl.experiments.train.render_outcome_curve") as mock_curve,
        ):
            _run(["--ticks", "5", "--render", "--out-dir", str(tmp_path)], capsys)
        mock_board.assert_called_once()
        mock_curve.assert_called_once()
        assert mock_curve.call_args.kwargs["window"] == 50

    def test_no_render_by_default(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("intruder_rl.experiments.train.render_board") as mock_board:
            _run(["--ticks", "5", "--out-dir", str(tmp_path)], capsys)
        mock_board.assert_not_called()

    def test_cli_flag_replaces_invalid_file_value(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"world": {"width": 0, "height": 4}}))
        out_dir = tmp_path / "run"
        summary = _run(
            [
                "--config", str(config_path),
                "--width", "6",
                "--ticks", "5",
                "--out-dir", str(out_dir),
            ],
            capsys,
        )
        assert summary["ticks"] == 5
        written = json.loads((out_dir / "summary.json").read_text())
        assert written["config"]["world"]["width"] == 6
        assert written["config"]["world"]["height"] == 4

    def test_numeric_strings_in_nested_sections_are_coerced(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps(
                {
                    "ticks": "3",
                    "world": {"width": "6", "height": "5", "density": "0.2"},
                    "reward": {"stay": "0.5"},
                    "learning": {"learn_iterations": "2"},
                }
            )
        )
        out_dir = tmp_path / "run"
        summary = _run(["--config", str(config_path), "--out-dir", str(out_dir)], capsys)
        assert summary["ticks"] == 3
        written = json.loads((out_dir / "summary.json").read_text())
        assert written["config"]["world"] == {"width": 6, "height": 5, "density": 0.2}
        assert written["config"]["reward"]["stay"] == 0.5
        assert written["config"]["learning"]["learn_iterations"] == 2

    def test_unknown_section_key_exits(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"world": {"depth": 3}}))
        with pytest.raises(SystemExit):
            main(["--config", str(config_path), "--out-dir", str(tmp_path)])

    def test_zero_ticks_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--ticks", "0", "--out-dir", str(tmp_path)])
