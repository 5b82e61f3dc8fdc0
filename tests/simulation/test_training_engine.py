"""Tests for the headless training engine (run_training)."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from intruder_rl.config.types import (
    LearningConfig,
    SimulationConfig,
    TrainingMode,
    WorldConfig,
)
from intruder_rl.io.schemas import TICK_LOG_SCHEMA
from intruder_rl.simulation.engine import build_trainer, run_ticks, run_training

CONFIG = SimulationConfig(
    world=WorldConfig(width=8, height=6, density=0.3),
    learning=LearningConfig(exploration_rate=0.2),
)


class TestRunTraining:
    def test_produces_tick_log_parquet(self, tmp_path: Path) -> None:
        run_training(CONFIG, tmp_path, ticks=25, seed=1)
        assert (tmp_path / "logs" / "tick_log.parquet").exists()

    def test_tick_log_has_schema_columns_and_one_row_per_tick(self, tmp_path: Path) -> None:
        run_training(CONFIG, tmp_path, ticks=25, seed=1)
        table = pq.read_table(tmp_path / "logs" / "tick_log.parquet")
        assert set(table.column_names) == {f.name for f in TICK_LOG_SCHEMA}
        assert table.num_rows == 25
        assert table.column("tick").to_pylist() == list(range(25))

    def test_actions_and_states_are_well_formed(self, tmp_path: Path) -> None:
        run_training(CONFIG, tmp_path, ticks=40, seed=2)
        table = pq.read_table(tmp_path / "logs" / "tick_log.parquet")
        assert set(table.column("action").to_pylist()) <= {-1, 0, 1}
        for key in table.column("state").to_pylist():
            assert len(key) == 9
            assert key[4] == "I"

    def test_summary_json_matches_result(self, tmp_path: Path) -> None:
        result = run_training(CONFIG, tmp_path, ticks=30, seed=3)
        payload = json.loads((tmp_path / "summary.json").read_text())
        assert payload["run_id"] == result.run_id == "learned_seed3"
        assert payload["ticks"] == 30
        assert sum(payload["outcome_counts"].values()) == 30
        assert payload["config"]["world"]["width"] == 8
        assert payload["table_size"] == result.table_size > 0

    def test_same_seed_is_deterministic(self, tmp_path: Path) -> None:
        run_training(CONFIG, tmp_path / "a", ticks=50, seed=9)
        run_training(CONFIG, tmp_path / "b", ticks=50, seed=9)
        a = pq.read_table(tmp_path / "a" / "logs" / "tick_log.parquet")
        b = pq.read_table(tmp_path / "b" / "logs" / "tick_log.parquet")
        assert a.column("action").to_pylist() == b.column("action").to_pylist()
        assert a.column("outcome").to_pylist() == b.column("outcome").to_pylist()

    def test_baseline_mode_learns_nothing(self, tmp_path: Path) -> None:
        result = run_training(CONFIG, tmp_path, ticks=20, seed=0, mode=TrainingMode.BASELINE)
        assert result.mode is TrainingMode.BASELINE
        assert result.table_size == 0
        assert result.state_count == 0
        table = pq.read_table(tmp_path / "logs" / "tick_log.parquet")
        assert set(table.column("decision").to_pylist()) == {"baseline"}

    def test_rejects_zero_ticks(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="ticks"):
            run_training(CONFIG, tmp_path, ticks=0)

    def test_flushes_in_chunks(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("intruder_rl.simulation.engine.FLUSH_THRESHOLD", 4)
        trainer = build_trainer(CONFIG, seed=5)
        run_ticks(trainer, ticks=10, out_dir=tmp_path, run_id="chunked")
        table = pq.read_table(tmp_path / "logs" / "tick_log.parquet")
        assert table.num_rows == 10
        assert set(table.column("run_id").to_pylist()) == {"chunked"}

    def test_summary_reports_distinct_states(self, tmp_path: Path) -> None:
        result = run_training(CONFIG, tmp_path, ticks=40, seed=6)
        payload = json.loads((tmp_path / "summary.json").read_text())
        assert payload["state_count"] == result.state_count
        assert 0 < result.state_count <= result.table_size

    def test_accepts_prebuilt_trainer(self, tmp_path: Path) -> None:
        trainer = build_trainer(CONFIG, seed=8)
        result = run_training(CONFIG, tmp_path, ticks=12, seed=8, trainer=trainer)
        assert trainer.ticks == result.ticks == 12
        assert result.table_size == len(trainer.value_table)
        assert (tmp_path / "summary.json").exists()
