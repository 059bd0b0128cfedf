"""
Unit tests for the progression command-line entry point.
"""
import json

import pytest

from application.exceptions import DatabaseNotConfiguredError
from backend import cli
from backend.core.progression_service import ProgressionService
from backend.settings import Settings
from tests.fakes import FakeProgressionRepository


SQUAT_LOGS = [
    {"date": "2026-02-20", "exercises": [
        {"name": "Back Squat", "performed_sets": [{"reps": 5, "weight_kg": 100}, {"reps": 5, "weight_kg": 102.5}]},
    ]},
    {"date": "2026-02-27", "exercises": [
        {"name": "Back Squat", "performed_sets": [{"reps": 5, "weight_kg": 105}, {"reps": 5, "weight_kg": 107.5}]},
    ]},
]


@pytest.fixture
def settings(monkeypatch):
    settings = Settings(environment="test", _env_file=None)
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    return settings


@pytest.fixture
def repo(monkeypatch, settings):
    repo = FakeProgressionRepository()
    monkeypatch.setattr(cli, "build_service", lambda s: ProgressionService(repo, settings=s))
    return repo


@pytest.mark.unit
class TestSnapshotsCommand:
    """Tests for the offline snapshots command."""

    def test_prints_snapshots(self, settings, tmp_path, capsys):
        path = tmp_path / "logs.json"
        path.write_text(json.dumps(SQUAT_LOGS))

        cli.main(["snapshots", str(path)])

        payload = json.loads(capsys.readouterr().out)
        assert len(payload) == 1
        assert payload[0]["exercise_name"] == "Back Squat"
        assert payload[0]["e1rm"] == 121.04
        assert payload[0]["total_volume"] == 518.75

    def test_accepts_wrapped_input_and_output_file(self, settings, tmp_path):
        path = tmp_path / "logs.json"
        path.write_text(json.dumps({"workouts": SQUAT_LOGS}))
        out = tmp_path / "out.json"

        cli.main(["snapshots", str(path), "-o", str(out)])

        assert json.loads(out.read_text())[0]["sample_size"] == 4

    def test_missing_file_exits(self, settings, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["snapshots", str(tmp_path / "missing.json")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_json_exits(self, settings, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SystemExit) as exc:
            cli.main(["snapshots", str(path)])
        assert exc.value.code == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_non_list_input_exits(self, settings, tmp_path, capsys):
        path = tmp_path / "scalar.json"
        path.write_text("42")
        with pytest.raises(SystemExit) as exc:
            cli.main(["snapshots", str(path)])
        assert exc.value.code == 1


@pytest.mark.unit
class TestStoredDataCommands:
    """Tests for commands backed by the repository."""

    def test_recompute(self, repo, capsys):
        repo.seed_workout_logs("user-1", SQUAT_LOGS)

        cli.main(["recompute", "--user-id", "user-1"])

        payload = json.loads(capsys.readouterr().out)
        assert payload["snapshot_count"] == 1

    def test_targets_with_filter(self, repo, capsys):
        repo.seed_snapshots("user-1", [
            {"exercise_name": "Bench Press", "e1rm": 100, "trend_score": 0.05},
            {"exercise_name": "Back Squat", "e1rm": 140},
        ])

        cli.main(["targets", "--user-id", "user-1", "--exercises", "bench press, ,Row"])

        payload = json.loads(capsys.readouterr().out)
        assert payload["sparse_history"] is False
        assert [t["exercise_name"] for t in payload["targets"]] == ["Bench Press"]
        assert payload["targets"][0]["target_load_kg"] == 75.0

    def test_analytics(self, repo, capsys):
        repo.seed_workout_logs("user-1", SQUAT_LOGS)
        repo.seed_snapshots("user-1", [{"exercise_name": "Back Squat", "e1rm": 121.04, "sample_size": 4}])

        cli.main(["analytics", "--user-id", "user-1", "--today", "2026-03-01", "--period-days", "7"])

        payload = json.loads(capsys.readouterr().out)
        assert payload["period_days"] == 7
        assert len(payload["progression_trend_points"]) == 2
        assert payload["progression_e1rm_metrics"][0]["exercise_name"] == "Back Squat"
        assert payload["progression_adherence"] is None

    def test_unconfigured_database_exits(self, settings, monkeypatch, capsys):
        def not_configured(s):
            raise DatabaseNotConfiguredError("Database not available.")

        monkeypatch.setattr(cli, "build_service", not_configured)

        with pytest.raises(SystemExit) as exc:
            cli.main(["recompute", "--user-id", "user-1"])
        assert exc.value.code == 1
        assert "Database not available" in capsys.readouterr().err
