"""
Tests for the command-line interface.

Runs commands against a temporary storage file.
"""

import json
import sys

import pytest

from adaptive_training import main as cli
from adaptive_training.config import AppConfig


@pytest.fixture
def env(tmp_path, monkeypatch):
    """Point storage and output at a temporary directory."""
    monkeypatch.setenv("TRAINING_STORAGE_FILE", str(tmp_path / "data" / "storage.json"))
    monkeypatch.setenv("TRAINING_OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.delenv("TRAINING_STORAGE_KEY", raising=False)
    return tmp_path


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["adaptive-training", *args])
    cli.main()


def log_set(monkeypatch, week, exercise, weight, reps, rir):
    run(
        monkeypatch,
        "log",
        "--week", str(week),
        "--exercise", exercise,
        "--weight", str(weight),
        "--reps", str(reps),
        "--rir", str(rir),
    )


class TestConfig:
    """Tests for environment-driven configuration."""

    def test_env_overrides(self, env):
        """Test storage file and output dir come from the environment."""
        config = AppConfig.load()

        assert config.storage.storage_file == env / "data" / "storage.json"
        assert config.storage.storage_key == "training_data"
        assert config.paths.output_dir == env / "output"
        assert config.export.filename == "training_data.xlsx"
        assert config.export.sheet_name == "TrainingData"

    def test_empty_key_rejected(self, env, monkeypatch):
        """Test blank storage key is a configuration error."""
        monkeypatch.setenv("TRAINING_STORAGE_KEY", " ")
        with pytest.raises(ValueError):
            AppConfig.load()


class TestCli:
    """Tests for CLI commands."""

    def test_no_command(self, monkeypatch):
        """Test missing command prints help and exits."""
        with pytest.raises(SystemExit) as exc:
            run(monkeypatch)
        assert exc.value.code == 1

    def test_log_prints_suggestion(self, env, monkeypatch, capsys):
        """Test logging a set prints the next-session directive."""
        log_set(monkeypatch, 1, "Squat", 100, 5, 3)

        out = capsys.readouterr().out
        assert "Next session: +2.5kg → 102.5 kg x 5" in out

        blob = json.loads((env / "data" / "storage.json").read_text())
        records = json.loads(blob["training_data"])
        assert records[0]["exercise"] == "Squat"

    def test_log_empty_exercise(self, env, monkeypatch, capsys):
        """Test logging without exercise stores nothing."""
        run(monkeypatch, "log", "--weight", "100", "--reps", "5")

        assert "Next session" not in capsys.readouterr().out
        assert not (env / "data" / "storage.json").exists()

    def test_history_filter(self, env, monkeypatch, capsys):
        """Test history shows only the requested exercise."""
        log_set(monkeypatch, 1, "Squat", 100, 5, 3)
        log_set(monkeypatch, 1, "Bench", 70, 8, 2)
        capsys.readouterr()

        run(monkeypatch, "history", "--exercise", "Bench")
        out = capsys.readouterr().out

        assert "Bench" in out
        assert "Squat" not in out

    def test_history_empty(self, env, monkeypatch, capsys):
        """Test history without data."""
        run(monkeypatch, "history")
        assert "No sets logged yet." in capsys.readouterr().out

    def test_export_and_import(self, env, monkeypatch, capsys):
        """Test export then import restores the log."""
        log_set(monkeypatch, 1, "Squat", 100, 5, 3)
        log_set(monkeypatch, 2, "Squat", 102.5, 5, 2)

        run(monkeypatch, "export")
        exported = env / "output" / "training_data.xlsx"
        assert exported.exists()

        (env / "data" / "storage.json").unlink()
        run(monkeypatch, "import", str(exported))
        capsys.readouterr()

        run(monkeypatch, "history")
        out = capsys.readouterr().out
        assert out.count("Squat") == 2

    def test_import_missing_file(self, env, monkeypatch):
        """Test importing a nonexistent file exits with an error."""
        with pytest.raises(SystemExit) as exc:
            run(monkeypatch, "import", str(env / "missing.xlsx"))
        assert exc.value.code == 1

    def test_import_directory(self, env, monkeypatch):
        """Test importing a directory exits with an error."""
        with pytest.raises(SystemExit) as exc:
            run(monkeypatch, "import", str(env))
        assert exc.value.code == 1

    def test_log_rejects_nan_weight(self, env, monkeypatch):
        """Test non-finite weights are refused by the argument parser."""
        with pytest.raises(SystemExit) as exc:
            log_set(monkeypatch, 4, "Squat", "nan", 5, 2)
        assert exc.value.code == 2
        assert not (env / "data" / "storage.json").exists()

    def test_corrupt_storage_exits(self, env, monkeypatch):
        """Test unreadable storage exits with an error."""
        path = env / "data" / "storage.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"training_data": "not json"}))

        with pytest.raises(SystemExit) as exc:
            run(monkeypatch, "history")
        assert exc.value.code == 1

    def test_chart_no_show(self, env, monkeypatch):
        """Test chart command saves an image."""
        log_set(monkeypatch, 1, "Squat", 100, 5, 3)
        log_set(monkeypatch, 2, "Squat", 102.5, 5, 2)

        output = env / "chart.png"
        run(monkeypatch, "chart", "-e", "Squat", "--no-show", "-o", str(output))

        assert output.exists()
