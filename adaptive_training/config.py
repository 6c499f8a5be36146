"""Configuration management for the training log."""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


# load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class PathConfig:
    """File path configuration."""

    base_dir: Path
    data_dir: Path
    output_dir: Path

    @classmethod
    def default(cls) -> "PathConfig":
        """
        Create default path configuration.

        TRAINING_DATA_DIR and TRAINING_OUTPUT_DIR override the
        directories under the project root.
        """
        base = Path(__file__).parent.parent
        data_dir = os.getenv("TRAINING_DATA_DIR")
        output_dir = os.getenv("TRAINING_OUTPUT_DIR")
        return cls(
            base_dir=base,
            data_dir=Path(data_dir).expanduser() if data_dir else base / "data",
            output_dir=Path(output_dir).expanduser() if output_dir else base / "output",
        )


@dataclass(frozen=True)
class StorageConfig:
    """Key-value storage settings."""

    storage_file: Path
    storage_key: str = "training_data"

    @classmethod
    def from_env(cls, paths: Optional[PathConfig] = None) -> "StorageConfig":
        """
        Create config from environment variables.
        """
        paths = paths or PathConfig.default()
        storage_file = os.getenv("TRAINING_STORAGE_FILE")
        storage_key = os.getenv("TRAINING_STORAGE_KEY", "training_data")

        if not storage_key.strip():
            raise ValueError("TRAINING_STORAGE_KEY must not be empty.")

        return cls(
            storage_file=(
                Path(storage_file).expanduser()
                if storage_file
                else paths.data_dir / "storage.json"
            ),
            storage_key=storage_key,
        )


@dataclass(frozen=True)
class ExportConfig:
    """Spreadsheet export settings."""

    filename: str = "training_data.xlsx"
    sheet_name: str = "TrainingData"


@dataclass(frozen=True)
class AppConfig:
    """Application-wide configuration."""

    paths: PathConfig
    storage: StorageConfig
    export: ExportConfig

    @classmethod
    def load(cls) -> "AppConfig":
        """
        Load full application configuration.
        """
        paths = PathConfig.default()
        return cls(
            paths=paths,
            storage=StorageConfig.from_env(paths),
            export=ExportConfig(),
        )
