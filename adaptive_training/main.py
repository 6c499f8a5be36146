"""
Main entry point for the training log.

Provides CLI interface for logging sets, showing history, charting
e1RM trends, and moving the log in and out of Excel workbooks.
"""

import sys
import math
import logging
import argparse
from pathlib import Path
from typing import Sequence

from .analyzer import filter_by_exercise
from .config import AppConfig
from .models import Entry
from .session import TrainingSession
from .spreadsheet import SpreadsheetError
from .storage import EntryStore, JsonFileStorage, StorageError
from .visualizations import plot_e1rm_trend


logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def finite_float(value: str) -> float:
    """Argparse type accepting only finite numbers."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(f"weight must be finite, got {value!r}")
    return number


def open_session(config: AppConfig) -> TrainingSession:
    """
    Load the entry store from disk and start a session on it.

    Parameters:
        config: Application configuration.

    Returns:
        Session bound to the hydrated store.
    """
    storage = JsonFileStorage(config.storage.storage_file)
    store = EntryStore(storage, key=config.storage.storage_key)
    store.load()
    return TrainingSession(store, sheet_name=config.export.sheet_name)


def print_history(entries: Sequence[Entry]) -> None:
    """
    Print logged sets as a table.

    Parameters:
        entries: Entries in insertion order.
    """
    if not entries:
        print("No sets logged yet.")
        return

    print("\n" + "=" * 60)
    print("TRAINING LOG")
    print("=" * 60)
    print(f"{'Week':>4}  {'Exercise':<20} {'Kg':>7} {'Reps':>4} {'RIR':>3} {'e1RM':>7}")
    for e in entries:
        print(
            f"{e.week:>4}  {e.exercise:<20} {e.weight:>7g} "
            f"{e.reps:>4} {e.rir:>3} {e.e1rm:>7.1f}"
        )
    print("=" * 60)


def cmd_log(args: argparse.Namespace, config: AppConfig) -> None:
    """Log a set and show the next-session suggestion."""
    session = open_session(config)
    session.week = args.week
    session.exercise = args.exercise
    session.weight = args.weight
    session.reps = args.reps
    session.rir = args.rir

    entry = session.save()
    if entry is None:
        logger.warning("Exercise name is empty, nothing logged")
        return

    print(f"\ne1RM: {entry.e1rm:.1f} kg")
    print(f"Next session: {session.suggestion}")

    if args.chart:
        output_dir = config.paths.output_dir
        plot_e1rm_trend(
            session.store, session.exercise, output_dir / "e1rm_trend.png", show=True
        )


def cmd_history(args: argparse.Namespace, config: AppConfig) -> None:
    """Show logged sets."""
    session = open_session(config)
    entries = list(session.store)
    if args.exercise is not None:
        entries = filter_by_exercise(entries, args.exercise)
    print_history(entries)


def cmd_chart(args: argparse.Namespace, config: AppConfig) -> None:
    """Generate the e1RM trend chart for one exercise."""
    session = open_session(config)
    session.exercise = args.exercise

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = config.paths.output_dir / "e1rm_trend.png"

    plot_e1rm_trend(session.store, session.exercise, output_path, show=not args.no_show)


def cmd_export(args: argparse.Namespace, config: AppConfig) -> None:
    """Export all entries to an Excel workbook."""
    session = open_session(config)

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = config.paths.output_dir / config.export.filename

    session.export(output_path)


def cmd_import(args: argparse.Namespace, config: AppConfig) -> None:
    """Replace all entries with the contents of an Excel workbook."""
    path = Path(args.file)
    if not path.is_file():
        logger.error(f"Import file not found: {path}")
        sys.exit(1)

    session = open_session(config)
    session.import_file(path)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Adaptive training log with e1RM tracking"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # log command
    log_parser = subparsers.add_parser("log", help="Log a set")
    log_parser.add_argument("--week", type=int, default=1, help="Training week")
    log_parser.add_argument("--exercise", "-e", default="", help="Exercise name")
    log_parser.add_argument(
        "--weight", "-w", type=finite_float, default=0, help="Load in kg"
    )
    log_parser.add_argument("--reps", "-r", type=int, default=0, help="Reps performed")
    log_parser.add_argument("--rir", type=int, default=0, help="Reps in reserve")
    log_parser.add_argument(
        "--chart", action="store_true", help="Show the e1RM trend after logging"
    )

    # history command
    history_parser = subparsers.add_parser("history", help="Show logged sets")
    history_parser.add_argument("--exercise", "-e", help="Only show this exercise")

    # chart command
    chart_parser = subparsers.add_parser("chart", help="Plot e1RM trend")
    chart_parser.add_argument("--exercise", "-e", required=True, help="Exercise name")
    chart_parser.add_argument(
        "--no-show", action="store_true", help="Save plot without displaying"
    )
    chart_parser.add_argument("--output", "-o", type=str, help="Image output path")

    # export command
    export_parser = subparsers.add_parser("export", help="Export to Excel")
    export_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file or directory (default: output dir)",
    )

    # import command
    import_parser = subparsers.add_parser("import", help="Import from Excel")
    import_parser.add_argument("file", help="Path to .xlsx file")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = AppConfig.load()

    commands = {
        "log": cmd_log,
        "history": cmd_history,
        "chart": cmd_chart,
        "export": cmd_export,
        "import": cmd_import,
    }

    try:
        commands[args.command](args, config)
    except (StorageError, SpreadsheetError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
