"""
Training log visualization.

Provides the e1RM trend chart for a single exercise using matplotlib.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np

from .analyzer import build_trend_series
from .models import Entry


logger = logging.getLogger(__name__)

# plot styling
plt.style.use("seaborn-v0_8-whitegrid")
COLORS = {
    "primary": "#00b36b",
    "secondary": "#64748b",
    "accent": "#f59e0b",
}


def plot_e1rm_trend(
    entries: Iterable[Entry],
    exercise: str,
    output_path: Optional[Path] = None,
    show: bool = True,
) -> bool:
    """
    Plot estimated one-rep max over training weeks for one exercise.

    Parameters:
        entries: Logged sets in insertion order.
        exercise: Exercise name to chart (exact match).
        output_path: Optional path to save the figure.
        show: Whether to display the plot.

    Returns:
        True if a chart was drawn, False if there was nothing to plot.
    """
    data = build_trend_series(entries, exercise)

    if not data:
        logger.warning(f"No e1RM data to plot for '{exercise}'")
        return False

    fig, ax = plt.subplots(figsize=(12, 6))

    weeks = np.array([d["week"] for d in data], dtype=float)
    e1rms = np.array([d["e1rm"] for d in data], dtype=float)

    ax.plot(
        weeks,
        e1rms,
        "o-",
        color=COLORS["primary"],
        linewidth=2,
        markersize=6,
        label="e1RM",
    )

    # linear fit needs at least two distinct weeks
    if len(np.unique(weeks)) >= 2:
        slope, intercept = np.polyfit(weeks, e1rms, 1)
        xs = np.array([weeks.min(), weeks.max()])
        ax.plot(
            xs,
            slope * xs + intercept,
            "--",
            color=COLORS["accent"],
            linewidth=1.5,
            label=f"Trend: {slope:+.2f} kg/week",
        )

    ax.set_xlabel("Week", fontsize=11)
    ax.set_ylabel("e1RM (kg)", fontsize=11)
    ax.set_title(f"Performance Trend (e1RM): {exercise}", fontsize=14, fontweight="bold")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        logger.info(f"Saved plot to {output_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return True
