"""Post-session WPM chart rendering."""

import logging
from pathlib import Path
from typing import Optional

import matplotlib
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

matplotlib.rcParams["font.family"] = "DejaVu Sans"
matplotlib.rcParams["font.sans-serif"] = [
    "DejaVu Sans",
    "Arial",
    "Liberation Sans",
    "sans-serif",
]

log = logging.getLogger("typetrainer.chart")


def smooth_series(values: list[float], smoothness: int) -> list[float]:
    """Apply exponential smoothing to a series of WPM samples.

    Args:
        values: Samples in time order
        smoothness: Smoothing level (0-100); 0 returns the samples unchanged

    Returns:
        Smoothed samples, same length as the input
    """
    if not values or smoothness <= 0:
        return values[:]

    alpha = 1.0 / (10.0 ** (min(smoothness, 100) / 100.0 * 3))
    smoothed = [values[0]]
    for value in values[1:]:
        smoothed.append(alpha * value + (1 - alpha) * smoothed[-1])
    return smoothed


def build_wpm_figure(
    snapshots: list[float], title: Optional[str] = None, smoothness: int = 0
) -> Figure:
    """Plot per-second WPM samples with their mean as a reference line.

    Args:
        snapshots: Instantaneous WPM, one sample per elapsed second
        title: Optional chart title
        smoothness: Smoothing level (0-100)

    Returns:
        The matplotlib figure
    """
    figure = Figure(figsize=(8, 4), dpi=100)
    FigureCanvasAgg(figure)
    ax = figure.add_subplot(111)

    if not snapshots:
        ax.text(
            0.5,
            0.5,
            "No data available",
            ha="center",
            va="center",
            transform=ax.transAxes,
        )
        return figure

    values = smooth_series(snapshots, smoothness)
    seconds = list(range(1, len(values) + 1))
    ax.plot(
        seconds,
        values,
        linewidth=2,
        color="#3daee9",
        marker="o",
        markersize=4 if len(values) < 100 else 2,
        label="WPM",
    )

    mean = sum(snapshots) / len(snapshots)
    ax.axhline(mean, color="#f67400", linestyle="--", linewidth=1, label=f"Mean {mean:.0f}")

    ax.set_xlabel("Second", fontsize=10)
    ax.set_ylabel("WPM", fontsize=10)
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3, linestyle="--")
    ax.legend(loc="lower right", fontsize=9)
    if title:
        ax.set_title(title, fontsize=12)

    figure.subplots_adjust(left=0.12, right=0.95, top=0.9, bottom=0.15)
    return figure


def save_wpm_chart(
    snapshots: list[float],
    path: Path,
    title: Optional[str] = None,
    smoothness: int = 0,
) -> Path:
    """Render the WPM chart to an image file.

    Returns:
        The path written to
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    figure = build_wpm_figure(snapshots, title=title, smoothness=smoothness)
    figure.savefig(path)
    log.info(f"Saved WPM chart with {len(snapshots)} samples to {path}")
    return path
