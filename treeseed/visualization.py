import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

logger = logging.getLogger("treeseed.visualization")


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def next_unique_path(path: str | Path) -> str:
    """If the file exists, append _1, _2 ... until a free name is found."""
    p = Path(path)
    if not p.exists():
        return str(p)
    stem = p.stem
    suffix = p.suffix
    parent = p.parent
    counter = 1
    while True:
        candidate = parent / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return str(candidate)
        counter += 1


def save_convergence_plot(
    histories: Dict[str, Sequence[float]],
    filepath: str,
    baseline: Optional[float] = None,
    title: str = "Convergence",
) -> str:
    """Draw best-so-far fitness per round for one or more runs and save it.

    Args:
        histories: label -> per-round best fitness.
        filepath: Target PNG path (parent directories are created).
        baseline: Optional reference fitness drawn as a horizontal line.
        title: Plot title.

    Returns:
        The path the figure was written to.
    """
    fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)
    for label, values in histories.items():
        values = list(values)
        if not values:
            continue
        rounds = list(range(1, len(values) + 1))
        ax.plot(
            rounds,
            values,
            label=label,
            linewidth=2,
            marker="o",
            markersize=4,
            markerfacecolor="white",
            markeredgewidth=1.0,
        )
        ax.annotate(
            f"{values[-1]:.2f}",
            xy=(rounds[-1], values[-1]),
            xytext=(6, -10),
            textcoords="offset points",
            fontsize=9,
            color="black",
            bbox=dict(boxstyle="round,pad=0.2", facecolor="white", alpha=0.55),
        )
    if baseline is not None:
        ax.axhline(y=baseline, color="red", linestyle="--", linewidth=1.2, label="round-robin")
    ax.set_xlabel("Round", fontsize=12)
    ax.set_ylabel("Fitness", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.25, linestyle="--", linewidth=0.7)
    ax.legend(
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        frameon=False,
        fontsize=9,
        borderaxespad=0.0,
    )
    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Convergence plot saved as: %s", filepath)
    return filepath


def save_load_chart(
    loads: Dict[str, Sequence[float]],
    filepath: str,
    title: str = "Per-resource load",
) -> str:
    """Grouped bar chart of per-resource load for several assignments."""
    series: List[tuple[str, List[float]]] = [(k, list(v)) for k, v in loads.items()]
    m = max((len(v) for _, v in series), default=0)
    fig, ax = plt.subplots(figsize=(min(6 + m * 0.4, 18), 5), constrained_layout=True)
    width = 0.8 / max(len(series), 1)
    for idx, (label, values) in enumerate(series):
        xs = [i + idx * width for i in range(len(values))]
        ax.bar(xs, values, width=width, label=label, alpha=0.85, edgecolor="black", linewidth=0.6)
    ax.set_xticks([i + 0.4 - width / 2 for i in range(m)])
    ax.set_xticklabels([f"R{i}" for i in range(m)])
    ax.set_xlabel("Resource", fontsize=12)
    ax.set_ylabel("Load", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.25, axis="y", linestyle="--", linewidth=0.7)
    ax.legend(fontsize=9)
    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Load chart saved as: %s", filepath)
    return filepath
