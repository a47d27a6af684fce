from __future__ import annotations

from pathlib import Path
from typing import Optional

HAS_MPL = False
plt = None  # type: ignore[assignment]

try:  # pragma: no cover - optional dependency
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MPL = True
except Exception:  # pragma: no cover - optional dependency missing
    plt = None  # type: ignore[assignment]


if HAS_MPL:  # pragma: no cover - tiny wrapper around matplotlib
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    def save(fig: Figure, path) -> Path:
        """Save the figure to *path* (parent directories created automatically)."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(str(target), bbox_inches="tight")
        plt.close(fig)
        return target

    def wide_grid(rows: int, cols: int):
        """Create a grid of subplots sized for side-by-side timing charts."""
        fig, axes = plt.subplots(rows, cols, figsize=(cols * 6.0, rows * 4.0), squeeze=False)
        return fig, axes

    def timing_axes(ax: Axes, title: str, xlabel: Optional[str] = None, *, log_time: bool = True) -> Axes:
        """Style an axis whose y values are elapsed seconds."""
        ax.set_title(title)
        if xlabel:
            ax.set_xlabel(xlabel)
        ax.set_ylabel("Elapsed time (s)")
        if log_time:
            ax.set_yscale("log")
        ax.grid(True, which="both", alpha=0.3)
        return ax

else:  # pragma: no cover - exercised when matplotlib is unavailable

    def save(fig, path) -> Path:
        """Fallback save that simply ensures the destination directory exists."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def wide_grid(rows: int, cols: int):
        """Fallback that returns (None, None) when matplotlib is absent."""
        return None, None

    def timing_axes(ax, title: str, xlabel: Optional[str] = None, *, log_time: bool = True):
        """Fallback that performs no styling when matplotlib is absent."""
        return ax

__all__ = [
    "HAS_MPL",
    "save",
    "wide_grid",
    "timing_axes",
]
