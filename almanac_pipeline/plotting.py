from __future__ import annotations
from typing import Dict, List, Optional
import matplotlib.pyplot as plt

from .range_map import Interval

def plot_stage_trace(
    trace: Dict[str, List[Interval]],
    title: str = "",
    show: bool = True,
    save_path: Optional[str] = None,
):
    """Draw the interval set after each stage, one horizontal lane per stage.
    Lanes run top (seeds) to bottom (final stage).
    """
    names = list(trace.keys())
    fig, ax = plt.subplots(figsize=(12, 0.6 * max(len(names), 1) + 1.5))
    for lane, name in enumerate(names):
        spans = trace[name]
        if not spans:
            continue
        y = len(names) - 1 - lane
        ax.broken_barh([(s, e - s) for (s, e) in spans], (y - 0.4, 0.8), alpha=0.6)
    ax.set_yticks(range(len(names)))
    ax.set_yticklabels(list(reversed(names)), fontsize=8)
    ax.set_title(title)
    ax.set_xlabel("Value")
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    if show:
        plt.show()
    plt.close(fig)
