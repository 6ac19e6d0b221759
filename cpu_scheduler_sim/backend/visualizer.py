from __future__ import annotations

from typing import List, Optional, Dict, Sequence
import os
import matplotlib.pyplot as plt

from .core import Job
from .sweep import SweepRecord
from .utils import EventLogger


def ensure_dir(path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def _finish(fig, out_path: Optional[str]) -> None:
    fig.tight_layout()
    if out_path:
        ensure_dir(out_path)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()


def plot_gantt(jobs: List[Job], logger: EventLogger, out_path: Optional[str] = None, title: str = "Gantt Chart") -> None:
    fig, ax = plt.subplots(figsize=(12, 3 + 0.2 * max(1, len(jobs))))

    cmap = plt.get_cmap("tab20")
    ids_order = sorted({seg["job_id"] for seg in logger.timeline if seg.get("job_id") is not None})
    y_positions: Dict[int, int] = {job_id: i for i, job_id in enumerate(ids_order)}

    for seg in logger.timeline:
        job_id = seg.get("job_id")
        start = seg["start"]
        end = seg["end"]
        if job_id is None:
            if seg.get("reason") == "context_switch":
                # overhead shown as a shaded band across all rows
                ax.axvspan(start, end, color="#bbbbbb", alpha=0.4, linewidth=0)
            continue
        ax.barh(y_positions[job_id], end - start, left=start, color=cmap(job_id % 20), edgecolor="black", alpha=0.9)

    ax.set_yticks([y_positions[job_id] for job_id in ids_order])
    ax.set_yticklabels([f"J{job_id}" for job_id in ids_order])
    ax.set_xlabel("Time (s)")
    ax.set_title(title)
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)
    _finish(fig, out_path)


def plot_sweep(records: Sequence[SweepRecord], metric: str = "avg_waiting_time", out_path: Optional[str] = None) -> None:
    """One line per overhead value: `metric` against quantum."""
    fig, ax = plt.subplots(figsize=(8, 5))
    overheads = sorted({r.overhead for r in records})
    for overhead in overheads:
        row = sorted((r for r in records if r.overhead == overhead), key=lambda r: r.quantum)
        ax.plot([r.quantum for r in row], [getattr(r, metric) for r in row], marker="o", label=f"overhead {overhead:g} ms")
    ax.set_xlabel("Quantum (ms)")
    ax.set_ylabel(metric.replace("_", " "))
    ax.set_title(f"Round Robin sweep: {metric.replace('_', ' ')}")
    ax.legend(fontsize=8)
    ax.grid(True, linestyle=":", alpha=0.5)
    _finish(fig, out_path)
