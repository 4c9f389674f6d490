"""
experiments/report.py

Output side of the harness: print a sweep table, export it as CSV, and plot
one result column against another. These only read the DataFrame returned by
warehouse_sim.sweep.sweep; nothing here feeds back into a simulation.
"""

from __future__ import annotations
import os
from typing import Optional
import pandas as pd

def print_table(df: pd.DataFrame, title: Optional[str] = None):
    """Print the full table with compact float formatting."""
    if title:
        print(title)
    if df.empty:
        print("  (no runs)")
        return
    print(df.to_string(index=False, float_format=lambda v: f"{v:.4f}"))

def write_csv(df: pd.DataFrame, path: str) -> str:
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    df.to_csv(path, index=False)
    return path

def plot_results(df: pd.DataFrame, x: str, y: str, out_path: str, title: Optional[str] = None):
    """
    Persist a PNG plot of column `y` against column `x`. Rows sharing an x
    value are averaged; when the worker count varies and is not the x axis,
    one line is drawn per worker count.
    """
    for col in (x, y):
        if col not in df.columns:
            raise KeyError(f"Unknown column {col!r}; available: {', '.join(df.columns)}")
    if df.empty:
        return None
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt  # type: ignore
    except Exception:
        return None
    plt.figure(figsize=(9, 5))
    if x != "n" and df["n"].nunique() > 1:
        for n_workers, group in df.groupby("n"):
            pts = group.groupby(x)[y].mean()
            plt.plot(pts.index, pts.values, marker="o", linewidth=1.5, label=f"n = {n_workers}")
        plt.legend()
    else:
        pts = df.groupby(x)[y].mean()
        plt.plot(pts.index, pts.values, marker="o", linewidth=1.5, color="#2563eb")
    plt.xlabel(x)
    plt.ylabel(y)
    plt.title(title or f"{y} vs {x}")
    plt.grid(True, linestyle="--", alpha=0.4)
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    return out_path
