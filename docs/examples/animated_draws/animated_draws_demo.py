"""
Animated draws: sampler() and bootstrapper() as frame data sources
------------------------------------------------------------------

This script shows how a plotting layer uses redraw:

1. Build a synthetic dataset with three groups of very different sizes.
2. Create a stratified sampler and a bootstrapper.
3. Animate one draw per frame with matplotlib. The resampling function is
   called again on every frame; because each call installs the same random
   baseline, the frames are stable no matter how often they are redrawn.

Output: two GIFs in ./plots (requires matplotlib with the Pillow writer).
"""

from __future__ import annotations

import os
import sys

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.animation import FuncAnimation, PillowWriter

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src")))
# --8<-- [start:imports]
from redraw import bootstrapper, sampler, select_draw

# --8<-- [end:imports]

PLOTS_DIR = os.path.join(os.path.dirname(__file__), "plots")
N_DRAWS = 12


def make_data(seed: int = 0) -> pd.DataFrame:
    """Three groups (A: 100, B: 10, C: 3 rows) with group-specific means."""
    rng = np.random.RandomState(seed)
    sizes = {"A": 100, "B": 10, "C": 3}
    means = {"A": 0.0, "B": 1.5, "C": 3.0}
    frames = [
        pd.DataFrame({"type": t, "x": rng.normal(means[t], 0.6, size=n)})
        for t, n in sizes.items()
    ]
    return pd.concat(frames, ignore_index=True)


def animate(resample, data: pd.DataFrame, title: str, path: str) -> None:
    """Animate one draw per frame, re-invoking ``resample`` each time."""
    fig, ax = plt.subplots(figsize=(6, 3))
    types = sorted(data["type"].unique())
    offsets = {t: i for i, t in enumerate(types)}

    def update(frame: int):
        ax.clear()
        ax.scatter(data["x"], data["type"].map(offsets), color="0.85", s=12)
        draw = select_draw(resample(data), frame + 1)
        sizes = 20 * draw[".copies"] if ".copies" in draw.columns else 20
        ax.scatter(draw["x"], draw["type"].map(offsets), color="tab:red", s=sizes)
        for t in types:
            mean = draw.loc[draw["type"] == t, "x"].mean()
            ax.vlines(mean, offsets[t] - 0.3, offsets[t] + 0.3, color="tab:red")
        ax.set_yticks(range(len(types)), types)
        ax.set_title(f"{title} (draw {frame + 1}/{N_DRAWS})")
        return ax.collections

    anim = FuncAnimation(fig, update, frames=N_DRAWS, interval=500)
    anim.save(path, writer=PillowWriter(fps=2))
    plt.close(fig)


if __name__ == "__main__":
    os.makedirs(PLOTS_DIR, exist_ok=True)
    data = make_data()

    stratified = sampler(times=N_DRAWS, size=3, group="type", seed=123)
    animate(stratified, data, "3 rows per group", os.path.join(PLOTS_DIR, "sampler.gif"))

    boot = bootstrapper(times=N_DRAWS, group="type", seed=123)
    animate(boot, data, "bootstrap per group", os.path.join(PLOTS_DIR, "bootstrap.gif"))

    # Same function, same data: identical frames on every call.
    assert stratified(data).equals(stratified(data))
    print(f"Saved animations to {PLOTS_DIR}")
