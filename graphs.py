# Charts drawn with matplotlib. Each function returns the figure, and
# saves it to path if one is given instead of showing it.

import matplotlib.pyplot as plt
import numpy as np

from anneal import OptimizationResult
from fingermap import Finger, finger_display_names

def _finish(fig, path: str = None):
    if path:
        fig.savefig(path)
        plt.close(fig)
    else:
        plt.show()
    return fig

def plot_history(result: OptimizationResult, path: str = None):
    """Best fitness so far against iteration number."""
    history = np.array(result.history, dtype=float)
    fig, ax = plt.subplots()
    ax.plot(np.arange(1, len(history) + 1), history)
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Best effort (lower is better)")
    ax.set_title(f"Annealing {result.best_layout.name}")
    return _finish(fig, path)

def plot_finger_usage(counts: dict, path: str = None):
    """Bar chart of keystrokes per finger, left pinkie to right pinkie."""
    values = np.array([counts.get(finger, 0) for finger in Finger], dtype=float)
    total = values.sum()
    if total:
        values = values / total * 100
    fig, ax = plt.subplots()
    ax.bar(np.arange(len(Finger)), values)
    ax.set_xticks(np.arange(len(Finger)),
                  labels=[finger_display_names[finger].replace(" ", "\n", 1)
                          for finger in Finger],
                  fontsize="small")
    ax.set_ylabel("Keystrokes (%)")
    ax.set_title("Finger usage")
    return _finish(fig, path)
