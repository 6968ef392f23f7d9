# ekflow/visualization/plotter.py
import os
import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt
from typing import List, Optional

def _setup_style(style: str = "dark"):
    """Sets a custom plot style based on the provided parameter."""
    if style == "dark":
        plt.style.use('dark_background')
        plt.rcParams.update({
            "axes.facecolor": "#2b2b2b", "axes.edgecolor": "#cccccc",
            "axes.labelcolor": "white", "axes.titlecolor": "white",
            "figure.facecolor": "#1e1e1e", "grid.color": "#555555",
            "xtick.color": "white", "ytick.color": "white",
            "text.color": "white", "legend.facecolor": "#333333",
        })
        return {"bbox_face": "black", "bbox_edge": "white", "flow_color": "#00ff7f",
                "marker_color": "white", "reference_color": "#ff6f61"}
    else:  # Default to light style
        plt.style.use('seaborn-v0_8-whitegrid')
        plt.rcParams.update({
            "axes.facecolor": "white", "axes.edgecolor": "black",
            "axes.labelcolor": "black", "axes.titlecolor": "black",
            "figure.facecolor": "white", "grid.color": "#dddddd",
            "xtick.color": "black", "ytick.color": "black",
            "text.color": "black", "legend.facecolor": "white",
        })
        return {"bbox_face": "whitesmoke", "bbox_edge": "black", "flow_color": "green",
                "marker_color": "black", "reference_color": "firebrick"}

def plot_augmentation_history(history: List[int], instance_name: str, output_dir: str, style: str,
                              reference_flow: Optional[int] = None) -> str:
    """Plots the cumulative flow after each augmentation."""
    colors = _setup_style(style)
    fig, ax = plt.subplots(figsize=(15, 8))

    x_data = list(range(len(history) + 1))
    y_data = [0] + list(history)

    ax.step(x_data, y_data, where='post', color=colors['flow_color'], linewidth=3, label="Total flow")
    ax.fill_between(x_data, y_data, step='post', color=colors['flow_color'], alpha=0.2)

    final_flow = y_data[-1]
    ax.scatter(x_data[-1], final_flow, color=colors['marker_color'], s=150, zorder=5,
               edgecolor='grey', label=f"Max flow: {final_flow}")

    if reference_flow is not None:
        ax.axhline(reference_flow, color=colors['reference_color'], linestyle='--', linewidth=1.5,
                   label=f"Reference: {reference_flow}")

    ax.set_title(f"Augmentation History for {instance_name}", fontsize=20, pad=20)
    ax.set_xlabel("Augmentation", fontsize=14)
    ax.set_ylabel("Total Flow", fontsize=14)
    ax.legend(fontsize=12)

    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, f"augmentation_history_{instance_name}.png")
    plt.savefig(filepath, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return filepath

def plot_path_lengths(path_lengths: List[int], instance_name: str, output_dir: str, style: str) -> str:
    """
    Plots the hop count of every augmenting path.

    Shortest-path augmentation never shortens the distance to the sink, so the
    curve is non-decreasing.
    """
    _setup_style(style)
    fig, ax = plt.subplots(figsize=(15, 8))

    df = pd.DataFrame({"Augmentation": range(1, len(path_lengths) + 1), "Path Length": path_lengths})
    sns.lineplot(data=df, x="Augmentation", y="Path Length", marker="o",
                 color=sns.color_palette("viridis", 1)[0], linewidth=2, ax=ax)

    ax.set_title(f"Augmenting Path Lengths for {instance_name}", fontsize=20, pad=20)
    ax.set_xlabel("Augmentation", fontsize=14)
    ax.set_ylabel("Arcs on Path", fontsize=14)

    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, f"path_lengths_{instance_name}.png")
    plt.savefig(filepath, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return filepath
