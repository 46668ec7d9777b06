"""
cancer_knn/sensitivity.py
How much the scaling strategy matters:
- compare_strategies: one paragraph contrasting the best accuracy reached under each strategy
- analyze_scaler_impact: mean pairwise Euclidean distance before and after each scaling, with a bar plot
"""

import os
from typing import Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

from .dataset import Dataset
from .distance import mean_pairwise_distance
from .experiment import ExperimentResult, best_result
from .preprocess import scale

sns.set(style="whitegrid", context="talk")


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def compare_strategies(results: Iterable[ExperimentResult], out_path: Optional[str] = None) -> str:
    results = list(results)
    strategies = []
    for r in results:
        if r.strategy not in strategies:
            strategies.append(r.strategy)

    parts = []
    for strategy in strategies:
        best = best_result(r for r in results if r.strategy == strategy)
        n_failed = sum(1 for r in results if r.strategy == strategy and not r.ok)
        if best is None:
            parts.append(f"{strategy} produced no successful configuration ({n_failed} failed)")
            continue
        text = f"{strategy} reached accuracy = {best.report.accuracy:.4f} at k={best.k}"
        if n_failed:
            text += f" ({n_failed} configuration(s) failed)"
        parts.append(text)

    if not parts:
        para = "No results to compare."
    else:
        para = "On the reserved test set, " + "; ".join(parts) + "."
        overall = best_result(results)
        if overall is not None:
            para += (
                f" The best configuration overall is {overall.strategy} with k={overall.k}"
                " (ties broken by the smaller k)."
            )

    if out_path:
        ensure_dir(os.path.dirname(out_path) or ".")
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(para + "\n")
    return para


def analyze_scaler_impact(dataset: Dataset, strategies: Sequence[str], out_txt: Optional[str] = None,
                          out_plot: Optional[str] = None, sample_frac: float = 0.2) -> Dict:
    before = mean_pairwise_distance(dataset.features, sample_frac=sample_frac, rng_seed=0)
    rows = []
    for strategy in strategies:
        scaled = scale(dataset, strategy)
        after = mean_pairwise_distance(scaled.features, sample_frac=sample_frac, rng_seed=0)
        rows.append({"strategy": strategy, "mean_dist_before": before, "mean_dist_after": after})
    df = pd.DataFrame(rows, columns=["strategy", "mean_dist_before", "mean_dist_after"])

    lines = ["Scaler impact summary:"]
    for _, r in df.iterrows():
        lines.append(
            f"- {r['strategy']}: mean pairwise distance before scaling = {r['mean_dist_before']:.4f}; "
            f"after scaling = {r['mean_dist_after']:.4f}"
        )

    if out_txt:
        ensure_dir(os.path.dirname(out_txt) or ".")
        with open(out_txt, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")

    if out_plot:
        ensure_dir(os.path.dirname(out_plot) or ".")
        plt.figure(figsize=(8, 5))
        x = np.arange(len(df))
        width = 0.35
        plt.bar(x - width/2, df["mean_dist_after"], width, label="after scaling")
        plt.bar(x + width/2, df["mean_dist_before"], width, label="before scaling")
        plt.xticks(x, df["strategy"])
        plt.yscale("log")
        plt.ylabel("Mean pairwise Euclidean distance")
        plt.title("Scaler impact on mean pairwise distances")
        plt.legend()
        plt.tight_layout()
        plt.savefig(out_plot, dpi=150)
        plt.close()

    return {"table": df, "lines": lines, "txt": out_txt, "plot": out_plot}
