import os
from typing import List, Sequence

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd

sns.set(style="whitegrid", context="talk")


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def _save_fig(fig, filepath: str):
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def class_proportions(df: pd.DataFrame, label_col: str = "diagnosis") -> pd.Series:
    """Percentage of samples per class, rounded to one decimal."""
    return (df[label_col].value_counts(normalize=True).sort_index() * 100).round(1)


def summarize_features(df: pd.DataFrame, cols: Sequence[str]) -> pd.DataFrame:
    return df[list(cols)].describe()


def plot_missing_map(df: pd.DataFrame, outdir: str) -> str:
    ensure_dir(outdir)
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.heatmap(df.isna(), cbar=False, cmap=["#3F51B5", "#FF4081"], yticklabels=False, ax=ax)
    ax.set_title("Missing Data Map")
    path = os.path.join(outdir, "missing_map.png")
    return _save_fig(fig, path)


def plot_class_counts(df: pd.DataFrame, outdir: str, label_col: str = "diagnosis") -> str:
    ensure_dir(outdir)
    fig, ax = plt.subplots(figsize=(6, 4))
    sns.countplot(x=df[label_col], order=sorted(df[label_col].dropna().unique()), ax=ax)
    ax.set_xlabel("Type of tumor")
    ax.set_ylabel("Numbers per type")
    path = os.path.join(outdir, f"count_{label_col}.png")
    return _save_fig(fig, path)


def plot_feature_density(df: pd.DataFrame, col: str, outdir: str, hue: str = "diagnosis") -> str:
    ensure_dir(outdir)
    fig, ax = plt.subplots(figsize=(7, 4))
    sns.kdeplot(data=df, x=col, hue=hue, ax=ax, common_norm=False)
    ax.set_title(f"{col} of each tumor type")
    path = os.path.join(outdir, f"density_{col}.png")
    return _save_fig(fig, path)


def plot_feature_densities(df: pd.DataFrame, cols: Sequence[str], outdir: str, hue: str = "diagnosis") -> List[str]:
    return [plot_feature_density(df, col, outdir, hue=hue) for col in cols]
