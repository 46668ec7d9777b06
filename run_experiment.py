"""
run_experiment.py
Classify the breast cancer samples with KNN for every scaling strategy and k value.
Run from project root: python run_experiment.py [--config experiment.json]
"""
import os
import argparse
import logging

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd

from cancer_knn.config import load_config, DEFAULT_K
from cancer_knn.load_data import load_dataset
from cancer_knn.evaluate import plot_confusion, save_cross_table
from cancer_knn.experiment import run, results_frame, best_result
from cancer_knn.utils import save_frame

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
sns.set(style="whitegrid", context="talk")


def plot_accuracy_vs_k(df: pd.DataFrame, outpath: str, k_values):
    ok = df[df["status"] == "ok"]
    plt.figure(figsize=(8, 5))
    for strategy, group in ok.groupby("strategy", sort=False):
        group_sorted = group.sort_values("k")
        plt.plot(group_sorted["k"], group_sorted["accuracy"], label=strategy, marker="o")
    plt.xlabel("k (neighbors)")
    plt.ylabel("Test accuracy")
    plt.title("KNN test accuracy vs k per scaling strategy")
    plt.xticks(sorted(set(k_values)))
    plt.legend()
    plt.tight_layout()
    os.makedirs(os.path.dirname(outpath) or ".", exist_ok=True)
    plt.savefig(outpath, dpi=150)
    plt.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="KNN tumor classification experiment")
    parser.add_argument("--config", default=None, help="JSON file overriding the defaults in cancer_knn/config.py")
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    dataset = load_dataset(cfg.raw_csv)

    results = []
    for result in run(dataset, cfg.holdout_size, cfg.seed, cfg.scaling_strategies, cfg.k_values, n_workers=cfg.n_workers):
        results.append(result)
        print(result.summary_line())
        if result.ok:
            plot_confusion(
                result.report,
                os.path.join(cfg.figs_dir, f"{result.strategy}_k{result.k}_confusion_matrix.png"),
                title=f"{result.strategy}  K={result.k}  Confusion Matrix",
            )
            save_cross_table(
                result.report,
                os.path.join(cfg.results_dir, "cross_tables", f"{result.strategy}_k{result.k}.txt"),
                title=f"strategy={result.strategy}, k={result.k}",
            )
            if result.k == DEFAULT_K:
                print(result.report.cross_table())

    df = results_frame(results)
    metrics_path = save_frame(df, os.path.join(cfg.results_dir, "knn_results.csv"))
    print("Saved metrics to:", metrics_path)

    outplot = os.path.join(cfg.figs_dir, "knn_accuracy_vs_k.png")
    plot_accuracy_vs_k(df, outplot, cfg.k_values)
    print("Saved accuracy vs k plot to:", outplot)

    best = best_result(results)
    if best is not None:
        print(f"Best configuration: {best.summary_line()}")
    failed = [r for r in results if not r.ok]
    if failed:
        print(f"{len(failed)} configuration(s) failed:")
        for r in failed:
            print(" -", r.summary_line())
    return results


if __name__ == "__main__":
    main()
