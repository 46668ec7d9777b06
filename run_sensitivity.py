import os
import argparse
import logging

from cancer_knn.config import load_config
from cancer_knn.load_data import load_dataset
from cancer_knn.experiment import run
from cancer_knn.sensitivity import compare_strategies, analyze_scaler_impact

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Scaling strategy sensitivity checks")
    parser.add_argument("--config", default=None, help="JSON file overriding the defaults in cancer_knn/config.py")
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    dataset = load_dataset(cfg.raw_csv)

    results = list(run(dataset, cfg.holdout_size, cfg.seed, cfg.scaling_strategies, cfg.k_values))
    para = compare_strategies(results, out_path=os.path.join(cfg.results_dir, "strategy_comparison.txt"))
    print("Strategy comparison paragraph saved.")
    print(para)

    res = analyze_scaler_impact(
        dataset, cfg.scaling_strategies,
        out_txt=os.path.join(cfg.results_dir, "scaler_impact.txt"),
        out_plot=os.path.join(cfg.figs_dir, "scaler_distance_change.png"),
    )
    print("Scaler impact analysis saved to:", res["txt"])
    print("Scaler distance plot saved to:", res["plot"])


if __name__ == "__main__":
    main()
