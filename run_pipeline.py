"""
run_pipeline.py
End-to-end pipeline runner. Run from project root where cancer_knn/ is importable.

Sequence:
1. EDA: audit files and exploration figures
2. Experiment: KNN over every scaling strategy and k value
3. Sensitivity: strategy comparison and scaler impact
4. Check that the key outputs exist

Usage: python run_pipeline.py [config.json]
"""

import sys
from pathlib import Path
import subprocess

STEPS = [
    ("EDA", [sys.executable, "run_eda.py"]),
    ("Experiment", [sys.executable, "run_experiment.py"]),
    ("Sensitivity", [sys.executable, "run_sensitivity.py"]),
]

EXPECTED_OUTPUTS = [
    "reports/results/knn_results.csv",
    "reports/figs/knn_accuracy_vs_k.png",
    "reports/results/strategy_comparison.txt",
]


def run_step(name, cmd):
    print(f"=== Step: {name} ===")
    print("Running:", " ".join(cmd))
    rc = subprocess.call(cmd)
    if rc != 0:
        raise SystemExit(f"Step '{name}' failed with exit code {rc}")


def check_expected_outputs():
    errs = [p for p in EXPECTED_OUTPUTS if not Path(p).exists()]
    if errs:
        print("Warning: expected outputs missing:")
        for e in errs:
            print(" -", e)
    else:
        print("All key outputs present.")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    config_args = ["--config", argv[0]] if argv else []
    try:
        for name, cmd in STEPS:
            run_step(name, cmd + (config_args if name != "EDA" else []))
        check_expected_outputs()
        print("Pipeline finished successfully.")
    except SystemExit as e:
        print("Pipeline failed:", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
