"""
run_eda.py
Explore the raw dataset: audit files, missing-data map, class balance and feature densities.
Run from project root (where cancer_knn/ is importable).
"""
import os
import logging

from cancer_knn.config import RAW_CSV, REPORTS_DIR, FIGS_DIR, DENSITY_FEATURES, SUMMARY_FEATURES
from cancer_knn.load_data import load_data, clean_frame
from cancer_knn.missing import missing_table
from cancer_knn.utils import save_raw_audit, format_audit
import cancer_knn.eda as eda

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main():
    df_raw = load_data(RAW_CSV)

    audit = save_raw_audit(df_raw, REPORTS_DIR)
    print(format_audit(audit))
    missing_path = eda.plot_missing_map(df_raw, FIGS_DIR)
    print(missing_table(df_raw).head(5).to_string(index=False))

    df = clean_frame(df_raw)
    count_path = eda.plot_class_counts(df, FIGS_DIR)
    density_paths = eda.plot_feature_densities(df, DENSITY_FEATURES, FIGS_DIR)

    print("Class proportions (%):")
    print(eda.class_proportions(df).to_string())
    print(eda.summarize_features(df, SUMMARY_FEATURES).to_string())

    print("EDA finished. Figures saved to:", FIGS_DIR)
    for p in [missing_path, count_path] + density_paths:
        print(" -", os.path.basename(p))


if __name__ == "__main__":
    main()
