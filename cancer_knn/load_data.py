"""
cancer_knn/load_data.py
Read the breast cancer diagnostic CSV and turn it into a Dataset:
- drop the sample identifier and any fully empty column
- recode the diagnosis codes B / M as Benign / Malignant
- refuse rows with missing feature or label values
"""

import os
import logging
from typing import Dict, Optional

import pandas as pd

from .config import ID_COL, LABEL_COL, LABEL_CODES
from .dataset import Dataset
from .errors import MissingValuesError
from .missing import columns_with_missing, empty_columns

logger = logging.getLogger(__name__)


def load_data(csv_path):
    if not os.path.isfile(csv_path):
        raise FileNotFoundError(f"CSV not found at: {csv_path}")

    return pd.read_csv(csv_path)


def clean_frame(df: pd.DataFrame, id_col: Optional[str] = ID_COL, label_col: str = LABEL_COL,
                label_codes: Optional[Dict[str, str]] = LABEL_CODES) -> pd.DataFrame:
    """Drop the id and empty columns, recode the label and validate completeness."""
    out = df.copy()
    if id_col is not None and id_col in out.columns:
        out = out.drop(columns=[id_col])

    empty = [c for c in empty_columns(out) if c != label_col]
    if empty:
        logger.info("Dropping empty column(s): %s", empty)
        out = out.drop(columns=empty)

    if label_col not in out.columns:
        raise KeyError(f"Label column '{label_col}' not found in columns: {list(out.columns)}")

    missing = columns_with_missing(out)
    if missing:
        raise MissingValuesError(missing)

    if label_codes:
        codes = out[label_col].astype(str).str.strip()
        unknown = sorted(set(codes) - set(label_codes))
        if unknown:
            raise ValueError(f"Unknown {label_col} code(s) {unknown}; expected one of {sorted(label_codes)}")
        out[label_col] = codes.map(label_codes)

    feature_cols = [c for c in out.columns if c != label_col]
    non_numeric = [c for c in feature_cols if not pd.api.types.is_numeric_dtype(out[c])]
    if non_numeric:
        raise ValueError(f"Feature column(s) are not numeric: {non_numeric}")
    return out


def load_dataset(csv_path, id_col: Optional[str] = ID_COL, label_col: str = LABEL_COL,
                 label_codes: Optional[Dict[str, str]] = LABEL_CODES) -> Dataset:
    df = clean_frame(load_data(csv_path), id_col=id_col, label_col=label_col, label_codes=label_codes)
    dataset = Dataset.from_frame(df, label_col=label_col)
    logger.info("Loaded %d samples with %d features from %s", len(dataset), dataset.n_features, csv_path)
    return dataset
