"""
cancer_knn/utils.py
File helpers and the audit of the raw diagnostic CSV, written before cleaning.

The audit reports what `load_data.clean_frame` is about to do with the raw frame:
- the sample id column that gets dropped, and whether ids repeat
- fully empty columns that get dropped (e.g. a trailing 'Unnamed: 32')
- partially missing columns, which make cleaning fail
- the diagnosis codes and the labels they are recoded to
"""

import os
import logging
from typing import Any, Dict, Optional

import pandas as pd

from .config import ID_COL, LABEL_COL, LABEL_CODES
from .missing import columns_with_missing, empty_columns, missing_table

logger = logging.getLogger(__name__)


def save_text(path, text):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def save_frame(df, path):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    df.to_csv(path, index=False)
    return path


def diagnosis_codes(df: pd.DataFrame, label_col: str = LABEL_COL,
                    label_codes: Optional[Dict[str, str]] = LABEL_CODES) -> pd.DataFrame:
    """One row per raw diagnosis code: its recoded label, count and share of the rows."""
    codes = df[label_col].dropna().astype(str).str.strip()
    counts = codes.value_counts().sort_index()
    total = len(df)
    mapping = label_codes or {}
    return pd.DataFrame({
        "code": counts.index.tolist(),
        "label": [mapping.get(c) for c in counts.index],
        "count": counts.values.tolist(),
        "percent": [round(c / total * 100, 1) if total else 0.0 for c in counts.values.tolist()],
    })


def audit_raw_frame(df: pd.DataFrame, id_col: Optional[str] = ID_COL, label_col: str = LABEL_COL,
                    label_codes: Optional[Dict[str, str]] = LABEL_CODES) -> Dict[str, Any]:
    has_id = id_col is not None and id_col in df.columns
    has_label = label_col in df.columns

    empty = [c for c in empty_columns(df) if c != label_col]
    kept = df.drop(columns=empty + ([id_col] if has_id else []))
    partial = columns_with_missing(kept)

    codes = diagnosis_codes(df, label_col, label_codes) if has_label else None
    unknown = [] if codes is None or not label_codes else codes.loc[codes["label"].isna(), "code"].tolist()

    features = [c for c in kept.columns if c != label_col]
    non_numeric = [c for c in features if not pd.api.types.is_numeric_dtype(kept[c])]

    return {
        "n_rows": len(df),
        "n_columns": df.shape[1],
        "id_col": id_col if has_id else None,
        "duplicate_ids": int(df[id_col].duplicated().sum()) if has_id else 0,
        "empty_columns": empty,
        "missing_columns": partial,
        "label_col": label_col if has_label else None,
        "codes": codes,
        "unknown_codes": unknown,
        "n_features": len(features),
        "non_numeric": non_numeric,
        "ready": has_label and not partial and not unknown and not non_numeric,
    }


def format_audit(audit: Dict[str, Any]) -> str:
    lines = [f"Raw frame: {audit['n_rows']} rows x {audit['n_columns']} columns"]

    if audit["id_col"] is None:
        lines.append("Id column: not present")
    else:
        lines.append(f"Id column: '{audit['id_col']}' dropped ({audit['duplicate_ids']} duplicated id(s))")
    lines.append(f"Empty columns dropped: {audit['empty_columns'] or 'none'}")
    lines.append(f"Columns with missing values: {audit['missing_columns'] or 'none'}")

    if audit["label_col"] is None:
        lines.append("Label column: not present")
    else:
        lines.append(f"Label column '{audit['label_col']}' recoding:")
        lines.append("Code\tLabel\tCount\tPercent")
        for _, row in audit["codes"].iterrows():
            label = "(unknown)" if pd.isna(row["label"]) else row["label"]
            lines.append(f"{row['code']}\t{label}\t{int(row['count'])}\t{row['percent']:.1f}%")

    lines.append(f"Feature columns: {audit['n_features']} (non-numeric: {audit['non_numeric'] or 'none'})")
    lines.append("Ready for cleaning: " + ("yes" if audit["ready"] else "no"))
    return "\n".join(lines)


def save_raw_audit(df: pd.DataFrame, outdir: str, id_col: Optional[str] = ID_COL, label_col: str = LABEL_COL,
                   label_codes: Optional[Dict[str, str]] = LABEL_CODES) -> Dict[str, Any]:
    """
    Write the raw-frame audit to `outdir`:
    - raw_audit.txt: the summary from `format_audit`
    - missing_table.csv: per-column missing counts
    - diagnosis_codes.csv: code -> label counts, when the label column exists
    Returns the audit dict with the written paths under "paths".
    """
    audit = audit_raw_frame(df, id_col=id_col, label_col=label_col, label_codes=label_codes)
    paths = [
        save_text(os.path.join(outdir, "raw_audit.txt"), format_audit(audit) + "\n"),
        save_frame(missing_table(df), os.path.join(outdir, "missing_table.csv")),
    ]
    if audit["codes"] is not None:
        paths.append(save_frame(audit["codes"], os.path.join(outdir, "diagnosis_codes.csv")))
    if not audit["ready"]:
        logger.warning("Raw frame will not pass cleaning; see %s", paths[0])
    audit["paths"] = paths
    return audit
