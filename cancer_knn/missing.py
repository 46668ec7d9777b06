import pandas as pd


def missing_table(df: pd.DataFrame) -> pd.DataFrame:
    """One row per column with its missing count and percentage, most missing first."""
    total = len(df)
    cols = []
    for col in df.columns:
        miss = int(df[col].isna().sum())
        pct = (miss / total) * 100 if total else 0.0
        cols.append({"column": col, "missing_count": miss, "missing_percent": round(pct, 3)})
    table = pd.DataFrame(cols, columns=["column", "missing_count", "missing_percent"])
    return table.sort_values("missing_percent", ascending=False, kind="stable").reset_index(drop=True)


def columns_with_missing(df: pd.DataFrame) -> list:
    table = missing_table(df)
    return table.loc[table["missing_count"] > 0, "column"].tolist()


def empty_columns(df: pd.DataFrame) -> list:
    """Columns with no values at all, e.g. the trailing 'Unnamed: 32' of some CSV exports."""
    return [c for c in df.columns if df[c].isna().all()]
