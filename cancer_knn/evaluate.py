"""
cancer_knn/evaluate.py
Compare predicted against actual labels:
- 2x2 contingency table (rows = actual, columns = predicted) over a fixed label domain
- overall accuracy, plus precision / recall / specificity for the positive label
- text cross table with row and column proportions, and a heatmap figure
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import accuracy_score, confusion_matrix

from .errors import LengthMismatchError

sns.set(style="whitegrid", context="talk")


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


@dataclass(frozen=True, eq=False)
class ConfusionReport:
    labels: Tuple[Any, ...]
    matrix: np.ndarray
    accuracy: float

    @property
    def n(self) -> int:
        return int(self.matrix.sum())

    @property
    def counts(self) -> Dict[Tuple[Any, Any], int]:
        return {
            (actual, pred): int(self.matrix[i, j])
            for i, actual in enumerate(self.labels)
            for j, pred in enumerate(self.labels)
        }

    @property
    def positive_label(self) -> Any:
        return self.labels[-1]

    def _pos_counts(self) -> Tuple[int, int, int, int]:
        p = len(self.labels) - 1
        tp = int(self.matrix[p, p])
        fp = int(self.matrix[:, p].sum()) - tp
        fn = int(self.matrix[p, :].sum()) - tp
        tn = self.n - tp - fp - fn
        return tp, fp, fn, tn

    @property
    def precision(self) -> float:
        tp, fp, _, _ = self._pos_counts()
        return tp / (tp + fp) if (tp + fp) > 0 else 0.0

    @property
    def recall(self) -> float:
        tp, _, fn, _ = self._pos_counts()
        return tp / (tp + fn) if (tp + fn) > 0 else 0.0

    @property
    def specificity(self) -> float:
        _, fp, _, tn = self._pos_counts()
        return tn / (tn + fp) if (tn + fp) > 0 else 0.0

    def to_frame(self, margins: bool = True) -> pd.DataFrame:
        df = pd.DataFrame(
            self.matrix,
            index=pd.Index(self.labels, name="Actual"),
            columns=pd.Index(self.labels, name="Predicted"),
        )
        if margins:
            df["Total"] = df.sum(axis=1)
            df.loc["Total"] = df.sum(axis=0)
        return df

    def cross_table(self) -> str:
        """
        Cross table with, in each cell, the count, the row proportion and the
        column proportion. The last row and column hold the totals.
        """
        m = self.matrix.astype(float)
        row_tot = m.sum(axis=1)
        col_tot = m.sum(axis=0)
        width = max(12, max(len(str(lab)) for lab in self.labels) + 2)

        header = "actual \\ predicted".ljust(20) + "".join(str(lab).rjust(width) for lab in self.labels) + "Row Total".rjust(width)
        lines = [f"Total Observations in Table: {self.n}", "", header, "-" * len(header)]
        for i, lab in enumerate(self.labels):
            counts = "".join(str(int(m[i, j])).rjust(width) for j in range(len(self.labels)))
            row_prop = "".join(
                (f"{m[i, j] / row_tot[i]:.3f}" if row_tot[i] else "-").rjust(width) for j in range(len(self.labels))
            )
            col_prop = "".join(
                (f"{m[i, j] / col_tot[j]:.3f}" if col_tot[j] else "-").rjust(width) for j in range(len(self.labels))
            )
            row_share = f"{row_tot[i] / self.n:.3f}" if self.n else "-"
            lines.append(str(lab).ljust(20) + counts + str(int(row_tot[i])).rjust(width))
            lines.append("  N / Row Total".ljust(20) + row_prop + row_share.rjust(width))
            lines.append("  N / Col Total".ljust(20) + col_prop)
            lines.append("-" * len(header))
        col_share = "".join((f"{c / self.n:.3f}" if self.n else "-").rjust(width) for c in col_tot)
        lines.append("Column Total".ljust(20) + "".join(str(int(c)).rjust(width) for c in col_tot) + str(self.n).rjust(width))
        lines.append("".ljust(20) + col_share)
        lines.append("")
        lines.append(f"Correctly predicted: {self.accuracy:.4f}")
        return "\n".join(lines)


def evaluate(actual: Sequence[Any], predicted: Sequence[Any], labels: Optional[Sequence[Any]] = None) -> ConfusionReport:
    """
    Build the actual x predicted contingency table and the accuracy.

    `labels` fixes the label domain and its order; by default it is the sorted
    set of labels seen in either input. An inferred domain needs at least two
    labels, otherwise ValueError asks for an explicit `labels`.
    """
    actual = np.asarray(list(actual), dtype=object)
    predicted = np.asarray(list(predicted), dtype=object)
    if len(actual) != len(predicted):
        raise LengthMismatchError(f"{len(actual)} actual labels but {len(predicted)} predictions")
    if len(actual) == 0:
        raise ValueError("Cannot evaluate an empty set of predictions")

    seen = set(actual.tolist()) | set(predicted.tolist())
    if labels is None:
        labels = tuple(sorted(seen))
        if len(labels) < 2:
            raise ValueError(
                f"Only {list(labels)} observed; pass labels= to fix the label domain of the contingency table"
            )
    else:
        labels = tuple(labels)
        unknown = seen - set(labels)
        if unknown:
            raise ValueError(f"Labels {sorted(map(str, unknown))} are outside the label domain {list(labels)}")

    cm = confusion_matrix(actual, predicted, labels=list(labels))
    acc = float(accuracy_score(actual, predicted))
    return ConfusionReport(labels=labels, matrix=cm, accuracy=acc)


def summary_line(k: int, strategy: str, report: ConfusionReport) -> str:
    return f"k={k}, strategy={strategy}: accuracy={report.accuracy:.4f}"


def plot_confusion(report: ConfusionReport, outpath: str, title: str = "Confusion Matrix") -> str:
    ensure_dir(os.path.dirname(outpath) or ".")
    plt.figure(figsize=(5, 4))
    sns.heatmap(report.matrix, annot=True, fmt="d", cmap="Blues",
                xticklabels=report.labels, yticklabels=report.labels)
    plt.xlabel("Predicted")
    plt.ylabel("Actual")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(outpath, dpi=150)
    plt.close()
    return outpath


def save_cross_table(report: ConfusionReport, outpath: str, title: Optional[str] = None) -> str:
    ensure_dir(os.path.dirname(outpath) or ".")
    text = report.cross_table()
    if title:
        text = f"{title}\n\n{text}"
    with open(outpath, "w", encoding="utf-8") as f:
        f.write(text + "\n")
    return outpath
