"""
cancer_knn/experiment.py
Run the KNN classifier over every (scaling strategy, k) configuration:
- one seeded hold-out split, shared by all configurations so they stay comparable
- the full dataset is scaled once per strategy, then split with the shared indices
- each k classifies the test rows against the training rows and is evaluated

Results come back lazily, strategies in the order given (outer) and k values in
the order given (inner). A configuration that fails is reported with its error
and the run moves on to the next one, unless fail_fast is set.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

import pandas as pd

from .dataset import Dataset
from .evaluate import ConfusionReport, evaluate, summary_line
from .knn import classify
from .preprocess import scale
from .prepare_inputs import Split, resolve_holdout_size, split, split_dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ExperimentResult:
    strategy: str
    k: int
    report: Optional[ConfusionReport] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None

    def summary_line(self) -> str:
        if self.ok:
            return summary_line(self.k, self.strategy, self.report)
        return f"k={self.k}, strategy={self.strategy}: failed ({self.error_kind}: {self.error})"


def _run_config(strategy: str, k: int, train: Dataset, test: Dataset, labels) -> ExperimentResult:
    predicted = classify(train, test, k)
    report = evaluate(test.labels, predicted, labels=labels)
    return ExperimentResult(strategy=strategy, k=k, report=report)


def _failed(strategy: str, k: int, exc: Exception, fail_fast: bool) -> ExperimentResult:
    if fail_fast:
        raise exc
    logger.warning("Configuration strategy=%s k=%s failed: %s: %s", strategy, k, type(exc).__name__, exc)
    return ExperimentResult(strategy=strategy, k=k, error=exc)


def _iter_results(dataset: Dataset, holdout_split: Split, strategies: Sequence[str], k_values: Sequence[int],
                  n_workers: Optional[int], fail_fast: bool, strict: bool) -> Iterator[ExperimentResult]:
    labels = dataset.label_domain
    executor = ThreadPoolExecutor(max_workers=n_workers) if n_workers and n_workers > 1 else None
    try:
        for strategy in strategies:
            try:
                scaled = scale(dataset, strategy, strict=strict)
                train, test = split_dataset(scaled, holdout_split)
            except Exception as e:
                for k in k_values:
                    yield _failed(strategy, k, e, fail_fast)
                continue

            if executor is None:
                for k in k_values:
                    try:
                        result = _run_config(strategy, k, train, test, labels)
                    except Exception as e:
                        result = _failed(strategy, k, e, fail_fast)
                    logger.info(result.summary_line())
                    yield result
                continue

            futures = [executor.submit(_run_config, strategy, k, train, test, labels) for k in k_values]
            for k, fut in zip(k_values, futures):
                try:
                    result = fut.result()
                except Exception as e:
                    result = _failed(strategy, k, e, fail_fast)
                logger.info(result.summary_line())
                yield result
    finally:
        if executor is not None:
            executor.shutdown(wait=True, cancel_futures=True)


def run(dataset: Dataset, holdout_size, seed: Optional[int], strategies: Sequence[str], k_values: Sequence[int],
        n_workers: Optional[int] = None, fail_fast: bool = False, strict: bool = False,
        holdout_split: Optional[Split] = None) -> Iterator[ExperimentResult]:
    """
    Compute the shared split and return a lazy iterator of ExperimentResult.

    The split is computed before the first result is requested, so an invalid
    holdout size raises InvalidSplitSizeError from this call. Pass `holdout_split` to
    reuse an existing split instead.
    """
    if holdout_split is None:
        holdout_split = split(len(dataset), resolve_holdout_size(len(dataset), holdout_size), seed)
    logger.info("Split %d samples into %d train / %d test (seed=%s)",
                len(dataset), len(holdout_split.train), len(holdout_split.test), seed)
    return _iter_results(dataset, holdout_split, list(strategies), list(k_values), n_workers, fail_fast, strict)


def results_frame(results: Iterable[ExperimentResult]) -> pd.DataFrame:
    rows = []
    for r in results:
        row = {"strategy": r.strategy, "k": r.k, "status": "ok" if r.ok else "failed",
               "accuracy": None, "n_test": None, "error": None}
        if r.ok:
            row["accuracy"] = r.report.accuracy
            row["n_test"] = r.report.n
            for (actual, pred), count in r.report.counts.items():
                row[f"{actual}->{pred}"] = count
        else:
            row["error"] = f"{r.error_kind}: {r.error}"
        rows.append(row)
    return pd.DataFrame(rows)


def best_result(results: Iterable[ExperimentResult]) -> Optional[ExperimentResult]:
    """Highest accuracy; ties go to the smaller k, then to the earlier strategy."""
    ok: List[ExperimentResult] = [r for r in results if r.ok]
    if not ok:
        return None
    order = {}
    for r in ok:
        order.setdefault(r.strategy, len(order))
    return min(ok, key=lambda r: (-r.report.accuracy, r.k, order[r.strategy]))
