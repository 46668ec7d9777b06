"""
cancer_knn/errors.py
Exception kinds raised by the scaling, splitting, distance, KNN and evaluation steps.
"""


class KnnExperimentError(Exception):
    """Base class for all errors raised inside the experiment package."""


class DegenerateColumnError(KnnExperimentError):
    """A feature column has zero range (min-max) or zero variance (z-score)."""

    def __init__(self, columns, strategy):
        self.columns = list(columns)
        self.strategy = strategy
        super().__init__(f"Degenerate column(s) for {strategy} scaling: {self.columns}")


class InvalidSplitSizeError(KnnExperimentError, ValueError):
    pass


class DimensionMismatchError(KnnExperimentError, ValueError):
    pass


class InvalidKError(KnnExperimentError, ValueError):
    pass


class LengthMismatchError(KnnExperimentError, ValueError):
    pass


class UnknownStrategyError(KnnExperimentError, ValueError):
    pass


class MissingValuesError(KnnExperimentError):
    """Raised by the loader when feature or label cells are empty."""

    def __init__(self, columns):
        self.columns = list(columns)
        super().__init__(f"Missing values found in column(s): {self.columns}")


class ConfigError(KnnExperimentError):
    pass
