# metrics/__init__.py
from .base import Metric, MetricShapeError, UnknownMetricError
from .config import HistoryConfig, MetricSetConfig
from .storage import ReportHistory, ReportRow
from .registry import METRIC_REGISTRY, MetricRegistry
from .manager import MetricSet

from .impl.regression import RMSE, CorrSqr
from .impl.classification import ErrorRate

__all__ = [
    "Metric",
    "MetricShapeError",
    "UnknownMetricError",
    "HistoryConfig",
    "MetricSetConfig",
    "ReportHistory",
    "ReportRow",
    "METRIC_REGISTRY",
    "MetricRegistry",
    "MetricSet",
    "RMSE",
    "CorrSqr",
    "ErrorRate",
]
