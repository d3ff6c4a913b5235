# metrics/impl/__init__.py
# import 시점에 METRIC_REGISTRY에 등록된다
from .regression import RMSE, CorrSqr
from .classification import ErrorRate

__all__ = ["RMSE", "CorrSqr", "ErrorRate"]
