# metrics/impl/classification.py
from __future__ import annotations
from typing import Any, Dict

import numpy as np

from ..base import Metric
from ..registry import METRIC_REGISTRY


@METRIC_REGISTRY.register("error")
class ErrorRate(Metric):
    """
    Streaming 분류 오류율.

    scores: (N, C) 클래스별 점수. instance마다 argmax(동점이면 앞쪽 index)를 예측으로 보고
    int(label)과 다르면 오류 1개로 센다. C == 1 이면 예측은 항상 0.
    """

    name = "error"

    def reset(self) -> None:
        self._sum_err = 0.0
        self._count = 0

    def _accumulate(self, scores: np.ndarray, labels: np.ndarray) -> None:
        # np.argmax는 첫 번째 최대값 index를 돌려준다
        pred = np.argmax(scores, axis=1)
        # C의 (int) 캐스팅처럼 0 방향으로 버림
        target = labels.astype(np.int64)
        self._sum_err += float(np.count_nonzero(pred != target))
        self._count += pred.shape[0]

    def compute(self) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(self._sum_err) / np.float64(self._count))

    def state_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self._count, "sum_err": self._sum_err}

    def load_state_dict(self, state) -> None:
        super().load_state_dict(state)
        self._sum_err = float(state["sum_err"])
