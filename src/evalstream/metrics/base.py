# metrics/base.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

import numpy as np

from .utils import as_label_vector, as_score_matrix


class MetricShapeError(ValueError):
    """score/label 버퍼가 metric의 shape 조건을 만족하지 못할 때."""


class UnknownMetricError(KeyError):
    """strict 모드에서 등록되지 않은 metric 이름을 요청했을 때."""


class Metric(ABC):
    """
    running sum만 들고 있는 streaming metric.
    - reset(): 상태 초기화 (언제 호출해도 안전)
    - update(scores, labels): batch 하나를 누적
    - compute(): 현재 값 계산 (누적 0개면 NaN)
    - name: 표시/중복 제거에 쓰는 고정 식별자
    - state_dict()/load_state_dict(): 체크포인트 지원

    scores는 기본적으로 (num_instances, num_outputs) 배열.
    instance 단위 데이터는 update 호출이 끝나면 보관하지 않는다.
    """

    name: str = ""

    def __init__(self):
        self.reset()

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def _accumulate(self, scores: np.ndarray, labels: np.ndarray) -> None:
        raise NotImplementedError

    @abstractmethod
    def compute(self) -> float:
        raise NotImplementedError

    def check_outputs(self, num_outputs: int) -> None:
        """output 축 크기 검사. 기본은 1 이상."""
        if num_outputs < 1:
            raise MetricShapeError(f"{self.name} requires at least one output per instance, got {num_outputs}")

    def update(self, scores: Any, labels: Any, layout: str = "instance_major") -> None:
        scores = as_score_matrix(scores, layout)
        labels = as_label_vector(labels)
        self.update_arrays(scores, labels)

    def validate(self, scores: np.ndarray, labels: np.ndarray) -> None:
        """상태를 건드리지 않고 shape 조건만 검사."""
        n, k = scores.shape
        self.check_outputs(k)
        if labels.shape[0] != n:
            raise MetricShapeError(
                f"{self.name}: label array has {labels.shape[0]} entries for {n} instances"
            )

    def update_arrays(self, scores: np.ndarray, labels: np.ndarray, check: bool = True) -> None:
        """
        이미 (N, K) float64 / (N,) 로 정리된 배열을 누적.
        check=False는 호출자가 validate()를 먼저 끝낸 경우에만.
        """
        if check:
            self.validate(scores, labels)
        if scores.shape[0] == 0:
            return
        self._accumulate(scores, labels)

    @property
    def count(self) -> int:
        return self._count

    def state_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self._count}

    def load_state_dict(self, state: Mapping[str, Any]) -> None:
        if state.get("name", self.name) != self.name:
            raise ValueError(f"checkpoint for {state['name']!r} cannot be loaded into {self.name!r}")
        self._count = int(state["count"])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self._count})"
