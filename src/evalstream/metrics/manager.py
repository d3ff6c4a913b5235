# metrics/manager.py
from __future__ import annotations
from typing import Any, Dict, Iterator, List, Mapping, Optional, TextIO
import threading

from loguru import logger

from . import impl  # noqa: F401  (기본 metric 등록)
from .base import Metric, UnknownMetricError
from .config import MetricSetConfig
from .registry import METRIC_REGISTRY, MetricRegistry
from .storage import ReportHistory, ReportRow
from .utils import as_label_vector, as_score_matrix, format_fragment


class MetricSet:
    """
    - 이름으로 고른 Metric들을 소유 (이름당 하나만 유지, 이름순 정렬)
    - update/reset/report를 모든 멤버에게 전달
    - report 결과를 ReportHistory 정책에 따라 저장(혹은 저장 안 함)
    - 내부 lock으로 update/reset/add_metric 직렬화

    사용:
      ms = MetricSet.from_config(MetricSetConfig(metrics=("rmse", "r2")))
      for scores, labels in loader:
          ms.update(scores, labels)
      ms.report(sys.stdout, "eval")
    """
    def __init__(self, config: Optional[MetricSetConfig] = None, registry: Optional[MetricRegistry] = None):
        self.config = config or MetricSetConfig()
        self.registry = registry or METRIC_REGISTRY
        self.history_storage = ReportHistory(self.config.history)
        self._metrics: List[Metric] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: MetricSetConfig, registry: Optional[MetricRegistry] = None) -> "MetricSet":
        ms = cls(config, registry)
        for name in config.metrics:
            ms.add_metric(name)
        return ms

    def add_metric(self, name: str) -> Optional[Metric]:
        """
        등록된 이름이면 metric을 만들어 추가하고 그 이름의 멤버를 돌려준다.
        모르는 이름은 permissive 모드에서 조용히 무시(None), strict 모드에서 UnknownMetricError.
        같은 이름이 이미 있으면 기존 멤버(누적 상태 포함)가 남는다.
        """
        if name not in self.registry:
            if self.config.strict:
                logger.error(f"Unknown metric name: {name!r}")
                raise UnknownMetricError(name)
            return None

        with self._lock:
            self._metrics.append(self.registry.create(name))
            # stable sort라서 같은 이름 중에는 먼저 있던 멤버가 앞에 온다
            self._metrics.sort(key=lambda m: m.name)
            unique: List[Metric] = []
            for m in self._metrics:
                if unique and unique[-1].name == m.name:
                    logger.debug(f"Dropped duplicate metric: {m.name}")
                    continue
                unique.append(m)
            self._metrics = unique
            logger.debug(f"MetricSet members: {[m.name for m in self._metrics]}")
            return self._get(name)

    def reset(self) -> None:
        with self._lock:
            for m in self._metrics:
                m.reset()
        logger.debug("MetricSet reset")

    def update(self, scores: Any, labels: Any) -> None:
        # 입력 변환은 한 번만
        scores = as_score_matrix(scores, self.config.layout)
        labels = as_label_vector(labels)
        with self._lock:
            # 한 멤버라도 shape을 거부하면 아무도 누적하지 않는다
            for m in self._metrics:
                m.validate(scores, labels)
            for m in self._metrics:
                m.update_arrays(scores, labels, check=False)

    def compute(self) -> Dict[str, float]:
        with self._lock:
            return {m.name: m.compute() for m in self._metrics}

    def format(self, label: str) -> str:
        return "".join(format_fragment(label, name, v) for name, v in self.compute().items())

    def report(self, sink: TextIO, label: str) -> Dict[str, float]:
        """
        멤버마다 "\\t<label>-<name>:<value>" 를 sink에 쓴다.
        줄바꿈/스트림 관리는 호출자 몫.
        """
        values = self.compute()
        for name, v in values.items():
            sink.write(format_fragment(label, name, v))
        self.history_storage.add(label, values)
        return values

    def history(self) -> List[ReportRow]:
        return self.history_storage.rows()

    def _get(self, name: str) -> Metric:
        for m in self._metrics:
            if m.name == name:
                return m
        raise KeyError(name)

    def __getitem__(self, name: str) -> Metric:
        return self._get(name)

    def __contains__(self, name: object) -> bool:
        return any(m.name == name for m in self._metrics)

    def __iter__(self) -> Iterator[Metric]:
        return iter(list(self._metrics))

    def __len__(self) -> int:
        return len(self._metrics)

    def names(self) -> List[str]:
        return [m.name for m in self._metrics]

    def state_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "metrics": {m.name: m.state_dict() for m in self._metrics},
                "history_step": self.history_storage.step,
            }

    def load_state_dict(self, state: Mapping[str, Any]) -> None:
        """체크포인트에 있는 이름 중 현재 멤버인 것만 복원."""
        with self._lock:
            for m in self._metrics:
                if m.name in state.get("metrics", {}):
                    m.load_state_dict(state["metrics"][m.name])
            self.history_storage.step = state.get("history_step", 0)
