# metrics/registry.py
from __future__ import annotations
from typing import Dict, Iterable, Type

from .base import Metric


class MetricRegistry:
    """
    name -> Metric 클래스 딕셔너리.
    사용 패턴:
      @METRIC_REGISTRY.register("rmse")
      class RMSE(Metric):
          name = "rmse"   # 등록 키와 같아야 함

      metric = METRIC_REGISTRY.create("rmse")
    """
    def __init__(self, name: str = "metrics"):
        self.name = name
        self._m: Dict[str, Type[Metric]] = {}

    def register(self, name: str):
        def decorator(cls: Type[Metric]) -> Type[Metric]:
            if name in self._m:
                raise ValueError(f"[{self.name}] '{name}' is already registered by {self._m[name]}")
            if cls.name != name:
                raise ValueError(f"[{self.name}] key '{name}' does not match {cls.__name__}.name={cls.name!r}")
            self._m[name] = cls
            return cls
        return decorator

    def get(self, name: str) -> Type[Metric]:
        if name not in self._m:
            raise KeyError(f"[{self.name}] '{name}' not found. Available: {sorted(self._m)}")
        return self._m[name]

    def create(self, name: str) -> Metric:
        return self.get(name)()

    def __contains__(self, name: str) -> bool:
        return name in self._m

    def names(self) -> Iterable[str]:
        return self._m.keys()


METRIC_REGISTRY = MetricRegistry("metrics")
