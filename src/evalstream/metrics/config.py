# metrics/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Tuple

HistoryMode = Literal["none", "last_k"]
ScoreLayout = Literal["instance_major", "output_major"]


@dataclass(frozen=True)
class HistoryConfig:
    """
    report() 결과를 메모리에 남기는 옵션 (metric 값만, I/O 없음):
      - none: 저장 안 함
      - last_k: 최근 maxlen개만 저장
    """
    mode: HistoryMode = "none"
    maxlen: int = 200

    def __post_init__(self):
        if self.maxlen < 1:
            raise ValueError(f"maxlen must be >= 1, got {self.maxlen}")


@dataclass(frozen=True)
class MetricSetConfig:
    """
    metrics: add_metric으로 추가할 이름들 (순서대로)
    strict: True면 모르는 이름에서 UnknownMetricError, False면 무시
    layout: score 버퍼 축 순서
      - instance_major: (num_instances, num_outputs)
      - output_major:   (num_outputs, num_instances)
    """
    metrics: Tuple[str, ...] = ()
    strict: bool = False
    layout: ScoreLayout = "instance_major"
    history: HistoryConfig = field(default_factory=HistoryConfig)
