# metrics/storage.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional
from collections import deque

from .config import HistoryConfig


@dataclass(frozen=True)
class ReportRow:
    """report() 한 번의 결과. instance 데이터가 아니라 metric 값만 담는다."""
    step: int
    label: str
    values: Dict[str, float]


class ReportHistory:
    """
    report 결과를 메모리에만 남긴다 (파일/스트림은 호출자 몫).
      - none: step만 세고 저장 안 함
      - last_k: 최근 maxlen개 ReportRow
    """

    def __init__(self, cfg: HistoryConfig):
        if cfg.mode not in ("none", "last_k"):
            raise ValueError(f"Unknown history mode: {cfg.mode}")
        self.cfg = cfg
        self._step = 0
        self._rows: Optional[Deque[ReportRow]] = deque(maxlen=cfg.maxlen) if cfg.mode == "last_k" else None

    @property
    def step(self) -> int:
        return self._step

    @step.setter
    def step(self, value: int) -> None:
        self._step = int(value)

    def add(self, label: str, values: Dict[str, float]) -> ReportRow:
        self._step += 1
        row = ReportRow(self._step, label, dict(values))
        if self._rows is not None:
            self._rows.append(row)
        return row

    def rows(self) -> List[ReportRow]:
        return list(self._rows) if self._rows is not None else []

    def reset(self) -> None:
        self._step = 0
        if self._rows is not None:
            self._rows.clear()
