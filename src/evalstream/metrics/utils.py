# metrics/utils.py
from __future__ import annotations
from typing import Any

import numpy as np
import torch

LAYOUTS = ("instance_major", "output_major")


def to_numpy(x: Any) -> np.ndarray:
    """
    PyTorch 텐서/NumPy 배열/list를 float64 ndarray로 변환.
    GPU 텐서는 그래프를 끊고 CPU로 복사한다 (호출자의 버퍼는 건드리지 않음).
    """
    if isinstance(x, torch.Tensor):
        x = x.detach().cpu().numpy()

    return np.asarray(x, dtype=np.float64)


def as_score_matrix(scores: Any, layout: str = "instance_major") -> np.ndarray:
    """
    score 버퍼를 (num_instances, num_outputs) 형태로 정리.
      - instance_major: (N, K) 그대로
      - output_major:   (K, N) -> 전치
      - 1차원 입력은 instance당 output 1개 (N, 1)
    """
    from .base import MetricShapeError

    if layout not in LAYOUTS:
        raise ValueError(f"Unknown score layout: {layout!r} (expected one of {LAYOUTS})")

    arr = to_numpy(scores)
    if arr.ndim == 1:
        return arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise MetricShapeError(f"score buffer must be 1-D or 2-D, got shape {arr.shape}")
    if layout == "output_major":
        arr = arr.T
    return arr


def as_label_vector(labels: Any) -> np.ndarray:
    from .base import MetricShapeError

    arr = to_numpy(labels)
    if arr.ndim != 1:
        # (N, 1) 라벨은 흔하므로 허용
        if arr.ndim == 2 and arr.shape[1] == 1:
            return arr[:, 0]
        raise MetricShapeError(f"label array must be 1-D, got shape {arr.shape}")
    return arr


def format_fragment(label: str, name: str, value: float) -> str:
    # printf("%f")와 같은 소수점 6자리
    return f"\t{label}-{name}:{value:f}"

