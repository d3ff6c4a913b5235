"""
실행:
  PYTHONPATH=src python -m evalstream.metrics

가짜 eval loop로 MetricSet 전체 경로(add_metric -> update -> report -> reset)를 점검.
"""
from __future__ import annotations
import sys
from typing import Dict, Optional, TextIO

import torch
from loguru import logger

from evalstream.metrics import HistoryConfig, MetricSet, MetricSetConfig
from evalstream.utils.logging import setup_logging


def make_batch(gen: torch.Generator, batch_size: int, num_classes: int):
    """
    regression: 확률 라벨 + 노이즈 섞인 예측 (N, 1)
    classification: 정답 클래스에 가산점을 준 점수 (N, C)
    """
    y_reg = torch.rand(batch_size, generator=gen)
    p_reg = (y_reg + 0.1 * torch.randn(batch_size, generator=gen)).clamp(0.0, 1.0).unsqueeze(1)

    y_cls = torch.randint(0, num_classes, (batch_size,), generator=gen)
    logits = torch.randn(batch_size, num_classes, generator=gen)
    logits[torch.arange(batch_size), y_cls] += 1.5
    return p_reg, y_reg, logits, y_cls.to(torch.float32)


def main(
    num_batches: int = 20,
    batch_size: int = 64,
    num_classes: int = 3,
    seed: int = 0,
    sink: Optional[TextIO] = None,
) -> Dict[str, Dict[str, float]]:
    sink = sink or sys.stdout
    gen = torch.Generator().manual_seed(seed)

    reg_set = MetricSet.from_config(
        MetricSetConfig(metrics=("rmse", "r2"), history=HistoryConfig(mode="last_k", maxlen=10))
    )
    # "bogus"는 permissive 모드에서 무시, 중복 "error"는 하나만 남는다
    cls_set = MetricSet.from_config(MetricSetConfig(metrics=("error", "bogus", "error")))
    assert reg_set.names() == ["r2", "rmse"]
    assert cls_set.names() == ["error"]

    for _ in range(num_batches):
        p_reg, y_reg, logits, y_cls = make_batch(gen, batch_size, num_classes)
        reg_set.update(p_reg, y_reg)
        cls_set.update(logits, y_cls)

    sink.write("[smoke]")
    reg_values = reg_set.report(sink, "eval")
    cls_values = cls_set.report(sink, "eval")
    sink.write("\n")

    logger.info(f"rmse={reg_values['rmse']:.4f} r2={reg_values['r2']:.4f} error={cls_values['error']:.4f}")
    return {"regression": reg_values, "classification": cls_values}


if __name__ == "__main__":
    setup_logging()
    main()
