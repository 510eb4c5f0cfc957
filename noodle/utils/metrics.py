# metrics.py
from __future__ import annotations
from typing import Callable, Dict, Sequence

import numpy as np


def binary_accuracy(
    outputs: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
    threshold: float = 0.5,
) -> Dict[str, float]:
    preds = (np.asarray(outputs, dtype=float) >= threshold).astype(int)
    truth = np.asarray(targets, dtype=float).astype(int)
    total = int(truth.size)
    correct = int((preds == truth).sum())
    acc = (100.0 * correct / total) if total > 0 else 0.0
    return {"name": "acc", "metric": acc, "correct": correct, "total": total}


def mse(
    outputs: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
) -> Dict[str, float]:
    diff = np.asarray(outputs, dtype=float) - np.asarray(targets, dtype=float)
    count = int(diff.size)
    value = float((diff * diff).sum() / count) if count > 0 else 0.0
    return {"name": "mse", "metric": value, "count": count}


def evaluate(
    predict_fn: Callable[[Sequence[float]], Sequence[float]],
    inputs: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
    scorer: Callable[..., Dict[str, float]] = binary_accuracy,
    **scorer_kwargs,
) -> Dict[str, float]:
    """Score any `input -> output vector` function (network.predict, wrapped perceptron, ...)."""
    outputs = [list(np.atleast_1d(predict_fn(x))) for x in inputs]
    return scorer(outputs, targets, **scorer_kwargs)
