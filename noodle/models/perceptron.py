# perceptron.py
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from noodle.activations import ACTIVATIONS
from noodle.core import make_rng, random_weight


Sample = Union[Tuple[Sequence[float], float], dict]


class Perceptron:
    """
    Single linear unit trained with the classical perceptron (delta) rule:

      sum   = b + sum_i w_i x_i
      y     = step(sum)            (binary, fires when sum >= 0.5)
            | clamp(sum, -1, 1)    (when the threshold is disabled)

      error = target - y
      w_i  += lr * error * x_i
      b    += lr * error

    Learning is online (one update per sample). Convergence is only
    guaranteed on linearly separable data and is never detected.
    """
    def __init__(
        self,
        input_size: int,
        learning_rate: float = 0.1,
        disable_threshold: bool = False,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        if input_size <= 0:
            raise ValueError(f"input_size must be positive, got {input_size}")
        if learning_rate <= 0:
            raise ValueError(f"learning_rate must be > 0, got {learning_rate}")
        self.rng = make_rng(rng, seed)
        self.learning_rate = learning_rate
        self.weights: List[float] = [random_weight(self.rng) for _ in range(input_size)]
        self.bias = random_weight(self.rng)
        self.activation_threshold = 0.0  # not used by activate()
        self.disable_threshold = disable_threshold
        self.name = "Perceptron"

    # ----- forward -----
    def activate(self, x: float) -> float:
        if self.disable_threshold:
            return ACTIVATIONS["linear_bounded"].f(x)
        return ACTIVATIONS["binary"].f(x)

    def weighted_sum(self, inputs: Sequence[float]) -> float:
        if len(inputs) < len(self.weights):
            raise IndexError(
                f"Perceptron expects at least {len(self.weights)} inputs, got {len(inputs)}"
            )
        total = self.bias
        for w, x in zip(self.weights, inputs):
            total += w * x
        return total

    def predict(self, inputs: Sequence[float]) -> float:
        return self.activate(self.weighted_sum(inputs))

    # ----- learning -----
    def train(self, inputs: Sequence[float], target: float) -> float:
        """One delta-rule step. Returns the error observed before the update."""
        error = target - self.predict(inputs)
        for i in range(len(self.weights)):
            self.weights[i] += self.learning_rate * error * inputs[i]
        self.bias += self.learning_rate * error
        return error

    def fit(self, data: Iterable[Sample], epochs: int = 20, shuffle: bool = True) -> None:
        """
        Run `epochs` passes of train() over (x, y) samples.
        With shuffle=True the order is re-drawn independently every epoch.
        """
        samples = [_unpack(s) for s in data]
        for _ in range(epochs):
            order = self.rng.permutation(len(samples)) if shuffle else range(len(samples))
            for idx in order:
                x, y = samples[idx]
                self.train(x, y)

    def reset(self) -> None:
        self.weights = [random_weight(self.rng) for _ in self.weights]
        self.bias = random_weight(self.rng)

    # ----- accessors -----
    def get_weights(self) -> List[float]:
        return list(self.weights)

    def set_weights(self, weights: Sequence[float]) -> None:
        if len(weights) != len(self.weights):
            raise ValueError(
                f"Expected {len(self.weights)} weights, got {len(weights)}"
            )
        self.weights = [float(w) for w in weights]

    def get_bias(self) -> float:
        return self.bias

    def set_bias(self, bias: float) -> None:
        self.bias = float(bias)

    def set_activation_threshold(self, threshold: float) -> None:
        self.activation_threshold = threshold

    def set_disable_threshold(self, disable: bool) -> None:
        self.disable_threshold = disable


def _unpack(sample: Sample) -> Tuple[Sequence[float], float]:
    if isinstance(sample, dict):
        return sample["x"], sample["y"]
    x, y = sample
    return x, y
