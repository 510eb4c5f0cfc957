# core.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np


@dataclass(frozen=True)
class ActivationFunction:
    key: str
    name: str
    fn: Callable[[float], float]
    deriv: Callable[[float], float]

    def f(self, x: float) -> float:
        return self.fn(x)

    def df(self, x: float) -> float:
        return self.deriv(x)


@dataclass
class Connection:
    source_index: int   # index into the input vector of the owning neuron
    weight: float

    def compute(self, inputs: Sequence[float]) -> float:
        return inputs[self.source_index] * self.weight

    def set_weight(self, weight: float) -> None:
        self.weight = weight


@dataclass
class ForwardCache:
    zs: List[List[float]] = field(default_factory=list)           # zs[l][j]: pre-activation of layer l
    activations: List[List[float]] = field(default_factory=list)  # activations[0] = raw input


class InvalidModelError(ValueError):
    """Raised when a persisted model is missing mandatory fields."""


@runtime_checkable
class Unit(Protocol):
    """Capability shared by Perceptron and Neuron."""

    def predict(self, inputs: Sequence[float]) -> float: ...
    def get_weights(self) -> List[float]: ...
    def set_weights(self, weights: Sequence[float]) -> None: ...
    def get_bias(self) -> float: ...
    def set_bias(self, bias: float) -> None: ...


# -------- randomness --------

def make_rng(rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def random_weight(rng: np.random.Generator) -> float:
    """Uniform draw in [-1, 1] as a plain float."""
    return float(rng.uniform(-1.0, 1.0))
