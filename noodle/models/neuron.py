# neuron.py
from __future__ import annotations
from numbers import Integral
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from noodle.activations import get_activation
from noodle.core import ActivationFunction, Connection, make_rng, random_weight


ConnectionSpec = Union[Connection, tuple, dict]


class Neuron:
    """
    Gradient-trainable unit with explicit (source_index, weight) connections:

      z = b + sum_c inputs[c.source_index] * c.weight
      a = f(z)

    Connections may be sparse and need not be unique per source; a source
    wired twice contributes twice. Weights are exposed in connection-list
    order, so get_weights()/set_weights() must be used as a matched pair.
    """
    def __init__(
        self,
        input_size: int = 0,
        learning_rate: float = 0.1,
        activation: Union[str, ActivationFunction] = "sigmoid",
        connections: Optional[Iterable[ConnectionSpec]] = None,
        bias: Optional[float] = None,
        name: str = "Neuron",
        rng: Optional[np.random.Generator] = None,
    ):
        self.rng = make_rng(rng)
        self.learning_rate = learning_rate
        self.activation = get_activation(activation)
        self.name = name

        specs = list(connections) if connections is not None else []
        if specs:
            self.connections: List[Connection] = [self._to_connection(c) for c in specs]
        else:
            if input_size <= 0:
                raise ValueError("Neuron needs a positive input_size or explicit connections")
            self.connections = [Connection(i, random_weight(self.rng)) for i in range(input_size)]

        self.bias = random_weight(self.rng) if bias is None else float(bias)

    def _to_connection(self, spec: ConnectionSpec) -> Connection:
        if isinstance(spec, Connection):
            index, weight = spec.source_index, spec.weight
        elif isinstance(spec, dict):
            index, weight = spec["index"], spec.get("weight")
        else:
            index, weight = spec
        if isinstance(index, bool) or not isinstance(index, Integral) or index < 0:
            raise ValueError(f"Connection source index must be a non-negative integer, got {index!r}")
        return Connection(int(index), random_weight(self.rng) if weight is None else float(weight))

    # ----- forward -----
    def weighted_sum(self, inputs: Sequence[float]) -> float:
        total = self.bias
        for c in self.connections:
            if c.source_index >= len(inputs):
                raise IndexError(
                    f"{self.name}: connection index {c.source_index} out of range for {len(inputs)} inputs"
                )
            total += c.compute(inputs)
        return total

    def predict(self, inputs: Sequence[float]) -> float:
        return self.activate(self.weighted_sum(inputs))

    def activate(self, z: float) -> float:
        return self.activation.f(z)

    def activation_derivative(self, z: float) -> float:
        return self.activation.df(z)

    def set_activation_function(self, activation: Union[str, ActivationFunction]) -> None:
        self.activation = get_activation(activation)

    # ----- wiring -----
    def add_connection(self, source_index: int, weight: Optional[float] = None) -> Connection:
        conn = self._to_connection((source_index, weight))
        self.connections.append(conn)
        return conn

    def get_connections(self) -> List[Connection]:
        return self.connections

    def weight_for(self, source_index: int) -> float:
        """Total weight from one input index (0.0 when not wired)."""
        return sum(c.weight for c in self.connections if c.source_index == source_index)

    # ----- accessors -----
    def get_weights(self) -> List[float]:
        return [c.weight for c in self.connections]

    def set_weights(self, weights: Sequence[float]) -> None:
        if len(weights) != len(self.connections):
            raise ValueError(
                f"{self.name}: got {len(weights)} weights for {len(self.connections)} connections"
            )
        values = [float(w) for w in weights]
        for c, w in zip(self.connections, values):
            c.set_weight(w)

    def get_bias(self) -> float:
        return self.bias

    def set_bias(self, bias: float) -> None:
        self.bias = float(bias)

    def __repr__(self) -> str:
        return f"Neuron(name={self.name!r}, activation={self.activation.key}, inputs={len(self.connections)})"
