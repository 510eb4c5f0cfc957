# network.py
from __future__ import annotations
from numbers import Integral
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from noodle.activations import get_activation, resolve_activation
from noodle.core import ActivationFunction, ForwardCache, InvalidModelError, make_rng
from noodle.models import equations
from noodle.models.neuron import Neuron


REQUIRED_MODEL_FIELDS = ("layer_sizes", "weights", "biases", "epoch")


def validate_layer_sizes(layer_sizes) -> List[int]:
    if not isinstance(layer_sizes, (list, tuple)) or len(layer_sizes) < 2:
        raise ValueError("layer_sizes must be a list with at least two entries.")
    for size in layer_sizes:
        if isinstance(size, bool) or not isinstance(size, Integral) or size <= 0:
            raise ValueError(f"Every layer size must be a positive integer, got {size!r}.")
    return [int(s) for s in layer_sizes]


def _layer_prefix(layer_idx: int) -> str:
    # 0 -> "A", 1 -> "B", ...
    return chr(ord("A") + layer_idx)


class NeuralNetwork:
    """
    Multilayer perceptron built from explicit Neuron objects.

      layer_sizes = [2, 4, 1]  ->  2 inputs, one hidden layer of 4, 1 output

    layers[l] holds layer_sizes[l+1] neurons, each wired to the
    layer_sizes[l] outputs of the previous layer (or the raw input for l=0).

    Training is plain online SGD on the squared error 0.5 * sum (a - t)^2:

      delta_L[j] = (a_L[j] - t[j]) * f'(z_L[j])
      delta_l[i] = (sum_j w[j->i] * delta_{l+1}[j]) * f'(z_l[i])
      w[j->k]   -= lr * delta[j] * a_prev[k]
      b[j]      -= lr * delta[j]

    `epoch` is bookkeeping for trainers/savers; propagation never touches it.
    """
    def __init__(
        self,
        layer_sizes: Sequence[int],
        input_names: Optional[Sequence[str]] = None,
        output_names: Optional[Sequence[str]] = None,
        learning_rate: float = 0.1,
        activation: Union[str, ActivationFunction] = "sigmoid",
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.layer_sizes = validate_layer_sizes(layer_sizes)
        self.activation = get_activation(activation)
        self.learning_rate = learning_rate
        self.input_names: List[str] = list(input_names or [])
        self.output_names: List[str] = list(output_names or [])
        self.epoch = 0
        self.rng = make_rng(rng, seed)

        self.layers: List[List[Neuron]] = []
        for l in range(1, len(self.layer_sizes)):
            self.layers.append(
                self._build_layer(l - 1, self.layer_sizes[l - 1], self.layer_sizes[l], self.activation)
            )

    def _build_layer(self, layer_idx: int, input_size: int, count: int,
                     activation: ActivationFunction) -> List[Neuron]:
        prefix = _layer_prefix(layer_idx)
        return [
            Neuron(input_size, self.learning_rate, activation, name=f"{prefix}{i + 1}", rng=self.rng)
            for i in range(count)
        ]

    # ========================= forward =========================

    def predict(self, inputs: Sequence[float]) -> List[float]:
        a = list(inputs)
        for layer in self.layers:
            a = [neuron.predict(a) for neuron in layer]
        return a

    def forward(self, inputs: Sequence[float]) -> Tuple[List[float], ForwardCache]:
        """Forward pass that keeps every layer's z and a (activations[0] is the input)."""
        cache = ForwardCache(zs=[], activations=[list(inputs)])
        for layer in self.layers:
            prev_a = cache.activations[-1]
            z = [neuron.weighted_sum(prev_a) for neuron in layer]
            a = [neuron.activate(z_j) for neuron, z_j in zip(layer, z)]
            cache.zs.append(z)
            cache.activations.append(a)
        return cache.activations[-1], cache

    # ========================= backward =========================

    def backpropagate(self, inputs: Sequence[float], target: Sequence[float]) -> float:
        """
        One SGD step on a single (input, target) pair.

        Deltas for layer l-1 are computed from layer l's weights before they
        are updated; a layer's new weights are written only once its deltas
        are known. Backward sums are matched by connection source index, so
        sparse wiring stays correct.

        Returns the sample loss 0.5 * sum (a - t)^2 measured before the update.
        """
        output, cache = self.forward(inputs)
        if len(target) != len(output):
            raise ValueError(f"Target has {len(target)} values, network outputs {len(output)}")

        loss = 0.5 * sum((a - t) ** 2 for a, t in zip(output, target))

        output_layer = self.layers[-1]
        z_out = cache.zs[-1]
        delta = [
            (a - t) * neuron.activation_derivative(z)
            for neuron, a, t, z in zip(output_layer, output, target, z_out)
        ]

        lr = self.learning_rate
        for l in range(len(self.layers) - 1, -1, -1):
            layer = self.layers[l]
            prev_a = cache.activations[l]

            # new parameters from the pre-update values
            updates = []
            for neuron, d in zip(layer, delta):
                new_weights = [c.weight - lr * d * prev_a[c.source_index] for c in neuron.connections]
                new_bias = neuron.get_bias() - lr * d
                updates.append((new_weights, new_bias))

            if l > 0:
                delta = self._propagate_delta(layer, delta, self.layers[l - 1], cache.zs[l - 1])

            for neuron, (new_weights, new_bias) in zip(layer, updates):
                neuron.set_weights(new_weights)
                neuron.set_bias(new_bias)

        return loss

    @staticmethod
    def _propagate_delta(layer: List[Neuron], delta: List[float],
                         prev_layer: List[Neuron], prev_z: List[float]) -> List[float]:
        back = [0.0] * len(prev_layer)
        for neuron, d in zip(layer, delta):
            for c in neuron.connections:
                back[c.source_index] += c.weight * d
        return [
            s * prev_neuron.activation_derivative(z)
            for s, prev_neuron, z in zip(back, prev_layer, prev_z)
        ]

    def train(self, inputs: Sequence[Sequence[float]], targets: Sequence[Sequence[float]],
              epochs: int, lr: float = 0.1) -> None:
        """
        `epochs` in-order passes of backpropagate() over every sample.
        Unlike Perceptron.fit, samples are never shuffled.
        """
        if len(inputs) != len(targets):
            raise ValueError(f"Got {len(inputs)} inputs for {len(targets)} targets")
        self.learning_rate = lr
        for _ in range(epochs):
            for x, t in zip(inputs, targets):
                self.backpropagate(x, t)

    # ========================= views =========================

    def get_layer(self, index: int) -> Dict[str, list]:
        """Weights and biases of one weight layer (0 = first hidden layer)."""
        if not 0 <= index < len(self.layers):
            raise IndexError(f"Layer index {index} out of range (0..{len(self.layers) - 1})")
        layer = self.layers[index]
        return {
            "weights": [n.get_weights() for n in layer],
            "biases": [n.get_bias() for n in layer],
        }

    def get_neuron(self, layer_index: int, neuron_index: int) -> Neuron:
        if not 0 <= layer_index < len(self.layers):
            raise IndexError(f"Layer index {layer_index} out of range")
        layer = self.layers[layer_index]
        if not 0 <= neuron_index < len(layer):
            raise IndexError(f"Neuron index {neuron_index} out of range for layer {layer_index}")
        return layer[neuron_index]

    def get_neuron_matrix(self) -> List[List[Neuron]]:
        return [list(layer) for layer in self.layers if layer]

    def count_neurons(self) -> int:
        return sum(len(layer) for layer in self.layers)

    def debug_print_weights_and_biases(self) -> None:
        print("=== Neural Network ===")
        for l, layer in enumerate(self.layers):
            print(f"Layer {l + 1}:")
            for i, n in enumerate(layer):
                print(f"  Neuron {i} ({n.name}, {n.activation.key}):")
                print(f"    Weights: {[f'{w:.3f}' for w in n.get_weights()]}")
                print(f"    Bias   : {n.get_bias():.3f}")

    # ========================= mutators =========================

    def set_activation_function_for_all(self, activation: Union[str, ActivationFunction]) -> None:
        act = get_activation(activation)
        self.activation = act
        for layer in self.layers:
            for neuron in layer:
                neuron.set_activation_function(act)

    def add_layer(self, nb_neurons: int, activation: Union[str, ActivationFunction] = "sigmoid") -> None:
        """Append a dense layer fed by the current output layer."""
        if isinstance(nb_neurons, bool) or not isinstance(nb_neurons, Integral) or nb_neurons <= 0:
            raise ValueError(f"nb_neurons must be a positive integer, got {nb_neurons!r}")
        act = get_activation(activation)
        input_size = self.layer_sizes[-1]
        self.layers.append(self._build_layer(len(self.layers), input_size, int(nb_neurons), act))
        self.layer_sizes.append(int(nb_neurons))

    # ========================= equations =========================

    def get_output_equation(self, output_neuron_index: int) -> str:
        return equations.output_equation(self, output_neuron_index)

    def get_full_equation(self, output_neuron_index: int) -> str:
        return equations.full_equation(self, output_neuron_index)

    # ========================= interchange =========================

    def to_dict(self) -> dict:
        return {
            "epoch": self.epoch,
            "layer_sizes": list(self.layer_sizes),
            "weights": [[n.get_weights() for n in layer] for layer in self.layers],
            "biases": [[n.get_bias() for n in layer] for layer in self.layers],
            "activations": [[n.activation.key for n in layer] for layer in self.layers],
            "input_names": list(self.input_names),
            "output_names": list(self.output_names),
            "learning_rate": self.learning_rate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NeuralNetwork":
        """
        Build a fresh network from the interchange format.
        Nothing is constructed until every mandatory field is present; any
        value that cannot be turned into a network raises InvalidModelError.
        """
        missing = [k for k in REQUIRED_MODEL_FIELDS if data.get(k) is None]
        if missing:
            raise InvalidModelError(f"Invalid or corrupt model: missing {', '.join(missing)}")

        try:
            return cls._build_from_dict(data)
        except InvalidModelError:
            raise
        except (ValueError, TypeError) as e:
            raise InvalidModelError(f"Invalid or corrupt model: {e}") from e

    @classmethod
    def _build_from_dict(cls, data: dict) -> "NeuralNetwork":
        weights, biases = data["weights"], data["biases"]
        if not isinstance(weights, list) or not isinstance(biases, list):
            raise InvalidModelError("Invalid or corrupt model: weights and biases must be lists")

        learning_rate = data.get("learning_rate")
        network = cls(
            data["layer_sizes"],
            input_names=data.get("input_names"),
            output_names=data.get("output_names"),
            learning_rate=0.1 if learning_rate is None else float(learning_rate),
        )
        network.epoch = int(data["epoch"])

        activations = data.get("activations") or []
        if len(weights) != len(network.layers) or len(biases) != len(network.layers):
            raise InvalidModelError("Invalid or corrupt model: layer count does not match layer_sizes")

        for l, layer in enumerate(network.layers):
            if len(weights[l]) != len(layer) or len(biases[l]) != len(layer):
                raise InvalidModelError(f"Invalid or corrupt model: neuron count mismatch in layer {l}")
            layer_acts = activations[l] if l < len(activations) else []
            for i, neuron in enumerate(layer):
                neuron.set_activation_function(resolve_activation(layer_acts[i] if i < len(layer_acts) else None))
                neuron.set_weights(weights[l][i])
                neuron.set_bias(biases[l][i])
        return network
