# equations.py
"""
Closed-form text equations of a network's output neurons.

Diagnostic/export only. The full equation always wraps every neuron in a
sigmoid, 1 / (1 + exp(-(z))), whatever activation the neuron is actually
configured with; a network using relu or tanh gets a textual formula that
does not match its predictions.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from noodle.models.network import NeuralNetwork
    from noodle.models.neuron import Neuron


def _check(network: "NeuralNetwork", output_neuron_index: int) -> "Neuron":
    if len(network.layers) < 2:
        raise ValueError("The network needs at least one hidden layer to build an output equation.")
    output_layer = network.layers[-1]
    if not 0 <= output_neuron_index < len(output_layer):
        raise IndexError(f"Invalid output neuron index: {output_neuron_index}")
    return output_layer[output_neuron_index]


def _weighted_sum(neuron: "Neuron", terms: List[str]) -> str:
    eq = f"{neuron.get_bias():.3f}"
    for c in neuron.connections:
        eq += f" + ({c.weight:.3f}) * {terms[c.source_index]}"
    return eq


def input_labels(network: "NeuralNetwork") -> List[str]:
    return [f"x{i + 1}" for i in range(network.layer_sizes[0])]


def output_equation(network: "NeuralNetwork", output_neuron_index: int) -> str:
    """y = b + (w1) * x1 + ... for one output neuron, in terms of its own inputs."""
    neuron = _check(network, output_neuron_index)
    terms = [f"x{i + 1}" for i in range(network.layer_sizes[-2])]
    return f"y = {_weighted_sum(neuron, terms)}"


def full_equation(network: "NeuralNetwork", output_neuron_index: int) -> str:
    """Nested expression of one output from the raw inputs through every layer."""
    _check(network, output_neuron_index)
    terms = input_labels(network)
    for layer in network.layers:
        terms = [f"1 / (1 + exp(-({_weighted_sum(n, terms)})))" for n in layer]
    return f"y = {terms[output_neuron_index]}"
