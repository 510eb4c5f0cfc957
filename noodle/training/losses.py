"""Loss functions for monitoring training.

NeuralNetwork.backpropagate descends on the half squared error; these
helpers report it over a whole dataset.
"""

from typing import Sequence


def squared_error(output: Sequence[float], target: Sequence[float]) -> float:
    """Half squared error 0.5 * sum (a - t)^2 of one sample."""
    return 0.5 * sum((a - t) ** 2 for a, t in zip(output, target))


def dataset_loss(network, inputs, targets):
    """Mean half squared error of `network` over a dataset."""
    if not inputs:
        return 0.0
    return sum(squared_error(network.predict(x), t) for x, t in zip(inputs, targets)) / len(inputs)
