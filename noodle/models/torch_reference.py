# torch_reference.py
from __future__ import annotations
from typing import List, Sequence, Tuple

import torch
import torch.nn as nn

from noodle.models.network import NeuralNetwork


_TORCH_ACTIVATIONS = {
    "sigmoid": nn.Sigmoid,
    "tanh": nn.Tanh,
    "relu": nn.ReLU,
    "leaky_relu": lambda: nn.LeakyReLU(0.01),
    "elu": lambda: nn.ELU(alpha=1.0),
    "softplus": nn.Softplus,
    "linear_bounded": lambda: nn.Hardtanh(-1.0, 1.0),
}


class TorchMLP(nn.Module):
    """
    nn.Linear stack mirroring a dense NeuralNetwork, used to cross-check
    the hand-written backpropagation against autograd.

    Every layer must share one activation (the mirror applies it per layer)
    and every neuron must be densely wired in source order.
    """
    def __init__(self, layer_sizes: Sequence[int], activation: str = "sigmoid",
                 dtype: torch.dtype = torch.float64):
        super().__init__()
        if activation not in _TORCH_ACTIVATIONS:
            raise ValueError(f"No torch counterpart for activation: {activation}")
        self.layer_sizes = list(layer_sizes)
        self.linears = nn.ModuleList(
            nn.Linear(n_in, n_out, dtype=dtype)
            for n_in, n_out in zip(self.layer_sizes[:-1], self.layer_sizes[1:])
        )
        self.act = _TORCH_ACTIVATIONS[activation]()
        self.dtype = dtype

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        for linear in self.linears:
            x = self.act(linear(x))
        return x

    @classmethod
    @torch.no_grad()
    def from_network(cls, network: NeuralNetwork, dtype: torch.dtype = torch.float64) -> "TorchMLP":
        keys = {n.activation.key for layer in network.layers for n in layer}
        if len(keys) != 1:
            raise ValueError(f"Mixed activations cannot be mirrored: {sorted(keys)}")
        model = cls(network.layer_sizes, activation=keys.pop(), dtype=dtype)
        for linear, layer in zip(model.linears, network.layers):
            for j, neuron in enumerate(layer):
                if [c.source_index for c in neuron.connections] != list(range(linear.in_features)):
                    raise ValueError(f"{neuron.name} is not densely wired; cannot mirror it")
                linear.weight[j] = torch.tensor(neuron.get_weights(), dtype=dtype)
                linear.bias[j] = neuron.get_bias()
        return model

    def parameters_as_lists(self) -> Tuple[List[List[List[float]]], List[List[float]]]:
        """(weights[l][j][k], biases[l][j]) in the same layout as NeuralNetwork.to_dict()."""
        weights = [linear.weight.detach().cpu().tolist() for linear in self.linears]
        biases = [linear.bias.detach().cpu().tolist() for linear in self.linears]
        return weights, biases


def torch_sgd_step(model: TorchMLP, inputs: Sequence[float], target: Sequence[float], lr: float) -> float:
    """
    One SGD step on 0.5 * sum (a - t)^2, the loss whose gradient is the
    delta rule used by NeuralNetwork.backpropagate.
    """
    opt = torch.optim.SGD(model.parameters(), lr=lr)
    x = torch.tensor(list(inputs), dtype=model.dtype)
    t = torch.tensor(list(target), dtype=model.dtype)
    loss = 0.5 * ((model(x) - t) ** 2).sum()
    opt.zero_grad(set_to_none=True)
    loss.backward()
    opt.step()
    return float(loss.detach())
