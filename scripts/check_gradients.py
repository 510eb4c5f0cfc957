#!/usr/bin/env python
"""
Compare NeuralNetwork.backpropagate with one PyTorch SGD step.

Both models start from the same parameters; after one step on the same
sample every weight and bias should agree to float64 precision.

Usage:
    python scripts/check_gradients.py
    python scripts/check_gradients.py --layers 3 5 4 2 --activation tanh --lr 0.3
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

import argparse

import numpy as np

from noodle.models.network import NeuralNetwork
from noodle.models.torch_reference import TorchMLP, torch_sgd_step


def max_param_diff(network, model):
    weights, biases = model.parameters_as_lists()
    diff = 0.0
    for l, layer in enumerate(network.layers):
        for j, neuron in enumerate(layer):
            diff = max(diff, float(np.max(np.abs(np.subtract(neuron.get_weights(), weights[l][j])))))
            diff = max(diff, abs(neuron.get_bias() - biases[l][j]))
    return diff


def main():
    parser = argparse.ArgumentParser(description='Backprop vs autograd')
    parser.add_argument('--layers', type=int, nargs='+', default=[2, 3, 1])
    parser.add_argument('--activation', type=str, default='sigmoid')
    parser.add_argument('--lr', type=float, default=0.5)
    parser.add_argument('--steps', type=int, default=10)
    parser.add_argument('--seed', type=int, default=0)
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    network = NeuralNetwork(args.layers, learning_rate=args.lr, activation=args.activation, rng=rng)
    model = TorchMLP.from_network(network)

    print(f"=== layers={args.layers} activation={args.activation} lr={args.lr} ===")
    for step in range(1, args.steps + 1):
        x = rng.uniform(-1, 1, size=args.layers[0]).tolist()
        t = rng.uniform(0, 1, size=args.layers[-1]).tolist()
        loss_ours = network.backpropagate(x, t)
        loss_torch = torch_sgd_step(model, x, t, lr=args.lr)
        print(f"step {step:3d} | loss ours={loss_ours:.8f} torch={loss_torch:.8f} | "
              f"max |dparam|={max_param_diff(network, model):.2e}")


if __name__ == '__main__':
    main()
