#!/usr/bin/env python
"""
Cross-check NeuralNetwork.backpropagate against PyTorch autograd.

Both models start from identical parameters and take SGD steps on the
same samples with loss 0.5 * sum (a - t)^2.

Usage:
    python tests/test_backprop_torch.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import torch

from noodle.models.network import NeuralNetwork
from noodle.models.torch_reference import TorchMLP, torch_sgd_step


def assert_same_parameters(network, model, atol=1e-10):
    weights, biases = model.parameters_as_lists()
    for l, layer in enumerate(network.layers):
        for j, neuron in enumerate(layer):
            np.testing.assert_allclose(neuron.get_weights(), weights[l][j], rtol=0, atol=atol)
            np.testing.assert_allclose(neuron.get_bias(), biases[l][j], rtol=0, atol=atol)


def test_mirror_forward():
    """TorchMLP.from_network reproduces predict()."""
    print("\n" + "=" * 60)
    print("Test 1: Forward mirror")
    print("=" * 60)

    net = NeuralNetwork([3, 4, 2], seed=0)
    model = TorchMLP.from_network(net)
    x = [0.1, -0.7, 0.4]
    with torch.no_grad():
        out = model(torch.tensor(x, dtype=torch.float64)).tolist()
    np.testing.assert_allclose(out, net.predict(x), rtol=0, atol=1e-12)

    print("✓ Forward passes agree")


def test_sgd_steps_match():
    """Several online steps stay in lockstep for several activations."""
    print("\n" + "=" * 60)
    print("Test 2: SGD steps")
    print("=" * 60)

    for activation, sizes in (("sigmoid", [2, 3, 1]), ("tanh", [3, 5, 4, 2]), ("softplus", [2, 4, 2])):
        rng = np.random.default_rng(1)
        net = NeuralNetwork(sizes, learning_rate=0.3, activation=activation, rng=rng)
        model = TorchMLP.from_network(net)

        for _ in range(5):
            x = rng.uniform(-1, 1, size=sizes[0]).tolist()
            t = rng.uniform(0, 1, size=sizes[-1]).tolist()
            ours = net.backpropagate(x, t)
            theirs = torch_sgd_step(model, x, t, lr=0.3)
            assert abs(ours - theirs) < 1e-10
            assert_same_parameters(net, model)

        print(f"✓ {activation} {sizes}")


def test_mirror_rejects_unsupported_networks():
    """Mixed activations or sparse wiring cannot be mirrored."""
    print("\n" + "=" * 60)
    print("Test 3: Mirror limits")
    print("=" * 60)

    net = NeuralNetwork([2, 2, 1], seed=2)
    net.layers[0][0].set_activation_function("relu")
    try:
        TorchMLP.from_network(net)
        assert False, "Mixed activations should raise"
    except ValueError:
        pass

    net = NeuralNetwork([2, 2, 1], seed=2)
    net.layers[1][0].connections.reverse()
    try:
        TorchMLP.from_network(net)
        assert False, "Reordered wiring should raise"
    except ValueError:
        pass

    print("✓ Unsupported networks rejected")


def run_all_tests():
    test_mirror_forward()
    test_sgd_steps_match()
    test_mirror_rejects_unsupported_networks()
    print("\n✅ All torch cross-check tests passed!")


if __name__ == "__main__":
    run_all_tests()
