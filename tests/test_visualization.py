#!/usr/bin/env python
"""
Test visualization helpers: prediction grid layout and figure output.

Usage:
    python tests/test_visualization.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import tempfile

import numpy as np

from noodle.activations import ACTIVATIONS
from noodle.models.network import NeuralNetwork
from noodle.utils.visualization import (
    plot_activation,
    plot_decision_heatmap,
    plot_training_history,
    prediction_grid,
)


def test_prediction_grid_layout():
    """Columns follow x1, row 0 is x2 = 1."""
    print("\n" + "=" * 60)
    print("Test 1: Grid layout")
    print("=" * 60)

    grid = prediction_grid(lambda v: v[0], size=50)
    assert grid.shape == (50, 50)
    assert np.allclose(grid[:, 0], 0.0)
    assert np.allclose(grid[:, 10], 0.2)

    top = prediction_grid(lambda v: [v[0], v[1]], size=10, output_index=1)
    assert np.allclose(top[0], 1.0)
    assert np.allclose(top[:, 0], [1 - j / 10 for j in range(10)])

    binary = prediction_grid(lambda v: v[0], size=50, binary=True)
    assert set(np.unique(binary)) <= {0.0, 1.0}
    assert binary[0, 25] == 1.0 and binary[0, 24] == 0.0

    clamped = prediction_grid(lambda v: 5.0, size=4)
    assert np.all(clamped == 1.0)

    print("✓ Grid orientation correct")


def test_figures_are_saved():
    """Every plot helper returns a figure and writes the requested file."""
    print("\n" + "=" * 60)
    print("Test 2: Saving figures")
    print("=" * 60)

    net = NeuralNetwork([2, 2, 1], seed=0)
    history = {'epoch': [1, 2, 3], 'loss': [0.3, 0.2, 0.1], 'acc': [50.0, 75.0, 100.0]}

    with tempfile.TemporaryDirectory() as tmp:
        heatmap = os.path.join(tmp, 'plots', 'heatmap.png')
        curve = os.path.join(tmp, 'plots', 'activation.png')
        curves = os.path.join(tmp, 'plots', 'history.png')

        assert plot_decision_heatmap(net.predict, title='xor', size=10, save_path=heatmap) is not None
        assert plot_activation(ACTIVATIONS['tanh'], save_path=curve) is not None
        assert plot_training_history(history, label='xor', save_path=curves) is not None
        assert plot_training_history({'epoch': [1], 'loss': [0.1], 'acc': []}) is not None

        for path in (heatmap, curve, curves):
            assert os.path.getsize(path) > 0

    print("✓ Figures written")


def run_all_tests():
    test_prediction_grid_layout()
    test_figures_are_saved()
    print("\n✅ All visualization tests passed!")


if __name__ == "__main__":
    run_all_tests()
