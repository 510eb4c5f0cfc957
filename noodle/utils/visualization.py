"""Offline plots for neurons and networks.

Everything here goes through the public read interfaces only
(`predict(input)` and an activation's f/df), so it works the same for a
Perceptron, a Neuron or a whole NeuralNetwork.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path


def prediction_grid(predict_fn, size=50, output_index=0, binary=False, threshold=0.5):
    """
    Evaluate a two-input model over the unit square.

    Row 0 is the top of the square (second input = 1), matching image layout.

    Args:
        predict_fn: Callable mapping [x1, x2] to a scalar or an output vector
        size: Number of cells per side
        output_index: Output to read when predict_fn returns a vector
        binary: Threshold outputs to 0/1
        threshold: Threshold used when binary is True

    Returns:
        grid: (size, size) array clamped to [0, 1]
    """
    grid = np.zeros((size, size))
    for j in range(size):
        for i in range(size):
            x = i / size
            y = 1 - j / size
            out = np.atleast_1d(predict_fn([x, y]))[output_index]
            if binary:
                out = 1.0 if out >= threshold else 0.0
            grid[j, i] = out
    return np.clip(grid, 0.0, 1.0)


def plot_decision_heatmap(predict_fn, title='', size=50, binary=False, save_path=None):
    """
    Heatmap of a two-input model's output (red = 0, green = 1).

    Returns:
        fig: Matplotlib figure
    """
    grid = prediction_grid(predict_fn, size=size, binary=binary)

    fig, ax = plt.subplots(figsize=(6, 5))
    sns.heatmap(grid, cmap='RdYlGn', vmin=0, vmax=1, cbar=True, ax=ax,
                xticklabels=False, yticklabels=False, square=True)
    ax.set_title(title or 'Network output', fontsize=14)
    ax.set_xlabel('x1 (0 -> 1)')
    ax.set_ylabel('x2 (1 -> 0)')
    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved heatmap to: {save_path}")

    return fig


def plot_activation(activation, x_range=(-5.0, 5.0), num_points=400, save_path=None):
    """Plot an activation function and its derivative."""
    xs = np.linspace(x_range[0], x_range[1], num_points)
    fs = [activation.f(float(x)) for x in xs]
    dfs = [activation.df(float(x)) for x in xs]

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(xs, fs, label='f(x)')
    ax.plot(xs, dfs, label="f'(x)", linestyle='--')
    ax.axhline(0, color='grey', linewidth=0.5)
    ax.axvline(0, color='grey', linewidth=0.5)
    ax.set_title(activation.name)
    ax.legend()
    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved activation plot to: {save_path}")

    return fig


def plot_training_history(history, label='', save_path=None):
    """
    Loss and accuracy curves from Trainer.train().

    Args:
        history: Dict with 'epoch', 'loss' and 'acc' lists
        label: Legend label
        save_path: Optional path to save plot
    """
    fig, ax = plt.subplots(1, 2, figsize=(11, 4.5))
    ax[0].plot(history['epoch'], history['loss'], label=label or 'train')
    ax[0].set_title('Training Loss (mean per sample)')
    ax[0].set_xlabel('Epoch'); ax[0].set_ylabel('Loss'); ax[0].legend()

    if history.get('acc'):
        ax[1].plot(history['epoch'], history['acc'], marker='.', label=label or 'train')
        ax[1].set_title('Accuracy')
        ax[1].set_xlabel('Epoch'); ax[1].set_ylabel('Accuracy (%)'); ax[1].legend()
    else:
        ax[1].text(0.5, 0.5, 'Accuracy snapshots unavailable',
                   ha='center', va='center', transform=ax[1].transAxes)
        ax[1].set_axis_off()
    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150)
        print(f"Saved training curves to: {save_path}")

    return fig
