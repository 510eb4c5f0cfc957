#!/usr/bin/env python
"""
Train a multilayer perceptron on a logic gate.

Usage:
    python scripts/train.py
    python scripts/train.py --gate xor --layers 2 3 1 --epochs 8000 --lr 0.5
    python scripts/train.py --resume checkpoints/xor_model.json --epochs 1000
    python scripts/train.py --config my_config.py --plot
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

import argparse

from noodle.config.mlp_config import MLPConfig
from noodle.data.logic_gates import logic_gate
from noodle.models.network import NeuralNetwork
from noodle.training.trainer import Trainer
from noodle.utils.checkpointing import load_model, save_model


def main():
    """Main training function."""
    parser = argparse.ArgumentParser(description='Train a NeuralNetwork on a logic gate')
    parser.add_argument('--config', type=str, default=None, help='Path to custom config')
    parser.add_argument('--gate', type=str, default=None, help='Logic gate (and, or, xor, ...)')
    parser.add_argument('--layers', type=int, nargs='+', default=None, help='Layer sizes, e.g. 2 2 1')
    parser.add_argument('--activation', type=str, default=None, help='Activation key')
    parser.add_argument('--epochs', type=int, default=None, help='Number of epochs')
    parser.add_argument('--lr', type=float, default=None, help='Learning rate')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--resume', type=str, default=None, help='Resume from a saved model')
    parser.add_argument('--output', type=str, default=None, help='Where to save the trained model')
    parser.add_argument('--plot', action='store_true', help='Save loss curve and decision heatmap')
    args = parser.parse_args()

    print("=" * 60)
    print("NoodleML - Multilayer Perceptron Training")
    print("=" * 60)

    if args.config:
        import importlib.util
        spec = importlib.util.spec_from_file_location("config", args.config)
        config_module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(config_module)
        config = config_module.MLPConfig()
    else:
        config = MLPConfig()

    if args.gate is not None:
        config.dataset = args.gate.lower()
    if args.layers is not None:
        config.layer_sizes = args.layers
    if args.activation is not None:
        config.activation = args.activation
    if args.epochs is not None:
        config.num_epochs = args.epochs
    if args.lr is not None:
        config.learning_rate = args.lr
    if args.seed is not None:
        config.seed = args.seed
    config.validate()

    inputs, targets = logic_gate(config.dataset)

    if args.resume:
        network = load_model(args.resume)
        config.layer_sizes = network.layer_sizes
    else:
        network = NeuralNetwork(
            config.layer_sizes,
            input_names=config.input_names,
            output_names=config.output_names,
            learning_rate=config.learning_rate,
            activation=config.activation,
            seed=config.seed,
        )

    print(f"Gate: {config.dataset.upper()} | Layers: {config.layer_sizes} | Activation: {config.activation}")
    print(f"Epochs: {config.num_epochs} | LR: {config.learning_rate} | Seed: {config.seed}")

    trainer = Trainer(network, inputs, targets, config)
    history = trainer.train()

    print("\nPredictions:")
    for x, t in zip(inputs, targets):
        out = network.predict(x)
        print(f"  {x} -> {out[0]:.4f} (target {t[0]:.0f})")

    if len(network.layers) >= 2:
        print(f"\n{network.get_output_equation(0)}")

    output_path = args.output or os.path.join(config.checkpoint_dir, f'{config.dataset}_model.json')
    save_model(network, output_path)

    if args.plot:
        from noodle.utils.visualization import plot_decision_heatmap, plot_training_history
        os.makedirs(config.output_dir, exist_ok=True)
        plot_training_history(history, label=config.dataset,
                              save_path=os.path.join(config.output_dir, f'{config.dataset}_history.png'))
        plot_decision_heatmap(network.predict, title=f'{config.dataset.upper()} network',
                              save_path=os.path.join(config.output_dir, f'{config.dataset}_heatmap.png'))


if __name__ == '__main__':
    main()
