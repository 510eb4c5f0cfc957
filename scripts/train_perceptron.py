#!/usr/bin/env python
"""
Train a single perceptron on every logic gate with the delta rule.

AND, OR, NAND and NOR are linearly separable and reach 100%; XOR and XNOR
cannot be learned by a single linear unit.

Usage:
    python scripts/train_perceptron.py
    python scripts/train_perceptron.py --epochs 50 --lr 0.1 --no-shuffle
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

import argparse

from noodle.data.logic_gates import GATES, logic_gate, perceptron_samples
from noodle.models.perceptron import Perceptron
from noodle.utils.metrics import binary_accuracy, evaluate


def main():
    parser = argparse.ArgumentParser(description='Perceptron on logic gates')
    parser.add_argument('--epochs', type=int, default=50, help='Number of epochs')
    parser.add_argument('--lr', type=float, default=0.1, help='Learning rate')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--no-shuffle', action='store_true', help='Keep sample order fixed')
    parser.add_argument('--plot', type=str, default=None, help='Directory for decision heatmaps')
    args = parser.parse_args()

    for gate in GATES:
        p = Perceptron(2, learning_rate=args.lr, seed=args.seed)
        p.fit(perceptron_samples(gate), epochs=args.epochs, shuffle=not args.no_shuffle)

        inputs, targets = logic_gate(gate)
        scores = evaluate(p.predict, inputs, targets, scorer=binary_accuracy)
        print(f"[{gate.upper():4s}] acc={scores['metric']:6.2f}% ({scores['correct']}/{scores['total']}) | "
              f"w={[round(w, 3) for w in p.get_weights()]} b={p.get_bias():.3f}")

        if args.plot:
            from noodle.utils.visualization import plot_decision_heatmap
            plot_decision_heatmap(p.predict, title=f'Perceptron {gate.upper()}',
                                  save_path=os.path.join(args.plot, f'perceptron_{gate}.png'))


if __name__ == '__main__':
    main()
