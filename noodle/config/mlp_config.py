"""Multilayer perceptron configuration."""

from noodle.activations import ACTIVATIONS
from noodle.data.logic_gates import GATES

from .base_config import BaseConfig


class MLPConfig(BaseConfig):
    """Configuration for NeuralNetwork training on a logic gate."""

    # Model architecture
    layer_sizes = [2, 2, 1]   # inputs, hidden..., outputs
    activation = "sigmoid"    # Catalog key (see noodle.activations.ACTIVATIONS)
    input_names = ["A", "B"]
    output_names = ["Y"]

    # Training (plain per-sample SGD)
    learning_rate = 0.5
    num_epochs = 5000

    # Data
    dataset = "xor"           # One of noodle.data.logic_gates.GATES

    def validate(self):
        """Check values that would otherwise fail deep inside training."""
        if self.activation not in ACTIVATIONS:
            raise ValueError(f"Unknown activation in config: {self.activation}")
        if self.dataset not in GATES:
            raise ValueError(f"Unknown dataset in config: {self.dataset}")
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")
        if self.num_epochs < 0:
            raise ValueError(f"num_epochs must be >= 0, got {self.num_epochs}")
        return self
