"""Model checkpointing utilities (JSON interchange format)."""

import json
import os

from noodle.core import InvalidModelError
from noodle.models.network import NeuralNetwork


def save_model(network, path, epoch=None):
    """
    Save a network to a JSON file.

    Args:
        network: NeuralNetwork to save
        path: Path of the JSON file
        epoch: Optional epoch counter to store (defaults to network.epoch)
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = network.to_dict()
    if epoch is not None:
        data['epoch'] = epoch

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)
    print(f"Model saved to {path}")


def load_model(path):
    """
    Load a network from a JSON file.

    Args:
        path: Path of the JSON file

    Returns:
        network: Freshly built NeuralNetwork (epoch restored from the file)
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Model file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidModelError(f"Invalid or corrupt model: {path} is not valid JSON") from e

    if not isinstance(data, dict):
        raise InvalidModelError(f"Invalid or corrupt model: {path} does not hold a JSON object")

    network = NeuralNetwork.from_dict(data)
    print(f"Model loaded from {path} (epoch {network.epoch})")
    return network
