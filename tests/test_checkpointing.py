#!/usr/bin/env python
"""
Test the JSON interchange format (to_dict / from_dict / save_model / load_model).

Usage:
    python tests/test_checkpointing.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import json
import tempfile

from noodle.core import InvalidModelError
from noodle.data.logic_gates import logic_gate
from noodle.models.network import NeuralNetwork
from noodle.utils.checkpointing import load_model, save_model


TEST_INPUTS = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0], [0.37, -0.81]]


def test_round_trip_file():
    """Saved and reloaded network predicts identically."""
    print("\n" + "=" * 60)
    print("Test 1: File round trip")
    print("=" * 60)

    net = NeuralNetwork([2, 3, 1], input_names=["A", "B"], output_names=["Y"], seed=0)
    net.layers[0][1].set_activation_function("tanh")
    inputs, targets = logic_gate("xor")
    net.train(inputs, targets, epochs=50, lr=0.5)
    net.epoch = 50

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "models", "xor.json")
        save_model(net, path)
        loaded = load_model(path)

    assert loaded is not net
    assert loaded.epoch == 50
    assert loaded.layer_sizes == [2, 3, 1]
    assert loaded.input_names == ["A", "B"] and loaded.output_names == ["Y"]
    assert loaded.layers[0][1].activation.key == "tanh"
    for x in TEST_INPUTS:
        assert loaded.predict(x) == net.predict(x)

    print("✓ Predictions identical after reload")


def test_required_fields():
    """Missing layer_sizes, weights, biases or epoch -> InvalidModelError."""
    print("\n" + "=" * 60)
    print("Test 2: Required fields")
    print("=" * 60)

    data = NeuralNetwork([2, 2, 1], seed=1).to_dict()
    for key in ("layer_sizes", "weights", "biases", "epoch"):
        broken = dict(data)
        del broken[key]
        try:
            NeuralNetwork.from_dict(broken)
            assert False, f"Missing {key} should raise"
        except InvalidModelError:
            pass

    data["epoch"] = 0
    assert NeuralNetwork.from_dict(data).epoch == 0

    print("✓ Missing fields rejected, epoch 0 accepted")


def test_shape_mismatch():
    """Weights that do not fit layer_sizes are rejected."""
    print("\n" + "=" * 60)
    print("Test 3: Shape mismatch")
    print("=" * 60)

    data = NeuralNetwork([2, 2, 1], seed=2).to_dict()
    data["weights"][0][0] = [0.1, 0.2, 0.3]
    try:
        NeuralNetwork.from_dict(data)
        assert False, "Wrong weight count should raise"
    except InvalidModelError:
        pass

    data = NeuralNetwork([2, 2, 1], seed=2).to_dict()
    data["biases"] = data["biases"][:1]
    try:
        NeuralNetwork.from_dict(data)
        assert False, "Missing bias layer should raise"
    except InvalidModelError:
        pass

    print("✓ Shape mismatch rejected")


def test_unknown_activation_falls_back():
    """Unknown activation names load as sigmoid."""
    print("\n" + "=" * 60)
    print("Test 4: Activation fallback")
    print("=" * 60)

    data = NeuralNetwork([2, 2, 1], activation="relu", seed=3).to_dict()
    data["activations"][0][0] = "mystery"
    data["activations"][1] = []
    net = NeuralNetwork.from_dict(data)
    assert net.layers[0][0].activation.key == "sigmoid"
    assert net.layers[0][1].activation.key == "relu"
    assert net.layers[1][0].activation.key == "sigmoid"

    del data["activations"]
    assert NeuralNetwork.from_dict(data).layers[0][1].activation.key == "sigmoid"

    print("✓ Fallback to sigmoid")


def test_load_errors_do_not_touch_existing_network():
    """Failed loads raise and leave other instances alone."""
    print("\n" + "=" * 60)
    print("Test 5: Load errors")
    print("=" * 60)

    net = NeuralNetwork([2, 2, 1], seed=4)
    before = net.to_dict()

    with tempfile.TemporaryDirectory() as tmp:
        try:
            load_model(os.path.join(tmp, "missing.json"))
            assert False, "Missing file should raise"
        except FileNotFoundError:
            pass

        corrupt = os.path.join(tmp, "corrupt.json")
        with open(corrupt, "w", encoding="utf-8") as f:
            f.write("{not json")
        try:
            load_model(corrupt)
            assert False, "Corrupt file should raise"
        except InvalidModelError:
            pass

        partial = os.path.join(tmp, "partial.json")
        with open(partial, "w", encoding="utf-8") as f:
            json.dump({"layer_sizes": [2, 1]}, f)
        try:
            load_model(partial)
            assert False, "Partial model should raise"
        except InvalidModelError:
            pass

    assert net.to_dict() == before
    print("✓ Errors raised, existing network untouched")


def test_corrupt_values():
    """Present but unusable fields are reported as InvalidModelError."""
    print("\n" + "=" * 60)
    print("Test 6: Corrupt values")
    print("=" * 60)

    good = NeuralNetwork([2, 2, 1], seed=5).to_dict()
    corruptions = {
        "layer_sizes": [2],
        "weights": 5,
        "biases": {"0": [0.1, 0.2]},
        "epoch": "ten",
        "learning_rate": "fast",
    }
    for key, value in corruptions.items():
        broken = json.loads(json.dumps(good))
        broken[key] = value
        try:
            NeuralNetwork.from_dict(broken)
            assert False, f"Corrupt {key} should raise"
        except InvalidModelError:
            pass

    broken = json.loads(json.dumps(good))
    broken["biases"][0][1] = "high"
    try:
        NeuralNetwork.from_dict(broken)
        assert False, "Non-numeric bias should raise"
    except InvalidModelError:
        pass

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "single_layer.json")
        broken = dict(good, layer_sizes=[2])
        with open(path, "w", encoding="utf-8") as f:
            json.dump(broken, f)
        try:
            load_model(path)
            assert False, "Single-layer model should raise"
        except InvalidModelError:
            pass

    print("✓ Corrupt values rejected")


def test_null_learning_rate_uses_default():
    """learning_rate: null loads like a missing learning rate."""
    print("\n" + "=" * 60)
    print("Test 7: Null learning rate")
    print("=" * 60)

    data = NeuralNetwork([2, 2, 1], seed=6).to_dict()
    data["learning_rate"] = None
    net = NeuralNetwork.from_dict(data)
    assert net.learning_rate == 0.1

    loss = net.backpropagate([1.0, 0.0], [1.0])
    assert loss >= 0.0

    print("✓ Default learning rate applied")


def run_all_tests():
    test_round_trip_file()
    test_required_fields()
    test_shape_mismatch()
    test_unknown_activation_falls_back()
    test_load_errors_do_not_touch_existing_network()
    test_corrupt_values()
    test_null_learning_rate_uses_default()
    print("\n✅ All checkpointing tests passed!")


if __name__ == "__main__":
    run_all_tests()
