"""Truth tables of two-input logic functions.

Used as the classic toy problems for perceptrons (AND, OR, NAND, NOR are
linearly separable) and multilayer networks (XOR, XNOR are not).
"""

from typing import Dict, List, Tuple


INPUTS = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]

_OUTPUTS = {
    "and":  [0.0, 0.0, 0.0, 1.0],
    "or":   [0.0, 1.0, 1.0, 1.0],
    "nand": [1.0, 1.0, 1.0, 0.0],
    "nor":  [1.0, 0.0, 0.0, 0.0],
    "xor":  [0.0, 1.0, 1.0, 0.0],
    "xnor": [1.0, 0.0, 0.0, 1.0],
}

LINEARLY_SEPARABLE = ("and", "or", "nand", "nor")

GATES = tuple(_OUTPUTS)


def logic_gate(name: str) -> Tuple[List[List[float]], List[List[float]]]:
    """
    Truth table of a gate in network format.

    Args:
        name: Gate name (case-insensitive), one of GATES

    Returns:
        inputs: 4 input vectors
        targets: 4 one-element target vectors
    """
    key = name.lower()
    if key not in _OUTPUTS:
        raise ValueError(f"Unknown logic gate: {name} (available: {', '.join(GATES)})")
    inputs = [list(x) for x in INPUTS]
    targets = [[y] for y in _OUTPUTS[key]]
    return inputs, targets


def perceptron_samples(name: str) -> List[Dict[str, object]]:
    """Same truth table as [{'x': [...], 'y': ...}, ...] for Perceptron.fit."""
    inputs, targets = logic_gate(name)
    return [{"x": x, "y": t[0]} for x, t in zip(inputs, targets)]
