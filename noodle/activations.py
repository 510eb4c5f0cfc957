# activations.py
"""
Catalog of scalar activation functions and their first derivatives.

Every f and df is total over finite reals. The binary step is the only
entry whose df is not the true derivative: it is a zero placeholder, so a
neuron using it inside backpropagation receives a constant zero gradient
and does not learn.
"""
from __future__ import annotations
import math
from types import MappingProxyType
from typing import Mapping, Union

from noodle.core import ActivationFunction


# -------- scalar helpers --------

def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


def _softplus(x: float) -> float:
    # log(1 + e^x) without overflow
    return max(x, 0.0) + math.log1p(math.exp(-abs(x)))


def _d_sigmoid(x: float) -> float:
    s = _sigmoid(x)
    return s * (1.0 - s)


def _d_tanh(x: float) -> float:
    t = math.tanh(x)
    return 1.0 - t * t


# -------- catalog --------

_CATALOG = {
    "binary": ActivationFunction(
        key="binary",
        name="binary [0,1]",
        fn=lambda x: 1.0 if x >= 0.5 else 0.0,
        deriv=lambda x: 0.0,
    ),
    "linear_bounded": ActivationFunction(
        key="linear_bounded",
        name="linear[-1,1]",
        fn=lambda x: max(-1.0, min(1.0, x)),
        deriv=lambda x: 0.0 if (x < -1.0 or x > 1.0) else 1.0,
    ),
    "sigmoid": ActivationFunction(
        key="sigmoid",
        name="sigmoid",
        fn=_sigmoid,
        deriv=_d_sigmoid,
    ),
    "relu": ActivationFunction(
        key="relu",
        name="relu",
        fn=lambda x: max(0.0, x),
        deriv=lambda x: 1.0 if x > 0 else 0.0,
    ),
    "tanh": ActivationFunction(
        key="tanh",
        name="tanh",
        fn=math.tanh,
        deriv=_d_tanh,
    ),
    "leaky_relu": ActivationFunction(
        key="leaky_relu",
        name="leakyReLU",
        fn=lambda x: x if x > 0 else 0.01 * x,
        deriv=lambda x: 1.0 if x > 0 else 0.01,
    ),
    "elu": ActivationFunction(
        key="elu",
        name="ELU",
        fn=lambda x: x if x >= 0 else math.expm1(x),
        deriv=lambda x: 1.0 if x >= 0 else math.exp(x),
    ),
    "softplus": ActivationFunction(
        key="softplus",
        name="Softplus",
        fn=_softplus,
        deriv=_sigmoid,
    ),
}

ACTIVATIONS: Mapping[str, ActivationFunction] = MappingProxyType(_CATALOG)

_BY_NAME = {a.name: a for a in _CATALOG.values()}


def get_activation(name: Union[str, ActivationFunction]) -> ActivationFunction:
    """Look up an activation by catalog key ('leaky_relu') or display name ('leakyReLU')."""
    if isinstance(name, ActivationFunction):
        return name
    if name in ACTIVATIONS:
        return ACTIVATIONS[name]
    if name in _BY_NAME:
        return _BY_NAME[name]
    raise KeyError(f"Unknown activation: {name!r} (available: {', '.join(ACTIVATIONS)})")


def resolve_activation(name, default: str = "sigmoid") -> ActivationFunction:
    """Tolerant lookup for persisted models: unknown names fall back to `default`."""
    if not name:
        return ACTIVATIONS[default]
    try:
        return get_activation(name)
    except KeyError:
        print(f"⚠️  Unknown activation '{name}', falling back to {default}")
        return ACTIVATIONS[default]
