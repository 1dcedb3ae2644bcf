from __future__ import annotations
import math
from typing import Callable, Dict

# =========================
# Activation Functions
# =========================
def sigmoid(x: float) -> float:
    # Split on sign so math.exp never sees a large positive argument.
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)

def tanh(x: float) -> float:
    return math.tanh(x)

def relu(x: float) -> float:
    return max(0.0, x)

def leaky_relu(x: float) -> float:
    return x if x > 0 else 0.01 * x

def identity(x: float) -> float:
    return x

def make_step(threshold: float = 0.0) -> Callable[[float], float]:
    """Heaviside step: 1.0 strictly above `threshold`, else 0.0."""
    def step(x: float) -> float:
        return 1.0 if x > threshold else 0.0
    return step

ACTIVATION_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    'sigmoid': sigmoid,
    'tanh': tanh,
    'relu': relu,
    'leaky_relu': leaky_relu,
    'identity': identity,
    'step': make_step(0.0),
}

def resolve_activation(name: str, step_threshold: float = 0.0) -> Callable[[float], float]:
    """Look up an activation by name; 'step' is bound to `step_threshold`."""
    if name not in ACTIVATION_FUNCTIONS:
        options = ", ".join(sorted(ACTIVATION_FUNCTIONS))
        raise ValueError(f"Unknown activation {name!r}; expected one of: {options}")
    if name == 'step':
        return make_step(step_threshold)
    return ACTIVATION_FUNCTIONS[name]
