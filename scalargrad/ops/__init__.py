# scalargrad/ops/__init__.py

# Convenience re-exports so users can do: from scalargrad.ops import mul, relu, ...
from .arithmetic import add, mul, pow
from .activation import relu

__all__ = [
    "add", "mul", "pow",
    "relu",
]
