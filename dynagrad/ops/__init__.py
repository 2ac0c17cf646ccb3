# dynagrad/ops/__init__.py

from . import arithmetic
from . import transcendental

# Convenience re-exports so users can do: from dynagrad.ops import square, exp, ...
from .arithmetic import Add, Sub, Mul, Div, Neg, Square
from .arithmetic import add, sub, mul, div, neg, square
from .transcendental import Exp, Log, Sqrt, Erf
from .transcendental import exp, log, sqrt, erf

__all__ = [
    "Add", "Sub", "Mul", "Div", "Neg", "Square",
    "add", "sub", "mul", "div", "neg", "square",
    "Exp", "Log", "Sqrt", "Erf",
    "exp", "log", "sqrt", "erf",
]
