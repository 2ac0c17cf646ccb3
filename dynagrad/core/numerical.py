# dynagrad/core/numerical.py
"""
Central-difference cross-check for analytic gradients.

Formula:
    f'(x) ≈ [f(x+ε) - f(x-ε)] / (2ε)

`f` is any single-input, single-output callable on Variables (a function
such as `square`, or a composition of operators). It is evaluated twice
with perturbed leaf inputs on a scratch tape under `no_grad()`, so the
active graph is left untouched.
"""

from typing import Any, Callable, Optional

import numpy as np

from .config import config, no_grad
from .seeds import grad, value
from .tape import use_tape
from .var import Variable


def numerical_diff(f: Callable[[Variable], Variable], x: Any, eps: Optional[float] = None) -> np.float64:
    """Central-difference estimate of df/dx at x (Variable or number)."""
    e = config.eps if eps is None else eps
    x0 = np.float64(value(x))
    with use_tape(), no_grad():
        y0 = f(Variable(x0 - e))
        y1 = f(Variable(x0 + e))
    return (np.float64(value(y1)) - np.float64(value(y0))) / (2.0 * e)


def gradient_check(f: Callable[[Variable], Variable], x: Any,
                   eps: Optional[float] = None, atol: Optional[float] = None) -> bool:
    """
    Compare the engine's gradient of f at x with a central-difference
    estimate, using an absolute tolerance (default `config.atol`).
    """
    tol = config.atol if atol is None else atol
    analytic = grad(f, value(x))
    numeric = numerical_diff(f, x, eps=eps)
    return bool(abs(analytic - numeric) <= tol)
