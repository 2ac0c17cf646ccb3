# dynagrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

import numpy as np

from .var import Variable
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Variable; pass through plain numbers unchanged."""
    return x.data if isinstance(x, Variable) else x


def _grad_of(x: Variable) -> np.float64:
    # inputs the output does not depend on never receive a gradient
    return x.grad if x.grad is not None else np.float64(0.0)


def _run(y: Any):
    if isinstance(y, Variable):
        backward(y)  # a constant output leaves every partial at zero


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Variable], Variable], x0: Any) -> np.float64:
    """
    Derivative of y=f(x) at x0 (single input).
    Builds the graph and runs one backward pass within a fresh, isolated tape.
    """
    with use_tape():
        x = Variable(value(x0), name="x")
        _run(f(x))
        return _grad_of(x)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Variable]], Variable],
          inputs: Dict[str, Any]) -> Dict[str, np.float64]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE backward pass to obtain every ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Variable} and returning a Variable
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: np.float64}  # gradients in the same key order as `inputs`
    """
    with use_tape():
        xs = {k: Variable(value(v), name=k) for k, v in inputs.items()}
        _run(f(xs))
        return {k: _grad_of(xs[k]) for k in inputs.keys()}


def grads_list(f: Callable[[List[Variable]], Variable],
               x0_list: Iterable[Any]) -> List[np.float64]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs = [Variable(value(v), name=f"x{i}") for i, v in enumerate(x0_list)]
        _run(f(xs))
        return [_grad_of(x) for x in xs]
