# dynagrad/core/__init__.py

"""
Core public API for the dynagrad package.

Exports:
    Variable           : Handle to one scalar value in the computation graph.
    Operation          : Base class every differentiable operator derives from.
    Tape               : Arena holding Variable and Operation nodes.
    global_tape        : The default arena new Variables are recorded on.
    use_tape           : Context manager to temporarily switch the active tape.
    GraphInvariantError: Raised for malformed graphs / protocol violations.
    backward           : Run a single reverse pass from a Variable.
    zero_grads         : Clear every gradient on the active tape.
    config             : Engine switches (recording, gradient retention, tolerances).
    using_config       : Temporarily override config fields.
    no_grad            : Evaluate without recording a graph.
    grad, grads        : Convenience: gradients of a function at given inputs.
    value              : Convenience: extract the primal value of a Variable.
    numerical_diff     : Central-difference derivative estimate.
    gradient_check     : Compare analytic and central-difference gradients.
"""

from .var import Variable
from .function import Operation
from .tape import Tape, GraphInvariantError, global_tape, use_tape
from .engine import backward, zero_grads, reachable_operations
from .config import EngineConfig, config, using_config, no_grad
from .seeds import grad, grads, grads_list, value
from .numerical import numerical_diff, gradient_check

__all__ = [
    "Variable", "Operation",
    "Tape", "GraphInvariantError", "global_tape", "use_tape",
    "backward", "zero_grads", "reachable_operations",
    "EngineConfig", "config", "using_config", "no_grad",
    "grad", "grads", "grads_list", "value",
    "numerical_diff", "gradient_check",
]
