# dynagrad/__init__.py
# Define-by-run reverse-mode automatic differentiation

from .core.var import Variable
from .core.function import Operation
from .core.tape import Tape, GraphInvariantError, use_tape
from .core.engine import backward, zero_grads
from .core.config import config, using_config, no_grad
from .core.seeds import grad, grads, grads_list, value
from .core.numerical import numerical_diff, gradient_check

# Operator library
from . import ops
from .ops import square, exp, log, sqrt, erf, add, sub, mul, div, neg

__all__ = [
    # Core
    'Variable',
    'Operation',
    'Tape',
    'GraphInvariantError',
    'use_tape',
    # Engine
    'backward',
    'zero_grads',
    'config',
    'using_config',
    'no_grad',
    # Convenience
    'grad',
    'grads',
    'grads_list',
    'value',
    'numerical_diff',
    'gradient_check',
    # Operators
    'ops',
    'square', 'exp', 'log', 'sqrt', 'erf',
    'add', 'sub', 'mul', 'div', 'neg',
]
