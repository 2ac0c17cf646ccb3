# dynagrad/core/function.py
"""
Base class for differentiable operations.

Every concrete operator implements two pure functions on raw float64 data:

    forward(*xs)   -> y  or  (y0, y1, ...)
    backward(*gys) -> gx or  (gx0, gx1, ...)

Calling an Operation instance on Variables runs the construction protocol:
read the inputs' data, evaluate `forward`, wrap every result in a new
Variable whose creator is this Operation, and record the edges on the
inputs' tape. `backward` is later invoked by the scheduler with one
gradient per output and must return one gradient per input, positionally
matched. It may read the captured forward values `self.xs` / `self.ys`.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, Union

import numpy as np

from . import tape as tape_mod
from .config import config
from .tape import GraphInvariantError, Tape
from .var import Variable, as_data


def as_variable(x, tape: Tape) -> Variable:
    """Ensure x is a Variable; otherwise wrap it as a constant leaf on `tape`."""
    return x if isinstance(x, Variable) else Variable(x, tape=tape)


class Operation(ABC):
    """
    One application of an operator.

    Class attributes
    ----------------
    op_tag : str
        Debug tag recorded on the tape.
    nin, nout : Optional[int]
        Declared arity. None means "any", otherwise calls and forward
        results are checked against it.

    Instance attributes (set once the operation is applied)
    -------------------------------------------------------
    xs, ys : tuple of np.float64
        Captured input and output data.
    index : Optional[int]
        Position of this operation in its tape's arena.
    """
    op_tag: str = "op"
    nin: Optional[int] = None
    nout: Optional[int] = None

    def __init__(self):
        self.xs: Tuple[np.float64, ...] = ()
        self.ys: Tuple[np.float64, ...] = ()
        self.index: Optional[int] = None
        self._applied = False

    def __call__(self, *inputs) -> Union[Variable, List[Variable]]:
        if self._applied:
            raise RuntimeError(f"{self.op_tag}: an Operation instance can only be applied once")
        if len(inputs) == 0:
            raise GraphInvariantError(f"{self.op_tag}: an operation needs at least one input")
        if self.nin is not None and len(inputs) != self.nin:
            raise GraphInvariantError(f"{self.op_tag}: expects {self.nin} input(s), got {len(inputs)}")

        tape = self._resolve_tape(inputs)
        variables = [as_variable(x, tape) for x in inputs]
        xs = tuple(v.data for v in variables)

        ys = self.forward(*xs)
        if not isinstance(ys, tuple):
            ys = (ys,)
        if len(ys) == 0:
            raise GraphInvariantError(f"{self.op_tag}: forward produced no outputs")
        if self.nout is not None and len(ys) != self.nout:
            raise GraphInvariantError(f"{self.op_tag}: declares {self.nout} output(s), forward produced {len(ys)}")
        ys = tuple(as_data(y) for y in ys)

        self.xs, self.ys = xs, ys
        self._applied = True

        if config.enable_backprop:
            out_indices = tape.push_operation(
                op_tag=self.op_tag, fn=self,
                inputs=[v.id for v in variables], outputs=ys,
            )
            self.index = len(tape.operations) - 1
        else:
            out_indices = [tape.push_variable(y) for y in ys]

        outputs = [Variable._attach(tape, i) for i in out_indices]
        return outputs[0] if len(outputs) == 1 else outputs

    @staticmethod
    def _resolve_tape(inputs) -> Tape:
        tapes = {id(x.tape): x for x in inputs if isinstance(x, Variable)}
        if len(tapes) > 1:
            raise GraphInvariantError("inputs of one operation live on different tapes")
        if tapes:
            return next(iter(tapes.values())).tape
        return tape_mod.global_tape

    @abstractmethod
    def forward(self, *xs):
        """Compute output data from input data."""

    @abstractmethod
    def backward(self, *gys):
        """Map output gradients to input gradients."""

    def __repr__(self):
        return f"{type(self).__name__}(index={self.index})"
