# dynagrad/core/var.py
from __future__ import annotations
import numpy as np
from typing import Any, Optional

from . import tape as tape_mod  # module access so use_tape() swaps are visible
from .tape import GraphInvariantError, Tape


def as_data(val: Any) -> np.float64:
    """
    Convert a user value into the engine's scalar data type.

    Only numeric scalars and 0-d arrays are accepted; everything is stored
    as an explicit float64 for precision.
    """
    # bool and complex pass the numeric checks but have no float64 meaning
    rejected = isinstance(val, (bool, np.bool_)) or np.iscomplexobj(val)
    if rejected or not isinstance(val, (int, float, np.number, np.ndarray)):
        raise TypeError(
            f"Variable only accepts numeric scalars (int, float, numpy scalar, 0-d ndarray), "
            f"but got {type(val)}"
        )
    if isinstance(val, np.ndarray) and val.ndim != 0:
        raise ValueError(f"Variable holds a single scalar, got an array of shape {val.shape}")
    return np.float64(val)


class Variable:
    """
    Handle to one value in the computation graph.

    The node itself lives in a Tape arena; the handle only stores the tape
    and the node index. Many handles may point at the same node, and
    operations consuming this Variable refer to it by index as well.

    Attributes
    ----------
    data       : np.float64
        Forward (primal) value.
    grad       : Optional[np.float64]
        Accumulated gradient, None until a backward pass reaches this node.
    creator    : Optional[Operation]
        The Operation that produced this Variable, None for leaves.
    generation : int
        Topological depth used to order the backward pass.
    id         : int
        Arena index, unique per node on its tape.
    """

    __array_priority__ = 1000  # numpy scalars on the left defer to our reflected operators

    def __init__(self, data: Any, *, name: Optional[str] = None, tape: Optional[Tape] = None):
        data = as_data(data)
        self._tape = tape if tape is not None else tape_mod.global_tape
        self._epoch = self._tape.epoch
        self._index = self._tape.push_variable(data, name=name)

    @classmethod
    def _attach(cls, tape: Tape, index: int) -> "Variable":
        """Wrap an existing arena node in a new handle."""
        obj = cls.__new__(cls)
        obj._tape = tape
        obj._epoch = tape.epoch
        obj._index = index
        return obj

    # ----------------------------- arena access ----------------------------- #
    @property
    def tape(self) -> Tape:
        return self._tape

    @property
    def node(self):
        if self._epoch != self._tape.epoch:
            raise GraphInvariantError(f"Variable #{self._index} belongs to a tape that has been reset")
        return self._tape.variables[self._index]

    @property
    def id(self) -> int:
        return self._index

    @property
    def data(self) -> np.float64:
        return self.node.data

    @property
    def grad(self) -> Optional[np.float64]:
        return self.node.grad

    @grad.setter
    def grad(self, g):
        self.node.grad = None if g is None else as_data(g)

    @property
    def creator(self):
        idx = self.node.creator
        return None if idx is None else self._tape.operations[idx].fn

    @property
    def generation(self) -> int:
        return self.node.generation

    @property
    def name(self) -> Optional[str]:
        return self.node.name

    # --------------------------- public accessors --------------------------- #
    def get_data(self) -> np.float64:
        return self.data

    def get_grad(self) -> Optional[np.float64]:
        return self.grad

    def set_grad(self, g):
        self.grad = g

    def clear_grad(self):
        self.node.grad = None

    def backward(self, retain_grad: Optional[bool] = None):
        """Seed this Variable with ones (if unset) and propagate to every ancestor."""
        from .engine import backward
        backward(self, retain_grad=retain_grad)

    def __repr__(self):
        kind = "leaf" if self.node.creator is None else f"gen={self.generation}"
        return f"Variable({self.data!r}, {kind}, name={self.name!r})"

    def __float__(self):
        return float(self.data)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        if other != 2:
            return NotImplemented
        from ..ops.arithmetic import square
        return square(self)
