# dynagrad/core/node.py
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from .function import Operation


@dataclass
class VariableNode:
    """
    One Variable record in the tape arena.

    Attributes
    ----------
    data       : np.float64
        Forward value. Written once when the node is created.
    grad       : Optional[np.float64]
        Accumulated gradient; None until a backward pass reaches this node.
    creator    : Optional[int]
        Index of the producing OperationNode, or None for a leaf.
    generation : int
        0 for leaves, otherwise the creator's generation.
    name       : Optional[str]
        Optional debug/pretty-print name.
    """
    data: np.float64
    grad: Optional[np.float64] = None
    creator: Optional[int] = None
    generation: int = 0
    name: Optional[str] = None


@dataclass
class OperationNode:
    """
    One applied Operation in the tape arena.

    Attributes
    ----------
    op_tag     : str
        Debug tag (e.g., "add", "exp").
    fn         : Operation
        The Operation instance; its `backward` maps output gradients to
        input gradients.
    inputs     : Tuple[int, ...]
        Indices of consumed VariableNodes, in call order.
    outputs    : Tuple[int, ...]
        Indices of produced VariableNodes, in forward order.
    generation : int
        max(input generations) + 1.
    """
    op_tag: str
    fn: "Operation"
    inputs: Tuple[int, ...] = field(default_factory=tuple)
    outputs: Tuple[int, ...] = field(default_factory=tuple)
    generation: int = 0
