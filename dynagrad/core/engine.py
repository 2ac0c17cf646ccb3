# dynagrad/core/engine.py
from __future__ import annotations
import heapq
import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

from . import tape as tape_mod
from .config import config
from .tape import GraphInvariantError, Tape
from .var import Variable, as_data

logger = logging.getLogger(__name__)


def zero_grads(tape: Optional[Tape] = None):
    """
    Clear every gradient on the given tape (default: the active tape),
    so the same forward graph can be differentiated again from scratch.
    """
    (tape or tape_mod.global_tape).clear_grads()


def backward(y: Variable, retain_grad: Optional[bool] = None):
    """
    Run one reverse pass from `y`.

    Args:
        y: the Variable to differentiate. Seeded with ones_like(y.data)
           unless it already holds a gradient.
        retain_grad: keep gradients of non-leaf Variables once their
           creator has consumed them. Defaults to `config.retain_grad`.

    Notes:
        - Operations run in decreasing generation, so every output
          gradient is fully summed over all downstream consumers before
          its creator reads it.
        - Each reachable operation runs exactly once.
        - For each input: x.grad += gx  (set when x.grad is None).
    """
    if retain_grad is None:
        retain_grad = config.retain_grad

    root = y.node
    if root.grad is None:
        root.grad = as_data(np.ones_like(root.data))
    if root.creator is None:
        return

    tape = y.tape
    processed = 0
    for op_index in _schedule(tape, root.creator):
        op = tape.operations[op_index]
        _run_operation(tape, op, op_index)
        processed += 1
        if not retain_grad:
            for o in op.outputs:
                tape.variables[o].grad = None

    logger.debug("backward from variable #%d ran %d operation(s)", y.id, processed)


def reachable_operations(y: Variable) -> List[int]:
    """Indices of every operation `y` depends on, in the order backward() visits them."""
    creator = y.node.creator
    if creator is None:
        return []
    return list(_schedule(y.tape, creator))


def _schedule(tape: Tape, start: int) -> Iterator[int]:
    """
    Yield operation indices reachable from `start`, greatest generation
    first. The caller processes each yielded operation before its inputs'
    creators are enqueued; a seen-set keeps every operation to one visit.
    """
    heap: List[Tuple[int, int]] = []
    seen = set()

    def push(op_index: int):
        if op_index in seen:
            return
        if not 0 <= op_index < len(tape.operations):
            raise GraphInvariantError(f"creator index {op_index} is not on this tape")
        seen.add(op_index)
        # max-heap on generation; among equals, the later-created operation first
        heapq.heappush(heap, (-tape.operations[op_index].generation, -op_index))

    push(start)
    while heap:
        _, neg_index = heapq.heappop(heap)
        op_index = -neg_index
        yield op_index
        for i in tape.operations[op_index].inputs:
            creator = tape.variables[i].creator
            if creator is not None:
                push(creator)


def _run_operation(tape: Tape, op, op_index: int):
    if not op.inputs or not op.outputs:
        raise GraphInvariantError(f"operation {op_index} ({op.op_tag}) has no recorded inputs or outputs")

    gys = []
    for o in op.outputs:
        out = tape.variables[o]
        if out.creator != op_index:
            raise GraphInvariantError(f"operation {op_index} ({op.op_tag}) lost its output {o}")
        # an unused output of a multi-output operation contributes nothing
        gys.append(out.grad if out.grad is not None else as_data(np.zeros_like(out.data)))

    logger.debug("backward %s (operation #%d, generation %d)", op.op_tag, op_index, op.generation)
    gxs = op.fn.backward(*gys)
    if not isinstance(gxs, tuple):
        gxs = (gxs,)
    if len(gxs) != len(op.inputs):
        raise GraphInvariantError(
            f"{op.op_tag}: backward returned {len(gxs)} gradient(s) for {len(op.inputs)} input(s)"
        )

    for i, gx in zip(op.inputs, gxs):
        x = tape.variables[i]
        gx = as_data(gx)
        # accumulate, never overwrite: x may feed several consumers
        x.grad = gx if x.grad is None else x.grad + gx
