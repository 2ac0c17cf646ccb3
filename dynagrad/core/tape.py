# dynagrad/core/tape.py
from __future__ import annotations
from typing import List, Optional, Sequence
from contextlib import contextmanager
from .node import OperationNode, VariableNode


class GraphInvariantError(RuntimeError):
    """Raised when the graph arena is malformed or an operation breaks the construction protocol."""


class Tape:
    """
    Arena of graph nodes, appended in forward order.

    Variables and Operations live in two growable lists and refer to each
    other by index. An Operation can only consume Variables that already
    exist, so every input index is smaller than the indices of the
    Operation's outputs and the graph is acyclic by construction.
    """
    def __init__(self):
        self.variables: List[VariableNode] = []
        self.operations: List[OperationNode] = []
        # bumped by reset() so handles into a discarded graph can be detected
        self.epoch = 0

    def reset(self):
        self.variables.clear()
        self.operations.clear()
        self.epoch += 1

    def push_variable(self, data, *, name: Optional[str] = None) -> int:
        """Append a leaf VariableNode and return its index."""
        self.variables.append(VariableNode(data=data, name=name))
        return len(self.variables) - 1

    def push_operation(self, *, op_tag: str, fn, inputs: Sequence[int], outputs: Sequence) -> List[int]:
        """
        Record one applied Operation.

        `inputs` are indices of existing VariableNodes; `outputs` are the
        forward results (already-converted data). Each output is wrapped in
        a new VariableNode whose creator is the new OperationNode. Returns
        the output indices in forward order.
        """
        if len(inputs) == 0:
            raise GraphInvariantError(f"{op_tag}: an operation needs at least one input")
        if len(outputs) == 0:
            raise GraphInvariantError(f"{op_tag}: an operation needs at least one output")
        for i in inputs:
            if not 0 <= i < len(self.variables):
                raise GraphInvariantError(f"{op_tag}: input index {i} is not on this tape")

        generation = max(self.variables[i].generation for i in inputs) + 1
        op_index = len(self.operations)

        out_indices = []
        for y in outputs:
            self.variables.append(VariableNode(data=y, creator=op_index, generation=generation))
            out_indices.append(len(self.variables) - 1)

        self.operations.append(OperationNode(
            op_tag=op_tag, fn=fn,
            inputs=tuple(inputs), outputs=tuple(out_indices),
            generation=generation,
        ))
        return out_indices

    def clear_grads(self):
        for node in self.variables:
            node.grad = None

    def validate(self):
        """
        Check the arena invariants:
          - leaves have generation 0, outputs share their creator's generation
          - every operation is strictly younger than each of its inputs
          - creator/output linkage agrees in both directions
          - inputs precede outputs (no cycles)
        """
        for idx, var in enumerate(self.variables):
            if var.creator is None:
                if var.generation != 0:
                    raise GraphInvariantError(f"leaf variable {idx} has generation {var.generation}")
                continue
            if not 0 <= var.creator < len(self.operations):
                raise GraphInvariantError(f"variable {idx} points at missing operation {var.creator}")
            op = self.operations[var.creator]
            if idx not in op.outputs:
                raise GraphInvariantError(f"variable {idx} is not an output of its creator {var.creator}")
            if var.generation != op.generation:
                raise GraphInvariantError(
                    f"variable {idx} has generation {var.generation}, creator has {op.generation}"
                )

        for k, op in enumerate(self.operations):
            if not op.inputs or not op.outputs:
                raise GraphInvariantError(f"operation {k} ({op.op_tag}) has no inputs or outputs")
            first_out = min(op.outputs)
            for i in op.inputs:
                if i >= first_out:
                    raise GraphInvariantError(f"operation {k} ({op.op_tag}) consumes a later variable {i}")
                if self.variables[i].generation >= op.generation:
                    raise GraphInvariantError(
                        f"operation {k} ({op.op_tag}) is not younger than its input {i}"
                    )
            for o in op.outputs:
                if self.variables[o].creator != k:
                    raise GraphInvariantError(f"operation {k} ({op.op_tag}) lost its output {o}")


# Global default arena
global_tape = Tape()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily use a fresh tape:
        with use_tape():
            ... build computation ...
            y.backward()
    """
    from . import tape as _tape_mod  # local import so callers see the swap through the module
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape or Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
