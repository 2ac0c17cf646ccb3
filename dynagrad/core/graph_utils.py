"""
Graph inspection helpers.
Print and summarise the structure recorded on a Tape.
"""

import numpy as np
from typing import Dict
from collections import Counter


def get_graph_stats(tape) -> Dict:
    """
    Collect graph statistics without printing.

    fan-in counts the inputs of each operation; fan-out counts how many
    operations consume each variable.

    Returns:
        dict of statistics
    """
    n_vars = len(tape.variables)
    n_ops = len(tape.operations)
    if n_ops == 0:
        return {
            'variables': n_vars,
            'operations': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'max_generation': 0,
            'op_tags': {}
        }

    n_edges = sum(len(op.inputs) for op in tape.operations)

    fan_ins = [len(op.inputs) for op in tape.operations]

    fan_outs = [0] * n_vars
    for op in tape.operations:
        for i in op.inputs:
            fan_outs[i] += 1

    op_counter = Counter(op.op_tag for op in tape.operations)

    return {
        'variables': n_vars,
        'operations': n_ops,
        'edges': n_edges,
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs) if fan_outs else 0,
        'avg_fan_out': float(np.mean(fan_outs)) if fan_outs else 0.0,
        'max_generation': max(op.generation for op in tape.operations),
        'op_tags': dict(op_counter)
    }


def print_graph_summary(tape) -> Dict:
    """
    Print a graph summary.

    Returns:
        the statistics dict from get_graph_stats
    """
    stats = get_graph_stats(tape)
    if stats['operations'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Variables:          {stats['variables']:,}")
    print(f"Operations:         {stats['operations']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print(f"Max generation:     {stats['max_generation']}")
    print()
    print("Operation breakdown:")
    for op_tag, count in Counter(stats['op_tags']).most_common(10):
        pct = 100.0 * count / stats['operations']
        print(f"  {op_tag:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")

    return stats


def print_computation_graph(tape, max_nodes: int = 20) -> None:
    """
    Print one line per operation: tag, generation, output values, inputs.

    Args:
        tape: the Tape to print
        max_nodes: maximum number of operations to print
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if not tape.operations:
        print("Empty graph")
        return

    for k, op in enumerate(tape.operations[:max_nodes]):
        outs = ", ".join(f"v{o}={float(tape.variables[o].data):.6f}" for o in op.outputs)
        ins = ", ".join(
            f"v{i}" if tape.variables[i].creator is not None else f"v{i}(leaf)"
            for i in op.inputs
        )
        print(f"Op {k:4d}: {op.op_tag:10s} gen={op.generation:<3d} [{outs}] <- [{ins}]")

    if len(tape.operations) > max_nodes:
        print(f"... ({len(tape.operations) - max_nodes} more operations)")

    print("="*70 + "\n")
