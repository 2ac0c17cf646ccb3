from dynagrad import Variable, Tape
from dynagrad.core.graph_utils import get_graph_stats, print_graph_summary, print_computation_graph
from dynagrad.ops import add, square, exp


def _build():
    x = Variable(0.5)
    a = square(x)
    return add(exp(a), a)


def test_empty_stats():
    stats = get_graph_stats(Tape())
    assert stats["operations"] == 0
    assert stats["op_tags"] == {}


def test_stats(tape):
    _build()
    stats = get_graph_stats(tape)
    assert stats["variables"] == 4
    assert stats["operations"] == 3
    assert stats["edges"] == 4
    assert stats["max_fan_in"] == 2
    assert stats["max_fan_out"] == 2  # `a` feeds exp and add
    assert stats["max_generation"] == 3
    assert stats["op_tags"] == {"square": 1, "exp": 1, "add": 1}


def test_printing(tape, capsys):
    _build()
    stats = print_graph_summary(tape)
    print_computation_graph(tape, max_nodes=2)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "square" in out
    assert "1 more operations" in out
    assert stats["operations"] == 3


def test_printing_empty(capsys):
    print_graph_summary(Tape())
    print_computation_graph(Tape())
    out = capsys.readouterr().out
    assert "Empty computation graph" in out
    assert "Empty graph" in out
