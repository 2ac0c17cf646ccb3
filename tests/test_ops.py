import math

import numpy as np
import pytest
from scipy.special import erf as scipy_erf

from dynagrad import Variable, GraphInvariantError, gradient_check
from dynagrad.ops import (
    Add, Square, Exp,
    add, sub, mul, div, neg, square, exp, log, sqrt, erf,
)


@pytest.mark.parametrize("x", [-3.0, -0.5, 0.0, 1.0, 2.0, 10.0])
def test_square_forward(x):
    assert square(Variable(x)).get_data() == pytest.approx(x * x)


@pytest.mark.parametrize("x", [-3.0, 0.0, 0.5, 2.0])
def test_exp_forward(x):
    assert exp(Variable(x)).get_data() == pytest.approx(math.exp(x))


def test_square_gradient_at_two():
    x = Variable(2.0)
    y = square(x)
    y.backward()
    assert x.get_grad() == pytest.approx(4.0)


def test_exp_gradient():
    x = Variable(0.7)
    exp(x).backward()
    assert x.get_grad() == pytest.approx(math.exp(0.7))


def test_add_distributes_gradient():
    a, b = Variable(1.0), Variable(2.0)
    y = add(a, b)
    assert y.get_data() == 3.0
    y.backward()
    assert a.get_grad() == 1.0
    assert b.get_grad() == 1.0


def test_binary_gradients():
    a, b = Variable(3.0), Variable(4.0)
    mul(a, b).backward()
    assert (a.get_grad(), b.get_grad()) == (4.0, 3.0)

    a, b = Variable(3.0), Variable(4.0)
    sub(a, b).backward()
    assert (a.get_grad(), b.get_grad()) == (1.0, -1.0)

    a, b = Variable(3.0), Variable(4.0)
    div(a, b).backward()
    assert a.get_grad() == pytest.approx(0.25)
    assert b.get_grad() == pytest.approx(-3.0 / 16.0)


def test_unary_values():
    x = Variable(4.0)
    assert neg(x).get_data() == -4.0
    assert log(x).get_data() == pytest.approx(math.log(4.0))
    assert sqrt(x).get_data() == pytest.approx(2.0)
    assert erf(Variable(0.3)).get_data() == pytest.approx(scipy_erf(0.3))


@pytest.mark.parametrize("f, x", [
    (log, 1.7),
    (sqrt, 2.3),
    (erf, 0.4),
    (neg, 1.1),
    (lambda v: div(1.0, v), 1.9),
])
def test_unary_gradients_match_central_difference(f, x):
    assert gradient_check(f, x)


def test_operator_overloading():
    x = Variable(3.0)
    y = x * x + 2 * x - x / 3.0 + (-x) + x ** 2
    assert y.get_data() == pytest.approx(9.0 + 6.0 - 1.0 - 3.0 + 9.0)
    y.backward()
    # d/dx (2x² + x - x/3) = 4x + 1 - 1/3
    assert x.get_grad() == pytest.approx(4 * 3.0 + 1.0 - 1.0 / 3.0)


def test_reflected_constant_lives_on_input_tape(tape):
    x = Variable(2.0)
    y = 5.0 - x
    assert y.tape is tape
    assert y.get_data() == 3.0


def test_operation_instance_is_single_use():
    f = Square()
    f(Variable(1.0))
    with pytest.raises(RuntimeError):
        f(Variable(2.0))


def test_arity_is_checked_at_construction():
    with pytest.raises(GraphInvariantError):
        Add()(Variable(1.0))
    with pytest.raises(GraphInvariantError):
        Exp()()


def test_backward_reads_captured_forward_values():
    f = Square()
    f(Variable(3.0))
    assert f.xs == (3.0,)
    assert f.ys == (9.0,)
    assert f.backward(np.float64(1.0)) == 6.0
