# dynagrad/ops/arithmetic.py
from ..core.function import Operation


class Add(Operation):
    """y = x0 + x1; the output gradient flows unchanged to both inputs."""
    op_tag = "add"
    nin, nout = 2, 1

    def forward(self, x0, x1):
        return x0 + x1

    def backward(self, gy):
        return gy, gy


class Sub(Operation):
    op_tag = "sub"
    nin, nout = 2, 1

    def forward(self, x0, x1):
        return x0 - x1

    def backward(self, gy):
        return gy, -gy


class Mul(Operation):
    op_tag = "mul"
    nin, nout = 2, 1

    def forward(self, x0, x1):
        return x0 * x1

    def backward(self, gy):
        x0, x1 = self.xs
        return gy * x1, gy * x0


class Div(Operation):
    op_tag = "div"
    nin, nout = 2, 1

    def forward(self, x0, x1):
        return x0 / x1

    def backward(self, gy):
        x0, x1 = self.xs
        # ∂y/∂x0 = 1/x1,  ∂y/∂x1 = -x0/x1²
        return gy / x1, -gy * x0 / (x1 * x1)


class Neg(Operation):
    op_tag = "neg"
    nin, nout = 1, 1

    def forward(self, x):
        return -x

    def backward(self, gy):
        return -gy


class Square(Operation):
    """y = x²,  dx = 2x · dy"""
    op_tag = "square"
    nin, nout = 1, 1

    def forward(self, x):
        return x * x

    def backward(self, gy):
        x, = self.xs
        return 2.0 * x * gy


def add(x0, x1): return Add()(x0, x1)
def sub(x0, x1): return Sub()(x0, x1)
def mul(x0, x1): return Mul()(x0, x1)
def div(x0, x1): return Div()(x0, x1)
def neg(x):      return Neg()(x)
def square(x):   return Square()(x)
